# This file is a part of Distlock.
#
# Copyright (C) 2026 The Distlock Authors
#
# Distlock is free software; you can redistribute it and/or modify it
# under the terms of the GNU Lesser General Public License as published by
# the Free Software Foundation, either version 3 of the License, or (at
# your option) any later version.
#
# Distlock is distributed in the hope that it will be useful, but WITHOUT
# ANY WARRANTY; without even the implied warranty of MERCHANTABILITY or
# FITNESS FOR A PARTICULAR PURPOSE. See the GNU Lesser General Public
# License for more details.
#
# You should have received a copy of the GNU Lesser General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.
from typing import Optional

import prometheus_client as prom

#: Every outcome a lease operation may report.
OUTCOMES = ("acquired", "contended", "released", "renewed", "not_owner", "communication_error")


class LeaseMetrics:
    """Export lease operation outcomes via Prometheus_.

    Pass an instance to :class:`Lease<distlock.Lease>` to have every
    operation counted.  Exposition is left to the application, for example
    with :func:`prometheus_client.start_http_server` on ``registry``.

    Parameters:
      registry(CollectorRegistry): the prometheus registry to use, if None, use a new registry.

    .. _Prometheus: https://prometheus.io
    """

    def __init__(self, *, registry: Optional[prom.CollectorRegistry] = None) -> None:
        self.registry = registry if registry is not None else prom.CollectorRegistry()
        self.total_operations = prom.Counter(
            "distlock_lease_operations_total",
            "The total number of lease operations, by outcome.",
            ["operation", "outcome"],
            registry=self.registry,
        )
        self.operation_durations = prom.Summary(
            "distlock_lease_operation_duration_milliseconds",
            "The time spent waiting on the store for lease operations.",
            ["operation"],
            registry=self.registry,
        )

    def observe(self, operation: str, outcome: str, duration_ms: float) -> None:
        if outcome not in OUTCOMES:
            raise ValueError(f"Unknown lease outcome {outcome!r}")

        self.total_operations.labels(operation, outcome).inc()
        self.operation_durations.labels(operation).observe(duration_ms)

    def get_count(self, operation: str, outcome: str) -> float:
        value = self.registry.get_sample_value(
            "distlock_lease_operations_total", {"operation": operation, "outcome": outcome}
        )
        return value or 0.0
