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


class LeaseBackend:
    """ABC for lease backends.

    A backend wraps a shared key-value store and exposes the atomic
    primitives leases are built on.  Every method must be atomic on the
    store side: implementations must never read a value and then write
    it in a separate step.

    Backends raise :class:`CommunicationError<distlock.errors.CommunicationError>`
    when the store cannot be reached, never a driver specific exception.
    """

    def set_if_absent(self, key: str, value: str, ttl_ms: int) -> bool:
        """Create ``key`` with ``value``, expiring after ``ttl_ms``
        milliseconds, unless it already exists.

        Returns:
          bool: True if this call created the key.
        """
        raise NotImplementedError(f"{type(self).__name__!r} does not implement set_if_absent")

    def compare_and_delete(self, key: str, expected: str) -> bool:
        """Delete ``key`` if its value is ``expected``.

        Returns:
          bool: True if the key existed with that value and was deleted.
        """
        raise NotImplementedError(f"{type(self).__name__!r} does not implement compare_and_delete")

    def compare_and_extend(self, key: str, expected: str, ttl_ms: int) -> bool:
        """Reset the expiry of ``key`` to ``ttl_ms`` milliseconds from now
        if its value is ``expected``.

        Returns:
          bool: True if the key existed with that value and its TTL was reset.
        """
        raise NotImplementedError(f"{type(self).__name__!r} does not implement compare_and_extend")

    def get(self, key: str) -> Optional[str]:
        """Return the value currently stored under ``key``, if any."""
        raise NotImplementedError(f"{type(self).__name__!r} does not implement get")
