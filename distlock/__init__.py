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

from .backend import LeaseBackend
from .errors import (
    CommunicationError,
    DistlockError,
    LeaseContended,
    LeaseError,
    LeaseTimeout,
    NotOwner,
    UnknownStrategy,
)
from .lease import Lease
from .logging import get_logger
from .metrics import LeaseMetrics

__all__ = [
    # Errors
    "CommunicationError",
    "DistlockError",
    # Leases
    "Lease",
    "LeaseBackend",
    "LeaseContended",
    "LeaseError",
    "LeaseMetrics",
    "LeaseTimeout",
    "NotOwner",
    "UnknownStrategy",
    "get_logger",
]

__version__ = "0.1.0"
