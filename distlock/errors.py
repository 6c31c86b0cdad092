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


class DistlockError(Exception):  # pragma: no cover
    """Base class for all distlock errors."""

    def __init__(self, message: str) -> None:
        self.message = message

    def __str__(self) -> str:
        return str(self.message) or repr(self.message)


class LeaseError(DistlockError):
    """Base class for lease protocol errors."""


class NotOwner(LeaseError):
    """Raised when releasing or renewing a lease whose key is either
    missing from the store or held under another owner token.

    The lease is gone for good: retrying with the same instance is pointless.
    """


class LeaseContended(LeaseError):
    """Raised by :meth:`Lease.hold` when another owner holds the lease."""


class CommunicationError(DistlockError):
    """Raised when the store could not be reached or did not answer.

    The effect of the operation is unknown, the lease may or may not be held.
    """


class LeaseTimeout(CommunicationError):
    """Raised when the caller's deadline elapsed before the store answered."""


class UnknownStrategy(DistlockError):
    """Raised when an unknown backoff strategy is requested."""
