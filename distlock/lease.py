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
import time
import uuid
from contextlib import contextmanager
from typing import Any, Callable, Iterator, NoReturn, Optional, Tuple

from .backend import LeaseBackend
from .errors import CommunicationError, LeaseContended, LeaseTimeout, NotOwner
from .helpers.deadline import Deadline
from .logging import get_logger
from .metrics import LeaseMetrics


class Lease:
    """A time-bounded, revocable claim of exclusive ownership over a
    named resource, recorded in a shared store.

    Every operation is a single atomic round trip to the backend and the
    lease keeps no other state: whether it is held is only ever known by
    asking the store.  Nothing is retried or renewed implicitly; see
    :func:`distlock.helpers.acquire_with_backoff` and
    :class:`distlock.helpers.LeaseRenewer` for opt-in helpers.

    Once released or lost, a lease instance should be discarded.  Build a
    new one, with a fresh owner token, to acquire the resource again.

    Example:

      >>> from distlock import Lease
      >>> from distlock.backends import RedisBackend
      >>> backend = RedisBackend(url="redis://localhost:6379/0")
      >>> lease = Lease(backend, "job-42", duration_ms=10000)
      >>> if lease.acquire(timeout=1):
      ...     try:
      ...         do_work()
      ...     finally:
      ...         lease.release(timeout=1)

    Parameters:
      backend(LeaseBackend): The store holding lease keys.
      resource_key(str): Identifies the protected resource, must be unique
        per resource across every process sharing the store.
      duration_ms(int): The TTL, in milliseconds, set on acquisition and
        reset on every renewal.
      owner_token(str): An opaque proof of ownership, unique to this lease
        attempt.  A random one is generated when omitted.
      metrics(LeaseMetrics): An optional Prometheus collector.
    """

    def __init__(
        self,
        backend: LeaseBackend,
        resource_key: str,
        *,
        duration_ms: int,
        owner_token: Optional[str] = None,
        metrics: Optional[LeaseMetrics] = None,
    ) -> None:
        if not resource_key:
            raise ValueError("resource_key must be a non-empty string")
        if isinstance(duration_ms, bool) or int(duration_ms) != duration_ms:
            raise ValueError("duration_ms must be a whole number of milliseconds")
        duration_ms = int(duration_ms)
        if duration_ms <= 0:
            raise ValueError("duration_ms must be positive")
        if owner_token is None:
            owner_token = uuid.uuid4().hex
        elif not owner_token:
            raise ValueError("owner_token must be a non-empty string")

        self.backend = backend
        self.metrics = metrics
        self.logger = get_logger(__name__, type(self))
        self._resource_key = resource_key
        self._owner_token = owner_token
        self._duration_ms = duration_ms

    @property
    def resource_key(self) -> str:
        return self._resource_key

    @property
    def owner_token(self) -> str:
        return self._owner_token

    @property
    def duration_ms(self) -> int:
        return self._duration_ms

    def acquire(self, *, timeout: Optional[float] = None) -> bool:
        """Try to take the lease, without blocking or retrying.

        Parameters:
          timeout(float): Deadline in seconds.  It is checked before the
            store is contacted and again once it answers, a call blocked on
            the network is only bounded by the client's socket timeout.

        Raises:
          CommunicationError: If the store could not be reached in time.
            Ownership must not be assumed.

        Returns:
          bool: True if the lease was acquired, False if another owner
          holds it.
        """
        acquired, duration_ms = self._call(
            "acquire", self.backend.set_if_absent, self.owner_token, self.duration_ms, timeout=timeout
        )
        if acquired:
            self.logger.debug("Acquired lease %r for %dms.", self.resource_key, self.duration_ms)
            self._observe("acquire", "acquired", duration_ms)
        else:
            self.logger.debug("Lease %r is held by another owner.", self.resource_key)
            self._observe("acquire", "contended", duration_ms)
        return bool(acquired)

    def release(self, *, timeout: Optional[float] = None) -> None:
        """Give the lease back, provided it is still ours.

        Parameters:
          timeout(float): Deadline in seconds, see :meth:`acquire`.

        Raises:
          NotOwner: If the lease expired, was taken over, or was never
            acquired by this instance.
          CommunicationError: If the store could not be reached in time.
            The lease may still be held and will then expire on its own.
        """
        released, duration_ms = self._call("release", self.backend.compare_and_delete, self.owner_token, timeout=timeout)
        if not released:
            self._lost("release", duration_ms)

        self.logger.debug("Released lease %r.", self.resource_key)
        self._observe("release", "released", duration_ms)

    def renew(self, *, timeout: Optional[float] = None) -> None:
        """Reset the lease's TTL to ``duration_ms`` from now, provided it is
        still ours.

        Parameters:
          timeout(float): Deadline in seconds, see :meth:`acquire`.

        Raises:
          NotOwner: If the lease was lost before this renewal reached the store.
          CommunicationError: If the store could not be reached in time.
            The TTL may or may not have been reset.
        """
        renewed, duration_ms = self._call(
            "renew", self.backend.compare_and_extend, self.owner_token, self.duration_ms, timeout=timeout
        )
        if not renewed:
            self._lost("renew", duration_ms)

        self.logger.debug("Renewed lease %r for %dms.", self.resource_key, self.duration_ms)
        self._observe("renew", "renewed", duration_ms)

    def owner(self, *, timeout: Optional[float] = None) -> Optional[str]:
        """Return the token currently holding the lease, if any.

        This is a plain read meant to re-derive the actual state after a
        :class:`CommunicationError`.  The answer may be stale by the time
        it is returned, so never gate a write on it.
        """
        value, _ = self._call("owner", self.backend.get, timeout=timeout)
        return value

    def is_held(self, *, timeout: Optional[float] = None) -> bool:
        """Return True if the store currently records this instance as the holder."""
        return self.owner(timeout=timeout) == self.owner_token

    @contextmanager
    def hold(self, *, timeout: Optional[float] = None, raise_on_failure: bool = True) -> Iterator[bool]:
        """Acquire the lease for the duration of a ``with`` block.

        The lease is released when the block exits.  A :class:`NotOwner`
        raised on exit means the lease expired while the block was running.

        Parameters:
          timeout(float): Deadline in seconds, per operation, see :meth:`acquire`.
          raise_on_failure(bool): Whether to raise :class:`LeaseContended`
            when the lease is held by another owner.  If False, the block
            runs and receives False.

        Raises:
          LeaseContended: If the lease is held by another owner and
            ``raise_on_failure`` is True.
        """
        if not self.acquire(timeout=timeout):
            if raise_on_failure:
                raise LeaseContended(f"Lease {self.resource_key!r} is held by another owner")
            yield False
            return

        try:
            yield True
        finally:
            self.release(timeout=timeout)

    def _call(self, operation: str, func: Callable[..., Any], *args, timeout: Optional[float]) -> Tuple[Any, float]:
        deadline = Deadline(timeout)
        if deadline.expired:
            raise LeaseTimeout(f"Deadline elapsed before {operation} of lease {self.resource_key!r}")

        start = time.monotonic()
        try:
            result = func(self.resource_key, *args)
        except CommunicationError as e:
            duration_ms = (time.monotonic() - start) * 1000
            self.logger.warning("Could not %s lease %r: %s", operation, self.resource_key, e)
            self._observe(operation, "communication_error", duration_ms)
            raise

        duration_ms = (time.monotonic() - start) * 1000
        if deadline.expired:
            self.logger.warning("Store answered %s of lease %r after the deadline.", operation, self.resource_key)
            self._observe(operation, "communication_error", duration_ms)
            raise LeaseTimeout(f"Deadline elapsed during {operation} of lease {self.resource_key!r}")
        return result, duration_ms

    def _lost(self, operation: str, duration_ms: float) -> NoReturn:
        self.logger.warning("Lease %r is no longer held by %r.", self.resource_key, self.owner_token)
        self._observe(operation, "not_owner", duration_ms)
        raise NotOwner(f"Lease {self.resource_key!r} is not held by owner {self.owner_token!r}")

    def _observe(self, operation: str, outcome: str, duration_ms: float) -> None:
        if self.metrics is not None:
            self.metrics.observe(operation, outcome, duration_ms)

    def __repr__(self) -> str:
        return (
            f"Lease(resource_key={self.resource_key!r}, owner_token={self.owner_token!r}, "
            f"duration_ms={self.duration_ms!r})"
        )
