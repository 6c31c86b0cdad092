import threading
import time
import types
from typing import TYPE_CHECKING, Callable, Optional, Type

from ..errors import CommunicationError, NotOwner
from ..logging import get_logger

if TYPE_CHECKING:
    from ..lease import Lease


class LeaseRenewer:
    """Keep a held lease alive by renewing it from a daemon thread.

    The renewal cadence is entirely up to the caller: ``interval`` must
    leave room for at least one round trip to the store plus scheduling
    jitter before the lease's TTL runs out.

    A :class:`NotOwner` answer means the lease is gone, the renewer calls
    ``on_lost`` and stops.  Communication failures are logged and renewal
    keeps being attempted until a full lease duration has passed since the
    last confirmed renewal, at which point the lease is considered lost.

    Parameters:
      lease(Lease): A lease the caller has already acquired.
      interval(float): Seconds between two renewals, strictly shorter than
        the lease duration.
      on_lost(callable): Called with the lease once it is known to be lost.
    """

    def __init__(self, lease: "Lease", *, interval: float, on_lost: Optional[Callable[["Lease"], None]] = None) -> None:
        if interval <= 0:
            raise ValueError("interval must be positive")
        if interval * 1000 >= lease.duration_ms:
            raise ValueError("interval must be shorter than the lease duration")

        self.lease = lease
        self.interval = interval
        self.on_lost = on_lost
        self.logger = get_logger(__name__, type(self))
        self.stop_event = threading.Event()
        self.thread: Optional[threading.Thread] = None
        self.last_renewed_at = time.monotonic()
        self._lost = False

    @property
    def lost(self) -> bool:
        return self._lost

    def __enter__(self) -> "LeaseRenewer":
        self.start()
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[types.TracebackType],
    ) -> None:
        self.stop()

    def start(self) -> None:
        if self.thread is not None:
            raise RuntimeError("LeaseRenewer has already been started")

        # The caller just acquired or renewed the lease.
        self.last_renewed_at = time.monotonic()
        self.thread = threading.Thread(
            target=self._run, name=f"lease-renewer-{self.lease.resource_key}", daemon=True
        )
        self.thread.start()

    def stop(self, timeout: Optional[float] = None) -> None:
        self.stop_event.set()
        if self.thread is not None and self.thread is not threading.current_thread():
            self.thread.join(timeout)

    def _run(self) -> None:
        self.logger.debug("Renewing lease %r every %ss.", self.lease.resource_key, self.interval)
        while not self.stop_event.wait(self.interval):
            if not self.renew_once():
                break

    def renew_once(self) -> bool:
        """Renew the lease once.

        Returns:
          bool: False if the lease is lost and renewal should stop.
        """
        # The store resets the TTL somewhere between sending and the answer, count from the send.
        sent_at = time.monotonic()
        try:
            self.lease.renew(timeout=self.interval)
        except NotOwner:
            self._mark_lost()
            return False
        except CommunicationError as e:
            elapsed_ms = (time.monotonic() - self.last_renewed_at) * 1000
            if elapsed_ms >= self.lease.duration_ms:
                self.logger.warning(
                    "Lease %r could not be renewed for %dms and has expired: %s",
                    self.lease.resource_key,
                    elapsed_ms,
                    e,
                )
                self._mark_lost()
                return False
            return True

        self.last_renewed_at = sent_at
        return True

    def _mark_lost(self) -> None:
        self._lost = True
        self.stop_event.set()
        self.logger.warning("Stopped renewing lost lease %r.", self.lease.resource_key)
        if self.on_lost is not None:
            self.on_lost(self.lease)
