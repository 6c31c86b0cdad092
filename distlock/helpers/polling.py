import time
from typing import TYPE_CHECKING, Callable

from ..logging import get_logger
from .backoff import BackoffStrategy, poll_delay

if TYPE_CHECKING:
    from ..lease import Lease

logger = get_logger(__name__)


def acquire_with_backoff(
    lease: "Lease",
    *,
    max_wait: float,
    backoff_strategy: BackoffStrategy = "exponential",
    min_backoff: int = 5,
    max_backoff: int = 2000,
    jitter: bool = True,
    sleep: Callable[[float], None] = time.sleep,
) -> bool:
    """Poll :meth:`Lease.acquire` until it succeeds or ``max_wait`` elapses.

    Contenders are not queued: whoever polls first after the holder lets
    go wins.  A :class:`CommunicationError<distlock.errors.CommunicationError>`
    is raised as soon as it happens, the lease is never assumed held
    after an ambiguous failure.

    Parameters:
      lease(Lease): The lease to acquire.
      max_wait(float): The number of seconds to keep trying for.
      backoff_strategy(str): See :func:`poll_delay`.
      min_backoff(int): The first wait between attempts in milliseconds.
      max_backoff(int): The longest wait between attempts in milliseconds.
      jitter(bool): Whether to randomize waits, see :func:`poll_delay`.
      sleep(callable): Called with the number of seconds to wait.

    Returns:
      bool: True if the lease was acquired, False if ``max_wait`` elapsed.
    """
    give_up_at = time.monotonic() + max_wait
    attempts = 0
    while True:
        if lease.acquire():
            return True

        attempts += 1
        remaining = give_up_at - time.monotonic()
        if remaining <= 0:
            logger.debug("Gave up acquiring lease %r after %d attempts.", lease.resource_key, attempts)
            return False

        sleep(
            poll_delay(
                attempts,
                remaining=remaining,
                backoff_strategy=backoff_strategy,
                min_backoff=min_backoff,
                max_backoff=max_backoff,
                jitter=jitter,
            )
        )
