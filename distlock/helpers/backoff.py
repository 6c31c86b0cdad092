from random import uniform
from typing import Optional

from typing_extensions import Literal

from ..errors import UnknownStrategy

BackoffStrategy = Literal["constant", "linear", "exponential"]

# Keeps 2 ** exponent small once max_backoff is reached anyway.
MAX_EXPONENT = 32


def poll_delay(
    attempts: int,
    *,
    remaining: Optional[float] = None,
    backoff_strategy: BackoffStrategy = "exponential",
    min_backoff: int = 5,
    max_backoff: int = 2000,
    jitter: bool = True,
) -> float:
    """Compute how long to wait, in seconds, before polling a contended
    lease again.

    Parameters:
      attempts(int): The number of failed acquisition attempts so far,
        at least 1.
      remaining(float): Seconds left before the caller gives up.  The
        delay never exceeds it, so the last poll happens right before the
        caller's deadline rather than after it.
      backoff_strategy(str): ``constant`` waits ``min_backoff`` every time,
        ``linear`` waits ``attempts * min_backoff`` and ``exponential``
        doubles the wait after every attempt.
      min_backoff(int): The first wait, in milliseconds.
      max_backoff(int): The longest wait, in milliseconds.
      jitter(bool): If true, wait a random duration between half and all
        of the computed backoff, so that contenders that saw the same
        holder do not poll in lockstep.

    Returns:
      float: The delay in seconds.
    """
    if min_backoff <= 0 or max_backoff < min_backoff:
        raise ValueError("backoffs must satisfy 0 < min_backoff <= max_backoff")

    attempts = max(attempts, 1)
    if backoff_strategy == "constant":
        backoff_ms = float(min_backoff)
    elif backoff_strategy == "linear":
        backoff_ms = float(min(attempts * min_backoff, max_backoff))
    elif backoff_strategy == "exponential":
        backoff_ms = float(min(min_backoff * 2 ** min(attempts - 1, MAX_EXPONENT), max_backoff))
    else:
        raise UnknownStrategy(f"Unknown backoff strategy: {backoff_strategy}")

    if jitter:
        backoff_ms = uniform(backoff_ms / 2, backoff_ms)

    delay = backoff_ms / 1000
    if remaining is not None:
        delay = min(delay, max(remaining, 0.0))
    return delay
