import time
from typing import Optional


class Deadline:
    """Track a caller's deadline, expressed as a timeout in seconds.

    A ``None`` timeout never expires.
    """

    def __init__(self, timeout: Optional[float] = None) -> None:
        self.timeout = timeout
        self.started_at = time.monotonic()

    @property
    def remaining(self) -> Optional[float]:
        if self.timeout is None:
            return None
        return max(self.timeout - (time.monotonic() - self.started_at), 0.0)

    @property
    def expired(self) -> bool:
        return self.remaining == 0.0

    def __repr__(self) -> str:
        return f"Deadline(timeout={self.timeout!r}, remaining={self.remaining!r})"
