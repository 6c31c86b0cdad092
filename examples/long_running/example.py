import logging
import os
import random
import sys
import time

from distlock import Lease, NotOwner
from distlock.backends import RedisBackend
from distlock.helpers import LeaseRenewer, acquire_with_backoff

logging.basicConfig(level=logging.DEBUG, format="[%(asctime)s] [%(name)s] [%(levelname)s] %(message)s")
logger = logging.getLogger("example")

backend = RedisBackend(url=os.getenv("REDIS_URL", "redis://localhost:6379/0"))


def fib(n):
    x, y = 1, 1
    while n > 2:
        x, y = x + y, x
        n -= 1
    return x


def long_running(duration):
    lease = Lease(backend, "long-running", duration_ms=10000)
    if not acquire_with_backoff(lease, max_wait=60):
        logger.info("Another process is already running the job.")
        return 1

    lost = []
    with LeaseRenewer(lease, interval=3, on_lost=lost.append):
        deadline = time.monotonic() + duration
        while time.monotonic() < deadline and not lost:
            n = random.randint(1000, 100000)
            logger.info("Computing fib(%d).", n)
            fib(n)

    if lost:
        logger.warning("Lease was lost, the last batch ran unprotected.")
        return 1

    try:
        lease.release()
    except NotOwner:
        logger.warning("Lease expired before it could be released.")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(long_running(int(sys.argv[1]) if len(sys.argv) > 1 else 30))
