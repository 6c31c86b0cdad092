from .backoff import BackoffStrategy, poll_delay
from .deadline import Deadline
from .polling import acquire_with_backoff
from .redis_client import redis_client
from .renewer import LeaseRenewer

__all__ = ["BackoffStrategy", "Deadline", "LeaseRenewer", "acquire_with_backoff", "poll_delay", "redis_client"]
