from typing import Any, Dict, Optional
from urllib.parse import ParseResult, urlparse

import redis


def redis_client(url: Optional[str], socket_timeout: Optional[float] = None, **parameters) -> Optional[redis.Redis]:
    """Build the Redis client lease keys are stored with.

    ``sentinel://[:password@]host:port/service`` URLs connect to the
    current master of ``service``, so that leases follow a failover.  Any
    other URL is passed to :meth:`redis.Redis.from_url`.

    Parameters:
      url(str): The connection URL.  None yields None, letting the caller
        report the missing configuration.
      socket_timeout(float): Bounds connecting and every command, in
        seconds.  This is what bounds a single lease operation.
      **parameters(dict): Passed to the client.

    Returns:
      Redis: The client, or None without a URL.
    """
    if not url:
        return None

    if socket_timeout is not None:
        parameters.setdefault("socket_timeout", socket_timeout)
        parameters.setdefault("socket_connect_timeout", socket_timeout)
        parameters.setdefault("socket_keepalive", True)

    url_parsed = urlparse(url)
    if url_parsed.scheme == "sentinel":
        return _sentinel_master(url_parsed, parameters)
    return redis.Redis.from_url(url, **parameters)


def _sentinel_master(url_parsed: ParseResult, parameters: Dict[str, Any]) -> redis.Redis:
    service_name = url_parsed.path.strip("/").split("/")[0]
    if not service_name:
        raise ValueError("sentinel URLs must name the monitored service, as in sentinel://host:26379/mymaster")

    sentinel_parameters = {
        key: value
        for key, value in parameters.items()
        if key in ("socket_timeout", "socket_connect_timeout", "socket_keepalive")
    }
    sentinel = redis.Sentinel(
        [(url_parsed.hostname, url_parsed.port or 26379)],
        sentinel_kwargs={"password": url_parsed.password, **sentinel_parameters},
    )
    return sentinel.master_for(service_name=service_name, password=url_parsed.password, **parameters)
