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
from typing import Optional

import redis

from ..backend import LeaseBackend
from ..errors import CommunicationError
from ..helpers.redis_client import redis_client

#: The prefix prepended to every lease key.
DEFAULT_KEY_PREFIX = "distlock:"

#: Socket and connect timeout, in seconds, of clients built from a URL.
DEFAULT_SOCKET_TIMEOUT = 5.0

# Delete the key only if it still holds the caller's token.
# KEYS[1]: lease key, ARGV[1]: owner token.
COMPARE_AND_DELETE_LUA = """
if redis.call('GET', KEYS[1]) == ARGV[1] then
  return redis.call('DEL', KEYS[1])
end
return 0
"""

# Reset the key's TTL only if it still holds the caller's token.
# KEYS[1]: lease key, ARGV[1]: owner token, ARGV[2]: ttl in milliseconds.
COMPARE_AND_EXTEND_LUA = """
if redis.call('GET', KEYS[1]) == ARGV[1] then
  return redis.call('PEXPIRE', KEYS[1], ARGV[2])
end
return 0
"""


class RedisBackend(LeaseBackend):
    """A lease backend for Redis_.

    Acquisition is a single ``SET key token NX PX ttl``.  Release and
    renewal run as Lua scripts so that comparing the stored token and
    acting on the key happen as one indivisible step on the server.

    Parameters:
      url(str): An optional connection URL.  If both a URL and
        connection parameters are provided, the URL is used.
      client(Redis): An optional client.  If this is passed,
        then all other parameters are ignored.
      key_prefix(str): A prefix to prepend to all lease keys.
      socket_timeout(float): Socket timeout, in seconds, of the client
        built from ``url``.  It bounds how long a single call may block.
      **parameters(dict): Connection parameters are passed directly
        to :class:`redis.Redis`.

    .. _redis: https://redis.io
    """

    def __init__(
        self,
        *,
        url: Optional[str] = None,
        client: Optional[redis.Redis] = None,
        key_prefix: str = DEFAULT_KEY_PREFIX,
        socket_timeout: float = DEFAULT_SOCKET_TIMEOUT,
        **parameters,
    ) -> None:
        super().__init__()
        self.client = client or redis_client(url=url, socket_timeout=socket_timeout, **parameters)
        if self.client is None:
            raise ValueError("A redis client or url must be provided for RedisBackend")
        self.key_prefix = key_prefix

        self._compare_and_delete_script = self.client.register_script(COMPARE_AND_DELETE_LUA)
        self._compare_and_extend_script = self.client.register_script(COMPARE_AND_EXTEND_LUA)

    def set_if_absent(self, key: str, value: str, ttl_ms: int) -> bool:
        try:
            created = self.client.set(self._build_key(key), value, nx=True, px=ttl_ms)
        except redis.exceptions.RedisError as e:
            raise CommunicationError(f"Could not set lease key {key!r}: {e}") from e
        return bool(created)

    def compare_and_delete(self, key: str, expected: str) -> bool:
        try:
            deleted = self._compare_and_delete_script(keys=[self._build_key(key)], args=[expected])
        except redis.exceptions.RedisError as e:
            raise CommunicationError(f"Could not delete lease key {key!r}: {e}") from e
        return bool(deleted)

    def compare_and_extend(self, key: str, expected: str, ttl_ms: int) -> bool:
        try:
            extended = self._compare_and_extend_script(keys=[self._build_key(key)], args=[expected, ttl_ms])
        except redis.exceptions.RedisError as e:
            raise CommunicationError(f"Could not extend lease key {key!r}: {e}") from e
        return bool(extended)

    def get(self, key: str) -> Optional[str]:
        try:
            value = self.client.get(self._build_key(key))
        except redis.exceptions.RedisError as e:
            raise CommunicationError(f"Could not read lease key {key!r}: {e}") from e

        if isinstance(value, bytes):
            return value.decode("utf-8")
        return value

    def _build_key(self, key: str) -> str:
        return f"{self.key_prefix}{key}"
