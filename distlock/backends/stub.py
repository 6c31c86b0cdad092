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
import threading
import time
from typing import Dict, Optional, Tuple

from ..backend import LeaseBackend


class StubBackend(LeaseBackend):
    """An in-memory lease backend.  For use in unit tests and
    single-process runs.

    Entries expire according to :func:`time.time`, so tests may drive
    expiry with freezegun.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self.entries: Dict[str, Tuple[str, float]] = {}

    def set_if_absent(self, key: str, value: str, ttl_ms: int) -> bool:
        with self._lock:
            if self._lookup(key) is not None:
                return False

            self.entries[key] = (value, self._expires_at(ttl_ms))
            return True

    def compare_and_delete(self, key: str, expected: str) -> bool:
        with self._lock:
            if self._lookup(key) != expected:
                return False

            del self.entries[key]
            return True

    def compare_and_extend(self, key: str, expected: str, ttl_ms: int) -> bool:
        with self._lock:
            if self._lookup(key) != expected:
                return False

            self.entries[key] = (expected, self._expires_at(ttl_ms))
            return True

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            return self._lookup(key)

    def flush_all(self) -> None:
        with self._lock:
            self.entries.clear()

    def _lookup(self, key: str) -> Optional[str]:
        entry = self.entries.get(key)
        if entry is None:
            return None

        value, expires_at = entry
        if time.time() >= expires_at:
            del self.entries[key]
            return None
        return value

    @staticmethod
    def _expires_at(ttl_ms: int) -> float:
        return time.time() + ttl_ms / 1000
