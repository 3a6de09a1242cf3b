"""
RankPilot — Tool response cache.

Keyed by (tool slug, validated input). Entries expire after a TTL and the
oldest entry is evicted once the cache is full.
"""

import json
import time
from collections import OrderedDict
from typing import Any, Callable


class ResponseCache:
    def __init__(
        self,
        ttl_secs: int,
        max_entries: int = 1000,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.ttl_secs = ttl_secs
        self.max_entries = max_entries
        self._clock = clock
        self._entries: OrderedDict[str, tuple[float, Any]] = OrderedDict()
        self.hits = 0
        self.misses = 0

    @property
    def enabled(self) -> bool:
        return self.ttl_secs > 0 and self.max_entries > 0

    @staticmethod
    def make_key(tool: str, params: dict) -> str:
        return f"{tool}:{json.dumps(params, sort_keys=True, default=str)}"

    def get(self, tool: str, params: dict) -> Any | None:
        if not self.enabled:
            return None
        key = self.make_key(tool, params)
        entry = self._entries.get(key)
        if entry is None:
            self.misses += 1
            return None
        expires_at, value = entry
        if self._clock() >= expires_at:
            del self._entries[key]
            self.misses += 1
            return None
        self.hits += 1
        return value

    def set(self, tool: str, params: dict, value: Any) -> None:
        if not self.enabled:
            return
        key = self.make_key(tool, params)
        self._entries.pop(key, None)
        self._entries[key] = (self._clock() + self.ttl_secs, value)
        while len(self._entries) > self.max_entries:
            self._entries.popitem(last=False)

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
