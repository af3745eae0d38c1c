"""Expiring key/value caches injected into price and portfolio loaders."""

from __future__ import annotations

import copy
import json
import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Protocol

logger = logging.getLogger(__name__)

Clock = Callable[[], float]


@dataclass(frozen=True)
class CacheEntry:
    value: Any
    expires_at: float  # unix epoch seconds


class Cache(Protocol):
    """Minimal TTL cache contract."""

    def get(self, key: str) -> CacheEntry | None: ...

    def set(self, key: str, value: Any, ttl_seconds: float) -> None: ...


class MemoryCache:
    """Process-local cache; entries vanish once ``clock()`` passes their expiry.

    Values are deep-copied on the way in and out so callers never share state
    with the stored entry.
    """

    def __init__(self, clock: Clock = time.time) -> None:
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}

    def get(self, key: str) -> CacheEntry | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if entry.expires_at <= self._clock():
            del self._entries[key]
            return None
        return CacheEntry(value=copy.deepcopy(entry.value), expires_at=entry.expires_at)

    def set(self, key: str, value: Any, ttl_seconds: float) -> None:
        self._entries[key] = CacheEntry(
            value=copy.deepcopy(value), expires_at=self._clock() + float(ttl_seconds)
        )

    def clear(self) -> None:
        self._entries.clear()


class JSONFileCache:
    """Cache persisted as ``{key: {"value": ..., "expires_at": ...}}`` in a JSON file.

    Values must be JSON serialisable. A corrupt file is treated as empty.
    """

    def __init__(self, path: str | Path, clock: Clock = time.time) -> None:
        self.path = Path(path)
        self._clock = clock

    def _read(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            with self.path.open() as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as exc:
            logger.warning("Ignoring unreadable cache file %s: %s", self.path, exc)
            return {}
        return data if isinstance(data, dict) else {}

    def _write(self, data: dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("w") as f:
            json.dump(data, f)

    def get(self, key: str) -> CacheEntry | None:
        raw = self._read().get(key)
        if not isinstance(raw, dict) or "expires_at" not in raw:
            return None
        expires_at = float(raw["expires_at"])
        if expires_at <= self._clock():
            return None
        return CacheEntry(value=raw.get("value"), expires_at=expires_at)

    def set(self, key: str, value: Any, ttl_seconds: float) -> None:
        data = self._read()
        now = self._clock()
        # prune stale keys while rewriting
        data = {
            k: v
            for k, v in data.items()
            if isinstance(v, dict) and float(v.get("expires_at", 0.0)) > now
        }
        data[key] = {"value": value, "expires_at": now + float(ttl_seconds)}
        self._write(data)


__all__ = ["Cache", "CacheEntry", "JSONFileCache", "MemoryCache"]
