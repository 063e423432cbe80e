from __future__ import annotations

import threading
import time
from dataclasses import dataclass
from typing import Dict, Protocol, Tuple


class TokenStore(Protocol):
    """Minimal protocol for single-use token storage, keyed per secret."""

    def put(self, secret_id: str, code: str) -> None: ...

    def contains(self, secret_id: str, code: str) -> bool: ...


class LastCodeTokenStore:
    """
    Remembers only the most recently used code per secret.

    A code that comes round again at a later counter is accepted once a
    different code has been used in between.
    """

    def __init__(self) -> None:
        self._last: Dict[str, str] = {}
        self._lock = threading.Lock()

    def put(self, secret_id: str, code: str) -> None:
        with self._lock:
            self._last[secret_id] = code

    def contains(self, secret_id: str, code: str) -> bool:
        with self._lock:
            return self._last.get(secret_id) == code

    def clear(self) -> None:
        with self._lock:
            self._last.clear()

    def size(self) -> int:
        with self._lock:
            return len(self._last)


@dataclass
class _TokenEntry:
    expiry: float | None = None


class MemoryTokenStore:
    """In-memory token store with optional TTL support."""

    def __init__(self, ttl: float | None = None) -> None:
        if ttl is not None and ttl <= 0:
            raise ValueError("ttl must be a positive number of seconds")
        self.ttl = ttl
        self._store: Dict[Tuple[str, str], _TokenEntry] = {}
        self._lock = threading.Lock()

    def put(self, secret_id: str, code: str) -> None:
        now = time.time()
        expiry = now + self.ttl if self.ttl else None
        with self._lock:
            self._purge_expired_unlocked(now)
            self._store[(secret_id, code)] = _TokenEntry(expiry=expiry)

    def contains(self, secret_id: str, code: str) -> bool:
        now = time.time()
        with self._lock:
            entry = self._store.get((secret_id, code))
            if entry is None:
                return False
            if entry.expiry is not None and entry.expiry <= now:
                del self._store[(secret_id, code)]
                return False
            return True

    def clear(self) -> None:
        with self._lock:
            self._store.clear()

    def size(self) -> int:
        with self._lock:
            self._purge_expired_unlocked(time.time())
            return len(self._store)

    def _purge_expired_unlocked(self, now: float) -> None:
        expired = [
            key
            for key, entry in self._store.items()
            if entry.expiry is not None and entry.expiry <= now
        ]
        for key in expired:
            del self._store[key]


__all__ = ["TokenStore", "LastCodeTokenStore", "MemoryTokenStore"]
