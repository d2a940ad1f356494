"""Per-domain locks serializing certificate requests within the process."""

from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Iterator


def normalize_domain(domain: str) -> str:
    """Lower-case a domain and drop any trailing dot."""
    return domain.strip().rstrip(".").lower()


class DomainLocks:
    """A registry of locks keyed by normalized domain name.

    Locks are created lazily and kept for the life of the process; the number
    of distinct domains an operator manages is small.
    """

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: dict[str, threading.Lock] = {}

    def _get(self, domain: str) -> threading.Lock:
        key = normalize_domain(domain)
        with self._guard:
            lock = self._locks.get(key)
            if lock is None:
                lock = threading.Lock()
                self._locks[key] = lock
            return lock

    @contextmanager
    def hold(self, domain: str) -> Iterator[None]:
        """Hold the lock for a domain for the duration of the block."""
        lock = self._get(domain)
        with lock:
            yield

    def __len__(self) -> int:
        with self._guard:
            return len(self._locks)
