"""Concurrency-safe entry sets used for exclusion lookups.

An EntrySet maps a key (domain or host) to an integer counter. In the
blacklist pipeline the counter is only a presence marker; lookups go
through contains() or contains_suffix().
"""

from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Iterable, Iterator


class ReadWriteLock:
    """Many concurrent readers, one writer at a time.

    New readers wait while a writer is waiting, so writers are not starved.
    """

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writers_waiting = 0
        self._writing = False

    @contextmanager
    def read_locked(self) -> Iterator[None]:
        with self._cond:
            while self._writing or self._writers_waiting:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if self._readers == 0:
                    self._cond.notify_all()

    @contextmanager
    def write_locked(self) -> Iterator[None]:
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writing or self._readers:
                    self._cond.wait()
            finally:
                self._writers_waiting -= 1
            self._writing = True
        try:
            yield
        finally:
            with self._cond:
                self._writing = False
                self._cond.notify_all()


def get_subdomains(key: str) -> list[str]:
    """Return key and each of its parent domains, longest first.

    The bare top-level label is not included:
    'a.b.example.com' -> ['a.b.example.com', 'b.example.com', 'example.com']
    """
    labels = [label for label in key.strip(".").split(".") if label]
    if len(labels) < 2:
        return [key] if key else []
    return [".".join(labels[i:]) for i in range(len(labels) - 1)]


class EntrySet:
    """Mapping of key -> counter guarded by a read/write lock."""

    def __init__(self, keys: Iterable[str] | None = None) -> None:
        self._entries: dict[str, int] = {}
        self._lock = ReadWriteLock()
        if keys is not None:
            self.add(keys)

    def add(self, keys: Iterable[str]) -> None:
        """Insert keys, keeping the counter of keys already present."""
        with self._lock.write_locked():
            for key in keys:
                self._entries.setdefault(key, 0)

    def set(self, key: str, value: int) -> None:
        with self._lock.write_locked():
            self._entries[key] = value

    def contains(self, key: str) -> bool:
        with self._lock.read_locked():
            return key in self._entries

    __contains__ = contains

    def contains_suffix(self, key: str) -> bool:
        """True if key or one of its parent domains is a member."""
        with self._lock.read_locked():
            return any(k in self._entries for k in get_subdomains(key))

    def merge(self, other: EntrySet) -> EntrySet:
        """Union other into this set and return self."""
        if other is self:
            return self
        # Snapshot first so the two locks are never held together
        snapshot = other.items()
        with self._lock.write_locked():
            self._entries.update(snapshot)
        return self

    def items(self) -> dict[str, int]:
        with self._lock.read_locked():
            return dict(self._entries)

    def keys(self) -> list[str]:
        """Sorted member keys."""
        with self._lock.read_locked():
            return sorted(self._entries)

    def render(self) -> str:
        """Deterministic '"key":count,' lines, sorted by key."""
        with self._lock.read_locked():
            lines = sorted(f'"{k}":{v},\n' for k, v in self._entries.items())
        return "".join(lines)

    def __len__(self) -> int:
        with self._lock.read_locked():
            return len(self._entries)

    def __str__(self) -> str:
        return self.render()
