"""Open-addressing hash map with case-insensitive string keys."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterator, List, Optional

LOAD_FACTOR = 0.7
_MASK = (1 << 64) - 1


@dataclass
class Pair:
    """A key and its value; an erased entry has ``key`` set to None."""

    key: Optional[str]
    value: Any


def hash_key(key: str, capacity: int) -> int:
    """Case-insensitive hash of ``key`` reduced to ``range(capacity)``."""
    value = 0
    for byte in key.encode("utf-8"):
        if 65 <= byte <= 90:
            byte += 32
        elif byte >= 128:
            byte -= 256
        value = (value * 33 + byte) & _MASK
    return value % capacity


def keys_equal(key1: Optional[str], key2: Optional[str]) -> bool:
    """Compare two keys ignoring ASCII case; None never matches."""
    if key1 is None or key2 is None:
        return False
    return key1.encode("utf-8").lower() == key2.encode("utf-8").lower()


class HashMap:
    """Linear-probing map that grows once it is more than 70% full.

    Inserting an existing key keeps the stored value. ``first`` and ``next``
    walk the entries while remembering a cursor, which ``search`` also moves.
    """

    def __init__(self, capacity: int) -> None:
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self.capacity = capacity
        self.size = 0
        self.current = -1
        self._buckets: List[Optional[Pair]] = [None] * capacity

    def insert(self, key: str, value: Any) -> None:
        """Store ``value`` under ``key`` unless the key is already present."""
        if self.size / self.capacity > LOAD_FACTOR:
            self.enlarge()

        index = hash_key(key, self.capacity)
        origin = index
        while True:
            bucket = self._buckets[index]
            if bucket is None or bucket.key is None:
                self._buckets[index] = Pair(key, value)
                self.current = index
                self.size += 1
                return
            if keys_equal(bucket.key, key):
                return
            index = (index + 1) % self.capacity
            if index == origin:
                return

    def enlarge(self) -> None:
        """Double the capacity and rehash every live entry."""
        old = self._buckets
        self.capacity *= 2
        self._buckets = [None] * self.capacity
        self.size = 0
        self.current = -1
        for bucket in old:
            if bucket is not None and bucket.key is not None:
                self.insert(bucket.key, bucket.value)

    def _find(self, key: str) -> Optional[int]:
        index = hash_key(key, self.capacity)
        origin = index
        while True:
            bucket = self._buckets[index]
            if bucket is None:
                return None
            if keys_equal(bucket.key, key):
                return index
            index = (index + 1) % self.capacity
            if index == origin:
                return None

    def search(self, key: str) -> Optional[Pair]:
        """Return the pair stored under ``key``, or None."""
        index = self._find(key)
        if index is None:
            return None
        self.current = index
        return self._buckets[index]

    def erase(self, key: str) -> None:
        """Remove ``key`` if present, leaving a reusable slot behind."""
        pair = self.search(key)
        if pair is not None:
            pair.key = None
            self.size -= 1

    def _scan_from(self, start: int) -> Optional[Pair]:
        for index in range(start, self.capacity):
            bucket = self._buckets[index]
            if bucket is not None and bucket.key is not None:
                self.current = index
                return bucket
        return None

    def first(self) -> Optional[Pair]:
        """Move the cursor to the first live entry and return it."""
        return self._scan_from(0)

    def next(self) -> Optional[Pair]:
        """Advance the cursor to the following live entry and return it."""
        return self._scan_from(self.current + 1)

    def __len__(self) -> int:
        return self.size

    def __iter__(self) -> Iterator[Pair]:
        """Yield live pairs in slot order without moving the cursor."""
        for bucket in self._buckets:
            if bucket is not None and bucket.key is not None:
                yield bucket

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self._find(key) is not None