from __future__ import annotations

import threading
from collections import OrderedDict
from typing import Callable, Generic, Hashable, Optional, TypeVar

from ..core.constants import DESCRIPTOR_CACHE_SIZE

V = TypeVar("V")


class DescriptorCache(Generic[V]):
    """Bounded, insertion-ordered cache of parsed descriptors.

    When the capacity is exceeded the oldest *inserted* entry is evicted.
    Re-setting an existing key moves it to the newest position; reads do not
    refresh recency. There is no time-based expiry.

    A single lock guards lookups and insert+evict, so instances can be shared
    across request threads.
    """

    def __init__(self, capacity: int = DESCRIPTOR_CACHE_SIZE):
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        self._capacity = int(capacity)
        self._items: OrderedDict[Hashable, V] = OrderedDict()
        self._lock = threading.Lock()

    @property
    def capacity(self) -> int:
        return self._capacity

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    def __contains__(self, key: Hashable) -> bool:
        with self._lock:
            return key in self._items

    def get(self, key: Hashable) -> Optional[V]:
        with self._lock:
            return self._items.get(key)

    def set(self, key: Hashable, value: V) -> None:
        with self._lock:
            self._items.pop(key, None)
            self._items[key] = value
            while len(self._items) > self._capacity:
                self._items.popitem(last=False)

    def get_or_parse(self, key: Optional[Hashable], raw: object, parse: Callable[[object], Optional[V]]) -> Optional[V]:
        """Return the cached value for ``key`` or parse ``raw`` and remember it.

        ``raw`` is ignored on a hit. A ``None`` key bypasses the cache entirely
        (used for single-use incoming descriptors). Failed parses are not
        cached.
        """
        if key is None:
            return parse(raw)

        with self._lock:
            if key in self._items:
                return self._items[key]

        parsed = parse(raw)
        if parsed is not None:
            self.set(key, parsed)
        return parsed

    def clear(self) -> None:
        with self._lock:
            self._items.clear()
