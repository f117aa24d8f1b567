"""Per-key mutual exclusion.

Work on different keys (products, orders, cart owners) proceeds in
parallel; work on the same key is serialised. Locks are reentrant, so a
handler may call into another that takes the same key.

A key's lock lives only while some thread holds it or waits on it, so
the registry stays as small as the set of keys in use.
"""

from __future__ import annotations

import threading
from collections.abc import Iterable, Iterator
from contextlib import ExitStack, contextmanager


class _Entry:

    __slots__ = ("lock", "users")

    def __init__(self) -> None:
        self.lock = threading.RLock()
        self.users = 0


class KeyedLock:

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._entries: dict[str, _Entry] = {}

    def __len__(self) -> int:
        with self._guard:
            return len(self._entries)

    def _checkout(self, key: str) -> _Entry:
        with self._guard:
            entry = self._entries.get(key)
            if entry is None:
                entry = self._entries[key] = _Entry()
            entry.users += 1
            return entry

    def _checkin(self, key: str, entry: _Entry) -> None:
        with self._guard:
            entry.users -= 1
            if entry.users == 0:
                del self._entries[key]

    @contextmanager
    def hold(self, key: str) -> Iterator[None]:
        entry = self._checkout(key)
        try:
            with entry.lock:
                yield
        finally:
            self._checkin(key, entry)

    @contextmanager
    def hold_all(self, keys: Iterable[str]) -> Iterator[None]:
        """Hold every key at once, taken in sorted order."""
        with ExitStack() as stack:
            for key in sorted(set(keys)):
                stack.enter_context(self.hold(key))
            yield


# Process-wide registries shared by every handler instance.
PRODUCT_LOCKS = KeyedLock()
ORDER_LOCKS = KeyedLock()
CART_LOCKS = KeyedLock()
