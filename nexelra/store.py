"""An ordered in-memory key-value store, prefix views over it, and pagination."""

from __future__ import annotations

import bisect
from dataclasses import dataclass
from typing import Callable, Iterator, Optional, Tuple

DEFAULT_LIMIT = 100

Entry = Tuple[bytes, bytes]


def _prefix_end(prefix: bytes) -> Optional[bytes]:
    """Return the smallest key greater than every key starting with ``prefix``."""
    end = bytearray(prefix)
    while end:
        if end[-1] != 0xFF:
            end[-1] += 1
            return bytes(end)
        end.pop()
    return None


class KVStore:
    """A byte-keyed store that iterates its keys in ascending byte order."""

    def __init__(self) -> None:
        self._keys: list[bytes] = []
        self._data: dict[bytes, bytes] = {}

    def __len__(self) -> int:
        return len(self._keys)

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def get(self, key: bytes) -> Optional[bytes]:
        """Return the value stored under ``key``, or None."""
        return self._data.get(bytes(key))

    def set(self, key: bytes, value: bytes) -> None:
        """Store ``value`` under ``key``."""
        key = bytes(key)
        if not key:
            raise ValueError("key is nil")
        if value is None:
            raise ValueError("value is nil")
        if key not in self._data:
            bisect.insort(self._keys, key)
        self._data[key] = bytes(value)

    def delete(self, key: bytes) -> None:
        """Remove ``key`` if it is present."""
        key = bytes(key)
        if self._data.pop(key, None) is not None:
            del self._keys[bisect.bisect_left(self._keys, key)]

    def items(
        self, start: Optional[bytes] = None, end: Optional[bytes] = None
    ) -> Iterator[Entry]:
        """Yield ``(key, value)`` pairs with ``start <= key < end`` in key order."""
        lo = 0 if start is None else bisect.bisect_left(self._keys, start)
        hi = len(self._keys) if end is None else bisect.bisect_left(self._keys, end)
        snapshot = [(key, self._data[key]) for key in self._keys[lo:hi]]
        yield from snapshot


class PrefixStore:
    """A view of a store restricted to the keys that start with a prefix."""

    def __init__(self, parent: KVStore, prefix: bytes) -> None:
        self.parent = parent
        self.prefix = bytes(prefix)

    def get(self, key: bytes) -> Optional[bytes]:
        return self.parent.get(self.prefix + bytes(key))

    def set(self, key: bytes, value: bytes) -> None:
        self.parent.set(self.prefix + bytes(key), value)

    def delete(self, key: bytes) -> None:
        self.parent.delete(self.prefix + bytes(key))

    def items(self) -> Iterator[Entry]:
        """Yield the view's pairs in key order, with the prefix stripped."""
        size = len(self.prefix)
        for key, value in self.parent.items(self.prefix, _prefix_end(self.prefix)):
            yield key[size:], value


@dataclass
class PageRequest:
    """Which part of a listing to return."""

    key: Optional[bytes] = None
    offset: int = 0
    limit: int = 0
    count_total: bool = False
    reverse: bool = False


@dataclass
class PageResponse:
    """Where the next page starts and, if asked for, how many entries exist."""

    next_key: Optional[bytes] = None
    total: int = 0


def paginate(
    store,
    page_request: Optional[PageRequest],
    on_result: Callable[[bytes, bytes], None],
) -> PageResponse:
    """Feed one page of ``store`` to ``on_result`` and describe the page."""
    request = page_request if page_request is not None else PageRequest()
    key = request.key
    offset = request.offset
    limit = request.limit
    count_total = request.count_total

    if offset > 0 and key:
        raise ValueError("invalid request, either offset or key is expected, got both")
    if limit == 0:
        limit = DEFAULT_LIMIT
        count_total = True

    entries = list(store.items())
    if request.reverse:
        entries.reverse()

    if key:
        if request.reverse:
            entries = [entry for entry in entries if entry[0] <= key]
        else:
            entries = [entry for entry in entries if entry[0] >= key]
        next_key = None
        count = 0
        for entry_key, value in entries:
            if count == limit:
                next_key = entry_key
                break
            on_result(entry_key, value)
            count += 1
        return PageResponse(next_key=next_key)

    end = offset + limit
    next_key = None
    count = 0
    for entry_key, value in entries:
        count += 1
        if count <= offset:
            continue
        if count <= end:
            on_result(entry_key, value)
        elif count == end + 1:
            next_key = entry_key
            if not count_total:
                break
    return PageResponse(next_key=next_key, total=count if count_total else 0)