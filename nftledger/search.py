"""Binary search over sorted sequences."""

from __future__ import annotations

from bisect import bisect_left
from typing import Any, Callable, Sequence


def find_index(
    items: Sequence[Any],
    element: str,
    key: Callable[[Any], str] | None = None,
) -> int:
    """Return the index of ``element`` in the sorted ``items``, or -1.

    ``key`` maps an item to the string it is sorted by; without it the
    items themselves are compared.
    """
    index = bisect_left(items, element, key=key)
    if index < len(items):
        found = items[index] if key is None else key(items[index])
        if found == element:
            return index
    return -1