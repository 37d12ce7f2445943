"""
Chunking for membership queries.

The document store caps the number of values in one "in" query, so every
fan-out step splits its id list with chunked() and merges the results.
"""

from typing import Iterable, List, TypeVar

T = TypeVar("T")


def chunked(items: Iterable[T], size: int) -> List[List[T]]:
    """Split items into consecutive lists of at most size elements (order kept)."""
    if size < 1:
        raise ValueError(f"chunk size must be positive, got {size}")
    values = list(items)
    return [values[i : i + size] for i in range(0, len(values), size)]


def unique(items: Iterable[T]) -> List[T]:
    """Drop duplicates, keeping first-seen order."""
    seen = set()
    out = []
    for item in items:
        if item in seen:
            continue
        seen.add(item)
        out.append(item)
    return out
