"""Shared utilities for chunked queries and timestamps."""

from .batching import chunked, unique
from .time import EPOCH, time_ago, to_datetime

__all__ = [
    "EPOCH",
    "chunked",
    "time_ago",
    "to_datetime",
    "unique",
]
