"""Parallel range search module."""

from prime_cache.search.parallel import (
    SearchRange,
    search_window,
    partition_window,
    search_chunk,
    parallel_range_compute,
)

__all__ = [
    'SearchRange',
    'search_window',
    'partition_window',
    'search_chunk',
    'parallel_range_compute',
]
