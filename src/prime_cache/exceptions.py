"""Exceptions raised by the prime cache and the operations built on it."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from prime_cache.search.parallel import SearchRange


class PrimeCacheError(Exception):
    """Base class for prime cache errors."""


class InvariantViolation(PrimeCacheError):
    """The cache was asked to do something that would break its invariants.

    Raised when trial division is attempted against a cache that does not yet
    hold every prime up to the candidate's square root, or when values that are
    not a strictly increasing odd continuation of the tail are appended. This
    is a programming error and is never handled inside the package.
    """


class ChunkSearchError(PrimeCacheError):
    """A chunk of a parallel range search failed.

    The worker's exception is chained as ``__cause__``.
    """

    def __init__(self, search_range: SearchRange, completed: int, total: int):
        self.search_range = search_range
        self.completed = completed
        self.total = total
        super().__init__(
            f"Search of chunk [{search_range.start:,d}, {search_range.end:,d}] failed "
            f"({completed:,d}/{total:,d} chunks succeeded); no results were merged"
        )


class PrimeOverflowError(PrimeCacheError, OverflowError):
    """A cached value does not fit in a signed 64-bit integer."""
