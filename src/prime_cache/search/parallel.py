"""Concurrent chunked range search beyond the cache frontier.

The window past the frontier is split into fixed-width chunks, each searched
by trial division in its own worker against a read-only snapshot of the
cache. Only the calling thread writes to the cache: once every chunk has
settled, the results are merged in chunk order, or not at all if any chunk
failed.
"""

from __future__ import annotations

import dataclasses
import logging
from concurrent.futures import Executor, Future, ProcessPoolExecutor, ThreadPoolExecutor, as_completed, wait
from dataclasses import dataclass
from typing import List, Optional, Sequence

from tqdm import tqdm

from prime_cache.config import SearchConfig
from prime_cache.core.cache import PrimeCache
from prime_cache.core.trial_division import check_range_for_primes
from prime_cache.exceptions import ChunkSearchError

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class SearchRange:
    """Inclusive bounds of a range of candidates to search."""
    start: int
    end: int

    @property
    def width(self) -> int:
        return self.end - self.start + 1


def search_window(largest: int, search_size_limit: int) -> Optional[SearchRange]:
    """Compute the window to search beyond the frontier.

    The upper bound is capped at largest ** 2 so every candidate can be fully
    trial-divided by primes that are already cached.

    Returns:
        The window, or None if it holds no candidates.
    """
    lower = largest + 2
    upper = min(largest + search_size_limit, largest * largest)
    if lower > upper:
        return None
    return SearchRange(lower, upper)


def partition_window(window: SearchRange, chunk_size_limit: int) -> List[SearchRange]:
    """Split a window into consecutive, non-overlapping chunks.

    Every chunk is chunk_size_limit wide except possibly the last one, and
    together they cover the window exactly.
    """
    if chunk_size_limit < 1:
        raise ValueError(f"chunk_size_limit must be >= 1, got {chunk_size_limit}")

    chunks = []
    start = window.start
    while start <= window.end:
        end = min(start + chunk_size_limit - 1, window.end)
        chunks.append(SearchRange(start, end))
        start = end + 1
    return chunks


def search_chunk(primes: Sequence[int], search_range: SearchRange) -> List[int]:
    """Worker: find the primes in one chunk without touching the cache."""
    return check_range_for_primes(primes, search_range.start, search_range.end)


def _create_executor(config: SearchConfig) -> Executor:
    if config.executor == "process":
        return ProcessPoolExecutor(max_workers=config.max_workers)
    return ThreadPoolExecutor(max_workers=config.max_workers, thread_name_prefix="prime-search")


def _settle(futures: List[Future], show_progress: bool) -> None:
    if show_progress:
        for _ in tqdm(as_completed(futures), total=len(futures), desc="Searching chunks", leave=False):
            pass
    else:
        wait(futures)


def parallel_range_compute(
    cache: PrimeCache,
    search_size_limit: Optional[int] = None,
    chunk_size_limit: Optional[int] = None,
    config: Optional[SearchConfig] = None,
) -> None:
    """Extend the cache by searching the window past its frontier concurrently.

    Explicit limits override the ones in config.

    Args:
        cache: Cache to extend in place.
        search_size_limit: How far beyond the current largest prime to search.
        chunk_size_limit: Maximum width of each chunk.
        config: Search configuration; defaults to SearchConfig().

    Raises:
        ValueError: If a limit is not positive.
        ChunkSearchError: If any chunk fails. The cache is left unchanged.
    """
    config = config or SearchConfig()
    overrides = {}
    if search_size_limit is not None:
        overrides["search_size_limit"] = search_size_limit
    if chunk_size_limit is not None:
        overrides["chunk_size_limit"] = chunk_size_limit
    if overrides:
        config = dataclasses.replace(config, **overrides)

    snapshot = cache.snapshot()
    window = search_window(snapshot[-1], config.search_size_limit)
    if window is None:
        log.debug("Nothing to search past %d with search_size_limit=%d", snapshot[-1], config.search_size_limit)
        return

    chunks = partition_window(window, config.chunk_size_limit)
    log.debug(
        "Searching [%d, %d] in %d chunks of up to %d with %s workers",
        window.start, window.end, len(chunks), config.chunk_size_limit, config.executor,
    )

    with _create_executor(config) as executor:
        futures = [executor.submit(search_chunk, snapshot, chunk) for chunk in chunks]
        _settle(futures, config.show_progress)

    for chunk, future in zip(chunks, futures):
        exc = future.exception()
        if exc is not None:
            completed = sum(1 for f in futures if f.exception() is None)
            raise ChunkSearchError(chunk, completed, len(chunks)) from exc

    found = [prime for future in futures for prime in future.result()]
    added = cache.extend(found)
    log.debug("Parallel search added %d primes (largest=%d)", added, cache.largest_discovered_prime)
