"""prime_cache - self-extending prime number cache and the algorithms built on it."""

__version__ = "0.1.0"

from prime_cache.core.cache import PrimeCache, SEED_PRIMES
from prime_cache.core.sieve import sieve_search, reference_primes
from prime_cache.search.parallel import parallel_range_compute
from prime_cache.theory.factors import (
    largest_prime_factor_of,
    smallest_multiple_of_all_numbers_to,
)
from prime_cache.config import SearchConfig
from prime_cache.exceptions import (
    PrimeCacheError,
    InvariantViolation,
    ChunkSearchError,
    PrimeOverflowError,
)

__all__ = [
    "PrimeCache",
    "SEED_PRIMES",
    "sieve_search",
    "reference_primes",
    "parallel_range_compute",
    "largest_prime_factor_of",
    "smallest_multiple_of_all_numbers_to",
    "SearchConfig",
    "PrimeCacheError",
    "InvariantViolation",
    "ChunkSearchError",
    "PrimeOverflowError",
]
