"""Number theory utilities."""

from prime_cache.theory.factors import largest_prime_factor_of, smallest_multiple_of_all_numbers_to

__all__ = [
    "largest_prime_factor_of",
    "smallest_multiple_of_all_numbers_to",
]
