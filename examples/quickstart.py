"""Quick start example for prime_cache.

Run this script to exercise each way of growing the cache and test the installation.
"""

import time


def main():
    print("Prime Cache - Quick Start Demo")
    print("=" * 50)

    from prime_cache import PrimeCache

    cache = PrimeCache()
    print(f"\nSeed: {list(cache)}")

    print("\n1. Indexed lazy growth...")
    print(f"   Prime at index 6: {cache[6]}")
    print(f"   Prime at index 99: {cache[99]}")
    print(f"   Cached: {cache.discovered_count}, largest: {cache.largest_discovered_prime}")

    print("\n2. Range check over the cached primes...")
    print(f"   Primes in [20, 40]: {cache.check_range_for_primes(20, 40)}")

    print("\n3. Sieve extension to 1,000,000...")
    from prime_cache.core.sieve import sieve_search

    start = time.perf_counter()
    sieve_search(cache, 1_000_000)
    elapsed = time.perf_counter() - start
    print(f"   Cached {cache.discovered_count:,} primes in {elapsed:.3f}s")
    print(f"   Largest: {cache.largest_discovered_prime:,}")

    print("\n4. Parallel range search past the frontier...")
    from prime_cache.search.parallel import parallel_range_compute

    start = time.perf_counter()
    parallel_range_compute(cache, 200_000, 20_000)
    elapsed = time.perf_counter() - start
    print(f"   Cached {cache.discovered_count:,} primes in {elapsed:.3f}s")
    print(f"   Largest: {cache.largest_discovered_prime:,}")

    print("\n5. Number theory...")
    from prime_cache.theory.factors import largest_prime_factor_of, smallest_multiple_of_all_numbers_to

    print(f"   Largest prime factor of 600851475143: {largest_prime_factor_of(cache, 600851475143)}")
    print(f"   Smallest multiple of 1..20: {smallest_multiple_of_all_numbers_to(cache, 20)}")

    print("\n" + "=" * 50)
    print("Quick start complete!")


if __name__ == "__main__":
    main()
