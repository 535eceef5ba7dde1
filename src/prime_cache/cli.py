"""Command-line interface for prime_cache."""

from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path
from typing import List, Optional

from prime_cache.config import SearchConfig
from prime_cache.core.arithmetic import integral_sqrt
from prime_cache.core.cache import PrimeCache
from prime_cache.core.sieve import reference_primes, sieve_search
from prime_cache.log import setup_logger
from prime_cache.search.parallel import parallel_range_compute
from prime_cache.theory.factors import largest_prime_factor_of, smallest_multiple_of_all_numbers_to


def _print_frontier(cache: PrimeCache, elapsed: float) -> None:
    print(f"{cache.discovered_count:,d} primes cached, largest: {cache.largest_discovered_prime:,d}")
    print(f"Took {elapsed:,f} seconds")


def cmd_nth(args: argparse.Namespace) -> int:
    """Print the prime at an index."""
    cache = PrimeCache()
    print(f"Prime at index {args.index:,d}: {cache[args.index]:,d}")
    return 0


def cmd_range(args: argparse.Namespace) -> int:
    """Print the primes in an inclusive range."""
    cache = PrimeCache()
    cache.ensure_covers(integral_sqrt(args.end))
    primes = cache.check_range_for_primes(args.start, args.end)

    print(f"{len(primes):,d} primes in [{args.start:,d}, {args.end:,d}]")
    if primes:
        print(" ".join(str(p) for p in primes))
    return 0


def cmd_sieve(args: argparse.Namespace) -> int:
    """Grow the cache with the sieve."""
    cache = PrimeCache()
    start = time.perf_counter()
    sieve_search(cache, args.limit, complete=not args.partial)
    _print_frontier(cache, time.perf_counter() - start)
    return 0


def cmd_parallel(args: argparse.Namespace) -> int:
    """Grow the cache with a parallel range search."""
    config = SearchConfig(
        search_size_limit=args.search_size,
        chunk_size_limit=args.chunk_size,
        max_workers=args.workers,
        executor="process" if args.processes else "thread",
        show_progress=args.progress,
    )
    cache = PrimeCache()
    if args.bootstrap:
        sieve_search(cache, args.bootstrap)

    start = time.perf_counter()
    parallel_range_compute(cache, config=config)
    _print_frontier(cache, time.perf_counter() - start)
    return 0


def cmd_factor(args: argparse.Namespace) -> int:
    """Print the largest prime factor of a value."""
    cache = PrimeCache()
    print(f"Largest prime factor of {args.value:,d}: {largest_prime_factor_of(cache, args.value):,d}")
    return 0


def cmd_lcm(args: argparse.Namespace) -> int:
    """Print the smallest multiple of all integers up to a value."""
    cache = PrimeCache()
    multiple = smallest_multiple_of_all_numbers_to(cache, args.value)
    print(f"Smallest multiple of 1..{args.value:,d}: {multiple:,d}")
    return 0


def cmd_verify(args: argparse.Namespace) -> int:
    """Compare a sieved cache with an independent whole-range sieve."""
    cache = PrimeCache()
    sieve_search(cache, args.limit)
    cached = [p for p in cache if p <= args.limit]
    expected = reference_primes(args.limit).tolist()

    if cached != expected:
        mismatch = next(
            (i for i, (a, b) in enumerate(zip(cached, expected)) if a != b),
            min(len(cached), len(expected)),
        )
        print(f"MISMATCH at index {mismatch:,d}: cached {len(cached):,d} primes, expected {len(expected):,d}")
        return 1

    print(f"OK: {len(cached):,d} primes <= {args.limit:,d} match")
    return 0


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Self-extending prime number cache",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Show debug logging")
    parser.add_argument("--log-file", type=Path, default=None, help="Also write logs to this file")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    nth_parser = subparsers.add_parser("nth", help="Prime at a 0-based index")
    nth_parser.add_argument("index", type=int, help="Index (0 -> 2)")

    range_parser = subparsers.add_parser("range", help="Primes in an inclusive range")
    range_parser.add_argument("start", type=int, help="Lower bound")
    range_parser.add_argument("end", type=int, help="Upper bound")

    sieve_parser = subparsers.add_parser("sieve", help="Grow the cache with the incremental sieve")
    sieve_parser.add_argument("limit", type=int, help="Upper bound")
    sieve_parser.add_argument("--partial", action="store_true",
                              help="Stop harvesting at the square of the last sieving prime")

    par_parser = subparsers.add_parser("parallel", help="Grow the cache with a parallel range search")
    par_parser.add_argument("--search-size", type=int, default=100_000, help="Distance past the frontier")
    par_parser.add_argument("--chunk-size", type=int, default=10_000, help="Maximum chunk width")
    par_parser.add_argument("--workers", type=int, default=None, help="Worker count")
    par_parser.add_argument("--processes", action="store_true", help="Use processes instead of threads")
    par_parser.add_argument("--progress", action="store_true", help="Show a progress bar")
    par_parser.add_argument("--bootstrap", type=int, default=None,
                            help="Sieve up to this bound first to widen the search window")

    factor_parser = subparsers.add_parser("factor", help="Largest prime factor")
    factor_parser.add_argument("value", type=int, help="Value >= 2")

    lcm_parser = subparsers.add_parser("lcm", help="Smallest multiple of all integers up to a value")
    lcm_parser.add_argument("value", type=int, help="Value >= 1")

    verify_parser = subparsers.add_parser("verify", help="Check the sieved cache against a reference sieve")
    verify_parser.add_argument("limit", type=int, help="Upper bound")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    setup_logger(logging.DEBUG if args.verbose else logging.INFO, args.log_file)

    commands = {
        "nth": cmd_nth,
        "range": cmd_range,
        "sieve": cmd_sieve,
        "parallel": cmd_parallel,
        "factor": cmd_factor,
        "lcm": cmd_lcm,
        "verify": cmd_verify,
    }

    try:
        return commands[args.command](args)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
