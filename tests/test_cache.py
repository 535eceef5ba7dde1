"""Tests for the prime cache."""

import logging

import numpy as np
import pytest

from prime_cache.core.cache import PrimeCache, SEED_PRIMES
from prime_cache.core.sieve import reference_primes
from prime_cache.exceptions import InvariantViolation, PrimeOverflowError


def _has_divisor(n):
    return any(n % d == 0 for d in range(2, n))


class TestSeed:
    """Tests for the initial cache state."""

    def test_seed_values(self):
        """Test that indices 0..5 return the seed without growing."""
        cache = PrimeCache()
        assert [cache.prime_at(i) for i in range(6)] == [2, 3, 5, 7, 11, 13]
        assert cache.discovered_count == len(SEED_PRIMES)

    def test_frontier(self):
        """Test derived views of a fresh cache."""
        cache = PrimeCache()
        assert cache.largest_discovered_prime == 13
        assert len(cache) == 6

    def test_instances_are_independent(self):
        """Test that growing one cache does not affect another."""
        a = PrimeCache()
        b = PrimeCache()
        a.prime_at(50)
        assert b.discovered_count == 6


class TestPrimeAt:
    """Tests for indexed lazy growth."""

    def test_first_growth(self):
        """Test the first primes beyond the seed."""
        cache = PrimeCache()
        assert cache.prime_at(6) == 17
        assert cache.prime_at(7) == 19

    def test_100th_prime(self):
        """Test the 100th prime (index 99)."""
        cache = PrimeCache()
        assert cache[99] == 541
        assert cache.discovered_count == 100

    def test_idempotent(self):
        """Test that repeating a lookup does not grow the cache."""
        cache = PrimeCache()
        first = cache.prime_at(40)
        count = cache.discovered_count
        assert cache.prime_at(40) == first
        assert cache.discovered_count == count

    def test_lookup_below_tail_does_not_grow(self):
        """Test that looking up an earlier index leaves the cache alone."""
        cache = PrimeCache()
        cache.prime_at(30)
        cache.prime_at(10)
        assert cache.discovered_count == 31

    def test_matches_reference(self):
        """Test that lazy growth agrees with an independent sieve."""
        cache = PrimeCache()
        expected = reference_primes(2000)
        assert [cache[i] for i in range(len(expected))] == expected.tolist()

    def test_strictly_increasing_and_prime(self):
        """Test that every cached value is prime and in order."""
        cache = PrimeCache()
        values = [cache[i] for i in range(200)]
        assert values[0] == 2
        assert all(a < b for a, b in zip(values, values[1:]))
        assert not any(_has_divisor(p) for p in values)

    def test_gap_free(self):
        """Test that nothing between consecutive cached primes is prime."""
        cache = PrimeCache()
        cache.prime_at(150)
        values = cache.snapshot()
        for p, q in zip(values, values[1:]):
            assert all(_has_divisor(n) for n in range(p + 1, q))

    def test_numpy_index(self):
        """Test that numpy integers are accepted as indices."""
        cache = PrimeCache()
        assert cache[np.int64(6)] == 17

    def test_negative_index(self):
        """Test that a negative index raises."""
        with pytest.raises(ValueError):
            PrimeCache().prime_at(-1)

    def test_non_integer_index(self):
        """Test that non-integer indices raise."""
        cache = PrimeCache()
        with pytest.raises(TypeError):
            cache.prime_at(1.5)
        with pytest.raises(TypeError):
            cache[1:3]


class TestViews:
    """Tests for read-only views of the cache."""

    def test_iter_does_not_grow(self):
        """Test that iterating only yields what is cached."""
        cache = PrimeCache()
        assert list(cache) == list(SEED_PRIMES)

    def test_contains(self):
        """Test membership against discovered primes."""
        cache = PrimeCache()
        assert 11 in cache
        assert 9 not in cache
        assert 17 not in cache
        assert 1 not in cache

    def test_snapshot_is_immutable_copy(self):
        """Test that the snapshot does not change as the cache grows."""
        cache = PrimeCache()
        snap = cache.snapshot()
        cache.prime_at(10)
        assert isinstance(snap, tuple)
        assert len(snap) == 6

    def test_to_array(self):
        """Test numpy conversion."""
        arr = PrimeCache().to_array()
        assert arr.dtype == np.int64
        np.testing.assert_array_equal(arr, np.array([2, 3, 5, 7, 11, 13]))

    def test_to_array_overflow(self):
        """Test that values past int64 raise."""
        cache = PrimeCache()
        cache._primes.append(2**63 + 1)
        with pytest.raises(PrimeOverflowError):
            cache.to_array()

    def test_repr(self):
        """Test repr contents."""
        assert repr(PrimeCache()) == "<PrimeCache[count=6, largest=13]>"


class TestGrowthHelpers:
    """Tests for convenience growth helpers."""

    def test_primes_up_to(self):
        """Test lazy iteration up to a bound."""
        cache = PrimeCache()
        assert list(cache.primes_up_to(50)) == reference_primes(50).tolist()
        assert cache.largest_discovered_prime == 53

    def test_primes_up_to_small(self):
        """Test bounds below the first prime."""
        assert list(PrimeCache().primes_up_to(1)) == []

    def test_ensure_covers(self):
        """Test growing the frontier to a bound."""
        cache = PrimeCache()
        cache.ensure_covers(100)
        assert cache.largest_discovered_prime == 101

    def test_is_prime(self):
        """Test primality of arbitrary integers."""
        cache = PrimeCache()
        expected = set(reference_primes(3000).tolist())
        for n in range(-5, 3001):
            assert cache.is_prime(n) == (n in expected), n

    def test_is_prime_grows_to_square_root(self):
        """Test that large candidates grow the cache first."""
        cache = PrimeCache()
        assert cache.is_prime(1_000_003)
        assert not cache.is_prime(1_000_001)
        assert cache.largest_discovered_prime >= 1000


class TestCheckRange:
    """Tests for range checking through the cache."""

    def test_scenario(self):
        """Test a range that needs no growth."""
        cache = PrimeCache()
        assert cache.check_range_for_primes(20, 40) == [23, 29, 31, 37]
        assert cache.discovered_count == 6

    def test_empty_range(self):
        """Test a range with no primes."""
        assert PrimeCache().check_range_for_primes(24, 28) == []

    def test_reversed_range(self):
        """Test that start > end raises."""
        with pytest.raises(ValueError):
            PrimeCache().check_range_for_primes(40, 20)

    def test_beyond_safe_region(self):
        """Test that checking past the square of the frontier raises."""
        with pytest.raises(InvariantViolation):
            PrimeCache().check_range_for_primes(1000, 1100)


class TestExtend:
    """Tests for bulk appends."""

    def test_extend(self):
        """Test a valid append."""
        cache = PrimeCache()
        assert cache.extend([17, 19, 23]) == 3
        assert cache.largest_discovered_prime == 23

    def test_extend_empty(self):
        """Test appending nothing."""
        cache = PrimeCache()
        assert cache.extend([]) == 0
        assert cache.discovered_count == 6

    @pytest.mark.parametrize("values", [[13], [11], [19, 17], [17, 18], [17, 17]])
    def test_extend_rejects_bad_order(self, values):
        """Test that appends which break the ordering raise and change nothing."""
        cache = PrimeCache()
        with pytest.raises(InvariantViolation):
            cache.extend(values)
        assert cache.snapshot() == SEED_PRIMES


class TestGrowthLogging:
    """Tests for debug logging of cache growth."""

    @staticmethod
    def _growth_records(caplog):
        return [r for r in caplog.records if r.getMessage().startswith("Grew cache")]

    def test_ensure_covers_logs_once(self, caplog):
        """Test that one bulk growth call emits one record."""
        caplog.set_level(logging.DEBUG, logger="prime_cache")
        cache = PrimeCache()
        cache.ensure_covers(10_000)
        records = self._growth_records(caplog)
        assert len(records) == 1
        assert records[0].getMessage().startswith(f"Grew cache by {cache.discovered_count - 6} primes")

    def test_primes_up_to_logs_once(self, caplog):
        """Test that iterating up to a bound grows the cache in one call."""
        caplog.set_level(logging.DEBUG, logger="prime_cache")
        primes = list(PrimeCache().primes_up_to(5000))
        assert len(primes) == 669
        assert len(self._growth_records(caplog)) == 1

    def test_no_record_without_growth(self, caplog):
        """Test that lookups inside the cache log nothing."""
        caplog.set_level(logging.DEBUG, logger="prime_cache")
        cache = PrimeCache()
        cache.prime_at(5)
        cache.ensure_covers(13)
        assert self._growth_records(caplog) == []
