"""Unit tests for clocks, random sources and node tags."""

import threading
import time

import pytest

from nulid.core.errors import ValueOutOfRangeError
from nulid.sources.clock import MockClock, SystemClock, get_system_clock
from nulid.sources.node import NODE_RANDOM_BITS, NodeTag
from nulid.sources.rng import SecureRng, SeededRng, SequentialRng, get_secure_rng


class TestSystemClock:
    """Tests for the production clock."""

    def test_close_to_wall_clock(self):
        """Readings track time.time_ns()."""
        clock = SystemClock()
        assert abs(clock.now_nanos() - time.time_ns()) < 1_000_000_000

    def test_never_goes_backwards(self):
        """Consecutive readings are non-decreasing."""
        clock = SystemClock()
        readings = [clock.now_nanos() for _ in range(1000)]
        assert readings == sorted(readings)

    def test_shared_instance(self):
        """get_system_clock returns one process-wide clock."""
        assert get_system_clock() is get_system_clock()

    def test_concurrent_reads(self):
        """Reads from many threads all succeed."""
        clock = get_system_clock()
        results = []

        def read():
            results.extend(clock.now_nanos() for _ in range(100))

        threads = [threading.Thread(target=read) for _ in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()
        assert len(results) == 400


class TestMockClock:
    """Tests for the controllable clock."""

    def test_set_advance_regress(self):
        """Controls move time as told."""
        clock = MockClock(1_000)
        assert clock.now_nanos() == 1_000
        clock.advance(500)
        assert clock.now_nanos() == 1_500
        clock.regress(700)
        assert clock.now_nanos() == 800
        clock.set(42)
        assert clock.now_nanos() == 42

    def test_regress_floors_at_zero(self):
        """Time never goes negative."""
        clock = MockClock(10)
        clock.regress(100)
        assert clock.now_nanos() == 0

    def test_frozen_by_default(self):
        """Time only moves when told to."""
        clock = MockClock(7)
        assert {clock.now_nanos() for _ in range(10)} == {7}


class TestRng:
    """Tests for random tail sources."""

    def test_secure_within_bounds(self):
        """Draws fit the requested width."""
        rng = SecureRng()
        for bits in (60, 44, 1):
            for _ in range(100):
                assert 0 <= rng.random_tail_bits(bits) < (1 << bits)

    def test_secure_refills_buffer(self):
        """Drawing past the buffer keeps producing distinct values."""
        rng = SecureRng(buffer_size=32)
        values = [rng.random_tail_bits() for _ in range(100)]
        assert len(set(values)) == 100

    def test_secure_shared_instance(self):
        """get_secure_rng returns one process-wide source."""
        assert get_secure_rng() is get_secure_rng()

    def test_seeded_reproducible(self):
        """Same seed, same sequence."""
        a, b = SeededRng(42), SeededRng(42)
        assert [a.random_tail_bits() for _ in range(20)] == [b.random_tail_bits() for _ in range(20)]

    def test_seeded_seeds_differ(self):
        """Different seeds, different sequences."""
        a, b = SeededRng(1), SeededRng(2)
        assert [a.random_tail_bits() for _ in range(5)] != [b.random_tail_bits() for _ in range(5)]

    def test_seeded_within_bounds(self):
        """Seeded draws fit the requested width."""
        rng = SeededRng(7)
        assert all(rng.random_tail_bits(44) < (1 << 44) for _ in range(100))

    def test_sequential_counts(self):
        """0, 1, 2, ..."""
        rng = SequentialRng()
        assert [rng.random_tail_bits() for _ in range(4)] == [0, 1, 2, 3]

    def test_sequential_start_and_mask(self):
        """Counter starts where told and wraps at the requested width."""
        assert SequentialRng(start=10).random_tail_bits() == 10
        assert SequentialRng(start=1 << 44).random_tail_bits(44) == 0


class TestNodeTag:
    """Tests for the per-generator node tag."""

    def test_merge_places_tag_high(self):
        """Tag occupies the top 16 tail bits."""
        tag = NodeTag(42)
        tail = tag.merge(0x123)
        assert tail >> NODE_RANDOM_BITS == 42
        assert tail & ((1 << NODE_RANDOM_BITS) - 1) == 0x123
        assert NodeTag.extract(tail) == 42

    def test_merge_masks_random_bits(self):
        """Random bits cannot spill into the tag."""
        tag = NodeTag(1)
        assert NodeTag.extract(tag.merge((1 << 60) - 1)) == 1

    @pytest.mark.parametrize("value", [0, 1, 65535])
    def test_valid_range(self, value):
        """Any 16-bit value is accepted."""
        assert NodeTag(value).value == value

    @pytest.mark.parametrize("value", [-1, 65536])
    def test_invalid_range(self, value):
        """Values outside 16 bits are rejected."""
        with pytest.raises(ValueOutOfRangeError):
            NodeTag(value)

    def test_equality(self):
        """Tags compare by value."""
        assert NodeTag(3) == NodeTag(3)
        assert NodeTag(3) != NodeTag(4)
