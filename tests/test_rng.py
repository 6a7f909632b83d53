"""Tests for the linear congruential generator."""

from kquant.rng import A, C, M, Lcg, unix_timestamp


class TestLcg:
    """Test cases for Lcg."""

    def test_first_value_from_zero_seed(self):
        """Test that seed 0 yields the increment first."""
        assert Lcg(0).next() == C

    def test_first_value_from_seed_one(self):
        """Test one step of the recurrence by hand."""
        assert Lcg(1).next() == (A + C) % M
        assert Lcg(1).next() == 7806831264735756412

    def test_state_advances(self):
        """Test that next() mutates and returns the state."""
        rng = Lcg(5)
        value = rng.next()
        assert rng.state == value
        assert rng.next() == (A * value + C) % M

    def test_reproducible(self):
        """Test that equal seeds give equal sequences."""
        first = Lcg(1234)
        second = Lcg(1234)
        assert [first.next() for _ in range(20)] == [second.next() for _ in range(20)]

    def test_different_seeds_differ(self):
        """Test that different seeds diverge."""
        assert Lcg(1).next() != Lcg(2).next()

    def test_values_below_modulus(self):
        """Test that all outputs fit in 63 bits."""
        rng = Lcg(2 ** 64 - 1)
        for _ in range(100):
            assert 0 <= rng.next() < 2 ** 63

    def test_seed_truncated_to_64_bits(self):
        """Test that oversized seeds wrap like an unsigned 64-bit value."""
        assert Lcg(2 ** 64 + 7).state == 7


def test_unix_timestamp_is_whole_seconds():
    """Test that the clock seed is a positive int."""
    stamp = unix_timestamp()
    assert isinstance(stamp, int)
    assert stamp > 1_600_000_000
