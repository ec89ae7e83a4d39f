"""Unit tests for the approved-amount sliding window."""

import statistics

import pytest

from src.domains.fraud.history import TransactionHistory


class TestTransactionHistory:
    def test_starts_empty(self):
        history = TransactionHistory()
        assert len(history) == 0
        assert history.mean() == 0.0
        assert history.stddev() == 0.0

    def test_seeded_oldest_first(self):
        history = TransactionHistory(amounts=[1.0, 2.0, 3.0])
        assert history.snapshot() == [1.0, 2.0, 3.0]

    def test_evicts_oldest_at_capacity(self):
        history = TransactionHistory(max_size=3)
        for amount in [1.0, 2.0, 3.0, 4.0, 5.0]:
            history.append(amount)
        assert history.snapshot() == [3.0, 4.0, 5.0]

    def test_never_exceeds_bound(self):
        history = TransactionHistory(max_size=100)
        for i in range(250):
            history.append(float(i))
            assert len(history) <= 100
        assert history.snapshot() == [float(i) for i in range(150, 250)]

    def test_sample_stddev_uses_bessel_correction(self):
        amounts = [100.0, 200.0, 300.0, 400.0, 500.0]
        history = TransactionHistory(amounts=amounts)
        assert history.mean() == pytest.approx(300.0)
        assert history.stddev() == pytest.approx(statistics.stdev(amounts))

    def test_single_sample_has_no_spread(self):
        assert TransactionHistory(amounts=[42.0]).stddev() == 0.0

    def test_identical_amounts_have_exactly_zero_spread(self):
        assert TransactionHistory(amounts=[0.1] * 7).stddev() == 0.0

    def test_clear(self):
        history = TransactionHistory(amounts=[1.0, 2.0])
        history.clear()
        assert len(history) == 0

    def test_invalid_size(self):
        with pytest.raises(ValueError):
            TransactionHistory(max_size=0)

    @pytest.mark.parametrize("bad", [float("nan"), float("inf"), float("-inf")])
    def test_non_finite_amount_rejected(self, bad):
        history = TransactionHistory(amounts=[1.0])
        with pytest.raises(ValueError, match="finite"):
            history.append(bad)
        assert history.snapshot() == [1.0]
