"""Tests for momentum scoring."""

import math

import pytest

from pumpsentry.market.models import NormalizedTicker
from pumpsentry.market.scoring import score, score_ticker, volume_impact


def ticker(change: float = 0.0, volume: float = 0.0, price: float = 1.0):
    return NormalizedTicker(
        symbol="TESTUSDT",
        last_price=price,
        price_change_percent=change,
        high=price,
        low=price,
        volume=volume,
    )


class TestBuyPressure:
    """Test the buy pressure formula."""

    def test_neutral_at_zero_change(self):
        assert score(ticker(change=0.0)).buy_pressure == 50.0

    def test_scales_with_change(self):
        assert score(ticker(change=5.0)).buy_pressure == pytest.approx(70.0)
        assert score(ticker(change=-5.0)).buy_pressure == pytest.approx(30.0)

    def test_clamped_on_extreme_dump(self):
        assert score(ticker(change=-100.0)).buy_pressure == 10.0

    def test_clamped_on_extreme_pump(self):
        assert score(ticker(change=1000.0)).buy_pressure == 95.0


class TestVolatilityScore:
    """Test the volatility score formula."""

    def test_zero_volume_does_not_raise(self):
        result = score(ticker(change=0.0, volume=0.0))
        assert result.volatility_score == 0.0

    def test_blend_of_change_and_volume(self):
        # log10(999 + 1) / 4 = 0.75 -> 0.75 * 35 = 26.25; 10% * 0.4 = 4
        result = score(ticker(change=-10.0, volume=999.0))
        assert result.volatility_score == pytest.approx(30.25)

    def test_capped_at_100(self):
        assert score(ticker(change=1000.0, volume=1e12)).volatility_score == 100.0

    def test_negative_volume_treated_as_zero(self):
        assert volume_impact(-50.0) == 0.0
        assert score(ticker(change=10.0, volume=-50.0)).volatility_score == pytest.approx(4.0)

    @pytest.mark.parametrize("change", [-100.0, -3.5, 0.0, 42.0, 1000.0])
    @pytest.mark.parametrize("volume", [0.0, 1.0, 5e7, 1e15])
    def test_ranges_hold(self, change, volume):
        result = score(ticker(change=change, volume=volume))
        assert 0.0 <= result.volatility_score <= 100.0
        assert 10.0 <= result.buy_pressure <= 95.0


class TestNonFiniteInputs:
    """Test that NaN inputs still produce finite, clamped scores."""

    def test_nan_change(self):
        result = score(ticker(change=float("nan"), volume=100.0))
        assert math.isfinite(result.volatility_score)
        assert result.buy_pressure == 50.0

    def test_nan_volume(self):
        result = score(ticker(change=2.0, volume=float("nan")))
        assert result.volatility_score == pytest.approx(0.8)


class TestScoreTicker:
    """Test the ScoredTicker wrapper."""

    def test_copies_fields_and_scores(self):
        scored = score_ticker(ticker(change=5.0, volume=999.0, price=2.5))
        assert scored.symbol == "TESTUSDT"
        assert scored.last_price == 2.5
        assert scored.buy_pressure == pytest.approx(70.0)
        assert scored.volatility_score == pytest.approx(2.0 + 26.25)

    def test_is_deterministic(self):
        t = ticker(change=12.3, volume=123456.0)
        assert score_ticker(t) == score_ticker(t)
