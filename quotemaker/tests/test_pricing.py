from __future__ import annotations

import math

import pytest

from quotemaker.services import pricing
from quotemaker.services.pricing import LatencyBand, classify_latency, derive_market
from quotemaker.services.quote_extractor import Quote


def test_scenario_five_bps_around_123_45():
    market = derive_market(Quote(last_price=123.45, low=122.0, high=125.0), 5.0)

    assert market.mid == 123.45
    assert market.bid == pytest.approx(123.388275)
    assert market.ask == pytest.approx(123.511725)
    assert market.market_bid == 122.0
    assert market.market_ask == 125.0


@pytest.mark.parametrize("mid", [0.01, 1.0, 123.45, 9999.99])
@pytest.mark.parametrize("spread_bps", [0.5, 5.0, 25.0, 100.0])
def test_bid_below_mid_below_ask(mid, spread_bps):
    market = derive_market(Quote(last_price=mid), spread_bps)

    assert market.bid < market.mid < market.ask
    assert math.isclose(market.spread_dollars, mid * 2 * spread_bps / 10_000, rel_tol=1e-9)


def test_profit_per_round_trip_scales_with_size():
    market = derive_market(Quote(last_price=100.0), 5.0)
    assert pricing.profit_per_round_trip(market, 100) == pytest.approx(10.0)
    assert pricing.profit_per_round_trip(market, 1) == pytest.approx(0.1)


def test_latency_bands():
    assert classify_latency(99_999, 100_000, 500_000) is LatencyBand.FAST
    assert classify_latency(100_000, 100_000, 500_000) is LatencyBand.MODERATE
    assert classify_latency(499_999, 100_000, 500_000) is LatencyBand.MODERATE
    assert classify_latency(500_000, 100_000, 500_000) is LatencyBand.SLOW
