from dataclasses import dataclass
from enum import Enum
from typing import Optional

from quotemaker.services.quote_extractor import Quote


def bps(x: float) -> float:
    return x / 10_000.0


@dataclass(frozen=True)
class DerivedMarket:
    mid: float
    bid: float
    ask: float
    spread_bps: float
    market_bid: Optional[float] = None
    market_ask: Optional[float] = None

    @property
    def spread_dollars(self) -> float:
        return self.ask - self.bid


def derive_market(quote: Quote, spread_bps: float) -> DerivedMarket:
    """
    bid = mid * (1 - spread_bps / 10_000)
    ask = mid * (1 + spread_bps / 10_000)
    The daily low/high ride along as the displayed "market" bid/ask.
    """
    mid = quote.last_price
    s = bps(spread_bps)
    return DerivedMarket(
        mid=mid,
        bid=mid * (1 - s),
        ask=mid * (1 + s),
        spread_bps=spread_bps,
        market_bid=quote.low,
        market_ask=quote.high,
    )


def profit_per_round_trip(market: DerivedMarket, share_size: int) -> float:
    return market.spread_dollars * share_size


class LatencyBand(str, Enum):
    FAST = "FAST"
    MODERATE = "MODERATE"
    SLOW = "SLOW"


def classify_latency(latency_us: int, fast_us: int, moderate_us: int) -> LatencyBand:
    if latency_us < fast_us:
        return LatencyBand.FAST
    if latency_us < moderate_us:
        return LatencyBand.MODERATE
    return LatencyBand.SLOW
