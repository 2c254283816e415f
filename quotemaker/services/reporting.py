"""
Report sinks.

Sinks receive one CycleReport per successful cycle plus free-form advisories.
How they render is up to them; the engine only relies on the two methods below.
"""
from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, Optional, Protocol, TextIO

if TYPE_CHECKING:
    from quotemaker.services.quoting_engine import CycleReport

RULE = "=" * 40


class QuoteSink(Protocol):
    def on_report(self, report: "CycleReport") -> None:
        """Consume one successful cycle."""

    def on_advisory(self, message: str) -> None:
        """Consume an advisory warning (rate limits, provider notes)."""


class LoggingSink:
    """Logs reports as single lines using the standard logging module."""

    def __init__(self, logger: Optional[logging.Logger] = None) -> None:
        self._logger = logger or logging.getLogger(__name__)

    def on_report(self, report: "CycleReport") -> None:
        self._logger.info(
            "cycle=%d symbol=%s mid=%.2f bid=%.4f ask=%.4f spread=%.4f (%.1f bps) "
            "profit_rt=%.2f latency_us=%d status=%s next_wait_s=%.0f",
            report.cycle,
            report.symbol,
            report.mid,
            report.bid,
            report.ask,
            report.spread_dollars,
            report.spread_bps,
            report.estimated_profit_per_round_trip,
            report.latency_us,
            report.latency_band.value,
            report.next_wait_seconds,
        )

    def on_advisory(self, message: str) -> None:
        self._logger.warning(message)


def _px(value: Optional[float]) -> str:
    return f"${value:.2f}" if value is not None else "n/a"


class ConsoleSink:
    """Renders the stats block and simulated order book to a text stream."""

    def __init__(self, stream: Optional[TextIO] = None) -> None:
        self.stream = stream or sys.stdout

    def _write(self, *lines: str) -> None:
        self.stream.write("\n".join(lines) + "\n")
        self.stream.flush()

    def on_report(self, report: "CycleReport") -> None:
        size = report.share_size
        self._write(
            "",
            RULE,
            f"[Cycle #{report.cycle} @ {report.timestamp.strftime('%H:%M:%S')}]",
            RULE,
            f"Symbol:      {report.symbol}",
            f"Mid Price:   ${report.mid:.2f}",
            f"Our Bid:     ${report.bid:.2f} ({size} shares)",
            f"Our Ask:     ${report.ask:.2f} ({size} shares)",
            f"Spread:      ${report.spread_dollars:.4f} ({report.spread_bps:g} bps)",
            f"Profit/RT:   ${report.estimated_profit_per_round_trip:.2f} per round trip",
            f"Latency:     {report.latency_us} us",
            RULE,
            "",
            "=== SIMULATED ORDER BOOK ===",
            f"Market ASK:  {_px(report.market_ask)}",
            f"Our ASK:     ${report.ask:.2f} [{size} shares]  <-- SELL",
            f"------------ MID: ${report.mid:.2f} ------------",
            f"Our BID:     ${report.bid:.2f} [{size} shares]  <-- BUY",
            f"Market BID:  {_px(report.market_bid)}",
            "",
            "Performance:",
            f"   Cycle time:  {report.latency_us / 1000.0:.3f} ms",
            f"   Status:      {report.latency_band.value}",
            "",
            f"Waiting {report.next_wait_seconds:g} seconds (API rate limit)...",
        )

    def on_advisory(self, message: str) -> None:
        self._write(f"WARNING: {message}")
