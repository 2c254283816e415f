from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

import pytz

from quotemaker.config import settings
from quotemaker.config.settings import EngineConfig
from quotemaker.core.errors import TransportFailure
from quotemaker.core.runtime_state import EngineState, RunState
from quotemaker.services import pricing
from quotemaker.services.market_data import fetch_global_quote
from quotemaker.services.quote_extractor import (
    ExtractionResult,
    Quote,
    QuoteOutcome,
    extract_quote,
)
from quotemaker.services.reporting import LoggingSink, QuoteSink

logger = logging.getLogger(__name__)

FetchFn = Callable[[str, str], str]
SleepFn = Callable[[float], object]

NY = pytz.timezone(settings.TIMEZONE)


@dataclass(frozen=True)
class CycleReport:
    cycle: int
    symbol: str
    mid: float
    bid: float
    ask: float
    spread_bps: float
    spread_dollars: float
    estimated_profit_per_round_trip: float
    latency_us: int
    latency_band: pricing.LatencyBand
    next_wait_seconds: float
    share_size: int
    timestamp: datetime
    market_bid: Optional[float] = None
    market_ask: Optional[float] = None


class QuotingEngine:
    """
    Poll -> extract -> derive -> report -> sleep, until a stop is requested.

    Single-shot: IDLE -> RUNNING -> STOPPING -> STOPPED. A stopped engine cannot
    be restarted. The stop signal is checked before and after every sleep; an
    in-flight fetch is never interrupted.
    """
    def __init__(
        self,
        config: EngineConfig,
        fetch: Optional[FetchFn] = None,
        sink: Optional[QuoteSink] = None,
        sleep: Optional[SleepFn] = None,
    ):
        self.config = config
        self.sink: QuoteSink = sink or LoggingSink()
        self.run_state = RunState()
        self._fetch: FetchFn = fetch or fetch_global_quote
        # Waiting on the stop event lets a stop request cut a sleep short.
        self._sleep: SleepFn = sleep or self.run_state.stop_event.wait
        self._state = EngineState.IDLE
        self._state_lock = threading.Lock()
        self._thread: Optional[threading.Thread] = None

    # --------------- Public control ---------------
    @property
    def state(self) -> EngineState:
        return self._state

    @property
    def cycle(self) -> int:
        return self.run_state.cycle

    @property
    def latest_quote(self) -> Optional[Quote]:
        return self.run_state.quote

    def start(self) -> Optional[threading.Thread]:
        if not self._begin():
            return None
        self._thread = threading.Thread(target=self._run_loop, name="QuotingEngine", daemon=True)
        self._thread.start()
        return self._thread

    def run(self) -> None:
        """Run the loop on the calling thread until a stop is requested."""
        if self._begin():
            self._run_loop()

    def request_stop(self) -> None:
        with self._state_lock:
            if self._state is EngineState.STOPPED:
                return
            self.run_state.stop_event.set()
            if self._state is EngineState.RUNNING:
                self._state = EngineState.STOPPING
                logger.info("Stop requested; finishing current cycle")

    def join(self, timeout: Optional[float] = None) -> bool:
        """Wait for the loop thread; True once the engine is STOPPED."""
        if self._thread is not None:
            self._thread.join(timeout=timeout)
        return self._state is EngineState.STOPPED

    def stop(self, timeout: Optional[float] = None) -> bool:
        self.request_stop()
        return self.join(timeout)

    # --------------- Core loop ---------------
    def _begin(self) -> bool:
        with self._state_lock:
            if self._state is not EngineState.IDLE:
                raise RuntimeError(f"QuotingEngine is single-shot (state={self._state.value})")
            if self.run_state.stop_requested:
                self._state = EngineState.STOPPED
                logger.info("Stop requested before start; engine stopped")
                return False
            self._state = EngineState.RUNNING
        logger.info(
            "Quoting %s: spread=%g bps size=%d wait=%gs retry=%gs limited=%s",
            self.config.symbol,
            self.config.spread_bps,
            self.config.share_size,
            self.config.wait_seconds,
            self.config.retry_interval_s,
            self.config.limited,
        )
        return True

    def _run_loop(self) -> None:
        try:
            while not self.run_state.stop_requested:
                try:
                    report = self.run_once()
                except Exception:
                    # Fail soft: log and retry, only a stop request ends the loop.
                    logger.exception("Cycle failed; retrying in %gs", self.config.retry_interval_s)
                    report = None
                if self.run_state.stop_requested:
                    break
                if report is None:
                    self._sleep(self.config.retry_interval_s)
                    continue
                self._sleep(report.next_wait_seconds)
        finally:
            with self._state_lock:
                self._state = EngineState.STOPPED
            logger.info("Engine stopped after %d cycles", self.run_state.cycle)

    def run_once(self) -> Optional[CycleReport]:
        """One poll/derive/report cycle. Returns None when the cycle failed."""
        cfg = self.config
        started = time.perf_counter_ns()
        fetched_at = datetime.now(NY)

        try:
            text = self._fetch(cfg.symbol, cfg.api_key)
        except TransportFailure as e:
            return self._fail(ExtractionResult(QuoteOutcome.TRANSPORT_FAILURE, detail=str(e)))
        except Exception as e:
            # The fetch collaborator is external; anything it raises is a failed cycle.
            logger.exception("Fetch collaborator raised")
            return self._fail(ExtractionResult(QuoteOutcome.TRANSPORT_FAILURE, detail=repr(e)))

        result = extract_quote(text, symbol=cfg.symbol, fetched_at=fetched_at)
        if not result.ok or result.quote is None:
            return self._fail(result, text)

        state = self.run_state
        state.quote = result.quote
        state.cycle += 1
        state.failures = 0
        state.last_outcome = QuoteOutcome.OK

        market = pricing.derive_market(result.quote, cfg.spread_bps)
        latency_us = (time.perf_counter_ns() - started) // 1000
        report = CycleReport(
            cycle=state.cycle,
            symbol=cfg.symbol,
            mid=market.mid,
            bid=market.bid,
            ask=market.ask,
            spread_bps=cfg.spread_bps,
            spread_dollars=market.spread_dollars,
            estimated_profit_per_round_trip=pricing.profit_per_round_trip(market, cfg.share_size),
            latency_us=latency_us,
            latency_band=pricing.classify_latency(
                latency_us, cfg.latency_fast_us, cfg.latency_moderate_us
            ),
            next_wait_seconds=cfg.wait_seconds,
            share_size=cfg.share_size,
            timestamp=fetched_at,
            market_bid=market.market_bid,
            market_ask=market.market_ask,
        )
        self.sink.on_report(report)
        self._maybe_warn_demo_limit()
        return report

    # --------------- Helpers ---------------
    def _fail(self, result: ExtractionResult, payload: str = "") -> None:
        state = self.run_state
        state.failures += 1
        state.last_outcome = result.outcome
        logger.warning(
            "Waiting for market data: %s (%s) failures=%d payload=%.200r",
            result.outcome.value,
            result.detail,
            state.failures,
            payload,
        )
        if result.outcome is QuoteOutcome.UPSTREAM_ERROR:
            message = f"API Error/Note: {result.detail}"
            if self.config.limited:
                message += f" (DEMO key is limited to {settings.DEMO_DAILY_REQUEST_LIMIT} requests/day)"
            self.sink.on_advisory(message)
        return None

    def _maybe_warn_demo_limit(self) -> None:
        state = self.run_state
        if not self.config.limited or state.demo_warning_sent:
            return
        if state.cycle > self.config.demo_warn_after_cycles:
            state.demo_warning_sent = True
            self.sink.on_advisory(
                f"DEMO key limit may be reached. Get a free key at {settings.API_KEY_SIGNUP_URL}"
            )
