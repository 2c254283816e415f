"""
Unified settings module

- Flat constants for the quote source, spread simulation and polling cadence
- EngineConfig: the immutable per-run configuration handed to the engine
- DEMO_API_KEY is the reserved key that switches the engine into limited mode
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from quotemaker.core.errors import ConfigError


# ---- App metadata ----
@dataclass(frozen=True)
class AppInfo:
    name: str = "Quote Maker"
    version: str = "1.0.0"
    description: str = "Simulated market maker quoting around a live price feed"


APP_INFO = AppInfo()
APP_NAME = APP_INFO.name
APP_VERSION = APP_INFO.version

# ---- Quote source (Alpha Vantage) ----
BASE_URL = "https://www.alphavantage.co/query"
QUOTE_FUNCTION = "GLOBAL_QUOTE"
API_KEY_ENV = "ALPHAVANTAGE_API_KEY"
KEYS_ENV_FILENAME = "keys.env"
DEMO_API_KEY = "demo"
DEMO_DAILY_REQUEST_LIMIT = 25
API_KEY_SIGNUP_URL = "https://www.alphavantage.co/support/#api-key"
FETCH_TIMEOUT_S = 10

# "Global Quote": { "05. price": "123.45", "03. high": ..., "04. low": ... }
PRICE_KEY = "05. price"
HIGH_KEY = "03. high"
LOW_KEY = "04. low"
UPSTREAM_ERROR_MARKERS = ("Error Message", "Note", "Information")

# ---- Timezone ----
TIMEZONE = "America/New_York"

# ---- Strategy defaults ----
DEFAULT_SYMBOL = "AAPL"
SPREAD_BPS_DEFAULT = 5.0
SHARE_SIZE_DEFAULT = 100

# ---- Cadence (free tier: 5 calls/minute, so 12s+ between polls) ----
POLL_INTERVAL_S = 12.0
DEMO_POLL_INTERVAL_S = 15.0
RETRY_INTERVAL_S = 5.0
DEMO_WARN_AFTER_CYCLES = 5

# ---- Latency bands (microseconds) ----
LATENCY_FAST_US = 100_000
LATENCY_MODERATE_US = 500_000


@dataclass(frozen=True)
class EngineConfig:
    symbol: str = DEFAULT_SYMBOL
    api_key: str = DEMO_API_KEY
    spread_bps: float = SPREAD_BPS_DEFAULT
    share_size: int = SHARE_SIZE_DEFAULT
    poll_interval_s: float = POLL_INTERVAL_S
    demo_poll_interval_s: float = DEMO_POLL_INTERVAL_S
    retry_interval_s: float = RETRY_INTERVAL_S
    demo_warn_after_cycles: int = DEMO_WARN_AFTER_CYCLES
    latency_fast_us: int = LATENCY_FAST_US
    latency_moderate_us: int = LATENCY_MODERATE_US

    def __post_init__(self) -> None:
        if not self.symbol or not self.symbol.strip():
            raise ConfigError("symbol must be a non-empty string")
        if not math.isfinite(self.spread_bps) or self.spread_bps < 0:
            raise ConfigError(f"spread_bps must be a finite number >= 0, got {self.spread_bps}")
        if self.share_size <= 0:
            raise ConfigError(f"share_size must be > 0, got {self.share_size}")
        for name in ("poll_interval_s", "demo_poll_interval_s", "retry_interval_s"):
            if getattr(self, name) < 0:
                raise ConfigError(f"{name} must be >= 0")
        if self.retry_interval_s > min(self.poll_interval_s, self.demo_poll_interval_s):
            raise ConfigError("retry_interval_s must not exceed the steady-state poll interval")
        if self.demo_warn_after_cycles < 0:
            raise ConfigError("demo_warn_after_cycles must be >= 0")
        if self.latency_fast_us > self.latency_moderate_us:
            raise ConfigError("latency_fast_us must not exceed latency_moderate_us")

    @property
    def limited(self) -> bool:
        return self.api_key == DEMO_API_KEY

    @property
    def spread_fraction(self) -> float:
        return self.spread_bps / 10_000.0

    @property
    def wait_seconds(self) -> float:
        return self.demo_poll_interval_s if self.limited else self.poll_interval_s
