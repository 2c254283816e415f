"""Persisted run preferences in ``data/app_config.json``."""

from __future__ import annotations

import json
import logging
import math
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Callable, Dict, Optional

from quotemaker.config.paths import APP_CONFIG_PATH, KEYS_ENV_PATH
from quotemaker.config.settings import (
    DEFAULT_SYMBOL,
    SHARE_SIZE_DEFAULT,
    SPREAD_BPS_DEFAULT,
    EngineConfig,
)

logger = logging.getLogger(__name__)


def _text(value: Any) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValueError("expected a non-empty string")
    return value.strip()


def _spread(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError("expected a number")
    if not math.isfinite(value) or value < 0:
        raise ValueError("expected a finite number >= 0")
    return float(value)


def _size(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ValueError("expected a positive integer")
    return value


_COERCE: Dict[str, Callable[[Any], Any]] = {
    "symbol": _text,
    "spread_bps": _spread,
    "share_size": _size,
    "keys_env_path": _text,
}


@dataclass
class AppConfig:
    symbol: str = DEFAULT_SYMBOL
    spread_bps: float = SPREAD_BPS_DEFAULT
    share_size: int = SHARE_SIZE_DEFAULT
    keys_env_path: str = str(KEYS_ENV_PATH)

    @staticmethod
    def load(path: Optional[Path] = None) -> "AppConfig":
        """Return the persisted :class:`AppConfig`, falling back to defaults on error."""

        path = path or APP_CONFIG_PATH
        if not path.exists():
            return AppConfig()

        try:
            with path.open("r", encoding="utf-8") as handle:
                payload: Dict[str, Any] = json.load(handle)
        except (OSError, json.JSONDecodeError) as exc:
            logger.warning("Ignoring unreadable %s: %s", path, exc)
            return AppConfig()
        if not isinstance(payload, dict):
            return AppConfig()

        kwargs: Dict[str, Any] = {}
        for field in fields(AppConfig):
            if field.name not in payload:
                continue
            try:
                kwargs[field.name] = _COERCE[field.name](payload[field.name])
            except ValueError as exc:
                logger.warning(
                    "Ignoring %s=%r in %s (%s); using default", field.name, payload[field.name], path, exc
                )
        return AppConfig(**kwargs)

    def save(self, path: Optional[Path] = None) -> None:
        path = path or APP_CONFIG_PATH
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with path.open("w", encoding="utf-8") as handle:
                json.dump(asdict(self), handle, indent=2, sort_keys=True)
        except OSError as exc:
            # Persistence is best-effort; a read-only data dir must not stop quoting.
            logger.warning("Could not save %s: %s", path, exc)

    def to_engine_config(self, api_key: str, **overrides: Any) -> EngineConfig:
        return EngineConfig(
            symbol=self.symbol.upper(),
            api_key=api_key,
            spread_bps=float(self.spread_bps),
            share_size=int(self.share_size),
            **overrides,
        )
