"""Dependency-free extraction of quoted values from a GLOBAL_QUOTE payload."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional

from quotemaker.config.settings import HIGH_KEY, LOW_KEY, PRICE_KEY, UPSTREAM_ERROR_MARKERS

_DECIMAL_RE = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


class QuoteOutcome(str, Enum):
    OK = "ok"
    MISSING_FIELD = "missing_field"
    UPSTREAM_ERROR = "upstream_error"
    UNEXPECTED_FORMAT = "unexpected_format"
    PARSE_FAILURE = "parse_failure"
    TRANSPORT_FAILURE = "transport_failure"


@dataclass(frozen=True)
class Quote:
    last_price: float
    low: Optional[float] = None
    high: Optional[float] = None
    symbol: Optional[str] = None
    fetched_at: Optional[datetime] = None


@dataclass(frozen=True)
class ExtractionResult:
    outcome: QuoteOutcome
    quote: Optional[Quote] = None
    detail: str = ""

    @property
    def ok(self) -> bool:
        return self.outcome is QuoteOutcome.OK


def extract_quoted_value(text: str, key: str) -> Optional[str]:
    """
    Return the text between the first pair of double quotes after ``"key"``'s colon.

    The scan is left-to-right: first occurrence of the quoted key, then the next
    colon, then the next two quote characters. ``None`` if any step fails.
    """
    if not text:
        return None
    quoted_key = f'"{key}"'
    key_pos = text.find(quoted_key)
    if key_pos < 0:
        return None
    colon_pos = text.find(":", key_pos + len(quoted_key))
    if colon_pos < 0:
        return None
    first_quote = text.find('"', colon_pos)
    if first_quote < 0:
        return None
    second_quote = text.find('"', first_quote + 1)
    if second_quote < 0:
        return None
    return text[first_quote + 1:second_quote]


def parse_decimal(raw: Optional[str]) -> Optional[float]:
    if raw is None:
        return None
    s = raw.strip()
    if not _DECIMAL_RE.fullmatch(s):
        return None
    try:
        value = float(s)
    except ValueError:
        return None
    return value if math.isfinite(value) else None


def _optional_field(text: str, key: str) -> Optional[float]:
    value = parse_decimal(extract_quoted_value(text, key))
    if value is None or value < 0:
        return None
    return value


def _upstream_message(text: str) -> Optional[str]:
    for marker in UPSTREAM_ERROR_MARKERS:
        if marker in text:
            return extract_quoted_value(text, marker) or marker
    return None


def _classify_missing(text: str) -> ExtractionResult:
    stripped = text.strip()
    if not stripped:
        return ExtractionResult(QuoteOutcome.MISSING_FIELD, detail="empty payload")
    message = _upstream_message(text)
    if message is not None:
        return ExtractionResult(QuoteOutcome.UPSTREAM_ERROR, detail=message)
    if f'"{PRICE_KEY}"' in text:
        return ExtractionResult(QuoteOutcome.UNEXPECTED_FORMAT, detail=f"no value after {PRICE_KEY!r}")
    if stripped.startswith("{") and stripped.endswith("}"):
        return ExtractionResult(QuoteOutcome.MISSING_FIELD, detail=f"missing {PRICE_KEY!r}")
    return ExtractionResult(QuoteOutcome.UNEXPECTED_FORMAT, detail="payload is not a quote object")


def extract_quote(
    text: Optional[str],
    symbol: Optional[str] = None,
    fetched_at: Optional[datetime] = None,
) -> ExtractionResult:
    """Parse ``text`` into a :class:`Quote`, or classify why it could not be."""
    text = text or ""
    raw_price = extract_quoted_value(text, PRICE_KEY)
    if raw_price is None:
        return _classify_missing(text)

    price = parse_decimal(raw_price)
    if price is None or price <= 0:
        return ExtractionResult(QuoteOutcome.PARSE_FAILURE, detail=f"bad price {raw_price!r}")

    quote = Quote(
        last_price=price,
        low=_optional_field(text, LOW_KEY),
        high=_optional_field(text, HIGH_KEY),
        symbol=symbol,
        fetched_at=fetched_at,
    )
    return ExtractionResult(QuoteOutcome.OK, quote=quote)
