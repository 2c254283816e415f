from __future__ import annotations

from typing import Optional

import requests

from quotemaker.config.settings import BASE_URL, FETCH_TIMEOUT_S, QUOTE_FUNCTION
from quotemaker.core.errors import TransportFailure


def fetch_global_quote(
    symbol: str,
    api_key: str,
    timeout: float = FETCH_TIMEOUT_S,
    session: Optional[requests.Session] = None,
) -> str:
    """Return the raw GLOBAL_QUOTE body for ``symbol``; parsing is the extractor's job."""
    getter = session.get if session is not None else requests.get
    params = {"function": QUOTE_FUNCTION, "symbol": symbol, "apikey": api_key}
    try:
        response = getter(BASE_URL, params=params, timeout=timeout)
        response.raise_for_status()
    except requests.RequestException as e:
        raise TransportFailure(f"GLOBAL_QUOTE {symbol} failed: {e}", cause=e) from e
    return response.text
