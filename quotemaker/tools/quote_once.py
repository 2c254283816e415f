"""
quotemaker.tools.quote_once
Single GLOBAL_QUOTE fetch -> extraction -> derived market, printed as JSON.
Handy for checking a key or a symbol without starting the loop.

Usage:
  python -m quotemaker.tools.quote_once IBM
  python -m quotemaker.tools.quote_once IBM --spread-bps 10 --raw

Exit codes: 0 success, 2 payload rejected, 3 network/API error.
"""
from __future__ import annotations

import argparse
import json
import sys
from dataclasses import asdict
from typing import List, Optional

from quotemaker.config.settings import SPREAD_BPS_DEFAULT
from quotemaker.core.errors import TransportFailure
from quotemaker.core.keys import read_api_key
from quotemaker.services.market_data import fetch_global_quote
from quotemaker.services.pricing import derive_market
from quotemaker.services.quote_extractor import extract_quote


def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(prog="quote_once")
    ap.add_argument("symbol")
    ap.add_argument("--api-key", default=None)
    ap.add_argument("--spread-bps", type=float, default=SPREAD_BPS_DEFAULT)
    ap.add_argument("--raw", action="store_true", help="also print the raw payload")
    args = ap.parse_args(argv)

    symbol = args.symbol.upper()
    try:
        text = fetch_global_quote(symbol, args.api_key or read_api_key())
    except TransportFailure as e:
        print(f"[quote_once] {e}", file=sys.stderr)
        return 3

    if args.raw:
        print(text)
    result = extract_quote(text, symbol=symbol)
    if not result.ok or result.quote is None:
        print(f"[quote_once] {result.outcome.value}: {result.detail}", file=sys.stderr)
        return 2

    market = derive_market(result.quote, args.spread_bps)
    out = {"symbol": symbol, **asdict(market), "spread_dollars": market.spread_dollars}
    print(json.dumps(out, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
