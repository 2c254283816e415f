"""
quotemaker.main
Simulated market maker: quotes a bid/ask around a live GLOBAL_QUOTE price.

Usage:
  python -m quotemaker.main                       # symbol/spread/size from data/app_config.json
  python -m quotemaker.main MSFT                  # demo key unless keys.env / env has one
  python -m quotemaker.main MSFT <API_KEY> --spread-bps 8 --shares 200
  python -m quotemaker.main MSFT <API_KEY> --save-key
  python -m quotemaker.main MSFT --spread-bps 8 --save-defaults   # remember MSFT/8 bps

Press Enter (or Ctrl+C) to stop.
"""
from __future__ import annotations

import argparse
import sys
from typing import List, Optional

from quotemaker.config.paths import ensure_runtime_dirs
from quotemaker.config.settings import APP_NAME, API_KEY_SIGNUP_URL, DEMO_DAILY_REQUEST_LIMIT
from quotemaker.core.app_config import AppConfig
from quotemaker.core.keys import mask_key, read_api_key, write_api_key
from quotemaker.core.logging_setup import setup_logging
from quotemaker.services.quoting_engine import QuotingEngine
from quotemaker.services.reporting import ConsoleSink


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="quotemaker", description=APP_NAME)
    ap.add_argument("symbol", nargs="?", help="ticker to quote (default from app_config.json)")
    ap.add_argument("api_key", nargs="?", help="Alpha Vantage key ('demo' for limited mode)")
    ap.add_argument("--spread-bps", type=float, default=None)
    ap.add_argument("--shares", type=int, default=None)
    ap.add_argument("--save-key", action="store_true", help="persist api_key to keys.env")
    ap.add_argument(
        "--save-defaults", action="store_true", help="persist symbol/spread/shares to app_config.json"
    )
    ap.add_argument("--log-level", default="INFO")
    return ap


def _wait_for_enter() -> None:
    try:
        sys.stdin.readline()
    except (EOFError, KeyboardInterrupt):
        pass


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    ensure_runtime_dirs()
    logger = setup_logging(args.log_level)

    app_cfg = AppConfig.load()
    if args.symbol:
        app_cfg.symbol = args.symbol
    if args.spread_bps is not None:
        app_cfg.spread_bps = args.spread_bps
    if args.shares is not None:
        app_cfg.share_size = args.shares

    api_key = args.api_key or read_api_key(app_cfg.keys_env_path)
    if args.save_key and args.api_key:
        write_api_key(app_cfg.keys_env_path, args.api_key)

    config = app_cfg.to_engine_config(api_key)
    logger.info("Starting %s", APP_NAME)
    logger.info(
        "Configuration: symbol=%s spread=%g bps order_size=%d api_key=%s",
        config.symbol,
        config.spread_bps,
        config.share_size,
        mask_key(config.api_key),
    )
    if config.limited:
        logger.warning(
            "Using DEMO key (limited to %d requests/day). Get a free key at %s",
            DEMO_DAILY_REQUEST_LIMIT,
            API_KEY_SIGNUP_URL,
        )

    engine = QuotingEngine(config, sink=ConsoleSink())
    engine.start()
    print("\nPress Enter to stop...\n", flush=True)
    try:
        _wait_for_enter()
    finally:
        engine.stop()
    if args.save_defaults:
        app_cfg.save()
    logger.info("Market maker stopped.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
