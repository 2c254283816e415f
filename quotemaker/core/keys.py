"""
keys.py

- `read_api_key(path)` resolves the quote-source key: keys.env, then the
  process environment, then the demo key.
- `get_keys_dict(path)` returns the raw keys.env mapping (nothing is loaded into env).
- `mask_key(key)` renders a key for logs and banners.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Dict, Optional, Union

from dotenv import dotenv_values

from quotemaker.config.paths import KEYS_ENV_PATH
from quotemaker.config.settings import API_KEY_ENV, DEMO_API_KEY

PathLike = Union[str, Path]


def _keys_file(path: Optional[PathLike] = None) -> Path:
    return Path(path) if path else KEYS_ENV_PATH


def _mask_tail(val: str, tail: int = 4) -> str:
    if not val:
        return "(missing)"
    s = str(val)
    return f"••••{s[-tail:]}" if len(s) >= tail else "••••"


def get_keys_dict(path: Optional[PathLike] = None) -> Dict[str, str]:
    p = _keys_file(path)
    if not p.exists():
        return {}
    return {k: v for k, v in (dotenv_values(p) or {}).items() if v is not None}


def read_api_key(path: Optional[PathLike] = None) -> str:
    key = get_keys_dict(path).get(API_KEY_ENV, "").strip()
    if key:
        return key
    key = os.environ.get(API_KEY_ENV, "").strip()
    return key or DEMO_API_KEY


def mask_key(key: str) -> str:
    if key == DEMO_API_KEY:
        return "DEMO (limited)"
    return _mask_tail(key)


def write_api_key(path: Optional[PathLike], key: str) -> bool:
    if not key or not key.strip():
        return False
    p = _keys_file(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    merged = dict(get_keys_dict(path))
    merged[API_KEY_ENV] = key.strip()
    p.write_text("".join(f"{k}={v}\n" for k, v in merged.items()), encoding="utf-8")
    return True
