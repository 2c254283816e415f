from __future__ import annotations

import pytest
import requests

from quotemaker.config import settings
from quotemaker.core.errors import TransportFailure
from quotemaker.services import market_data


class _FakeResponse:
    def __init__(self, text: str, status: int = 200):
        self.text = text
        self.status_code = status

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")


def test_fetch_returns_raw_text_and_sends_params(monkeypatch):
    seen = {}

    def _fake_get(url, params=None, timeout=None):
        seen.update(url=url, params=params, timeout=timeout)
        return _FakeResponse('{"Global Quote": {"05. price": "1.00"}}')

    monkeypatch.setattr(market_data.requests, "get", _fake_get)

    body = market_data.fetch_global_quote("MSFT", "KEY123")

    assert body == '{"Global Quote": {"05. price": "1.00"}}'
    assert seen["url"] == settings.BASE_URL
    assert seen["params"] == {"function": "GLOBAL_QUOTE", "symbol": "MSFT", "apikey": "KEY123"}
    assert seen["timeout"] == settings.FETCH_TIMEOUT_S


def test_http_error_status_is_transport_failure(monkeypatch):
    monkeypatch.setattr(market_data.requests, "get", lambda *a, **k: _FakeResponse("", 503))

    with pytest.raises(TransportFailure) as info:
        market_data.fetch_global_quote("MSFT", "KEY123")
    assert isinstance(info.value.cause, requests.HTTPError)


def test_timeout_is_transport_failure(monkeypatch):
    def _boom(*a, **k):
        raise requests.Timeout("read timed out")

    monkeypatch.setattr(market_data.requests, "get", _boom)

    with pytest.raises(TransportFailure):
        market_data.fetch_global_quote("MSFT", "KEY123", timeout=0.1)


def test_session_is_used_when_given():
    class _Session:
        def get(self, url, params=None, timeout=None):
            return _FakeResponse("session body")

    assert market_data.fetch_global_quote("MSFT", "K", session=_Session()) == "session body"
