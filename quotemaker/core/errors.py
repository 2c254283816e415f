from __future__ import annotations

from typing import Optional


class QuoteMakerError(Exception):
    """Base class for errors raised by quotemaker."""


class ConfigError(QuoteMakerError, ValueError):
    """Invalid engine or application configuration."""


class TransportFailure(QuoteMakerError):
    """The quote source could not be reached or answered with a non-2xx status."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause
