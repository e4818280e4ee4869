"""Application ports package."""

from .banking_api import (
    BankingApiPort,
    UpApiError,
    UpAuthenticationError,
    UpRateLimitError,
    UpTransientError,
)

__all__ = [
    "BankingApiPort",
    "UpApiError",
    "UpAuthenticationError",
    "UpRateLimitError",
    "UpTransientError",
]
