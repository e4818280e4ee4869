"""Application port for the banking API collaborator."""

from datetime import datetime
from typing import Protocol

from saverchart.domain.models import Account, Transaction


class UpApiError(Exception):
    """Failure reported by, or while reaching, the banking API.

    Attributes:
        status: HTTP status code, or None when no response was received.
    """

    def __init__(self, status: int | None, message: str) -> None:
        super().__init__(message)
        self.status = status
        self.message = message


class UpAuthenticationError(UpApiError):
    """The API token is invalid, revoked, or expired."""


class UpRateLimitError(UpApiError):
    """The API refused the request because of rate limiting."""


class UpTransientError(UpApiError):
    """Network failure, timeout, or server-side error worth retrying."""


class BankingApiPort(Protocol):
    """Port exposing read access to accounts and transactions."""

    async def ping(self) -> bool:
        """Return True when the API accepts the configured token."""

    async def list_accounts(
        self,
        account_type: str | None = None,
    ) -> list[Account]:
        """Return every account, optionally filtered by type."""

    async def list_transactions(
        self,
        account_id: str,
        since: datetime | None = None,
        until: datetime | None = None,
    ) -> list[Transaction]:
        """Return every transaction of an account across all pages."""


__all__ = [
    "BankingApiPort",
    "UpApiError",
    "UpAuthenticationError",
    "UpRateLimitError",
    "UpTransientError",
]
