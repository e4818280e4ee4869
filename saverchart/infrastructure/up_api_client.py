"""HTTP client for the Up banking API.

The client follows JSON:API pagination links until exhausted and maps
responses onto domain models. Transport failures and 5xx responses are
retried; authentication and rate-limit failures are raised immediately as
distinct error types.
"""

from datetime import datetime
from typing import Any

import httpx
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from saverchart.application.ports.banking_api import (
    UpApiError,
    UpAuthenticationError,
    UpRateLimitError,
    UpTransientError,
)
from saverchart.domain.models import Account, Transaction
from saverchart.domain.policies import normalize_api_token
from saverchart.infrastructure.logging.logger import get_app_logger
from saverchart.infrastructure.settings import (
    DEFAULT_BASE_URL,
    DEFAULT_PAGE_SIZE,
)

DEFAULT_TIMEOUT = httpx.Timeout(20.0, connect=5.0)
PING_OK_EMOJI = "⚡️"


class UpApiClient:
    """Async client for the accounts and transactions endpoints."""

    def __init__(
        self,
        api_token: str,
        *,
        base_url: str = DEFAULT_BASE_URL,
        page_size: int = DEFAULT_PAGE_SIZE,
        http_client: httpx.AsyncClient | None = None,
        logger=None,
        retry_attempts: int = 3,
        retry_wait=None,
    ) -> None:
        """Initialize the client.

        Args:
            api_token: Up personal access token.
            base_url: Root URL of the API.
            page_size: Page size for paginated listings.
            http_client: Optional pre-built httpx client, closed by caller.
            logger: Optional logger compatible with logging.Logger-like API.
            retry_attempts: Attempts for transient failures.
            retry_wait: Optional tenacity wait strategy between attempts.

        Raises:
            InvalidApiTokenError: If the token format is invalid.
        """
        self._token = normalize_api_token(api_token)
        self._base_url = base_url.rstrip("/")
        self._page_size = page_size
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(
            timeout=DEFAULT_TIMEOUT
        )
        self._logger = logger or get_app_logger()
        self._retry_attempts = retry_attempts
        self._retry_wait = retry_wait or wait_exponential(
            multiplier=1,
            min=1,
            max=5,
        )

    async def __aenter__(self) -> "UpApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying HTTP client when this instance owns it."""
        if self._owns_client:
            await self._client.aclose()

    async def ping(self) -> bool:
        """Return True when the API accepts the token.

        Raises:
            UpAuthenticationError: If the token is rejected.
        """
        payload = await self._get_json(f"{self._base_url}/util/ping")
        meta = payload.get("meta") or {}
        return meta.get("statusEmoji") == PING_OK_EMOJI

    async def list_accounts(
        self,
        account_type: str | None = None,
    ) -> list[Account]:
        """Return every account across all pages.

        Args:
            account_type: Optional account type filter, such as SAVER.

        Returns:
            list[Account]: Accounts mapped from the API payload.
        """
        params: dict[str, Any] = {"page[size]": self._page_size}
        if account_type:
            params["filter[accountType]"] = account_type
        items = await self._get_all_pages(
            f"{self._base_url}/accounts",
            params,
        )
        accounts = [self._to_account(item) for item in items]
        self._logger.info(f"Fetched {len(accounts)} accounts from Up")
        return accounts

    async def list_transactions(
        self,
        account_id: str,
        since: datetime | None = None,
        until: datetime | None = None,
    ) -> list[Transaction]:
        """Return every transaction of an account across all pages.

        Args:
            account_id: Account to list transactions for.
            since: Optional inclusive lower bound on creation time.
            until: Optional exclusive upper bound on creation time.

        Returns:
            list[Transaction]: Transactions in API order (newest first).
        """
        params: dict[str, Any] = {"page[size]": self._page_size}
        if since is not None:
            params["filter[since]"] = since.isoformat()
        if until is not None:
            params["filter[until]"] = until.isoformat()
        items = await self._get_all_pages(
            f"{self._base_url}/accounts/{account_id}/transactions",
            params,
        )
        transactions = [self._to_transaction(item) for item in items]
        self._logger.info(
            f"Fetched {len(transactions)} transactions for account "
            f"{account_id}"
        )
        return transactions

    async def _get_all_pages(
        self,
        url: str,
        params: dict[str, Any],
    ) -> list[dict[str, Any]]:
        """Collect the data items of every page, following next links."""
        items: list[dict[str, Any]] = []
        next_url: str | None = url
        next_params: dict[str, Any] | None = params
        while next_url:
            self._logger.debug(f"Fetching page {next_url}")
            payload = await self._get_json(next_url, next_params)
            items.extend(payload.get("data") or [])
            links = payload.get("links") or {}
            next_url = links.get("next")
            # next links already carry the query string
            next_params = None
        return items

    async def _get_json(
        self,
        url: str,
        params: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """GET a URL, retrying transient failures."""
        payload: dict[str, Any] = {}
        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(self._retry_attempts),
            wait=self._retry_wait,
            retry=retry_if_exception_type(UpTransientError),
            reraise=True,
        ):
            with attempt:
                payload = await self._request_json(url, params)
        return payload

    async def _request_json(
        self,
        url: str,
        params: dict[str, Any] | None,
    ) -> dict[str, Any]:
        headers = {
            "Authorization": f"Bearer {self._token}",
            "Accept": "application/json",
        }
        try:
            response = await self._client.get(
                url,
                params=params,
                headers=headers,
            )
        except httpx.TransportError as exc:
            self._logger.warning(f"Transport error calling {url}: {exc}")
            raise UpTransientError(
                None,
                "Failed to connect to Up API",
            ) from exc

        status = response.status_code
        if status == 401:
            raise UpAuthenticationError(
                status,
                "Invalid API key. Please make sure you are using a valid Up "
                "Personal Access Token.",
            )
        if status == 429:
            raise UpRateLimitError(status, "Up API rate limit exceeded")
        if status >= 500:
            self._logger.warning(f"Up API returned {status} for {url}")
            raise UpTransientError(
                status,
                f"Up API request failed with status {status}",
            )
        if response.is_error:
            self._logger.error(
                f"Up API returned {status} for {url}: {response.text}"
            )
            raise UpApiError(
                status,
                f"Up API request failed with status {status}",
            )
        try:
            payload = response.json()
        except ValueError:
            raise UpApiError(status, "Up API returned invalid JSON") from None
        if not isinstance(payload, dict):
            raise UpApiError(status, "Up API returned an unexpected payload")
        return payload

    @staticmethod
    def _to_account(item: dict[str, Any]) -> Account:
        try:
            attributes = item["attributes"]
            balance = attributes["balance"]
            return Account(
                id=item["id"],
                display_name=attributes["displayName"],
                account_type=attributes["accountType"],
                balance_value=balance["value"],
                currency_code=balance["currencyCode"],
            )
        except (KeyError, TypeError):
            raise UpApiError(
                None,
                f"Unexpected account payload: {item!r}",
            ) from None

    @staticmethod
    def _to_transaction(item: dict[str, Any]) -> Transaction:
        try:
            attributes = item["attributes"]
            amount = attributes["amount"]
            balance_after = attributes.get("balanceAfter") or {}
            return Transaction(
                id=item["id"],
                amount_value=amount["value"],
                currency_code=amount["currencyCode"],
                created_at=attributes["createdAt"],
                balance_after_value=balance_after.get("value"),
                description=attributes.get("description"),
            )
        except (KeyError, TypeError, AttributeError):
            raise UpApiError(
                None,
                f"Unexpected transaction payload: {item!r}",
            ) from None


__all__ = ["UpApiClient", "DEFAULT_TIMEOUT", "PING_OK_EMOJI"]
