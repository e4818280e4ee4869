"""Tests for the Up API client."""

import asyncio
from datetime import datetime, timezone
from decimal import Decimal
from unittest.mock import MagicMock

import httpx
import pytest
from tenacity import wait_none

from saverchart.application.ports.banking_api import (
    UpApiError,
    UpAuthenticationError,
    UpRateLimitError,
    UpTransientError,
)
from saverchart.domain.errors import InvalidApiTokenError
from saverchart.infrastructure.up_api_client import (
    PING_OK_EMOJI,
    UpApiClient,
)

TOKEN = "up:yeah:abc123"
BASE_URL = "https://api.test/api/v1"


def _account_item(account_id: str, account_type: str = "SAVER") -> dict:
    return {
        "id": account_id,
        "attributes": {
            "displayName": account_id.title(),
            "accountType": account_type,
            "balance": {"value": "12.34", "currencyCode": "AUD"},
        },
    }


def _transaction_item(tx_id: str, balance_after: str | None = None) -> dict:
    attributes = {
        "description": "Transfer",
        "amount": {"value": "-1.50", "currencyCode": "AUD"},
        "createdAt": "2024-05-10T10:00:00+10:00",
    }
    if balance_after is not None:
        attributes["balanceAfter"] = {
            "value": balance_after,
            "currencyCode": "AUD",
        }
    return {"id": tx_id, "attributes": attributes}


def _run(handler, call, **kwargs):
    async def _main():
        async with httpx.AsyncClient(
            transport=httpx.MockTransport(handler)
        ) as http_client:
            client = UpApiClient(
                TOKEN,
                base_url=BASE_URL,
                page_size=2,
                http_client=http_client,
                logger=MagicMock(),
                retry_wait=wait_none(),
                **kwargs,
            )
            return await call(client)

    return asyncio.run(_main())


def test_list_accounts_follows_pagination_links() -> None:
    """Every page is fetched and mapped to accounts."""
    requests: list[httpx.Request] = []
    next_url = f"{BASE_URL}/accounts?page%5Bafter%5D=cursor"

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        if request.url.params.get("page[after]") == "cursor":
            return httpx.Response(
                200,
                json={"data": [_account_item("b")], "links": {"next": None}},
            )
        return httpx.Response(
            200,
            json={"data": [_account_item("a")], "links": {"next": next_url}},
        )

    accounts = _run(
        handler,
        lambda client: client.list_accounts(account_type="SAVER"),
    )

    assert [account.id for account in accounts] == ["a", "b"]
    assert accounts[0].balance_value == "12.34"
    assert accounts[0].currency_code == "AUD"
    assert requests[0].headers["Authorization"] == f"Bearer {TOKEN}"
    assert requests[0].url.params["page[size]"] == "2"
    assert requests[0].url.params["filter[accountType]"] == "SAVER"
    assert requests[1].url.params["page[after]"] == "cursor"


def test_list_transactions_sends_time_filters() -> None:
    """since and until are sent as ISO 8601 filters."""
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(
            200,
            json={
                "data": [
                    _transaction_item("tx-1", balance_after="10.00"),
                    _transaction_item("tx-2"),
                ],
                "links": {"next": None},
            },
        )

    since = datetime(2024, 1, 1, tzinfo=timezone.utc)
    transactions = _run(
        handler,
        lambda client: client.list_transactions("goal", since=since),
    )

    assert seen[0].url.path == "/api/v1/accounts/goal/transactions"
    assert seen[0].url.params["filter[since]"] == since.isoformat()
    assert "filter[until]" not in seen[0].url.params
    assert [tx.id for tx in transactions] == ["tx-1", "tx-2"]
    assert Decimal(transactions[0].amount_value) == Decimal("-1.50")
    assert transactions[0].balance_after_value == "10.00"
    assert transactions[1].balance_after_value is None
    assert transactions[0].created_at == "2024-05-10T10:00:00+10:00"


def test_ping_checks_status_emoji() -> None:
    """ping is True only for the expected status emoji."""

    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/api/v1/util/ping"
        return httpx.Response(
            200,
            json={"meta": {"id": "x", "statusEmoji": PING_OK_EMOJI}},
        )

    assert _run(handler, lambda client: client.ping()) is True


def test_unauthorized_raises_authentication_error_without_retry() -> None:
    """A 401 is raised immediately as an authentication error."""
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(401, json={"errors": []})

    with pytest.raises(UpAuthenticationError) as excinfo:
        _run(handler, lambda client: client.list_accounts())

    assert excinfo.value.status == 401
    assert len(calls) == 1


def test_rate_limit_is_distinct_error() -> None:
    """A 429 surfaces as a rate-limit error."""

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(429)

    with pytest.raises(UpRateLimitError):
        _run(handler, lambda client: client.list_accounts())


def test_server_errors_are_retried() -> None:
    """Transient 5xx responses are retried until success."""
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        if len(calls) < 3:
            return httpx.Response(503)
        return httpx.Response(200, json={"data": [], "links": {}})

    accounts = _run(handler, lambda client: client.list_accounts())

    assert accounts == []
    assert len(calls) == 3


def test_transport_errors_raise_after_retries() -> None:
    """Connection failures become transient errors once retries run out."""
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        raise httpx.ConnectError("boom", request=request)

    with pytest.raises(UpTransientError) as excinfo:
        _run(
            handler,
            lambda client: client.list_accounts(),
            retry_attempts=2,
        )

    assert excinfo.value.status is None
    assert len(calls) == 2


def test_client_errors_raise_api_error() -> None:
    """Other 4xx responses raise the generic API error."""

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404, text="missing")

    with pytest.raises(UpApiError) as excinfo:
        _run(handler, lambda client: client.list_transactions("nope"))

    assert excinfo.value.status == 404
    assert not isinstance(excinfo.value, UpTransientError)


def test_malformed_payload_raises_api_error() -> None:
    """Items missing required attributes are rejected."""

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200,
            json={"data": [{"id": "a", "attributes": {}}], "links": {}},
        )

    with pytest.raises(UpApiError, match="Unexpected account payload"):
        _run(handler, lambda client: client.list_accounts())


def test_invalid_token_is_rejected_before_requests() -> None:
    """Malformed tokens never reach the network."""
    with pytest.raises(InvalidApiTokenError):
        UpApiClient("not-a-token", logger=MagicMock())
