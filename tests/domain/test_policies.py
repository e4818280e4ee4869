"""Tests for domain policies."""

import pytest

from saverchart.domain.errors import InvalidApiTokenError
from saverchart.domain.models import Account
from saverchart.domain.policies import (
    is_saver_account,
    normalize_api_token,
    resolve_selection,
    select_saver_accounts,
)


def _account(account_id: str, account_type: str) -> Account:
    return Account(
        id=account_id,
        display_name=account_id,
        account_type=account_type,
        balance_value="0.00",
        currency_code="AUD",
    )


def test_select_saver_accounts_keeps_order() -> None:
    """Only SAVER accounts survive, in their original order."""
    accounts = [
        _account("spending", "TRANSACTIONAL"),
        _account("holiday", "SAVER"),
        _account("home", "saver"),
    ]

    assert [a.id for a in select_saver_accounts(accounts)] == [
        "holiday",
        "home",
    ]
    assert is_saver_account(accounts[0]) is False


def test_resolve_selection_defaults_to_all_accounts() -> None:
    """None selects everything; an explicit empty list selects nothing."""
    accounts = [_account("a", "SAVER"), _account("b", "SAVER")]

    assert resolve_selection(accounts, None) == ["a", "b"]
    assert resolve_selection(accounts, []) == []
    assert resolve_selection(accounts, ["b", "b", "x"]) == ["b", "x"]


def test_normalize_api_token_strips_whitespace() -> None:
    """Pasted tokens lose surrounding and embedded whitespace."""
    assert normalize_api_token("  up:yeah:abc\n123 ") == "up:yeah:abc123"


@pytest.mark.parametrize(
    "raw",
    [
        "",
        "abc123",
        "up:nope:abc",
        "up:yeah:",
        "up:yeah:abc-123",
        "up:yeah:a:b",
    ],
)
def test_normalize_api_token_rejects_bad_format(raw: str) -> None:
    """Tokens must look like up:yeah:<letters and digits>."""
    with pytest.raises(InvalidApiTokenError):
        normalize_api_token(raw)
