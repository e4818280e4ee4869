"""Account filtering policies."""

from collections.abc import Iterable

from saverchart.domain.constants import SAVER_ACCOUNT_TYPE
from saverchart.domain.models import Account


def is_saver_account(account: Account) -> bool:
    """Return True when the account is a savings account.

    Args:
        account: Account to evaluate.

    Returns:
        bool: True for SAVER accounts, regardless of tag casing.
    """
    return account.account_type.strip().upper() == SAVER_ACCOUNT_TYPE


def select_saver_accounts(accounts: Iterable[Account]) -> list[Account]:
    """Return the saver accounts, preserving input order."""
    return [account for account in accounts if is_saver_account(account)]


def resolve_selection(
    accounts: Iterable[Account],
    selected_ids: Iterable[str] | None,
) -> list[str]:
    """Return the account ids contributing to the aggregate.

    A selection of None means nothing was chosen yet, in which case every
    account is selected. An explicit empty selection stays empty.

    Args:
        accounts: Accounts available for selection.
        selected_ids: Ids chosen by the caller, or None.

    Returns:
        list[str]: Unique selected ids in first-seen order.
    """
    if selected_ids is None:
        return [account.id for account in accounts]
    return list(dict.fromkeys(selected_ids))


__all__ = ["is_saver_account", "select_saver_accounts", "resolve_selection"]
