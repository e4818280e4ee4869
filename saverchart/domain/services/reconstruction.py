"""Per-account daily balance reconstruction.

Historical balances are derived backwards from the account's current
balance: the most recent date holds the current balance, and every earlier
date undoes the transactions posted on the date that follows it.
"""

from collections.abc import Iterable
from datetime import date, tzinfo
from decimal import Decimal
from logging import Logger

from saverchart.domain.models import Account, DailyBalanceMap, Transaction
from saverchart.domain.services.parsing import (
    bucket_date,
    parse_amount,
    parse_timestamp,
)
from saverchart.utils.decimal_utils import round_currency


def sum_amounts_by_date(
    transactions: Iterable[Transaction],
    *,
    account_id: str,
    tz: tzinfo,
) -> dict[date, Decimal]:
    """Group transaction amounts by calendar date.

    Transactions are parsed and ordered newest first before grouping, so
    the returned mapping iterates from the most recent date.

    Args:
        transactions: Transactions of one account.
        account_id: Account owning the transactions.
        tz: Time zone used to truncate timestamps to dates.

    Returns:
        dict[date, Decimal]: Net amount posted on each date.

    Raises:
        BalanceIntegrityError: If any amount or timestamp is malformed.
    """
    parsed = [
        (
            parse_timestamp(tx.created_at, account_id=account_id),
            parse_amount(tx.amount_value, account_id=account_id),
        )
        for tx in transactions
    ]
    parsed.sort(key=lambda item: item[0], reverse=True)
    totals: dict[date, Decimal] = {}
    for moment, amount in parsed:
        day = bucket_date(moment, tz)
        totals[day] = totals.get(day, Decimal("0")) + amount
    return totals


def reconstruct_daily_balances(
    account: Account,
    transactions: Iterable[Transaction],
    *,
    today: date,
    tz: tzinfo,
    logger: Logger | None = None,
) -> DailyBalanceMap:
    """Return the end-of-day balance for each active date of an account.

    Args:
        account: Account providing the authoritative current balance.
        transactions: Every fetched transaction of the account.
        today: Current date in the bucketing time zone.
        tz: Time zone used to truncate timestamps to dates.
        logger: Optional logger for diagnostics.

    Returns:
        DailyBalanceMap: Balance per date, covering every transaction date
        plus today.

    Raises:
        BalanceIntegrityError: If the balance or any transaction is
            malformed. The account is not partially reconstructed.
    """
    current = parse_amount(
        account.balance_value,
        account_id=account.id,
        field="balance",
    )
    totals = sum_amounts_by_date(transactions, account_id=account.id, tz=tz)
    if not totals:
        if logger:
            logger.debug(
                f"Account {account.id} has no transactions; "
                f"pinning {current} to {today}"
            )
        return {today: round_currency(current)}

    dates = sorted(set(totals) | {today}, reverse=True)
    daily: DailyBalanceMap = {}
    running = round_currency(current)
    more_recent: date | None = None
    for day in dates:
        if more_recent is not None:
            running = round_currency(
                running - totals.get(more_recent, Decimal("0"))
            )
        daily[day] = running
        more_recent = day

    if logger:
        logger.debug(
            f"Reconstructed {len(daily)} daily balances for account "
            f"{account.id} ({dates[-1]} to {dates[0]})"
        )
    return daily


__all__ = ["sum_amounts_by_date", "reconstruct_daily_balances"]
