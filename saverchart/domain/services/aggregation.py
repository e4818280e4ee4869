"""Cross-account aggregation with carry-forward."""

from collections.abc import Iterable, Mapping
from datetime import date, tzinfo
from decimal import Decimal
from logging import Logger

from saverchart.domain.errors import BalanceIntegrityError
from saverchart.domain.models import (
    Account,
    AccountFailure,
    BalanceSeries,
    DailyBalanceMap,
    Transaction,
)
from saverchart.domain.services.reconstruction import (
    reconstruct_daily_balances,
)
from saverchart.utils.decimal_utils import round_currency


def build_account_daily_maps(
    accounts: Iterable[Account],
    transactions_by_account: Mapping[str, Iterable[Transaction]],
    selected_ids: Iterable[str],
    *,
    today: date,
    tz: tzinfo,
    strict: bool = False,
    logger: Logger | None = None,
) -> tuple[dict[str, DailyBalanceMap], list[AccountFailure]]:
    """Reconstruct daily balances for every selected account.

    Args:
        accounts: Accounts available to the engine.
        transactions_by_account: Transactions grouped by account id. An
            account missing from the mapping is treated as having none.
        selected_ids: Ids of the accounts contributing to the aggregate.
            Ids matching no account are ignored.
        today: Current date in the bucketing time zone.
        tz: Time zone used to truncate timestamps to dates.
        strict: Re-raise the first integrity error instead of collecting.
        logger: Optional logger for diagnostics.

    Returns:
        tuple: Daily maps keyed by account id, and the accounts that failed.
    """
    accounts_by_id = {account.id: account for account in accounts}
    daily_maps: dict[str, DailyBalanceMap] = {}
    failures: list[AccountFailure] = []
    for account_id in dict.fromkeys(selected_ids):
        account = accounts_by_id.get(account_id)
        if account is None:
            if logger:
                logger.debug(f"Selected account {account_id} is unknown")
            continue
        transactions = transactions_by_account.get(account_id, ())
        try:
            daily_maps[account_id] = reconstruct_daily_balances(
                account,
                transactions,
                today=today,
                tz=tz,
                logger=logger,
            )
        except BalanceIntegrityError as exc:
            if strict:
                raise
            if logger:
                logger.error(f"Skipping account {account_id}: {exc}")
            failures.append(
                AccountFailure(account_id=account_id, reason=str(exc))
            )
    return daily_maps, failures


def aggregate_daily_balances(
    daily_maps: Mapping[str, DailyBalanceMap],
    *,
    logger: Logger | None = None,
) -> BalanceSeries:
    """Sum per-account daily balances over the union of their dates.

    An account without an entry on a date contributes its last known
    balance, or nothing before its first entry.

    Args:
        daily_maps: Daily balance maps keyed by account id.
        logger: Optional logger for diagnostics.

    Returns:
        BalanceSeries: Ascending dates with the rounded aggregate for each.
    """
    all_dates: set[date] = set()
    for daily in daily_maps.values():
        all_dates.update(daily)
    if not all_dates:
        return BalanceSeries()

    dates = sorted(all_dates)
    last_known: dict[str, Decimal] = {}
    totals: list[Decimal] = []
    for day in dates:
        for account_id, daily in daily_maps.items():
            if day in daily:
                last_known[account_id] = daily[day]
        totals.append(round_currency(sum(last_known.values(), Decimal("0"))))

    if logger:
        logger.debug(
            f"Aggregated {len(daily_maps)} accounts over {len(dates)} dates"
        )
    return BalanceSeries(dates=tuple(dates), balances=tuple(totals))


__all__ = ["build_account_daily_maps", "aggregate_daily_balances"]
