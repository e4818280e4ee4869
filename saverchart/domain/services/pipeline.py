"""Entry point composing reconstruction, aggregation, and windowing."""

from collections.abc import Iterable, Mapping
from datetime import date, tzinfo
from logging import Logger

from saverchart.domain.models import (
    Account,
    BalanceSeries,
    BalanceSeriesResult,
    Timeframe,
    Transaction,
)
from saverchart.domain.services.aggregation import (
    aggregate_daily_balances,
    build_account_daily_maps,
)
from saverchart.domain.services.windowing import clip_series, compute_window


def build_balance_series(
    accounts: Iterable[Account],
    transactions_by_account: Mapping[str, Iterable[Transaction]],
    selected_ids: Iterable[str],
    timeframe: Timeframe,
    reference_date: date,
    *,
    today: date,
    tz: tzinfo,
    strict: bool = False,
    logger: Logger | None = None,
) -> BalanceSeriesResult:
    """Compute the windowed aggregate balance of the selected accounts.

    The computation is pure: the same inputs, including ``today``, always
    give the same result.

    Args:
        accounts: Accounts fetched from the bank.
        transactions_by_account: Transactions grouped by account id.
        selected_ids: Accounts contributing to the aggregate.
        timeframe: Window length.
        reference_date: Date anchoring the window.
        today: Current date in the bucketing time zone.
        tz: Time zone used to bucket transactions into dates.
        strict: Raise on the first malformed account instead of skipping.
        logger: Optional logger for diagnostics.

    Returns:
        BalanceSeriesResult: Windowed and full series plus the accounts
        that were excluded because of malformed data.

    Raises:
        BalanceIntegrityError: Only when ``strict`` is set.
    """
    timeframe = Timeframe.parse(timeframe)
    window = compute_window(timeframe, reference_date, today=today)
    accounts = tuple(accounts)
    selected = tuple(dict.fromkeys(selected_ids))
    if not accounts or not selected:
        if logger:
            logger.debug("No accounts selected; returning an empty series")
        return BalanceSeriesResult(
            series=BalanceSeries(),
            window=window,
            full_series=BalanceSeries(),
        )

    daily_maps, failures = build_account_daily_maps(
        accounts,
        transactions_by_account,
        selected,
        today=today,
        tz=tz,
        strict=strict,
        logger=logger,
    )
    full_series = aggregate_daily_balances(daily_maps, logger=logger)
    series = clip_series(full_series, window)
    if logger:
        logger.debug(
            f"{timeframe.value} window {window.start} to {window.end}: "
            f"{len(series)} of {len(full_series)} points"
        )
    return BalanceSeriesResult(
        series=series,
        window=window,
        full_series=full_series,
        failures=tuple(failures),
    )


__all__ = ["build_balance_series"]
