"""Use case to summarize the selected savers for the dashboard."""

from collections.abc import Iterable
from datetime import date, timezone, tzinfo

from saverchart.domain.models import (
    BalanceSeriesResult,
    DashboardSummary,
    SaverSnapshot,
    Timeframe,
)
from saverchart.domain.services.parsing import bucket_date, parse_timestamp
from saverchart.domain.services.periods import (
    can_move_to_next_period,
    format_period_label,
)
from saverchart.infrastructure.logging.logger import get_app_logger


class GetDashboardSummaryUseCase:
    """Derive summary figures from a computed balance series."""

    def __init__(self, logger=None, tz: tzinfo = timezone.utc) -> None:
        """Initialize the use case.

        Args:
            logger: Optional logger compatible with logging.Logger-like API.
            tz: Time zone used to bucket transactions into dates.
        """
        self._logger = logger or get_app_logger()
        self._tz = tz

    def execute(
        self,
        snapshot: SaverSnapshot,
        result: BalanceSeriesResult,
        selected_ids: Iterable[str],
        timeframe: Timeframe | str,
        reference_date: date,
        today: date,
    ) -> DashboardSummary:
        """Return the dashboard summary.

        Args:
            snapshot: Accounts and transactions the series was built from.
            result: Output of the balance series use case.
            selected_ids: Account ids included in the series.
            timeframe: Window length.
            reference_date: Date anchoring the window.
            today: Current date in the bucketing time zone.

        Returns:
            DashboardSummary: Figures for the summary panel.
        """
        timeframe = Timeframe.parse(timeframe)
        known_ids = {account.id for account in snapshot.accounts}
        failed_ids = {failure.account_id for failure in result.failures}
        selected = [
            account_id
            for account_id in dict.fromkeys(selected_ids)
            if account_id in known_ids
        ]
        currencies = {
            account.currency_code
            for account in snapshot.accounts
            if account.id in selected
        }

        transaction_count = 0
        for account_id in selected:
            if account_id in failed_ids:
                continue
            for tx in snapshot.transactions_by_account.get(account_id, ()):
                moment = parse_timestamp(tx.created_at, account_id=account_id)
                if result.window.contains(bucket_date(moment, self._tz)):
                    transaction_count += 1

        summary = DashboardSummary(
            selected_account_count=len(selected),
            latest_balance=result.series.last_balance,
            currency_code=currencies.pop() if len(currencies) == 1 else None,
            transaction_count=transaction_count,
            days_with_data=len(result.series),
            period_label=format_period_label(timeframe, reference_date),
            can_move_next=can_move_to_next_period(
                timeframe,
                reference_date,
                today=today,
            ),
        )
        self._logger.info(
            f"Summary for {summary.period_label}: "
            f"{summary.selected_account_count} savers, "
            f"{summary.transaction_count} transactions"
        )
        return summary


__all__ = ["GetDashboardSummaryUseCase", "DashboardSummary"]
