"""Use case to compute the windowed saver balance series."""

from collections.abc import Callable, Iterable
from datetime import date, datetime, timezone, tzinfo

from saverchart.domain.models import (
    BalanceSeriesResult,
    SaverSnapshot,
    Timeframe,
)
from saverchart.domain.policies import resolve_selection
from saverchart.domain.services.pipeline import build_balance_series
from saverchart.infrastructure.logging.logger import get_app_logger


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class GetBalanceSeriesUseCase:
    """Compute the aggregated balance of selected savers for a period."""

    def __init__(
        self,
        logger=None,
        tz: tzinfo = timezone.utc,
        clock: Callable[[], datetime] = _utc_now,
        strict: bool = False,
    ) -> None:
        """Initialize the use case.

        Args:
            logger: Optional logger compatible with logging.Logger-like API.
            tz: Time zone used for date bucketing and for today.
            clock: Callable returning the current aware datetime.
            strict: Raise on malformed account data instead of skipping.
        """
        self._logger = logger or get_app_logger()
        self._tz = tz
        self._clock = clock
        self._strict = strict

    def today(self) -> date:
        """Return today's date in the bucketing time zone."""
        return self._clock().astimezone(self._tz).date()

    def execute(
        self,
        snapshot: SaverSnapshot,
        selected_ids: Iterable[str] | None = None,
        timeframe: Timeframe | str = Timeframe.MONTHLY,
        reference_date: date | None = None,
    ) -> BalanceSeriesResult:
        """Return the balance series for the selection and period.

        Args:
            snapshot: Accounts and transactions fetched upstream.
            selected_ids: Contributing account ids; None selects all.
            timeframe: Window length.
            reference_date: Date anchoring the window; defaults to today.

        Returns:
            BalanceSeriesResult: Windowed series, window, and failures.
        """
        today = self.today()
        timeframe = Timeframe.parse(timeframe)
        reference = reference_date or today
        selection = resolve_selection(snapshot.accounts, selected_ids)
        result = build_balance_series(
            snapshot.accounts,
            snapshot.transactions_by_account,
            selection,
            timeframe,
            reference,
            today=today,
            tz=self._tz,
            strict=self._strict,
            logger=self._logger,
        )
        for failure in result.failures:
            self._logger.warning(
                f"Account {failure.account_id} excluded: {failure.reason}"
            )
        self._logger.info(
            f"Balance series for {len(selection)} accounts, "
            f"{timeframe.value} {result.window.start} to {result.window.end}: "
            f"{len(result.series)} points"
        )
        return result


__all__ = ["GetBalanceSeriesUseCase"]
