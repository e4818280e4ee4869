"""CLI adapter printing the saver balance series for one period.

The period and selection come from environment variables:
BALANCE_TIMEFRAME (Weekly, Monthly, Yearly), BALANCE_REFERENCE_DATE
(YYYY-MM-DD) and BALANCE_ACCOUNTS (comma separated account ids).
"""

import asyncio
from datetime import date
import os

from saverchart.application.ports.banking_api import (
    UpApiError,
    UpAuthenticationError,
)
from saverchart.domain.errors import InvalidApiTokenError
from saverchart.domain.models import SaverSnapshot, Timeframe
from saverchart.domain.policies import resolve_selection
from saverchart.infrastructure.container import (
    build_balance_series_use_case,
    build_banking_client,
    build_dashboard_summary_use_case,
    build_settings,
    build_snapshot_use_case,
)
from saverchart.infrastructure.logging.logger import get_app_logger
from saverchart.infrastructure.settings import UpApiSettings

EXIT_API_ERROR = 1
EXIT_AUTH_ERROR = 2
EXIT_CONFIG_ERROR = 1


def _parse_date(value: str | None, logger) -> date | None:
    """Parse an ISO date string into a date.

    Args:
        value: Date string in YYYY-MM-DD format.
        logger: Logger used for warnings.

    Returns:
        date | None: Parsed date or None when invalid.
    """
    if not value:
        return None
    try:
        return date.fromisoformat(value.strip())
    except ValueError:
        logger.warning(
            f"Invalid date '{value}'. Expected format YYYY-MM-DD."
        )
        return None


def _parse_timeframe(value: str | None, logger) -> Timeframe:
    """Parse a timeframe name, falling back to Monthly."""
    if not value:
        return Timeframe.MONTHLY
    try:
        return Timeframe.parse(value)
    except ValueError:
        logger.warning(
            f"Invalid timeframe '{value}'. Expected Weekly, Monthly or "
            "Yearly; using Monthly."
        )
        return Timeframe.MONTHLY


def _parse_selection(value: str | None) -> list[str] | None:
    """Split a comma separated id list; None selects every account."""
    if value is None or not value.strip():
        return None
    return [item.strip() for item in value.split(",") if item.strip()]


async def _load_snapshot(settings: UpApiSettings, logger) -> SaverSnapshot:
    """Check the token and fetch saver accounts with transactions."""
    async with build_banking_client(settings) as client:
        if not await client.ping():
            raise UpAuthenticationError(None, "Up API did not accept the key")
        logger.info("Up API key validated")
        use_case = build_snapshot_use_case(client, settings)
        return await use_case.execute()


def main() -> None:
    """Fetch savers and print their balance series for the period."""
    logger = get_app_logger()
    try:
        settings = build_settings()
    except RuntimeError as exc:
        logger.error(f"Invalid configuration: {exc}")
        raise SystemExit(EXIT_CONFIG_ERROR) from exc
    if not settings.api_token:
        logger.warning("UP_API_TOKEN is required to fetch balances.")
        return

    timeframe = _parse_timeframe(os.getenv("BALANCE_TIMEFRAME"), logger)
    reference_date = _parse_date(os.getenv("BALANCE_REFERENCE_DATE"), logger)
    selected_ids = _parse_selection(os.getenv("BALANCE_ACCOUNTS"))

    try:
        snapshot = asyncio.run(_load_snapshot(settings, logger))
    except (InvalidApiTokenError, UpAuthenticationError) as exc:
        logger.error(f"Authentication failed: {exc}")
        raise SystemExit(EXIT_AUTH_ERROR) from exc
    except UpApiError as exc:
        logger.error(f"Up API request failed: {exc}")
        raise SystemExit(EXIT_API_ERROR) from exc

    series_use_case = build_balance_series_use_case(settings)
    today = series_use_case.today()
    reference = reference_date or today
    result = series_use_case.execute(
        snapshot,
        selected_ids=selected_ids,
        timeframe=timeframe,
        reference_date=reference,
    )
    summary = build_dashboard_summary_use_case(settings).execute(
        snapshot,
        result,
        resolve_selection(snapshot.accounts, selected_ids),
        timeframe,
        reference,
        today,
    )

    print(
        f"Savers balance ({timeframe.value}, {summary.period_label}, "
        f"{result.window.start} to {result.window.end})"
    )
    if result.series.is_empty:
        print("No balance data for this period.")
    for day, balance in zip(result.series.dates, result.series.balances):
        print(f"{day.isoformat()}  {balance:>14,.2f}")
    latest = (
        f"{summary.latest_balance:,.2f}"
        if summary.latest_balance is not None
        else "N/A"
    )
    print(
        f"Savers selected: {summary.selected_account_count}, "
        f"total balance: {latest} {summary.currency_code or ''}".rstrip()
    )
    print(
        f"Transactions in period: {summary.transaction_count}, "
        f"days with data: {summary.days_with_data}"
    )
    for failure in result.failures:
        print(f"Excluded {failure.account_id}: {failure.reason}")


if __name__ == "__main__":  # pragma: no cover
    main()
