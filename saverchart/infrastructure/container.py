"""Composition root for wiring infrastructure adapters."""

from saverchart.application.ports.banking_api import BankingApiPort
from saverchart.application.use_cases.get_balance_series import (
    GetBalanceSeriesUseCase,
)
from saverchart.application.use_cases.get_dashboard_summary import (
    GetDashboardSummaryUseCase,
)
from saverchart.application.use_cases.load_saver_snapshot import (
    LoadSaverSnapshotUseCase,
)
from saverchart.infrastructure.logging.logger import get_app_logger
from saverchart.infrastructure.settings import UpApiSettings
from saverchart.infrastructure.up_api_client import UpApiClient


def build_settings() -> UpApiSettings:
    """Return settings loaded from the environment."""
    return UpApiSettings.from_env()


def build_banking_client(
    settings: UpApiSettings | None = None,
    api_token: str | None = None,
) -> UpApiClient:
    """Return the Up API client.

    Raises:
        RuntimeError: If no token is configured or given.
    """
    resolved = settings or build_settings()
    token = api_token or resolved.api_token
    if not token:
        raise RuntimeError("Up API requires an UP_API_TOKEN value.")
    return UpApiClient(
        token,
        base_url=resolved.base_url,
        page_size=resolved.page_size,
        logger=get_app_logger(),
    )


def build_snapshot_use_case(
    banking_api: BankingApiPort,
    settings: UpApiSettings | None = None,
) -> LoadSaverSnapshotUseCase:
    """Return the use case fetching saver accounts and transactions."""
    resolved = settings or build_settings()
    return LoadSaverSnapshotUseCase(
        banking_api,
        logger=get_app_logger(),
        history_days=resolved.history_days,
    )


def build_balance_series_use_case(
    settings: UpApiSettings | None = None,
) -> GetBalanceSeriesUseCase:
    """Return the balance series use case bound to the configured zone."""
    resolved = settings or build_settings()
    return GetBalanceSeriesUseCase(
        logger=get_app_logger(),
        tz=resolved.timezone,
    )


def build_dashboard_summary_use_case(
    settings: UpApiSettings | None = None,
) -> GetDashboardSummaryUseCase:
    """Return the dashboard summary use case."""
    resolved = settings or build_settings()
    return GetDashboardSummaryUseCase(
        logger=get_app_logger(),
        tz=resolved.timezone,
    )


__all__ = [
    "build_settings",
    "build_banking_client",
    "build_snapshot_use_case",
    "build_balance_series_use_case",
    "build_dashboard_summary_use_case",
]
