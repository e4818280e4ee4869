"""Application use cases package."""

from .get_balance_series import GetBalanceSeriesUseCase
from .get_dashboard_summary import (
    DashboardSummary,
    GetDashboardSummaryUseCase,
)
from .load_saver_snapshot import LoadSaverSnapshotUseCase

__all__ = [
    "GetBalanceSeriesUseCase",
    "GetDashboardSummaryUseCase",
    "DashboardSummary",
    "LoadSaverSnapshotUseCase",
]
