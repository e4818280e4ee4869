"""Domain models package."""

from .accounts import Account, SaverSnapshot, Transaction
from .balances import (
    AccountFailure,
    BalanceSeries,
    BalanceSeriesResult,
    DailyBalanceMap,
    DateWindow,
    Timeframe,
)
from .summary import DashboardSummary

__all__ = [
    "Account",
    "SaverSnapshot",
    "Transaction",
    "AccountFailure",
    "BalanceSeries",
    "BalanceSeriesResult",
    "DailyBalanceMap",
    "DateWindow",
    "Timeframe",
    "DashboardSummary",
]
