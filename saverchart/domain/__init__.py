"""Domain package for balance history rules and core models."""

from .constants import DEFAULT_TIMEZONE, SAVER_ACCOUNT_TYPE
from .errors import BalanceIntegrityError, InvalidApiTokenError
from .models import (
    Account,
    AccountFailure,
    BalanceSeries,
    BalanceSeriesResult,
    DateWindow,
    SaverSnapshot,
    Timeframe,
    Transaction,
)
from .policies import is_saver_account, normalize_api_token
from .services import build_balance_series

__all__ = [
    "DEFAULT_TIMEZONE",
    "SAVER_ACCOUNT_TYPE",
    "BalanceIntegrityError",
    "InvalidApiTokenError",
    "Account",
    "AccountFailure",
    "BalanceSeries",
    "BalanceSeriesResult",
    "DateWindow",
    "SaverSnapshot",
    "Timeframe",
    "Transaction",
    "is_saver_account",
    "normalize_api_token",
    "build_balance_series",
]
