"""Domain policies package."""

from .account_filters import (
    is_saver_account,
    resolve_selection,
    select_saver_accounts,
)
from .api_token import normalize_api_token

__all__ = [
    "is_saver_account",
    "resolve_selection",
    "select_saver_accounts",
    "normalize_api_token",
]
