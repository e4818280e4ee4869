"""Domain services package."""

from .aggregation import aggregate_daily_balances, build_account_daily_maps
from .parsing import bucket_date, parse_amount, parse_timestamp
from .periods import (
    can_move_to_next_period,
    format_period_label,
    shift_reference_date,
)
from .pipeline import build_balance_series
from .reconstruction import reconstruct_daily_balances, sum_amounts_by_date
from .windowing import clip_series, compute_window, window_series

__all__ = [
    "aggregate_daily_balances",
    "build_account_daily_maps",
    "bucket_date",
    "parse_amount",
    "parse_timestamp",
    "can_move_to_next_period",
    "format_period_label",
    "shift_reference_date",
    "build_balance_series",
    "reconstruct_daily_balances",
    "sum_amounts_by_date",
    "clip_series",
    "compute_window",
    "window_series",
]
