"""Domain models for dashboard summaries."""

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class DashboardSummary:
    """Figures shown next to the balance chart.

    Attributes:
        selected_account_count: Number of selected saver accounts.
        latest_balance: Last balance of the windowed series, if any.
        currency_code: Shared currency of the selection, None when mixed.
        transaction_count: Selected transactions posted inside the window.
        days_with_data: Number of points in the windowed series.
        period_label: Human label of the window.
        can_move_next: Whether the following period may be shown.
    """

    selected_account_count: int
    latest_balance: Decimal | None
    currency_code: str | None
    transaction_count: int
    days_with_data: int
    period_label: str
    can_move_next: bool


__all__ = ["DashboardSummary"]
