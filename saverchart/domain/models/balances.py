"""Domain models for reconstructed balance series."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum

DailyBalanceMap = dict[date, Decimal]


class Timeframe(str, Enum):
    """Calendar period used to window a balance series."""

    WEEKLY = "Weekly"
    MONTHLY = "Monthly"
    YEARLY = "Yearly"

    @classmethod
    def parse(cls, value: "str | Timeframe") -> "Timeframe":
        """Return the timeframe matching a name or value, ignoring case.

        Raises:
            ValueError: If the value names no timeframe.
        """
        if isinstance(value, cls):
            return value
        cleaned = str(value).strip().lower()
        for member in cls:
            if cleaned in (member.value.lower(), member.name.lower()):
                return member
        raise ValueError(f"Unknown timeframe: {value!r}")


@dataclass(frozen=True)
class DateWindow:
    """Inclusive calendar window."""

    start: date
    end: date

    def contains(self, day: date) -> bool:
        """Return True when the day falls inside the window."""
        return self.start <= day <= self.end


@dataclass(frozen=True)
class BalanceSeries:
    """Aggregated balance per calendar date.

    Attributes:
        dates: Strictly ascending unique dates.
        balances: Balance for each date, rounded to currency precision.
    """

    dates: tuple[date, ...] = ()
    balances: tuple[Decimal, ...] = ()

    def __post_init__(self) -> None:
        if len(self.dates) != len(self.balances):
            raise ValueError(
                "dates and balances must have the same length: "
                f"{len(self.dates)} != {len(self.balances)}"
            )

    def __len__(self) -> int:
        return len(self.dates)

    @property
    def is_empty(self) -> bool:
        """Return True when the series has no points."""
        return not self.dates

    @property
    def last_balance(self) -> Decimal | None:
        """Return the most recent balance, or None for an empty series."""
        return self.balances[-1] if self.balances else None

    def to_chart_payload(self) -> dict[str, list]:
        """Return the series as ISO date strings and float balances."""
        return {
            "dates": [day.isoformat() for day in self.dates],
            "balances": [float(balance) for balance in self.balances],
        }


@dataclass(frozen=True)
class AccountFailure:
    """Account excluded from aggregation because of bad source data."""

    account_id: str
    reason: str


@dataclass(frozen=True)
class BalanceSeriesResult:
    """Output of the balance pipeline.

    Attributes:
        series: Aggregated series clipped to the window.
        window: Calendar window the series was clipped to.
        full_series: Aggregated series before windowing.
        failures: Accounts whose history could not be reconstructed.
    """

    series: BalanceSeries
    window: DateWindow
    full_series: BalanceSeries
    failures: tuple[AccountFailure, ...] = ()

    @property
    def has_failures(self) -> bool:
        """Return True when at least one account was excluded."""
        return bool(self.failures)


__all__ = [
    "DailyBalanceMap",
    "Timeframe",
    "DateWindow",
    "BalanceSeries",
    "AccountFailure",
    "BalanceSeriesResult",
]
