"""Tests for domain models."""

from datetime import date
from decimal import Decimal

import pytest

from saverchart.domain.models import (
    BalanceSeries,
    DateWindow,
    SaverSnapshot,
    Timeframe,
    Transaction,
)


def test_balance_series_chart_payload() -> None:
    """The chart payload uses ISO dates and float balances."""
    series = BalanceSeries(
        dates=(date(2024, 5, 1), date(2024, 5, 2)),
        balances=(Decimal("10.50"), Decimal("11.00")),
    )

    assert series.to_chart_payload() == {
        "dates": ["2024-05-01", "2024-05-02"],
        "balances": [10.5, 11.0],
    }
    assert series.last_balance == Decimal("11.00")
    assert len(series) == 2


def test_balance_series_rejects_misaligned_lengths() -> None:
    """Dates and balances must be aligned."""
    with pytest.raises(ValueError):
        BalanceSeries(dates=(date(2024, 5, 1),), balances=())


def test_empty_series_has_no_last_balance() -> None:
    """An empty series reports no balance."""
    assert BalanceSeries().last_balance is None
    assert BalanceSeries().is_empty


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("Weekly", Timeframe.WEEKLY),
        ("monthly", Timeframe.MONTHLY),
        ("YEARLY", Timeframe.YEARLY),
        (Timeframe.MONTHLY, Timeframe.MONTHLY),
    ],
)
def test_timeframe_parse(raw, expected) -> None:
    """Timeframes parse from names or values in any case."""
    assert Timeframe.parse(raw) is expected


def test_timeframe_parse_rejects_unknown() -> None:
    """Unknown timeframe names raise ValueError."""
    with pytest.raises(ValueError):
        Timeframe.parse("Daily")


def test_date_window_contains_is_inclusive() -> None:
    """Both window edges are inside the window."""
    window = DateWindow(date(2024, 5, 1), date(2024, 5, 31))

    assert window.contains(date(2024, 5, 1))
    assert window.contains(date(2024, 5, 31))
    assert not window.contains(date(2024, 6, 1))


def test_snapshot_transaction_count() -> None:
    """Counts default to zero for accounts without transactions."""
    tx = Transaction(
        id="t",
        amount_value="1.00",
        currency_code="AUD",
        created_at="2024-05-01T00:00:00Z",
    )
    snapshot = SaverSnapshot(transactions_by_account={"a": (tx, tx)})

    assert snapshot.transaction_count("a") == 2
    assert snapshot.transaction_count("b") == 0
