"""Tests for timeframe windowing."""

from datetime import date
from decimal import Decimal

import pytest

from saverchart.domain.models import BalanceSeries, DateWindow, Timeframe
from saverchart.domain.services.windowing import (
    clip_series,
    compute_window,
    window_series,
)


def _series(*points: tuple[date, str]) -> BalanceSeries:
    return BalanceSeries(
        dates=tuple(day for day, _ in points),
        balances=tuple(Decimal(value) for _, value in points),
    )


MAY = DateWindow(start=date(2024, 5, 1), end=date(2024, 5, 31))


@pytest.mark.parametrize(
    "reference",
    [date(2024, 5, 13), date(2024, 5, 15), date(2024, 5, 19)],
)
def test_weekly_window_runs_monday_to_sunday(reference: date) -> None:
    """The current week keeps its Sunday end even when that is after today."""
    window = compute_window(
        Timeframe.WEEKLY,
        reference,
        today=date(2024, 5, 15),
    )

    assert window == DateWindow(date(2024, 5, 13), date(2024, 5, 19))


def test_monthly_window_of_past_month_covers_whole_month() -> None:
    """Past months end on their last calendar day."""
    window = compute_window(
        Timeframe.MONTHLY,
        date(2024, 2, 10),
        today=date(2024, 5, 15),
    )

    assert window == DateWindow(date(2024, 2, 1), date(2024, 2, 29))


def test_monthly_window_of_current_month_stops_today() -> None:
    """The current month never extends past today."""
    window = compute_window(
        Timeframe.MONTHLY,
        date(2024, 5, 3),
        today=date(2024, 5, 15),
    )

    assert window == DateWindow(date(2024, 5, 1), date(2024, 5, 15))


def test_yearly_windows() -> None:
    """Past years are complete; the current year stops today."""
    today = date(2024, 5, 15)

    past = compute_window(Timeframe.YEARLY, date(2023, 7, 1), today=today)
    current = compute_window("yearly", date(2024, 1, 9), today=today)

    assert past == DateWindow(date(2023, 1, 1), date(2023, 12, 31))
    assert current == DateWindow(date(2024, 1, 1), today)


def test_clip_pads_start_and_end_with_carried_values() -> None:
    """The window starts at the prior balance and ends flat."""
    series = _series(
        (date(2024, 4, 20), "100.00"),
        (date(2024, 5, 3), "120.00"),
        (date(2024, 5, 10), "90.00"),
        (date(2024, 6, 2), "80.00"),
    )

    clipped = clip_series(series, MAY)

    assert clipped == _series(
        (date(2024, 5, 1), "100.00"),
        (date(2024, 5, 3), "120.00"),
        (date(2024, 5, 10), "90.00"),
        (date(2024, 5, 31), "90.00"),
    )


def test_clip_flat_window_has_start_and_end_points() -> None:
    """A window without activity shows the carried balance at both edges."""
    series = _series((date(2024, 4, 20), "100.00"))

    clipped = clip_series(series, MAY)

    assert clipped == _series(
        (date(2024, 5, 1), "100.00"),
        (date(2024, 5, 31), "100.00"),
    )


def test_clip_flat_single_day_window_has_one_point() -> None:
    """When start and end coincide a single point is emitted."""
    series = _series((date(2024, 4, 20), "100.00"))
    window = DateWindow(date(2024, 6, 1), date(2024, 6, 1))

    assert clip_series(series, window) == _series((date(2024, 6, 1), "100.00"))


def test_clip_without_history_is_empty() -> None:
    """Nothing known before or inside the window gives an empty series."""
    series = _series((date(2024, 6, 10), "50.00"))

    assert clip_series(series, MAY).is_empty
    assert clip_series(BalanceSeries(), MAY).is_empty


def test_clip_does_not_prepend_without_prior_balance() -> None:
    """A series starting inside the window is not padded on the left."""
    series = _series((date(2024, 5, 10), "90.00"))

    clipped = clip_series(series, MAY)

    assert clipped == _series(
        (date(2024, 5, 10), "90.00"),
        (date(2024, 5, 31), "90.00"),
    )


def test_clip_keeps_points_on_window_edges() -> None:
    """Existing points at start and end are not duplicated."""
    series = _series(
        (date(2024, 4, 1), "1.00"),
        (date(2024, 5, 1), "2.00"),
        (date(2024, 5, 31), "3.00"),
    )

    clipped = clip_series(series, MAY)

    assert clipped == _series(
        (date(2024, 5, 1), "2.00"),
        (date(2024, 5, 31), "3.00"),
    )


def test_window_series_uses_timeframe_window() -> None:
    """window_series clips to the computed window."""
    series = _series(
        (date(2024, 5, 6), "10.00"),
        (date(2024, 5, 14), "12.00"),
    )

    weekly = window_series(
        series,
        Timeframe.WEEKLY,
        date(2024, 5, 15),
        today=date(2024, 5, 15),
    )

    assert weekly == _series(
        (date(2024, 5, 13), "10.00"),
        (date(2024, 5, 14), "12.00"),
        (date(2024, 5, 19), "12.00"),
    )
