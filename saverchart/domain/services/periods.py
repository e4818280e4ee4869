"""Period navigation and labelling for windowed views."""

import calendar
from datetime import date, timedelta

from saverchart.domain.models import Timeframe
from saverchart.domain.services.windowing import compute_window

_MONTH_NAMES = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


def _add_months(day: date, months: int) -> date:
    """Shift a date by whole months, clamping the day to the month length."""
    index = day.year * 12 + (day.month - 1) + months
    year, month_index = divmod(index, 12)
    month = month_index + 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(day.day, last_day))


def shift_reference_date(
    timeframe: Timeframe,
    reference_date: date,
    steps: int = 1,
) -> date:
    """Move a reference date by whole periods.

    Args:
        timeframe: Period length (7 days, 1 month, or 1 year).
        reference_date: Current anchor date.
        steps: Number of periods, negative to go back.

    Returns:
        date: The shifted anchor date.
    """
    timeframe = Timeframe.parse(timeframe)
    if timeframe is Timeframe.WEEKLY:
        return reference_date + timedelta(days=7 * steps)
    if timeframe is Timeframe.MONTHLY:
        return _add_months(reference_date, steps)
    return _add_months(reference_date, 12 * steps)


def can_move_to_next_period(
    timeframe: Timeframe,
    reference_date: date,
    *,
    today: date,
) -> bool:
    """Return True when the following period starts on or before today."""
    next_reference = shift_reference_date(timeframe, reference_date, 1)
    next_window = compute_window(timeframe, next_reference, today=today)
    return next_window.start <= today


def format_period_label(timeframe: Timeframe, reference_date: date) -> str:
    """Return a short human label for the period containing a date."""
    timeframe = Timeframe.parse(timeframe)
    if timeframe is Timeframe.WEEKLY:
        monday = reference_date - timedelta(days=reference_date.weekday())
        sunday = monday + timedelta(days=6)
        return (
            f"{_MONTH_NAMES[monday.month - 1]} {monday.day} - "
            f"{_MONTH_NAMES[sunday.month - 1]} {sunday.day}, {sunday.year}"
        )
    if timeframe is Timeframe.MONTHLY:
        month = _MONTH_NAMES[reference_date.month - 1]
        return f"{month} {reference_date.year}"
    return str(reference_date.year)


__all__ = [
    "shift_reference_date",
    "can_move_to_next_period",
    "format_period_label",
]
