"""Calendar windowing of aggregated balance series."""

import calendar
from bisect import bisect_left, bisect_right
from datetime import date, timedelta

from saverchart.domain.models import BalanceSeries, DateWindow, Timeframe


def compute_window(
    timeframe: Timeframe,
    reference_date: date,
    *,
    today: date,
) -> DateWindow:
    """Return the calendar window anchored at a reference date.

    Weekly windows always run Monday to Sunday, so the current week ends
    on its Sunday even when that is after today, and clipping carries the
    latest balance to it. Monthly and yearly windows stop at today when
    they contain it.

    Args:
        timeframe: Period length.
        reference_date: Any date inside the wanted period.
        today: Current date in the bucketing time zone.

    Returns:
        DateWindow: Inclusive start and end dates.
    """
    timeframe = Timeframe.parse(timeframe)
    if timeframe is Timeframe.WEEKLY:
        start = reference_date - timedelta(days=reference_date.weekday())
        return DateWindow(start=start, end=start + timedelta(days=6))
    if timeframe is Timeframe.MONTHLY:
        start = reference_date.replace(day=1)
        last_day = calendar.monthrange(start.year, start.month)[1]
        end = start.replace(day=last_day)
        if (start.year, start.month) == (today.year, today.month):
            end = today
        return DateWindow(start=start, end=end)
    start = date(reference_date.year, 1, 1)
    end = date(reference_date.year, 12, 31)
    if start.year == today.year:
        end = today
    return DateWindow(start=start, end=end)


def clip_series(series: BalanceSeries, window: DateWindow) -> BalanceSeries:
    """Clip a series to a window, padding both edges with carried values.

    Args:
        series: Full aggregated series with ascending dates.
        window: Inclusive window to keep.

    Returns:
        BalanceSeries: Points inside the window. A synthetic point at the
        window start carries the last balance known before it, and a
        synthetic point at the window end carries the last in-window
        balance. Empty when nothing is known up to the window end.
    """
    dates = series.dates
    balances = series.balances
    first = bisect_left(dates, window.start)
    stop = bisect_right(dates, window.end)
    prior = balances[first - 1] if first > 0 else None

    if first >= stop:
        if prior is None:
            return BalanceSeries()
        if window.end > window.start:
            return BalanceSeries(
                dates=(window.start, window.end),
                balances=(prior, prior),
            )
        return BalanceSeries(dates=(window.start,), balances=(prior,))

    out_dates = list(dates[first:stop])
    out_balances = list(balances[first:stop])
    if out_dates[0] > window.start and prior is not None:
        out_dates.insert(0, window.start)
        out_balances.insert(0, prior)
    if out_dates[-1] < window.end:
        out_dates.append(window.end)
        out_balances.append(out_balances[-1])
    return BalanceSeries(dates=tuple(out_dates), balances=tuple(out_balances))


def window_series(
    series: BalanceSeries,
    timeframe: Timeframe,
    reference_date: date,
    *,
    today: date,
) -> BalanceSeries:
    """Return the part of a series inside a timeframe window."""
    window = compute_window(timeframe, reference_date, today=today)
    return clip_series(series, window)


__all__ = ["compute_window", "clip_series", "window_series"]
