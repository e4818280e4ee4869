"""Streamlit dashboard entry point."""

import asyncio
from collections.abc import Sequence
from datetime import date
from decimal import Decimal

import altair as alt
import streamlit as st

from saverchart.application.ports.banking_api import (
    UpApiError,
    UpAuthenticationError,
)
from saverchart.domain.errors import InvalidApiTokenError
from saverchart.domain.models import (
    Account,
    BalanceSeries,
    DashboardSummary,
    SaverSnapshot,
    Timeframe,
)
from saverchart.domain.policies import normalize_api_token
from saverchart.domain.services.periods import shift_reference_date
from saverchart.infrastructure.container import (
    build_balance_series_use_case,
    build_banking_client,
    build_dashboard_summary_use_case,
    build_settings,
    build_snapshot_use_case,
)
from saverchart.infrastructure.logging.logger import (
    get_app_logger,
    get_usage_logger,
)
from saverchart.infrastructure.logging.memory import (
    MemoryLogHandler,
    attach_memory_handler,
)

_REFERENCE_KEY = "reference_date"
_SELECTION_KEY = "selected_account_ids"


async def _fetch_snapshot_async(api_token: str) -> SaverSnapshot:
    """Validate the token and fetch saver accounts with transactions."""
    settings = build_settings()
    async with build_banking_client(settings, api_token=api_token) as client:
        if not await client.ping():
            raise UpAuthenticationError(None, "Up API did not accept the key")
        use_case = build_snapshot_use_case(client, settings)
        return await use_case.execute()


def _fetch_snapshot(api_token: str) -> SaverSnapshot:
    """Fetch a snapshot from the Up API."""
    return asyncio.run(_fetch_snapshot_async(api_token))


@st.cache_data(show_spinner=False, ttl=300)
def _load_snapshot(api_token: str, refresh_count: int = 0) -> SaverSnapshot:
    """Cached wrapper around _fetch_snapshot for Streamlit sessions."""
    _ = refresh_count
    return _fetch_snapshot(api_token)


@st.cache_resource
def _get_memory_handler() -> MemoryLogHandler:
    """Attach one in-memory log buffer to the app logger per process."""
    return attach_memory_handler(get_app_logger())


def _format_currency(value: Decimal | None, currency_code: str | None) -> str:
    """Format currency values for display."""
    if value is None:
        return "N/A"
    symbol = "$" if currency_code in (None, "AUD") else currency_code
    return f"{symbol}{value:,.2f}"


def _prepare_line_chart_data(
    series: BalanceSeries,
    currency_code: str | None,
) -> list[dict[str, str | float]]:
    """Prepare Altair-ready rows from a balance series.

    Args:
        series: Windowed balance series.
        currency_code: Currency used for tooltip labels.

    Returns:
        list[dict[str, str | float]]: One row per date.
    """
    return [
        {
            "date": day.isoformat(),
            "balance": float(balance),
            "balance_label": _format_currency(balance, currency_code),
        }
        for day, balance in zip(series.dates, series.balances)
    ]


def _render_balance_chart(
    series: BalanceSeries,
    currency_code: str | None,
    title: str,
) -> None:
    """Render the balance line chart, or a notice when there is no data."""
    st.subheader(title)
    if series.is_empty:
        st.info("No balance history for this period.")
        return
    data = _prepare_line_chart_data(series, currency_code)
    hover = alt.selection_point(
        name="hover",
        fields=["date"],
        nearest=True,
        on="mouseover",
        empty=False,
    )
    line = alt.Chart(alt.Data(values=data)).mark_line(
        interpolate="step-after",
        strokeWidth=2,
        color="#ff7a64",
    ).encode(
        x=alt.X("date:T", title=None),
        y=alt.Y("balance:Q", title=None, scale=alt.Scale(zero=False)),
    )
    points = line.mark_point(filled=True, size=60).encode(
        opacity=alt.condition(hover, alt.value(1.0), alt.value(0.0)),
        tooltip=[
            alt.Tooltip("date:T", title="Date"),
            alt.Tooltip("balance_label:N", title="Balance"),
        ],
    ).add_params(hover)
    chart = alt.layer(line, points).properties(height=320).configure_view(
        stroke=None
    )
    st.altair_chart(chart, width="stretch")


def _render_summary(summary: DashboardSummary) -> None:
    """Render the summary metrics row."""
    noun = "Saver" if summary.selected_account_count == 1 else "Savers"
    st.caption(f"{summary.selected_account_count} {noun} selected")
    balance_col, tx_col, days_col = st.columns(3)
    balance_col.metric(
        "Total Balance",
        _format_currency(summary.latest_balance, summary.currency_code),
    )
    tx_col.metric("Transactions in period", summary.transaction_count)
    days_col.metric("Days with data", summary.days_with_data)


def _render_account_selector(accounts: Sequence[Account]) -> list[str]:
    """Render the saver multiselect and return the selected ids."""
    labels = {account.id: account.display_name for account in accounts}
    default = st.session_state.get(_SELECTION_KEY)
    if default is None:
        default = list(labels)
    default = [account_id for account_id in default if account_id in labels]
    selected = st.sidebar.multiselect(
        "Savers",
        options=list(labels),
        default=default,
        format_func=lambda account_id: labels[account_id],
    )
    st.session_state[_SELECTION_KEY] = selected
    return selected


def _render_debug_panel(handler: MemoryLogHandler) -> None:
    """Render captured log lines inside a collapsed expander."""
    with st.expander("Debug log"):
        lines = handler.lines()
        if not lines:
            st.caption("No log lines captured yet.")
            return
        st.code("\n".join(lines), language=None)


def main() -> None:
    """Render the Streamlit app."""
    st.set_page_config(page_title="Savers over time", layout="wide")
    st.title("Savers over time")
    memory_handler = _get_memory_handler()
    usage_logger = get_usage_logger()
    try:
        settings = build_settings()
    except RuntimeError as exc:
        st.error(f"Invalid configuration: {exc}")
        return

    raw_token = st.sidebar.text_input(
        "Up API key",
        value=settings.api_token or "",
        type="password",
    )
    if not raw_token:
        st.info("Enter an Up personal access token to load your savers.")
        return
    try:
        api_token = normalize_api_token(raw_token)
    except InvalidApiTokenError as exc:
        st.error(str(exc))
        return

    refresh_count = st.session_state.get("refresh_count", 0)
    if st.sidebar.button("Refresh data"):
        refresh_count += 1
        st.session_state["refresh_count"] = refresh_count
        usage_logger.info(f"Refresh requested (count {refresh_count})")

    try:
        with st.spinner("Loading savers..."):
            snapshot = _load_snapshot(api_token, refresh_count)
    except UpAuthenticationError as exc:
        st.error(exc.message)
        return
    except UpApiError as exc:
        st.error(f"Could not reach Up: {exc.message}")
        _render_debug_panel(memory_handler)
        return

    if not snapshot.accounts:
        st.warning("No saver accounts found for this key.")
        return

    timeframe = Timeframe.parse(
        st.sidebar.selectbox(
            "Timeframe",
            [option.value for option in Timeframe],
            index=1,
        )
    )
    selected_ids = _render_account_selector(snapshot.accounts)

    series_use_case = build_balance_series_use_case(settings)
    today = series_use_case.today()
    reference_date: date = st.session_state.get(_REFERENCE_KEY, today)

    result = series_use_case.execute(
        snapshot,
        selected_ids=selected_ids,
        timeframe=timeframe,
        reference_date=reference_date,
    )
    summary = build_dashboard_summary_use_case(settings).execute(
        snapshot,
        result,
        selected_ids,
        timeframe,
        reference_date,
        today,
    )

    usage_logger.info(
        f"Viewed {timeframe.value} {summary.period_label} "
        f"for {summary.selected_account_count} savers"
    )
    if not selected_ids:
        st.info("Select at least one saver to see its balance.")
    else:
        _render_balance_chart(
            result.series,
            summary.currency_code,
            summary.period_label,
        )
    for failure in result.failures:
        st.warning(f"Skipped {failure.account_id}: {failure.reason}")
    _render_summary(summary)

    prev_col, label_col, next_col = st.columns([1, 4, 1])
    if prev_col.button("Previous"):
        usage_logger.info(f"Moved to previous {timeframe.value} period")
        st.session_state[_REFERENCE_KEY] = shift_reference_date(
            timeframe,
            reference_date,
            -1,
        )
        st.rerun()
    label_col.markdown(f"**{summary.period_label}**")
    if next_col.button("Next", disabled=not summary.can_move_next):
        usage_logger.info(f"Moved to next {timeframe.value} period")
        st.session_state[_REFERENCE_KEY] = shift_reference_date(
            timeframe,
            reference_date,
            1,
        )
        st.rerun()

    _render_debug_panel(memory_handler)


if __name__ == "__main__":  # pragma: no cover
    main()
