"""Tests for raw value parsing."""

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from saverchart.domain.errors import BalanceIntegrityError
from saverchart.domain.services.parsing import (
    bucket_date,
    parse_amount,
    parse_timestamp,
)


def test_parse_amount_keeps_exact_decimal() -> None:
    """Decimal strings parse without float rounding."""
    assert parse_amount("-0.10", account_id="a") == Decimal("-0.10")
    assert parse_amount(" 1234.56 ", account_id="a") == Decimal("1234.56")


def test_parse_amount_accepts_largest_plain_amount() -> None:
    """Fifteen integer digits is the largest accepted magnitude."""
    raw = "-999999999999999.99"

    assert parse_amount(raw, account_id="a") == Decimal(raw)
    assert parse_amount(Decimal("10.00"), account_id="a") == Decimal("10")
    assert parse_amount(5, account_id="a") == Decimal("5")


@pytest.mark.parametrize(
    "raw",
    [
        None,
        "",
        "abc",
        "NaN",
        "Infinity",
        1.5,
        "1_0.00",
        "1E+1",
        "+5.00",
        "1.",
        "1E+27",
        "1000000000000000.00",
        "\u0661\u0660",
    ],
)
def test_parse_amount_rejects_bad_values(raw) -> None:
    """Anything but plain, bounded decimal notation is a fault."""
    with pytest.raises(BalanceIntegrityError) as excinfo:
        parse_amount(raw, account_id="acc-9", field="balance")

    assert excinfo.value.account_id == "acc-9"
    assert excinfo.value.field == "balance"
    assert "acc-9" in str(excinfo.value)


def test_parse_timestamp_accepts_z_and_offsets() -> None:
    """Both Z and explicit offsets are accepted."""
    utc = parse_timestamp("2024-05-10T08:00:00Z", account_id="a")
    offset = parse_timestamp("2024-05-10T18:00:00+10:00", account_id="a")

    assert utc == offset
    assert utc.tzinfo is not None


@pytest.mark.parametrize(
    "raw",
    ["2024-05-10T08:00:00", "10/05/2024", "", None, 1715328000],
)
def test_parse_timestamp_rejects_naive_or_malformed(raw) -> None:
    """Timestamps without an offset cannot be bucketed reliably."""
    with pytest.raises(BalanceIntegrityError):
        parse_timestamp(raw, account_id="a")


def test_bucket_date_converts_before_truncating() -> None:
    """The date comes from the target zone, not the source offset."""
    moment = datetime(2024, 5, 10, 23, 30, tzinfo=timezone.utc)

    assert bucket_date(moment, timezone.utc).isoformat() == "2024-05-10"
    assert (
        bucket_date(moment, timezone(timedelta(hours=10))).isoformat()
        == "2024-05-11"
    )
