"""Parsing of raw API values into domain primitives."""

from datetime import date, datetime, tzinfo
from decimal import Decimal
import re

from saverchart.domain.errors import BalanceIntegrityError

# Plain decimal notation with at most 15 integer digits, which keeps
# running sums well inside the default 28-digit context.
_AMOUNT_PATTERN = re.compile(r"-?\d{1,15}(?:\.\d+)?", re.ASCII)


def parse_amount(value, *, account_id: str, field: str = "amount") -> Decimal:
    """Parse an exact decimal string.

    Only plain notation such as ``"-12.50"`` is accepted. Exponents,
    digit separators, and magnitudes of a quadrillion or more are
    rejected.

    Args:
        value: Raw decimal string (a Decimal or int is accepted as is).
        account_id: Account owning the value, for error reporting.
        field: Field name used in error messages.

    Returns:
        Decimal: Parsed finite amount.

    Raises:
        BalanceIntegrityError: If the value is missing, malformed, or out
            of range.
    """
    if value is None or isinstance(value, (bool, float)):
        raise BalanceIntegrityError(account_id, field, value)
    raw = str(value).strip()
    if not _AMOUNT_PATTERN.fullmatch(raw):
        raise BalanceIntegrityError(account_id, field, value)
    return Decimal(raw)


def parse_timestamp(value, *, account_id: str) -> datetime:
    """Parse an ISO-8601 timestamp carrying an explicit offset.

    Raises:
        BalanceIntegrityError: If the value is malformed or naive.
    """
    if not isinstance(value, str):
        raise BalanceIntegrityError(account_id, "created_at", value)
    raw = value.strip()
    if raw.endswith(("Z", "z")):
        raw = raw[:-1] + "+00:00"
    try:
        moment = datetime.fromisoformat(raw)
    except ValueError:
        raise BalanceIntegrityError(account_id, "created_at", value) from None
    if moment.tzinfo is None or moment.utcoffset() is None:
        raise BalanceIntegrityError(account_id, "created_at", value)
    return moment


def bucket_date(moment: datetime, tz: tzinfo) -> date:
    """Return the calendar date of an aware datetime in the given zone."""
    return moment.astimezone(tz).date()


__all__ = ["parse_amount", "parse_timestamp", "bucket_date"]
