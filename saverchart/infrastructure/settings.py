"""Settings helpers for infrastructure adapters."""

from dataclasses import dataclass
from datetime import timezone, tzinfo
import os
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import dotenv

from saverchart.domain.constants import DEFAULT_TIMEZONE

DEFAULT_BASE_URL = "https://api.up.com.au/api/v1"
DEFAULT_PAGE_SIZE = 100
MAX_PAGE_SIZE = 100


def _get_int_env(name: str, default: int | None) -> int | None:
    """Read a positive integer environment variable.

    Args:
        name: Name of the environment variable to read.
        default: Value returned when the variable is unset or empty.

    Returns:
        int | None: Parsed value or the default.

    Raises:
        RuntimeError: If the value is not a positive integer.
    """
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        raise RuntimeError(
            f"Environment variable {name} must be an integer, got {raw!r}"
        ) from None
    if value <= 0:
        raise RuntimeError(
            f"Environment variable {name} must be positive, got {value}"
        )
    return value


@dataclass(frozen=True)
class UpApiSettings:
    """Settings for the Up banking API and balance engine.

    Attributes:
        api_token: Personal access token, if configured.
        base_url: Root URL of the Up API.
        page_size: Page size requested when listing transactions.
        history_days: Optional limit on how far back to fetch.
        timezone_name: IANA zone used to bucket transactions into dates.
    """

    api_token: str | None = None
    base_url: str = DEFAULT_BASE_URL
    page_size: int = DEFAULT_PAGE_SIZE
    history_days: int | None = None
    timezone_name: str = DEFAULT_TIMEZONE

    @classmethod
    def from_env(cls) -> "UpApiSettings":
        """Build settings from environment variables and a .env file.

        Returns:
            UpApiSettings: Settings sourced from the environment.

        Raises:
            RuntimeError: If a value is present but invalid.
        """
        dotenv.load_dotenv()
        token = os.getenv("UP_API_TOKEN", "").strip() or None
        base_url = (
            os.getenv("UP_API_BASE_URL", "").strip() or DEFAULT_BASE_URL
        )
        page_size = _get_int_env("UP_PAGE_SIZE", DEFAULT_PAGE_SIZE)
        if page_size > MAX_PAGE_SIZE:
            raise RuntimeError(
                f"UP_PAGE_SIZE cannot exceed {MAX_PAGE_SIZE}, got {page_size}"
            )
        timezone_name = (
            os.getenv("BALANCE_TIMEZONE", "").strip() or DEFAULT_TIMEZONE
        )
        settings = cls(
            api_token=token,
            base_url=base_url.rstrip("/"),
            page_size=page_size,
            history_days=_get_int_env("UP_HISTORY_DAYS", None),
            timezone_name=timezone_name,
        )
        _ = settings.timezone
        return settings

    @property
    def timezone(self) -> tzinfo:
        """Return the bucketing time zone.

        UTC resolves without the system zone database.

        Raises:
            RuntimeError: If the zone name is unknown.
        """
        if self.timezone_name.upper() == "UTC":
            return timezone.utc
        try:
            return ZoneInfo(self.timezone_name)
        except (ZoneInfoNotFoundError, ValueError):
            raise RuntimeError(
                f"Unknown time zone in BALANCE_TIMEZONE: {self.timezone_name}"
            ) from None


__all__ = ["UpApiSettings", "DEFAULT_BASE_URL", "DEFAULT_PAGE_SIZE"]
