"""Domain constants for saver balance history."""

SAVER_ACCOUNT_TYPE = "SAVER"

API_TOKEN_PREFIX = "up:yeah:"

DEFAULT_TIMEZONE = "UTC"


__all__ = ["SAVER_ACCOUNT_TYPE", "API_TOKEN_PREFIX", "DEFAULT_TIMEZONE"]
