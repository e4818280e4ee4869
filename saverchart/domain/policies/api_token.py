"""Validation policy for Up personal access tokens."""

import re

from saverchart.domain.constants import API_TOKEN_PREFIX
from saverchart.domain.errors import InvalidApiTokenError

_WHITESPACE = re.compile(r"\s+")
_TOKEN_BODY = re.compile(r"^[A-Za-z0-9]+$")


def normalize_api_token(raw_token: str) -> str:
    """Strip whitespace from a token and check its format.

    Args:
        raw_token: Token as typed or pasted by the user.

    Returns:
        str: Token without any whitespace.

    Raises:
        InvalidApiTokenError: If the token is not ``up:yeah:<letters/digits>``.
    """
    token = _WHITESPACE.sub("", raw_token or "")
    if not token.startswith(API_TOKEN_PREFIX):
        raise InvalidApiTokenError(
            f'Invalid API key format. The key should start with '
            f'"{API_TOKEN_PREFIX}"'
        )
    parts = token.split(":")
    if len(parts) != 3 or not _TOKEN_BODY.match(parts[2]):
        raise InvalidApiTokenError(
            "Invalid API key format. The token part should only contain "
            "letters and numbers."
        )
    return token


__all__ = ["normalize_api_token"]
