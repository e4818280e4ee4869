"""Domain errors."""


class BalanceIntegrityError(ValueError):
    """Raised when source data cannot be turned into a balance history.

    Attributes:
        account_id: Account whose data is malformed.
        field: Name of the offending field.
        value: Raw value that failed to parse.
    """

    def __init__(self, account_id: str, field: str, value) -> None:
        self.account_id = account_id
        self.field = field
        self.value = value
        super().__init__(
            f"Invalid {field} {value!r} for account {account_id}"
        )


class InvalidApiTokenError(ValueError):
    """Raised when an API token does not match the expected format."""


__all__ = ["BalanceIntegrityError", "InvalidApiTokenError"]
