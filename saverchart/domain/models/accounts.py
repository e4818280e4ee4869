"""Domain models for bank accounts and their transactions."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Account:
    """Bank account as reported by the banking API.

    Attributes:
        id: Stable account identifier.
        display_name: Human readable account name.
        account_type: Account category tag (for example SAVER).
        balance_value: Current balance as an exact decimal string.
        currency_code: ISO 4217 currency code of the balance.
    """

    id: str
    display_name: str
    account_type: str
    balance_value: str
    currency_code: str


@dataclass(frozen=True)
class Transaction:
    """Posted movement on a single account.

    Attributes:
        id: Transaction identifier.
        amount_value: Signed amount as a decimal string (negative = debit).
        currency_code: ISO 4217 currency code of the amount.
        created_at: ISO-8601 timestamp with an explicit offset.
        balance_after_value: Optional post-transaction balance snapshot.
        description: Optional free text description.
    """

    id: str
    amount_value: str
    currency_code: str
    created_at: str
    balance_after_value: str | None = None
    description: str | None = None


@dataclass(frozen=True)
class SaverSnapshot:
    """Accounts and their transactions fetched in one batch."""

    accounts: tuple[Account, ...] = ()
    transactions_by_account: dict[str, tuple[Transaction, ...]] = field(
        default_factory=dict
    )

    def transaction_count(self, account_id: str) -> int:
        """Return how many transactions were fetched for an account."""
        return len(self.transactions_by_account.get(account_id, ()))


__all__ = ["Account", "Transaction", "SaverSnapshot"]
