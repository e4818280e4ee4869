"""Use case to fetch saver accounts and their transactions."""

import asyncio
from collections.abc import Callable
from datetime import datetime, timedelta, timezone

from saverchart.application.ports.banking_api import BankingApiPort
from saverchart.domain.models import SaverSnapshot
from saverchart.domain.policies import select_saver_accounts
from saverchart.infrastructure.logging.logger import get_app_logger


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class LoadSaverSnapshotUseCase:
    """Fetch saver accounts and every transaction they hold."""

    def __init__(
        self,
        banking_api: BankingApiPort,
        logger=None,
        history_days: int | None = None,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        """Initialize the use case.

        Args:
            banking_api: Port providing account and transaction listings.
            logger: Optional logger compatible with logging.Logger-like API.
            history_days: Optional limit on how many days back to fetch.
            clock: Callable returning the current aware datetime.
        """
        self._banking_api = banking_api
        self._logger = logger or get_app_logger()
        self._history_days = history_days
        self._clock = clock

    async def execute(self) -> SaverSnapshot:
        """Return saver accounts and their transactions.

        API errors propagate unchanged so callers can tell expired
        credentials from transient failures.

        Returns:
            SaverSnapshot: Saver accounts with transactions keyed by id.
        """
        accounts = await self._banking_api.list_accounts()
        savers = tuple(select_saver_accounts(accounts))
        self._logger.info(
            f"Found {len(savers)} saver accounts out of {len(accounts)}"
        )
        if not savers:
            return SaverSnapshot()

        since = None
        if self._history_days:
            since = self._clock() - timedelta(days=self._history_days)
        results = await asyncio.gather(
            *(
                self._banking_api.list_transactions(account.id, since=since)
                for account in savers
            )
        )
        transactions_by_account = {
            account.id: tuple(transactions)
            for account, transactions in zip(savers, results)
        }
        total = sum(len(items) for items in transactions_by_account.values())
        self._logger.info(
            f"Fetched {total} transactions across {len(savers)} saver accounts"
        )
        return SaverSnapshot(
            accounts=savers,
            transactions_by_account=transactions_by_account,
        )


__all__ = ["LoadSaverSnapshotUseCase"]
