"""AccountApplicationService — the ledger for a single account's balance.

Deposit and reset run inside `transaction(db)`; get_balance is read-only.
Debits happen only through the purchase engine, inside its own transaction.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import settings
from src.vm_account.application.schemas import BalanceResponse, DepositResponse
from src.vm_account.domain.repository import AccountRepositoryProtocol
from src.vm_account.infrastructure.persistence import AccountRepository
from src.vm_common.enums import UserRole
from src.vm_common.errors import (
    AccountNotFoundError,
    InvalidAmountError,
    RoleNotPermittedError,
)
from src.vm_common.transaction import transaction

logger = logging.getLogger(__name__)


class AccountApplicationService:
    def __init__(
        self,
        repo: AccountRepositoryProtocol | None = None,
        accepted_denominations: list[int] | None = None,
    ) -> None:
        self._repo: AccountRepositoryProtocol = repo or AccountRepository()
        self._accepted: frozenset[int] = frozenset(
            accepted_denominations
            if accepted_denominations is not None
            else settings.ACCEPTED_DEPOSIT_DENOMINATIONS
        )

    async def get_balance(self, db: AsyncSession, user_id: str) -> BalanceResponse:
        account = await self._repo.get_account(db, user_id)
        if account is None:
            raise AccountNotFoundError(user_id)
        return BalanceResponse.from_cents(user_id=user_id, balance=account.balance)

    async def deposit(
        self, db: AsyncSession, user_id: str, amount_cents: int
    ) -> DepositResponse:
        if amount_cents not in self._accepted:
            raise InvalidAmountError(amount_cents, list(self._accepted))

        async with transaction(db):
            # Row lock so the role check and the credit see the same row version
            account = await self._repo.get_account(db, user_id, for_update=True)
            if account is None:
                raise AccountNotFoundError(user_id)
            if account.role != UserRole.BUYER:
                raise RoleNotPermittedError(account.role, "deposit")
            account = await self._repo.deposit(db, user_id, amount_cents)

        logger.info(
            "Deposit: user=%s amount=%d balance=%d", user_id, amount_cents, account.balance
        )
        return DepositResponse.from_result(
            user_id=user_id, balance=account.balance, amount=amount_cents
        )

    async def reset(self, db: AsyncSession, user_id: str) -> BalanceResponse:
        async with transaction(db):
            account = await self._repo.reset(db, user_id)
        logger.info("Balance reset: user=%s", user_id)
        return BalanceResponse.from_cents(user_id=user_id, balance=account.balance)
