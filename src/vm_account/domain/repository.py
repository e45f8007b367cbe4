"""Repository Protocol — dependency inversion for testability.

Unit tests inject a mock or an in-memory fake that conforms to this Protocol.
Infrastructure layer provides the real implementation.
"""

from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.vm_account.domain.models import Account


class AccountRepositoryProtocol(Protocol):
    async def get_account(
        self, db: AsyncSession, user_id: str, for_update: bool = False
    ) -> Account | None: ...

    async def deposit(self, db: AsyncSession, user_id: str, amount: int) -> Account: ...

    async def reset(self, db: AsyncSession, user_id: str) -> Account: ...

    async def debit(self, db: AsyncSession, user_id: str, amount: int) -> Account: ...
