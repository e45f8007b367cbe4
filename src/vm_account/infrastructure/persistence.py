"""AccountRepository — concrete implementation of AccountRepositoryProtocol.

All balance-mutating operations use atomic PostgreSQL UPDATE ... RETURNING.
A result of 0 rows on debit means the balance could not cover the amount.

Transaction ownership: The CALLER (application service or purchase engine) is
responsible for committing via `async with transaction(db)`.
"""

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.vm_account.domain.models import Account
from src.vm_common.errors import AccountNotFoundError, InsufficientFundsError

_COLUMNS = "id, username, role, balance, created_at, updated_at"

_GET_ACCOUNT_SQL = text(f"SELECT {_COLUMNS} FROM users WHERE id = :user_id")

_GET_ACCOUNT_FOR_UPDATE_SQL = text(
    f"SELECT {_COLUMNS} FROM users WHERE id = :user_id FOR UPDATE"
)

_DEPOSIT_SQL = text(f"""
    UPDATE users
    SET balance = balance + :amount,
        updated_at = NOW()
    WHERE id = :user_id
    RETURNING {_COLUMNS}
""")

_RESET_SQL = text(f"""
    UPDATE users
    SET balance = 0,
        updated_at = NOW()
    WHERE id = :user_id
    RETURNING {_COLUMNS}
""")

_DEBIT_SQL = text(f"""
    UPDATE users
    SET balance = balance - :amount,
        updated_at = NOW()
    WHERE id = :user_id AND balance >= :amount
    RETURNING {_COLUMNS}
""")


def _row_to_account(row: object) -> Account:
    return Account(
        id=str(row.id),  # type: ignore[attr-defined]
        username=row.username,  # type: ignore[attr-defined]
        role=row.role,  # type: ignore[attr-defined]
        balance=row.balance,  # type: ignore[attr-defined]
        created_at=row.created_at,  # type: ignore[attr-defined]
        updated_at=row.updated_at,  # type: ignore[attr-defined]
    )


class AccountRepository:
    """Concrete repository — all operations atomic at the SQL level."""

    async def get_account(
        self, db: AsyncSession, user_id: str, for_update: bool = False
    ) -> Account | None:
        sql = _GET_ACCOUNT_FOR_UPDATE_SQL if for_update else _GET_ACCOUNT_SQL
        result = await db.execute(sql, {"user_id": user_id})
        row = result.fetchone()
        return _row_to_account(row) if row else None

    async def deposit(self, db: AsyncSession, user_id: str, amount: int) -> Account:
        result = await db.execute(_DEPOSIT_SQL, {"user_id": user_id, "amount": amount})
        row = result.fetchone()
        if row is None:
            raise AccountNotFoundError(user_id)
        return _row_to_account(row)

    async def reset(self, db: AsyncSession, user_id: str) -> Account:
        result = await db.execute(_RESET_SQL, {"user_id": user_id})
        row = result.fetchone()
        if row is None:
            raise AccountNotFoundError(user_id)
        return _row_to_account(row)

    async def debit(self, db: AsyncSession, user_id: str, amount: int) -> Account:
        result = await db.execute(_DEBIT_SQL, {"user_id": user_id, "amount": amount})
        row = result.fetchone()
        if row is None:
            account = await self.get_account(db, user_id)
            if account is None:
                raise AccountNotFoundError(user_id)
            raise InsufficientFundsError(amount, account.balance)
        return _row_to_account(row)
