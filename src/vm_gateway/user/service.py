"""User domain service: register, login, profile maintenance.

All DB operations use the injected AsyncSession. Mutations are wrapped in
`transaction(db)` by the router layer.
"""

import logging

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.vm_common.enums import UserRole
from src.vm_common.errors import (
    AccountNotFoundError,
    InvalidCredentialsError,
    UsernameExistsError,
)
from src.vm_gateway.auth.jwt_handler import create_access_token
from src.vm_gateway.auth.password import hash_password, verify_password
from src.vm_gateway.user.db_models import UserModel

logger = logging.getLogger(__name__)

_UNIQUE_USERNAME_CONSTRAINT = "uq_users_username"


class UserService:
    """Stateless service — instantiate once, reuse across requests."""

    async def register(
        self,
        username: str,
        password: str,
        role: UserRole,
        db: AsyncSession,
    ) -> UserModel:
        """Register a new account with a zero balance.

        The caller must wrap this in `transaction(db)`.
        """
        # Check username uniqueness (DB UNIQUE constraint is the final guard)
        if await self._get_by_username(username, db) is not None:
            raise UsernameExistsError()

        user = UserModel(
            username=username,
            password_hash=hash_password(password),
            role=UserRole(role).value,
            balance=0,
        )
        db.add(user)
        await self._flush_username(username, db)  # Get user.id without committing
        logger.info("User registered: id=%s role=%s", user.id, user.role)
        return user

    async def login(
        self,
        username: str,
        password: str,
        db: AsyncSession,
    ) -> tuple[UserModel, str]:
        """Authenticate user and return (user, access_token).

        "User not found" and "Wrong password" both raise InvalidCredentialsError
        so usernames cannot be enumerated.
        """
        user = await self._get_by_username(username, db)
        if user is None or not verify_password(password, user.password_hash):
            raise InvalidCredentialsError()
        return user, create_access_token(str(user.id))

    async def list_users(self, db: AsyncSession) -> list[UserModel]:
        result = await db.execute(select(UserModel).order_by(UserModel.created_at))
        return list(result.scalars().all())

    async def get_user(self, user_id: str, db: AsyncSession) -> UserModel:
        result = await db.execute(select(UserModel).where(UserModel.id == user_id))
        user = result.scalar_one_or_none()
        if user is None:
            raise AccountNotFoundError(user_id)
        return user

    async def rename(self, user_id: str, username: str, db: AsyncSession) -> UserModel:
        """Change the username. Role and balance are not editable here."""
        user = await self.get_user(user_id, db)
        if username != user.username:
            if await self._get_by_username(username, db) is not None:
                raise UsernameExistsError()
            user.username = username
            await self._flush_username(username, db)
        return user

    async def delete_user(self, user_id: str, db: AsyncSession) -> None:
        """Delete the account; products and sale records cascade in the DB."""
        result = await db.execute(
            delete(UserModel).where(UserModel.id == user_id).returning(UserModel.id)
        )
        if result.scalar_one_or_none() is None:
            raise AccountNotFoundError(user_id)
        logger.info("User deleted: id=%s", user_id)

    async def _get_by_username(self, username: str, db: AsyncSession) -> UserModel | None:
        result = await db.execute(select(UserModel).where(UserModel.username == username))
        return result.scalar_one_or_none()

    async def _flush_username(self, username: str, db: AsyncSession) -> None:
        # A concurrent insert can pass the lookup above; the constraint decides
        try:
            await db.flush()
        except IntegrityError as exc:
            if _UNIQUE_USERNAME_CONSTRAINT in str(exc.orig):
                raise UsernameExistsError() from exc
            raise
