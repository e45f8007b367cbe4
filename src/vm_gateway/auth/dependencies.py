"""FastAPI dependencies: get_current_user, get_current_principal, require_roles.

Usage in any protected router:
    from src.vm_gateway.auth.dependencies import require_roles

    @router.post("/buy")
    async def buy(principal: Principal = Depends(require_roles(UserRole.BUYER))):
        ...
"""

from collections.abc import Awaitable, Callable

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.vm_common.authorization import Principal, authorize
from src.vm_common.database import get_db_session
from src.vm_common.enums import UserRole
from src.vm_common.errors import InvalidCredentialsError
from src.vm_gateway.auth.jwt_handler import decode_access_token
from src.vm_gateway.user.db_models import UserModel

# tokenUrl tells Swagger UI where to get a token (used for the "Authorize" button)
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/login")

# Reusable 401 exception with WWW-Authenticate header (OAuth2 standard)
_CREDENTIALS_EXCEPTION = HTTPException(
    status_code=status.HTTP_401_UNAUTHORIZED,
    detail="Invalid or expired token",
    headers={"WWW-Authenticate": "Bearer"},
)


async def get_current_user(
    token: str = Depends(oauth2_scheme),
    db: AsyncSession = Depends(get_db_session),
) -> UserModel:
    """Extract and validate the JWT Bearer token, return the UserModel.

    Raises HTTP 401 if the token is missing, invalid, expired, or names a
    user that no longer exists.
    """
    try:
        payload = decode_access_token(token)
    except InvalidCredentialsError:
        raise _CREDENTIALS_EXCEPTION from None

    user_id = payload.get("sub")
    if not user_id:
        raise _CREDENTIALS_EXCEPTION

    result = await db.execute(select(UserModel).where(UserModel.id == user_id))
    user = result.scalar_one_or_none()
    if user is None:
        raise _CREDENTIALS_EXCEPTION
    return user


async def get_current_principal(
    current_user: UserModel = Depends(get_current_user),
) -> Principal:
    return Principal(user_id=str(current_user.id), role=UserRole(current_user.role))


def require_roles(*roles: UserRole) -> Callable[..., Awaitable[Principal]]:
    """Dependency factory: the caller must hold one of ``roles``.

    Raises HTTP 403 (ForbiddenError) on denial.
    """

    async def _dependency(
        principal: Principal = Depends(get_current_principal),
    ) -> Principal:
        authorize(principal, roles).raise_if_denied()
        return principal

    return _dependency
