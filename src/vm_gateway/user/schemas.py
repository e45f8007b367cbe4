"""Pydantic request/response schemas for vm_gateway.

All responses are wrapped in ApiResponse at the router layer.
"""

import re

from pydantic import BaseModel, Field, field_validator, model_validator

from src.vm_common.cents import cents_to_display
from src.vm_common.enums import UserRole
from src.vm_gateway.user.db_models import UserModel

_USERNAME_PATTERN = r"^[a-zA-Z0-9_]+$"


class RegisterRequest(BaseModel):
    username: str = Field(..., min_length=3, max_length=64, pattern=_USERNAME_PATTERN)
    password: str = Field(..., min_length=8, max_length=128)
    role: UserRole

    @field_validator("password")
    @classmethod
    def password_complexity(cls, v: str) -> str:
        """Enforce: at least one uppercase, one lowercase, one digit."""
        if not re.search(r"[A-Z]", v):
            raise ValueError("Password must contain at least one uppercase letter")
        if not re.search(r"[a-z]", v):
            raise ValueError("Password must contain at least one lowercase letter")
        if not re.search(r"\d", v):
            raise ValueError("Password must contain at least one digit")
        return v

    @model_validator(mode="after")
    def password_differs_from_username(self) -> "RegisterRequest":
        if self.password.lower() == self.username.lower():
            raise ValueError("Password can't be the same as the username")
        return self


class LoginRequest(BaseModel):
    username: str
    password: str


class UpdateUserRequest(BaseModel):
    username: str = Field(..., min_length=3, max_length=64, pattern=_USERNAME_PATTERN)


class UserDetails(BaseModel):
    """Public view of an account. Never includes the password hash."""

    user_id: str
    username: str
    role: str
    balance_cents: int
    balance_display: str

    @classmethod
    def from_model(cls, user: UserModel) -> "UserDetails":
        return cls(
            user_id=str(user.id),
            username=user.username,
            role=user.role,
            balance_cents=user.balance,
            balance_display=cents_to_display(user.balance),
        )


class UserListResponse(BaseModel):
    users: list[UserDetails]


class RegisterResponse(BaseModel):
    user_id: str
    username: str
    role: str
    created_at: str


class LoginResponse(BaseModel):
    access_token: str
    token_type: str = "Bearer"
    expires_in: int = 1800  # 30 minutes in seconds
    user: UserDetails
