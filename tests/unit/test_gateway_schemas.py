"""Unit tests for vm_gateway Pydantic schemas."""

import uuid
from datetime import UTC, datetime

import pytest
from pydantic import ValidationError

from src.vm_common.enums import UserRole
from src.vm_gateway.user.db_models import UserModel
from src.vm_gateway.user.schemas import RegisterRequest, UpdateUserRequest, UserDetails


class TestRegisterRequest:
    def test_valid_input(self) -> None:
        req = RegisterRequest(username="alice", password="SecureP4ss", role="buyer")
        assert req.role is UserRole.BUYER

    @pytest.mark.parametrize("username", ["ab", "a" * 65, "alice!", "al ice"])
    def test_bad_username(self, username: str) -> None:
        with pytest.raises(ValidationError):
            RegisterRequest(username=username, password="SecureP4ss", role="buyer")

    @pytest.mark.parametrize("password", ["Ab1", "alllower1", "ALLUPPER1", "NoDigitPass"])
    def test_weak_password(self, password: str) -> None:
        with pytest.raises(ValidationError):
            RegisterRequest(username="alice", password=password, role="buyer")

    def test_password_equal_to_username(self) -> None:
        with pytest.raises(ValidationError):
            RegisterRequest(username="Alice1234", password="Alice1234", role="seller")

    def test_unknown_role(self) -> None:
        with pytest.raises(ValidationError):
            RegisterRequest(username="alice", password="SecureP4ss", role="admin")

    def test_role_required(self) -> None:
        with pytest.raises(ValidationError):
            RegisterRequest(username="alice", password="SecureP4ss")  # type: ignore[call-arg]


class TestUpdateUserRequest:
    def test_username_rules_apply(self) -> None:
        with pytest.raises(ValidationError):
            UpdateUserRequest(username="x")


class TestUserDetails:
    def test_never_exposes_password_hash(self) -> None:
        user = UserModel(
            id=uuid.uuid4(),
            username="alice",
            password_hash="$2b$12$secret",
            role="buyer",
            balance=185,
            created_at=datetime.now(UTC),
        )

        details = UserDetails.from_model(user).model_dump()

        assert "password_hash" not in details
        assert details["balance_display"] == "$1.85"
