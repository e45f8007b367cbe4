"""Shared test fixtures."""

import os

# Settings() requires JWT_SECRET; must be set before any src/config import
os.environ.setdefault("JWT_SECRET", "test-secret-not-for-production")

import pytest  # noqa: E402

from tests.fakes import FakeStore  # noqa: E402


@pytest.fixture
def store() -> FakeStore:
    return FakeStore()
