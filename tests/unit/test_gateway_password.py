"""Unit tests for password hashing utilities."""

from src.vm_gateway.auth.password import hash_password, verify_password


def test_hash_is_not_plain() -> None:
    hashed = hash_password("Vending1")
    assert hashed != "Vending1"
    assert hashed.startswith("$2")


def test_verify_correct_password() -> None:
    assert verify_password("Vending1", hash_password("Vending1")) is True


def test_verify_wrong_password() -> None:
    assert verify_password("Vending2", hash_password("Vending1")) is False


def test_salted() -> None:
    assert hash_password("Vending1") != hash_password("Vending1")


def test_long_password_round_trips() -> None:
    long_password = "Aa1" + "x" * 120
    assert verify_password(long_password, hash_password(long_password)) is True


def test_malformed_hash_is_a_mismatch() -> None:
    assert verify_password("Vending1", "not-a-bcrypt-hash") is False
