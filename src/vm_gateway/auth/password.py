"""bcrypt password hashing.

bcrypt only looks at the first 72 bytes of its input (bcrypt>=5 refuses
longer input outright), and RegisterRequest allows up to 128 characters, so
both sides truncate the utf-8 encoding to the same 72-byte prefix.
"""

import bcrypt

_BCRYPT_MAX_BYTES = 72


def _encode(plain: str) -> bytes:
    return plain.encode("utf-8")[:_BCRYPT_MAX_BYTES]


def hash_password(plain: str) -> str:
    return bcrypt.hashpw(_encode(plain), bcrypt.gensalt()).decode("utf-8")


def verify_password(plain: str, hashed: str) -> bool:
    """False for a wrong password or a hash bcrypt cannot parse."""
    try:
        return bcrypt.checkpw(_encode(plain), hashed.encode("utf-8"))
    except ValueError:
        return False
