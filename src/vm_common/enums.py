"""Global enums — must match DB CHECK constraints exactly."""

from enum import Enum


class UserRole(str, Enum):
    BUYER = "buyer"
    SELLER = "seller"


class PurchaseState(str, Enum):
    """Lifecycle of a single buy attempt."""
    REQUESTED = "REQUESTED"
    VALIDATED = "VALIDATED"
    COMMITTED = "COMMITTED"
    REJECTED = "REJECTED"


class ErrorKind(str, Enum):
    """Stable error identifiers. Clients branch on these, never on messages."""
    INVALID_PAYLOAD = "INVALID_PAYLOAD"
    INVALID_AMOUNT = "INVALID_AMOUNT"
    ROLE_NOT_PERMITTED = "ROLE_NOT_PERMITTED"
    DUPLICATE_NAME = "DUPLICATE_NAME"
    NOT_FOUND = "NOT_FOUND"
    FORBIDDEN = "FORBIDDEN"
    UNAUTHORIZED = "UNAUTHORIZED"
    INSUFFICIENT_FUNDS = "INSUFFICIENT_FUNDS"
    INSUFFICIENT_STOCK = "INSUFFICIENT_STOCK"
    PURCHASE_FAILED = "PURCHASE_FAILED"
    STORE_UNAVAILABLE = "STORE_UNAVAILABLE"
    INTERNAL = "INTERNAL"
