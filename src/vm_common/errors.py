"""Unified error codes and custom exceptions.

Every error carries a numeric ``code`` and a stable ``kind`` (ErrorKind).

Error code ranges:
  1xxx: Auth/User
  2xxx: Account
  3xxx: Catalog
  4xxx: Purchase
  9xxx: System
"""

from src.vm_common.enums import ErrorKind


class AppError(Exception):
    """Base application error."""

    def __init__(
        self,
        code: int,
        message: str,
        http_status: int = 500,
        kind: ErrorKind = ErrorKind.INTERNAL,
    ) -> None:
        self.code = code
        self.message = message
        self.http_status = http_status
        self.kind = kind
        super().__init__(message)


# --- 1xxx: Auth/User ---

class UsernameExistsError(AppError):
    def __init__(self) -> None:
        super().__init__(1001, "Username already exists", 409, ErrorKind.DUPLICATE_NAME)


class InvalidCredentialsError(AppError):
    def __init__(self) -> None:
        super().__init__(1003, "Invalid username or password", 401, ErrorKind.UNAUTHORIZED)


class ForbiddenError(AppError):
    def __init__(self, reason: str = "Forbidden") -> None:
        super().__init__(1006, reason, 403, ErrorKind.FORBIDDEN)


# --- 2xxx: Account ---

class InsufficientFundsError(AppError):
    def __init__(self, required: int, available: int) -> None:
        super().__init__(
            2001,
            f"Insufficient funds: required {required} cents, available {available} cents",
            422,
            ErrorKind.INSUFFICIENT_FUNDS,
        )


class AccountNotFoundError(AppError):
    def __init__(self, user_id: str) -> None:
        super().__init__(2002, f"Account not found: {user_id}", 404, ErrorKind.NOT_FOUND)


class InvalidAmountError(AppError):
    def __init__(self, amount: int, accepted: list[int]) -> None:
        super().__init__(
            2003,
            f"Invalid deposit amount {amount}; accepted coins: {sorted(accepted)}",
            422,
            ErrorKind.INVALID_AMOUNT,
        )


class RoleNotPermittedError(AppError):
    def __init__(self, role: str, operation: str) -> None:
        super().__init__(
            2004,
            f"Role {role} is not permitted to {operation}",
            403,
            ErrorKind.ROLE_NOT_PERMITTED,
        )


# --- 3xxx: Catalog ---

class ProductNotFoundError(AppError):
    def __init__(self, product_id: str) -> None:
        super().__init__(3001, f"Product not found: {product_id}", 404, ErrorKind.NOT_FOUND)


class DuplicateProductNameError(AppError):
    def __init__(self, name: str) -> None:
        super().__init__(
            3002, f"Product name already exists: {name}", 409, ErrorKind.DUPLICATE_NAME
        )


class InsufficientStockError(AppError):
    def __init__(self, requested: int, available: int) -> None:
        super().__init__(
            3003,
            f"Insufficient stock: requested {requested}, available {available}",
            422,
            ErrorKind.INSUFFICIENT_STOCK,
        )


# --- 4xxx: Purchase ---

class PurchaseFailedError(AppError):
    def __init__(self, detail: str = "Purchase could not be committed") -> None:
        super().__init__(4001, detail, 409, ErrorKind.PURCHASE_FAILED)


# --- 9xxx: System ---

class InternalError(AppError):
    def __init__(self, detail: str = "Internal server error") -> None:
        super().__init__(9002, detail, 500, ErrorKind.INTERNAL)


class InvalidPayloadError(AppError):
    def __init__(self, detail: str) -> None:
        super().__init__(9003, f"Invalid payload: {detail}", 422, ErrorKind.INVALID_PAYLOAD)


class StoreUnavailableError(AppError):
    def __init__(self, detail: str = "Persistent store unavailable") -> None:
        super().__init__(9004, detail, 503, ErrorKind.STORE_UNAVAILABLE)
