"""Catalog validation rules. Each raises InvalidPayloadError on violation."""

from src.vm_catalog.domain.models import ProductUpdate
from src.vm_common.errors import InvalidPayloadError

MAX_NAME_LENGTH: int = 128


def check_name(name: str) -> None:
    if not name or not name.strip():
        raise InvalidPayloadError("name is a required field")
    if len(name) > MAX_NAME_LENGTH:
        raise InvalidPayloadError(f"name must be at most {MAX_NAME_LENGTH} characters")


def check_cost(cost: int) -> None:
    if cost <= 0:
        raise InvalidPayloadError(f"cost must be a positive number of cents, got {cost}")


def check_new_product(name: str, cost: int, amount_available: int) -> None:
    """A new product needs a name, a positive cost and at least one unit."""
    check_name(name)
    check_cost(cost)
    if amount_available <= 0:
        raise InvalidPayloadError(
            f"amount_available must be positive, got {amount_available}"
        )


def check_update(update: ProductUpdate) -> None:
    """Provided fields must be valid; zero stock is a legitimate sold-out state."""
    if update.name is not None:
        check_name(update.name)
    if update.cost is not None:
        check_cost(update.cost)
    if update.amount_available is not None and update.amount_available < 0:
        raise InvalidPayloadError(
            f"amount_available cannot be negative, got {update.amount_available}"
        )
