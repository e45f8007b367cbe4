"""Domain models for vm_catalog — pure dataclasses, no SQLAlchemy dependency."""

from dataclasses import dataclass, replace
from datetime import datetime


@dataclass
class Product:
    id: str
    seller_id: str
    name: str
    cost: int                # cents per unit, > 0
    amount_available: int    # units in stock, >= 0
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True)
class ProductUpdate:
    """Partial update. ``None`` means "not provided": the field keeps its value.

    seller_id is deliberately absent — ownership never changes.
    """

    name: str | None = None
    cost: int | None = None
    amount_available: int | None = None

    @property
    def is_empty(self) -> bool:
        return self.name is None and self.cost is None and self.amount_available is None

    def apply_to(self, product: Product) -> Product:
        return replace(
            product,
            name=self.name if self.name is not None else product.name,
            cost=self.cost if self.cost is not None else product.cost,
            amount_available=(
                self.amount_available
                if self.amount_available is not None
                else product.amount_available
            ),
        )
