"""Pydantic request/response schemas for vm_catalog."""

from pydantic import BaseModel, ConfigDict, Field

from src.vm_catalog.domain.models import Product, ProductUpdate
from src.vm_common.cents import cents_to_display


class CreateProductRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=128)
    cost: int = Field(..., gt=0, description="Unit cost in cents")
    amount_available: int = Field(..., gt=0)


class UpdateProductRequest(BaseModel):
    """Every field optional; omitted or null means "keep current value".

    0 is not treated as "not provided": ``cost: 0`` fails validation and
    ``amount_available: 0`` marks the product sold out.
    """

    # seller_id (or any unknown field) is rejected rather than silently dropped
    model_config = ConfigDict(extra="forbid")

    name: str | None = Field(None, min_length=1, max_length=128)
    cost: int | None = Field(None, gt=0, description="Unit cost in cents")
    amount_available: int | None = Field(None, ge=0)

    def to_domain(self) -> ProductUpdate:
        return ProductUpdate(
            name=self.name, cost=self.cost, amount_available=self.amount_available
        )


class ProductResponse(BaseModel):
    id: str
    seller_id: str
    name: str
    cost_cents: int
    cost_display: str
    amount_available: int

    @classmethod
    def from_domain(cls, product: Product) -> "ProductResponse":
        return cls(
            id=product.id,
            seller_id=product.seller_id,
            name=product.name,
            cost_cents=product.cost,
            cost_display=cents_to_display(product.cost),
            amount_available=product.amount_available,
        )


class ProductListResponse(BaseModel):
    items: list[ProductResponse]
