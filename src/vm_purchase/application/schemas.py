"""Pydantic schemas for the buy endpoint."""

import uuid

from pydantic import BaseModel, Field

from src.vm_common.cents import cents_to_display
from src.vm_purchase.domain.models import PurchaseReceipt


class BuyRequest(BaseModel):
    product_id: uuid.UUID
    quantity: int = Field(..., gt=0, description="Units to buy")


class ChangeResponse(BaseModel):
    hundreds: int
    fifties: int
    twenties: int
    tens: int
    fives: int


class PurchasedItemResponse(BaseModel):
    product_id: str
    product_name: str
    unit_cost_cents: int
    quantity: int


class PurchaseReceiptResponse(BaseModel):
    buyer_id: str
    product_id: str
    quantity: int
    total_spent_cents: int
    total_spent_display: str
    balance_cents: int
    balance_display: str
    change: ChangeResponse
    products_purchased: list[PurchasedItemResponse]

    @classmethod
    def from_receipt(cls, receipt: PurchaseReceipt) -> "PurchaseReceiptResponse":
        return cls(
            buyer_id=receipt.buyer_id,
            product_id=receipt.product_id,
            quantity=receipt.quantity,
            total_spent_cents=receipt.total_spent,
            total_spent_display=cents_to_display(receipt.total_spent),
            balance_cents=receipt.balance_after,
            balance_display=cents_to_display(receipt.balance_after),
            change=ChangeResponse(**receipt.change.as_dict()),
            products_purchased=[
                PurchasedItemResponse(
                    product_id=item.product_id,
                    product_name=item.product_name,
                    unit_cost_cents=item.unit_cost,
                    quantity=item.quantity,
                )
                for item in receipt.products_purchased
            ],
        )
