"""Domain models for vm_purchase — pure dataclasses."""

from dataclasses import dataclass, field
from datetime import datetime

from src.vm_common.coins import Change


@dataclass
class SaleRecord:
    """One committed purchase line. Immutable once written."""

    id: str
    buyer_id: str
    product_id: str
    quantity: int
    created_at: datetime | None = None


@dataclass
class PurchasedItem:
    """A buyer's purchase history for one product, summed over all sales."""

    product_id: str
    product_name: str
    unit_cost: int        # cents, current catalog price
    quantity: int


@dataclass
class PurchaseReceipt:
    buyer_id: str
    product_id: str
    quantity: int
    total_spent: int      # cents, cost of this purchase only
    balance_after: int    # cents
    change: Change
    products_purchased: list[PurchasedItem] = field(default_factory=list)
