"""SaleRepository — append-only writes to the sales table.

Referential integrity (buyer and product must exist) is enforced by the
foreign keys; the purchase engine has already locked both rows.
"""

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.vm_common.errors import InternalError
from src.vm_purchase.domain.models import PurchasedItem, SaleRecord

_INSERT_SALE_SQL = text("""
    INSERT INTO sales (buyer_id, product_id, quantity)
    VALUES (:buyer_id, :product_id, :quantity)
    RETURNING id, buyer_id, product_id, quantity, created_at
""")

_LIST_SALES_FOR_ACCOUNT_SQL = text("""
    SELECT p.id AS product_id,
           p.name AS product_name,
           p.cost AS unit_cost,
           SUM(s.quantity) AS quantity
    FROM sales s
    JOIN products p ON p.id = s.product_id
    WHERE s.buyer_id = :buyer_id
    GROUP BY p.id, p.name, p.cost
    ORDER BY p.name
""")


class SaleRepository:
    async def record_sale(
        self, db: AsyncSession, buyer_id: str, product_id: str, quantity: int
    ) -> SaleRecord:
        result = await db.execute(
            _INSERT_SALE_SQL,
            {"buyer_id": buyer_id, "product_id": product_id, "quantity": quantity},
        )
        row = result.fetchone()
        if row is None:
            raise InternalError("Sale insert returned no rows")
        return SaleRecord(
            id=str(row.id),
            buyer_id=str(row.buyer_id),
            product_id=str(row.product_id),
            quantity=row.quantity,
            created_at=row.created_at,
        )

    async def list_sales_for_account(
        self, db: AsyncSession, buyer_id: str
    ) -> list[PurchasedItem]:
        result = await db.execute(_LIST_SALES_FOR_ACCOUNT_SQL, {"buyer_id": buyer_id})
        return [
            PurchasedItem(
                product_id=str(row.product_id),
                product_name=row.product_name,
                unit_cost=row.unit_cost,
                quantity=int(row.quantity),
            )
            for row in result.fetchall()
        ]
