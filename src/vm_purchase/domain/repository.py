"""SaleRepository Protocol — sale records written by the purchase engine."""

from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.vm_purchase.domain.models import PurchasedItem, SaleRecord


class SaleRepositoryProtocol(Protocol):
    async def record_sale(
        self, db: AsyncSession, buyer_id: str, product_id: str, quantity: int
    ) -> SaleRecord: ...

    async def list_sales_for_account(
        self, db: AsyncSession, buyer_id: str
    ) -> list[PurchasedItem]: ...
