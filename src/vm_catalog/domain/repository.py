"""ProductRepository Protocol — interface contract for persistence layer."""

from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.vm_catalog.domain.models import Product


class ProductRepositoryProtocol(Protocol):
    async def get_product(
        self, db: AsyncSession, product_id: str, for_update: bool = False
    ) -> Product | None: ...

    async def get_product_by_name(self, db: AsyncSession, name: str) -> Product | None: ...

    async def list_products(self, db: AsyncSession) -> list[Product]: ...

    async def create_product(
        self,
        db: AsyncSession,
        seller_id: str,
        name: str,
        cost: int,
        amount_available: int,
    ) -> Product: ...

    async def update_product(self, db: AsyncSession, product: Product) -> Product: ...

    async def delete_product(self, db: AsyncSession, product_id: str) -> bool: ...

    async def decrement_stock(
        self, db: AsyncSession, product_id: str, quantity: int
    ) -> Product: ...
