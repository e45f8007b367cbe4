"""CatalogApplicationService — product CRUD with seller ownership.

Create/update/delete run inside `transaction(db)` and pass through the
authorization gate; listing and lookup are read-only.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from src.vm_catalog.application.schemas import ProductListResponse, ProductResponse
from src.vm_catalog.domain.models import ProductUpdate
from src.vm_catalog.domain.repository import ProductRepositoryProtocol
from src.vm_catalog.domain.rules import check_new_product, check_update
from src.vm_catalog.infrastructure.persistence import ProductRepository
from src.vm_common.authorization import Principal, authorize
from src.vm_common.enums import UserRole
from src.vm_common.errors import DuplicateProductNameError, ProductNotFoundError
from src.vm_common.transaction import transaction

logger = logging.getLogger(__name__)

_SELLER_ONLY = (UserRole.SELLER,)


class CatalogApplicationService:
    def __init__(self, repo: ProductRepositoryProtocol | None = None) -> None:
        self._repo: ProductRepositoryProtocol = repo or ProductRepository()

    async def list_products(self, db: AsyncSession) -> ProductListResponse:
        products = await self._repo.list_products(db)
        return ProductListResponse(items=[ProductResponse.from_domain(p) for p in products])

    async def get_product(self, db: AsyncSession, product_id: str) -> ProductResponse:
        product = await self._repo.get_product(db, product_id)
        if product is None:
            raise ProductNotFoundError(product_id)
        return ProductResponse.from_domain(product)

    async def create_product(
        self,
        db: AsyncSession,
        principal: Principal,
        name: str,
        cost: int,
        amount_available: int,
    ) -> ProductResponse:
        authorize(principal, _SELLER_ONLY).raise_if_denied()
        check_new_product(name, cost, amount_available)

        async with transaction(db):
            if await self._repo.get_product_by_name(db, name) is not None:
                raise DuplicateProductNameError(name)
            product = await self._repo.create_product(
                db, principal.user_id, name, cost, amount_available
            )

        logger.info("Product created: id=%s seller=%s", product.id, principal.user_id)
        return ProductResponse.from_domain(product)

    async def update_product(
        self,
        db: AsyncSession,
        principal: Principal,
        product_id: str,
        update: ProductUpdate,
    ) -> ProductResponse:
        check_update(update)

        async with transaction(db):
            existing = await self._repo.get_product(db, product_id, for_update=True)
            if existing is None:
                raise ProductNotFoundError(product_id)
            authorize(principal, _SELLER_ONLY, existing.seller_id).raise_if_denied()
            if update.is_empty:
                return ProductResponse.from_domain(existing)

            if update.name is not None and update.name != existing.name:
                clash = await self._repo.get_product_by_name(db, update.name)
                if clash is not None:
                    raise DuplicateProductNameError(update.name)

            product = await self._repo.update_product(db, update.apply_to(existing))

        logger.info("Product updated: id=%s seller=%s", product.id, principal.user_id)
        return ProductResponse.from_domain(product)

    async def delete_product(
        self, db: AsyncSession, principal: Principal, product_id: str
    ) -> None:
        async with transaction(db):
            existing = await self._repo.get_product(db, product_id, for_update=True)
            if existing is None:
                raise ProductNotFoundError(product_id)
            authorize(principal, _SELLER_ONLY, existing.seller_id).raise_if_denied()
            if not await self._repo.delete_product(db, product_id):
                raise ProductNotFoundError(product_id)

        logger.info("Product deleted: id=%s seller=%s", product_id, principal.user_id)
