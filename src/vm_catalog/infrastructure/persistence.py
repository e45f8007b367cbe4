"""ProductRepository — concrete implementation of ProductRepositoryProtocol.

All queries use raw text() SQL (no ORM). Stock decrements are a single
conditional UPDATE ... RETURNING so concurrent buyers serialize on the row.
The products.name UNIQUE constraint is the final guard against duplicates.
"""

from sqlalchemy import text
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.vm_catalog.domain.models import Product
from src.vm_common.errors import (
    DuplicateProductNameError,
    InsufficientStockError,
    ProductNotFoundError,
)

# ---------------------------------------------------------------------------
# SQL
# ---------------------------------------------------------------------------

_COLUMNS = "id, seller_id, name, cost, amount_available, created_at, updated_at"

_GET_PRODUCT_SQL = text(f"SELECT {_COLUMNS} FROM products WHERE id = :product_id")

_GET_PRODUCT_FOR_UPDATE_SQL = text(
    f"SELECT {_COLUMNS} FROM products WHERE id = :product_id FOR UPDATE"
)

_GET_PRODUCT_BY_NAME_SQL = text(f"SELECT {_COLUMNS} FROM products WHERE name = :name")

_LIST_PRODUCTS_SQL = text(f"SELECT {_COLUMNS} FROM products ORDER BY name")

_INSERT_PRODUCT_SQL = text(f"""
    INSERT INTO products (seller_id, name, cost, amount_available)
    VALUES (:seller_id, :name, :cost, :amount_available)
    RETURNING {_COLUMNS}
""")

_UPDATE_PRODUCT_SQL = text(f"""
    UPDATE products
    SET name = :name,
        cost = :cost,
        amount_available = :amount_available,
        updated_at = NOW()
    WHERE id = :product_id
    RETURNING {_COLUMNS}
""")

_DELETE_PRODUCT_SQL = text("DELETE FROM products WHERE id = :product_id RETURNING id")

_DECREMENT_STOCK_SQL = text(f"""
    UPDATE products
    SET amount_available = amount_available - :quantity,
        updated_at = NOW()
    WHERE id = :product_id AND amount_available >= :quantity
    RETURNING {_COLUMNS}
""")

_UNIQUE_NAME_CONSTRAINT = "uq_products_name"

# ---------------------------------------------------------------------------
# Row mappers
# ---------------------------------------------------------------------------


def _row_to_product(row: object) -> Product:
    return Product(
        id=str(row.id),  # type: ignore[attr-defined]
        seller_id=str(row.seller_id),  # type: ignore[attr-defined]
        name=row.name,  # type: ignore[attr-defined]
        cost=row.cost,  # type: ignore[attr-defined]
        amount_available=row.amount_available,  # type: ignore[attr-defined]
        created_at=row.created_at,  # type: ignore[attr-defined]
        updated_at=row.updated_at,  # type: ignore[attr-defined]
    )


def _is_duplicate_name(exc: IntegrityError) -> bool:
    return _UNIQUE_NAME_CONSTRAINT in str(exc.orig)


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------


class ProductRepository:
    async def get_product(
        self, db: AsyncSession, product_id: str, for_update: bool = False
    ) -> Product | None:
        sql = _GET_PRODUCT_FOR_UPDATE_SQL if for_update else _GET_PRODUCT_SQL
        result = await db.execute(sql, {"product_id": product_id})
        row = result.fetchone()
        return _row_to_product(row) if row else None

    async def get_product_by_name(self, db: AsyncSession, name: str) -> Product | None:
        result = await db.execute(_GET_PRODUCT_BY_NAME_SQL, {"name": name})
        row = result.fetchone()
        return _row_to_product(row) if row else None

    async def list_products(self, db: AsyncSession) -> list[Product]:
        result = await db.execute(_LIST_PRODUCTS_SQL)
        return [_row_to_product(row) for row in result.fetchall()]

    async def create_product(
        self,
        db: AsyncSession,
        seller_id: str,
        name: str,
        cost: int,
        amount_available: int,
    ) -> Product:
        try:
            result = await db.execute(
                _INSERT_PRODUCT_SQL,
                {
                    "seller_id": seller_id,
                    "name": name,
                    "cost": cost,
                    "amount_available": amount_available,
                },
            )
        except IntegrityError as exc:
            if _is_duplicate_name(exc):
                raise DuplicateProductNameError(name) from exc
            raise
        return _row_to_product(result.fetchone())

    async def update_product(self, db: AsyncSession, product: Product) -> Product:
        try:
            result = await db.execute(
                _UPDATE_PRODUCT_SQL,
                {
                    "product_id": product.id,
                    "name": product.name,
                    "cost": product.cost,
                    "amount_available": product.amount_available,
                },
            )
        except IntegrityError as exc:
            if _is_duplicate_name(exc):
                raise DuplicateProductNameError(product.name) from exc
            raise
        row = result.fetchone()
        if row is None:
            raise ProductNotFoundError(product.id)
        return _row_to_product(row)

    async def delete_product(self, db: AsyncSession, product_id: str) -> bool:
        result = await db.execute(_DELETE_PRODUCT_SQL, {"product_id": product_id})
        return result.fetchone() is not None

    async def decrement_stock(
        self, db: AsyncSession, product_id: str, quantity: int
    ) -> Product:
        result = await db.execute(
            _DECREMENT_STOCK_SQL, {"product_id": product_id, "quantity": quantity}
        )
        row = result.fetchone()
        if row is None:
            product = await self.get_product(db, product_id)
            if product is None:
                raise ProductNotFoundError(product_id)
            raise InsufficientStockError(quantity, product.amount_available)
        return _row_to_product(row)
