"""PurchaseEngine — the atomic buy operation.

One buy attempt moves REQUESTED -> VALIDATED -> COMMITTED, or to REJECTED.
Everything between loading the rows and writing the sale happens in a single
store transaction:

  1. lock account row, then product row (fixed order, no lock cycles)
  2. cost = unit cost * quantity
  3. reject if balance < cost, then if stock < quantity
  4. decrement stock, debit balance, insert sale record
  5. commit, then compute change from the balance left

The conditional UPDATEs in step 4 re-check both guards, so a concurrent
buyer that slipped past step 3 still gets the same typed error. Any other
store failure rolls the whole transaction back and surfaces as
PurchaseFailedError; no partial debit or stock change is ever visible.
"""

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.vm_account.domain.repository import AccountRepositoryProtocol
from src.vm_account.infrastructure.persistence import AccountRepository
from src.vm_catalog.domain.repository import ProductRepositoryProtocol
from src.vm_catalog.infrastructure.persistence import ProductRepository
from src.vm_common.authorization import Principal, authorize
from src.vm_common.cents import total_cost
from src.vm_common.coins import compute_change
from src.vm_common.enums import PurchaseState, UserRole
from src.vm_common.errors import (
    AccountNotFoundError,
    AppError,
    InsufficientFundsError,
    InsufficientStockError,
    InvalidPayloadError,
    ProductNotFoundError,
    PurchaseFailedError,
)
from src.vm_common.transaction import transaction
from src.vm_purchase.domain.models import PurchaseReceipt
from src.vm_purchase.domain.repository import SaleRepositoryProtocol
from src.vm_purchase.infrastructure.persistence import SaleRepository

logger = logging.getLogger(__name__)

_BUYER_ONLY = (UserRole.BUYER,)


class PurchaseEngine:
    def __init__(
        self,
        accounts: AccountRepositoryProtocol | None = None,
        products: ProductRepositoryProtocol | None = None,
        sales: SaleRepositoryProtocol | None = None,
    ) -> None:
        self._accounts: AccountRepositoryProtocol = accounts or AccountRepository()
        self._products: ProductRepositoryProtocol = products or ProductRepository()
        self._sales: SaleRepositoryProtocol = sales or SaleRepository()

    async def buy(
        self,
        db: AsyncSession,
        principal: Principal,
        product_id: str,
        quantity: int,
    ) -> PurchaseReceipt:
        buyer_id = principal.user_id
        self._log_state(PurchaseState.REQUESTED, buyer_id, product_id, quantity)
        try:
            authorize(principal, _BUYER_ONLY).raise_if_denied()
            if quantity <= 0:
                raise InvalidPayloadError(f"quantity must be positive, got {quantity}")

            async with transaction(db):
                account = await self._accounts.get_account(db, buyer_id, for_update=True)
                if account is None:
                    raise AccountNotFoundError(buyer_id)
                product = await self._products.get_product(db, product_id, for_update=True)
                if product is None:
                    raise ProductNotFoundError(product_id)

                cost = total_cost(product.cost, quantity)
                if account.balance < cost:
                    raise InsufficientFundsError(cost, account.balance)
                if product.amount_available < quantity:
                    raise InsufficientStockError(quantity, product.amount_available)
                self._log_state(PurchaseState.VALIDATED, buyer_id, product_id, quantity)

                await self._products.decrement_stock(db, product_id, quantity)
                account = await self._accounts.debit(db, buyer_id, cost)
                await self._sales.record_sale(db, buyer_id, product_id, quantity)
                history = await self._sales.list_sales_for_account(db, buyer_id)
        except AppError as exc:
            self._log_state(
                PurchaseState.REJECTED, buyer_id, product_id, quantity, exc.kind.value
            )
            raise
        except SQLAlchemyError as exc:
            self._log_state(
                PurchaseState.REJECTED, buyer_id, product_id, quantity, "store error"
            )
            raise PurchaseFailedError() from exc

        self._log_state(PurchaseState.COMMITTED, buyer_id, product_id, quantity)
        return PurchaseReceipt(
            buyer_id=buyer_id,
            product_id=product_id,
            quantity=quantity,
            total_spent=cost,
            balance_after=account.balance,
            change=compute_change(account.balance),
            products_purchased=history,
        )

    @staticmethod
    def _log_state(
        state: PurchaseState,
        buyer_id: str,
        product_id: str,
        quantity: int,
        reason: str | None = None,
    ) -> None:
        level = logging.INFO if state in (PurchaseState.COMMITTED, PurchaseState.REJECTED) else logging.DEBUG
        logger.log(
            level,
            "Purchase %s: buyer=%s product=%s qty=%d%s",
            state.value,
            buyer_id,
            product_id,
            quantity,
            f" reason={reason}" if reason else "",
        )
