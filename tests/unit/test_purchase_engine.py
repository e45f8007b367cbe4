"""Unit tests for PurchaseEngine against the in-memory store.

The fake store honours rollback and row locks, so these tests cover the
atomicity and serialization guarantees of a buy, not just the happy path.
"""

import asyncio
import logging

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from src.vm_common.authorization import Principal
from src.vm_common.coins import Change
from src.vm_common.enums import UserRole
from src.vm_common.errors import (
    AccountNotFoundError,
    ForbiddenError,
    InsufficientFundsError,
    InsufficientStockError,
    InvalidPayloadError,
    ProductNotFoundError,
    PurchaseFailedError,
    StoreUnavailableError,
)
from src.vm_purchase.application.service import PurchaseEngine
from tests.fakes import (
    FakeAccountRepository,
    FakeProductRepository,
    FakeSaleRepository,
    FakeSession,
    FakeStore,
)


@pytest.fixture
def engine(store: FakeStore) -> PurchaseEngine:
    return PurchaseEngine(
        accounts=FakeAccountRepository(store),
        products=FakeProductRepository(store),
        sales=FakeSaleRepository(store),
    )


def _buyer(store: FakeStore, balance: int) -> Principal:
    account = store.add_account(role=UserRole.BUYER, balance=balance)
    return Principal(user_id=account.id, role=UserRole.BUYER)


def _seller_id(store: FakeStore) -> str:
    return store.add_account(role=UserRole.SELLER).id


class TestSuccessfulBuy:
    async def test_debits_decrements_and_records(
        self, engine: PurchaseEngine, store: FakeStore
    ) -> None:
        buyer = _buyer(store, balance=250)
        product = store.add_product(_seller_id(store), name="Cola", cost=65, amount_available=5)
        db = FakeSession(store)

        receipt = await engine.buy(db, buyer, product.id, 1)

        assert receipt.total_spent == 65
        assert receipt.balance_after == 185
        assert receipt.change == Change(1, 1, 1, 1, 1)
        assert store.accounts[buyer.user_id].balance == 185
        assert store.products[product.id].amount_available == 4
        assert len(store.sales) == 1
        assert db.commits == 1

    async def test_multiple_units(self, engine: PurchaseEngine, store: FakeStore) -> None:
        buyer = _buyer(store, balance=600)
        product = store.add_product(_seller_id(store), cost=5, amount_available=3)

        receipt = await engine.buy(FakeSession(store), buyer, product.id, 3)

        assert receipt.total_spent == 15
        assert receipt.change == Change(5, 1, 1, 1, 1)
        assert store.products[product.id].amount_available == 0

    async def test_exact_balance_leaves_no_change(
        self, engine: PurchaseEngine, store: FakeStore
    ) -> None:
        buyer = _buyer(store, balance=100)
        product = store.add_product(_seller_id(store), cost=50, amount_available=2)

        receipt = await engine.buy(FakeSession(store), buyer, product.id, 2)

        assert receipt.balance_after == 0
        assert receipt.change == Change()

    async def test_history_aggregates_per_product(
        self, engine: PurchaseEngine, store: FakeStore
    ) -> None:
        buyer = _buyer(store, balance=1000)
        seller_id = _seller_id(store)
        cola = store.add_product(seller_id, name="Cola", cost=50)
        water = store.add_product(seller_id, name="Water", cost=20)

        await engine.buy(FakeSession(store), buyer, cola.id, 1)
        await engine.buy(FakeSession(store), buyer, water.id, 2)
        receipt = await engine.buy(FakeSession(store), buyer, cola.id, 2)

        assert receipt.total_spent == 100
        assert [(i.product_name, i.quantity) for i in receipt.products_purchased] == [
            ("Cola", 3),
            ("Water", 2),
        ]


class TestRejectedBuy:
    async def test_insufficient_funds_changes_nothing(
        self, engine: PurchaseEngine, store: FakeStore
    ) -> None:
        buyer = _buyer(store, balance=40)
        product = store.add_product(_seller_id(store), cost=65, amount_available=5)

        with pytest.raises(InsufficientFundsError):
            await engine.buy(FakeSession(store), buyer, product.id, 1)

        assert store.accounts[buyer.user_id].balance == 40
        assert store.products[product.id].amount_available == 5
        assert store.sales == []

    async def test_insufficient_stock_changes_nothing(
        self, engine: PurchaseEngine, store: FakeStore
    ) -> None:
        buyer = _buyer(store, balance=1000)
        product = store.add_product(_seller_id(store), cost=10, amount_available=2)

        with pytest.raises(InsufficientStockError):
            await engine.buy(FakeSession(store), buyer, product.id, 3)

        assert store.accounts[buyer.user_id].balance == 1000
        assert store.products[product.id].amount_available == 2

    async def test_funds_checked_before_stock(
        self, engine: PurchaseEngine, store: FakeStore
    ) -> None:
        buyer = _buyer(store, balance=5)
        product = store.add_product(_seller_id(store), cost=10, amount_available=0)

        with pytest.raises(InsufficientFundsError):
            await engine.buy(FakeSession(store), buyer, product.id, 1)

    async def test_seller_forbidden(self, engine: PurchaseEngine, store: FakeStore) -> None:
        seller_id = _seller_id(store)
        product = store.add_product(seller_id)
        seller = Principal(user_id=seller_id, role=UserRole.SELLER)

        with pytest.raises(ForbiddenError):
            await engine.buy(FakeSession(store), seller, product.id, 1)

    @pytest.mark.parametrize("quantity", [0, -1])
    async def test_non_positive_quantity(
        self, engine: PurchaseEngine, store: FakeStore, quantity: int
    ) -> None:
        buyer = _buyer(store, balance=100)
        product = store.add_product(_seller_id(store))

        with pytest.raises(InvalidPayloadError):
            await engine.buy(FakeSession(store), buyer, product.id, quantity)

    async def test_missing_product(self, engine: PurchaseEngine, store: FakeStore) -> None:
        buyer = _buyer(store, balance=100)
        with pytest.raises(ProductNotFoundError):
            await engine.buy(FakeSession(store), buyer, "no-such-product", 1)

    async def test_missing_account(self, engine: PurchaseEngine, store: FakeStore) -> None:
        ghost = Principal(user_id="deleted-user", role=UserRole.BUYER)
        product = store.add_product(_seller_id(store))
        with pytest.raises(AccountNotFoundError):
            await engine.buy(FakeSession(store), ghost, product.id, 1)

    async def test_rejection_is_logged(
        self, engine: PurchaseEngine, store: FakeStore, caplog: pytest.LogCaptureFixture
    ) -> None:
        buyer = _buyer(store, balance=0)
        product = store.add_product(_seller_id(store))

        with caplog.at_level(logging.INFO, logger="src.vm_purchase.application.service"):
            with pytest.raises(InsufficientFundsError):
                await engine.buy(FakeSession(store), buyer, product.id, 1)

        assert "REJECTED" in caplog.text
        assert "INSUFFICIENT_FUNDS" in caplog.text


class TestStoreFailures:
    async def test_failure_after_debit_rolls_everything_back(
        self, engine: PurchaseEngine, store: FakeStore
    ) -> None:
        buyer = _buyer(store, balance=200)
        product = store.add_product(_seller_id(store), cost=50, amount_available=3)
        store.fail("record_sale", IntegrityError("INSERT INTO sales", {}, Exception("boom")))
        db = FakeSession(store)

        with pytest.raises(PurchaseFailedError):
            await engine.buy(db, buyer, product.id, 1)

        assert store.accounts[buyer.user_id].balance == 200
        assert store.products[product.id].amount_available == 3
        assert store.sales == []
        assert db.rollbacks == 1

    async def test_connectivity_failure_is_store_unavailable(
        self, engine: PurchaseEngine, store: FakeStore
    ) -> None:
        buyer = _buyer(store, balance=200)
        product = store.add_product(_seller_id(store), cost=50, amount_available=3)
        store.fail("debit", OperationalError("UPDATE users", {}, ConnectionResetError()))

        with pytest.raises(StoreUnavailableError):
            await engine.buy(FakeSession(store), buyer, product.id, 1)

        assert store.products[product.id].amount_available == 3

    async def test_failed_commit_leaves_no_trace(
        self, engine: PurchaseEngine, store: FakeStore
    ) -> None:
        buyer = _buyer(store, balance=200)
        product = store.add_product(_seller_id(store), cost=50, amount_available=3)
        store.fail("commit", OperationalError("COMMIT", {}, ConnectionResetError()))

        with pytest.raises(StoreUnavailableError):
            await engine.buy(FakeSession(store), buyer, product.id, 1)

        assert store.accounts[buyer.user_id].balance == 200
        assert store.products[product.id].amount_available == 3
        assert store.sales == []


class TestConcurrency:
    async def test_last_unit_goes_to_exactly_one_buyer(
        self, engine: PurchaseEngine, store: FakeStore
    ) -> None:
        first = _buyer(store, balance=100)
        second = _buyer(store, balance=100)
        product = store.add_product(_seller_id(store), cost=50, amount_available=1)

        results = await asyncio.gather(
            engine.buy(FakeSession(store), first, product.id, 1),
            engine.buy(FakeSession(store), second, product.id, 1),
            return_exceptions=True,
        )

        failures = [r for r in results if isinstance(r, Exception)]
        assert len(failures) == 1
        assert isinstance(failures[0], InsufficientStockError)
        assert store.products[product.id].amount_available == 0
        assert len(store.sales) == 1
        balances = sorted(store.accounts[p.user_id].balance for p in (first, second))
        assert balances == [50, 100]

    async def test_same_buyer_cannot_overspend(
        self, engine: PurchaseEngine, store: FakeStore
    ) -> None:
        buyer = _buyer(store, balance=100)
        product = store.add_product(_seller_id(store), cost=60, amount_available=10)

        results = await asyncio.gather(
            *(engine.buy(FakeSession(store), buyer, product.id, 1) for _ in range(3)),
            return_exceptions=True,
        )

        successes = [r for r in results if not isinstance(r, Exception)]
        assert len(successes) == 1
        assert all(
            isinstance(r, InsufficientFundsError) for r in results if isinstance(r, Exception)
        )
        assert store.accounts[buyer.user_id].balance == 40
        assert store.products[product.id].amount_available == 9
