"""Unit tests for vm_catalog Pydantic schemas."""

import pytest
from pydantic import ValidationError

from src.vm_catalog.application.schemas import (
    CreateProductRequest,
    ProductResponse,
    UpdateProductRequest,
)
from src.vm_catalog.domain.models import Product, ProductUpdate


class TestCreateProductRequest:
    def test_valid(self) -> None:
        req = CreateProductRequest(name="Cola", cost=65, amount_available=3)
        assert req.cost == 65

    @pytest.mark.parametrize(
        "payload",
        [
            {"name": "", "cost": 65, "amount_available": 3},
            {"name": "Cola", "cost": 0, "amount_available": 3},
            {"name": "Cola", "cost": 65, "amount_available": 0},
            {"cost": 65, "amount_available": 3},
        ],
    )
    def test_invalid(self, payload: dict) -> None:
        with pytest.raises(ValidationError):
            CreateProductRequest(**payload)


class TestUpdateProductRequest:
    def test_all_optional(self) -> None:
        assert UpdateProductRequest().to_domain() == ProductUpdate()

    def test_zero_stock_allowed(self) -> None:
        assert UpdateProductRequest(amount_available=0).to_domain().amount_available == 0

    def test_zero_cost_rejected(self) -> None:
        with pytest.raises(ValidationError):
            UpdateProductRequest(cost=0)

    def test_seller_id_rejected(self) -> None:
        with pytest.raises(ValidationError):
            UpdateProductRequest.model_validate({"seller_id": "someone-else"})


class TestProductResponse:
    def test_from_domain(self) -> None:
        product = Product(id="p1", seller_id="s1", name="Cola", cost=185, amount_available=2)
        resp = ProductResponse.from_domain(product)
        assert resp.cost_display == "$1.85"
        assert resp.amount_available == 2
