"""vm_catalog REST API — product listing for everyone, mutations for sellers."""

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.vm_catalog.application.schemas import CreateProductRequest, UpdateProductRequest
from src.vm_catalog.application.service import CatalogApplicationService
from src.vm_common.authorization import Principal
from src.vm_common.database import get_db_session
from src.vm_common.enums import UserRole
from src.vm_common.response import ApiResponse, success_response
from src.vm_gateway.auth.dependencies import get_current_principal, require_roles

router = APIRouter(prefix="/products", tags=["products"])

_service = CatalogApplicationService()
_require_seller = require_roles(UserRole.SELLER)


@router.get("")
async def list_products(
    principal: Annotated[Principal, Depends(get_current_principal)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.list_products(db)
    resp = success_response(data.model_dump())
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_product(
    body: CreateProductRequest,
    principal: Annotated[Principal, Depends(_require_seller)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.create_product(
        db, principal, body.name, body.cost, body.amount_available
    )
    resp = success_response(data.model_dump())
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.get("/{product_id}")
async def get_product(
    product_id: uuid.UUID,
    principal: Annotated[Principal, Depends(get_current_principal)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.get_product(db, str(product_id))
    resp = success_response(data.model_dump())
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.put("/{product_id}")
async def update_product(
    product_id: uuid.UUID,
    body: UpdateProductRequest,
    principal: Annotated[Principal, Depends(_require_seller)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.update_product(db, principal, str(product_id), body.to_domain())
    resp = success_response(data.model_dump())
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.delete("/{product_id}")
async def delete_product(
    product_id: uuid.UUID,
    principal: Annotated[Principal, Depends(_require_seller)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    await _service.delete_product(db, principal, str(product_id))
    resp = success_response(None)
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    resp.message = "Product deleted"
    return resp
