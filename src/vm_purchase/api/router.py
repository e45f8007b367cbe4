"""vm_purchase REST API — POST /buy, buyers only."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.vm_common.authorization import Principal
from src.vm_common.database import get_db_session
from src.vm_common.enums import UserRole
from src.vm_common.response import ApiResponse, success_response
from src.vm_gateway.auth.dependencies import require_roles
from src.vm_purchase.application.schemas import BuyRequest, PurchaseReceiptResponse
from src.vm_purchase.application.service import PurchaseEngine

router = APIRouter(tags=["purchase"])

_engine = PurchaseEngine()


@router.post("/buy")
async def buy(
    body: BuyRequest,
    principal: Annotated[Principal, Depends(require_roles(UserRole.BUYER))],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    receipt = await _engine.buy(db, principal, str(body.product_id), body.quantity)
    resp = success_response(PurchaseReceiptResponse.from_receipt(receipt).model_dump())
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    resp.message = "Purchase completed"
    return resp
