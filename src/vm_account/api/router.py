"""vm_account REST API — balance, deposit, reset. All require JWT authentication."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.vm_account.application.schemas import DepositRequest
from src.vm_account.application.service import AccountApplicationService
from src.vm_common.authorization import Principal
from src.vm_common.database import get_db_session
from src.vm_common.enums import UserRole
from src.vm_common.response import ApiResponse, success_response
from src.vm_gateway.auth.dependencies import get_current_principal, require_roles

router = APIRouter(prefix="/account", tags=["account"])

_service = AccountApplicationService()


@router.get("/balance")
async def get_balance(
    principal: Annotated[Principal, Depends(get_current_principal)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.get_balance(db, principal.user_id)
    resp = success_response(data.model_dump())
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.post("/deposit")
async def deposit(
    body: DepositRequest,
    # Role is enforced by the ledger so a seller gets ROLE_NOT_PERMITTED
    principal: Annotated[Principal, Depends(get_current_principal)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.deposit(db, principal.user_id, body.amount_cents)
    resp = success_response(data.model_dump())
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.post("/reset")
async def reset(
    principal: Annotated[Principal, Depends(require_roles(UserRole.BUYER))],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.reset(db, principal.user_id)
    resp = success_response(data.model_dump())
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp
