"""User directory and self-service profile endpoints."""

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.vm_common.database import get_db_session
from src.vm_common.response import ApiResponse, success_response
from src.vm_common.transaction import transaction
from src.vm_gateway.auth.dependencies import get_current_user
from src.vm_gateway.user.db_models import UserModel
from src.vm_gateway.user.schemas import UpdateUserRequest, UserDetails, UserListResponse
from src.vm_gateway.user.service import UserService

router = APIRouter(tags=["users"])

_service = UserService()


@router.get("/users")
async def list_users(
    current_user: Annotated[UserModel, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    users = await _service.list_users(db)
    data = UserListResponse(users=[UserDetails.from_model(u) for u in users])
    resp = success_response(data.model_dump())
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.get("/users/{user_id}")
async def get_user(
    user_id: uuid.UUID,
    current_user: Annotated[UserModel, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    user = await _service.get_user(str(user_id), db)
    resp = success_response(UserDetails.from_model(user).model_dump())
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.put("/user")
async def rename_current_user(
    body: UpdateUserRequest,
    current_user: Annotated[UserModel, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    async with transaction(db):
        user = await _service.rename(str(current_user.id), body.username, db)
    resp = success_response(UserDetails.from_model(user).model_dump())
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.delete("/user")
async def delete_current_user(
    current_user: Annotated[UserModel, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    user_id = str(current_user.id)
    async with transaction(db):
        await _service.delete_user(user_id, db)
    resp = success_response(None)
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    resp.message = "User deleted"
    return resp
