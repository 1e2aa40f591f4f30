"""
Password Vault API Endpoints (admin only).

Item routes answer 403 with ``details.needs_unlock`` until the caller
unlocks the vault.
"""

from fastapi import APIRouter

from agencyhub.backend.core.dependencies import AdminUser, DbSession
from agencyhub.backend.schemas.base import ApiResponse
from agencyhub.backend.schemas.vault import (
    VaultItemCreate,
    VaultItemResponse,
    VaultItemUpdate,
    VaultStatusResponse,
    VaultUnlockRequest,
)
from agencyhub.backend.services.vault import VaultService

router = APIRouter()


@router.get("/status", response_model=ApiResponse[VaultStatusResponse])
async def vault_status(db: DbSession, user: AdminUser) -> ApiResponse[VaultStatusResponse]:
    service = VaultService(db)
    return ApiResponse(data=service.status(user))


@router.post("/unlock", response_model=ApiResponse[VaultStatusResponse])
async def unlock(
    data: VaultUnlockRequest,
    db: DbSession,
    user: AdminUser,
) -> ApiResponse[VaultStatusResponse]:
    service = VaultService(db)
    return ApiResponse(data=await service.unlock(user, data.password))


@router.post("/lock", response_model=ApiResponse[VaultStatusResponse])
async def lock(db: DbSession, user: AdminUser) -> ApiResponse[VaultStatusResponse]:
    service = VaultService(db)
    return ApiResponse(data=await service.lock(user))


@router.get("/items", response_model=ApiResponse[list[VaultItemResponse]])
async def list_items(db: DbSession, user: AdminUser) -> ApiResponse[list[VaultItemResponse]]:
    service = VaultService(db)
    return ApiResponse(data=await service.list_items(user))


@router.post("/items", response_model=ApiResponse[VaultItemResponse], status_code=201)
async def create_item(
    data: VaultItemCreate,
    db: DbSession,
    user: AdminUser,
) -> ApiResponse[VaultItemResponse]:
    service = VaultService(db)
    return ApiResponse(data=await service.create_item(user, data))


@router.patch("/items/{item_id}", response_model=ApiResponse[VaultItemResponse])
async def update_item(
    item_id: str,
    data: VaultItemUpdate,
    db: DbSession,
    user: AdminUser,
) -> ApiResponse[VaultItemResponse]:
    service = VaultService(db)
    return ApiResponse(data=await service.update_item(user, item_id, data))


@router.delete("/items/{item_id}", status_code=204)
async def delete_item(item_id: str, db: DbSession, user: AdminUser) -> None:
    service = VaultService(db)
    await service.delete_item(user, item_id)
