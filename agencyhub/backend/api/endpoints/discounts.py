"""
Discount Code API Endpoints.

Code management and stats are admin only. Validation is public so the
pricing page can check a code before checkout; redemption needs a login.
"""

from fastapi import APIRouter

from agencyhub.backend.core.dependencies import AdminUser, CurrentUser, DbSession
from agencyhub.backend.schemas.base import ApiResponse
from agencyhub.backend.schemas.discount import (
    DiscountCodeCreate,
    DiscountCodeResponse,
    DiscountCodeUpdate,
    DiscountRedeemRequest,
    DiscountRedemptionResponse,
    DiscountStatsResponse,
    DiscountValidateRequest,
    DiscountValidateResponse,
)
from agencyhub.backend.services.discount import DiscountService

router = APIRouter()


@router.get("", response_model=ApiResponse[list[DiscountCodeResponse]])
async def list_codes(db: DbSession, user: AdminUser) -> ApiResponse[list[DiscountCodeResponse]]:
    service = DiscountService(db)
    codes = await service.list_codes()
    return ApiResponse(data=[DiscountCodeResponse.model_validate(c) for c in codes])


@router.get("/stats", response_model=ApiResponse[DiscountStatsResponse])
async def code_stats(db: DbSession, user: AdminUser) -> ApiResponse[DiscountStatsResponse]:
    service = DiscountService(db)
    return ApiResponse(data=await service.stats())


@router.post(
    "/validate",
    response_model=ApiResponse[DiscountValidateResponse],
    summary="Validate a discount code",
    description="Public. Invalid codes return 400 with the rejection reason.",
)
async def validate_code(
    data: DiscountValidateRequest,
    db: DbSession,
) -> ApiResponse[DiscountValidateResponse]:
    service = DiscountService(db)
    code = await service.validate(data.code, data.package_id)
    return ApiResponse(data=DiscountValidateResponse.model_validate(code, from_attributes=True))


@router.post(
    "/redeem",
    response_model=ApiResponse[DiscountRedemptionResponse],
    status_code=201,
)
async def redeem_code(
    data: DiscountRedeemRequest,
    db: DbSession,
    user: CurrentUser,
) -> ApiResponse[DiscountRedemptionResponse]:
    service = DiscountService(db)
    redemption = await service.redeem(data, user)
    return ApiResponse(data=DiscountRedemptionResponse.model_validate(redemption))


@router.post("", response_model=ApiResponse[DiscountCodeResponse], status_code=201)
async def create_code(
    data: DiscountCodeCreate,
    db: DbSession,
    user: AdminUser,
) -> ApiResponse[DiscountCodeResponse]:
    service = DiscountService(db)
    code = await service.create_code(data, user)
    return ApiResponse(data=DiscountCodeResponse.model_validate(code))


@router.patch("/{code_id}", response_model=ApiResponse[DiscountCodeResponse])
async def update_code(
    code_id: str,
    data: DiscountCodeUpdate,
    db: DbSession,
    user: AdminUser,
) -> ApiResponse[DiscountCodeResponse]:
    service = DiscountService(db)
    code = await service.update_code(code_id, data)
    return ApiResponse(data=DiscountCodeResponse.model_validate(code))


@router.delete("/{code_id}", status_code=204)
async def delete_code(code_id: str, db: DbSession, user: AdminUser) -> None:
    service = DiscountService(db)
    await service.delete_code(code_id)
