"""
Auth API Endpoints.

Login, token refresh and the current-user profile.
"""

from fastapi import APIRouter

from agencyhub.backend.core.dependencies import CurrentUser, DbSession, RequestId
from agencyhub.backend.schemas.base import ApiResponse, ResponseMetadata
from agencyhub.backend.schemas.user import (
    AccessTokenResponse,
    LoginRequest,
    MeResponse,
    RefreshRequest,
    TokenResponse,
)
from agencyhub.backend.services.auth import AuthService

router = APIRouter()


@router.post(
    "/login",
    response_model=ApiResponse[TokenResponse],
    summary="Log in",
    description="Exchange username and password for an access/refresh token pair.",
)
async def login(
    data: LoginRequest,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[TokenResponse]:
    service = AuthService(db)
    tokens = await service.login(data.username, data.password)
    return ApiResponse(data=tokens, metadata=ResponseMetadata(request_id=request_id))


@router.post(
    "/refresh",
    response_model=ApiResponse[AccessTokenResponse],
    summary="Refresh access token",
)
async def refresh(
    data: RefreshRequest,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[AccessTokenResponse]:
    service = AuthService(db)
    token = await service.refresh(data.refresh_token)
    return ApiResponse(data=token, metadata=ResponseMetadata(request_id=request_id))


@router.get(
    "/me",
    response_model=ApiResponse[MeResponse],
    summary="Current user",
    description="The authenticated user and their permission map.",
)
async def me(user: CurrentUser) -> ApiResponse[MeResponse]:
    return ApiResponse(data=AuthService.describe(user))
