"""
Authentication endpoints: password login and token refresh.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..database import get_db
from ..schemas import (
    ApiResponse,
    LoginRequest,
    LoginResponse,
    RefreshRequest,
    TokenPairResponse,
    UserSummary,
)
from ..services import auth_service

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post(
    "/login",
    response_model=ApiResponse[LoginResponse],
    response_model_exclude_none=True,
)
def login(payload: LoginRequest, db: Session = Depends(get_db)):
    """Exchange email and password for an access/refresh token pair."""
    user, tokens = auth_service.login(db, payload)
    return ApiResponse(
        message="login successful",
        data=LoginResponse(
            access_token=tokens.access_token,
            refresh_token=tokens.refresh_token,
            user=UserSummary.model_validate(user),
        ),
    )


@router.post(
    "/refresh",
    response_model=ApiResponse[TokenPairResponse],
    response_model_exclude_none=True,
)
def refresh(payload: RefreshRequest, db: Session = Depends(get_db)):
    """Exchange a refresh token for a new token pair."""
    tokens = auth_service.refresh(db, payload.refresh_token)
    return ApiResponse(
        message="token refreshed",
        data=TokenPairResponse(
            access_token=tokens.access_token,
            refresh_token=tokens.refresh_token,
        ),
    )
