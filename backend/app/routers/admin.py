"""
Admin directory endpoints.

Every route requires an access token with the admin role.
"""

from typing import Any

from fastapi import APIRouter, Body, Depends, Query, status
from sqlalchemy.orm import Session

from core.constants import DEFAULT_PAGE, DEFAULT_PAGE_SIZE

from ..auth.dependencies import require_admin
from ..database import get_db
from ..schemas import ApiResponse, CreateUserRequest, PageMeta, UserResponse
from ..services import admin_service

router = APIRouter(
    prefix="/admin",
    tags=["admin"],
    dependencies=[Depends(require_admin)],
)


@router.post(
    "/create",
    status_code=status.HTTP_201_CREATED,
    response_model=ApiResponse[UserResponse],
    response_model_exclude_none=True,
)
def create_user(payload: CreateUserRequest, db: Session = Depends(get_db)):
    """Create a user. Any role other than "admin" is stored as "user"."""
    user = admin_service.create_user(db, payload)
    return ApiResponse(message="user created", data=UserResponse.model_validate(user))


@router.put(
    "/{user_id}",
    response_model=ApiResponse[UserResponse],
    response_model_exclude_none=True,
)
def update_user(
    user_id: str,
    payload: dict[str, Any] = Body(...),
    db: Session = Depends(get_db),
):
    """Update name, email, role, password or status of a user."""
    user = admin_service.update_user(db, user_id, payload)
    return ApiResponse(message="user updated", data=UserResponse.model_validate(user))


@router.get(
    "",
    response_model=ApiResponse[list[UserResponse]],
    response_model_exclude_none=True,
)
def list_users(
    page: int = Query(DEFAULT_PAGE),
    limit: int = Query(DEFAULT_PAGE_SIZE),
    search: str | None = Query(None),
    role: str | None = Query(None),
    db: Session = Depends(get_db),
):
    """List users newest first, optionally filtered by search term and role."""
    result = admin_service.list_users(db, page=page, limit=limit, search=search, role=role)
    return ApiResponse(
        data=[UserResponse.model_validate(user) for user in result.items],
        meta=PageMeta(
            page=result.page,
            limit=result.limit,
            total=result.total,
            total_pages=result.total_pages,
        ),
    )


@router.delete(
    "/{user_id}",
    response_model=ApiResponse[UserResponse],
    response_model_exclude_none=True,
)
def delete_user(user_id: str, db: Session = Depends(get_db)):
    """Delete a user and the domains they own. Irreversible."""
    user = admin_service.delete_user(db, user_id)
    return ApiResponse(message="user deleted", data=UserResponse.model_validate(user))
