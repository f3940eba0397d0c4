"""
Pydantic schemas for request and response validation.

JSON keys are camelCase on the wire (``domainName``, ``refreshToken``,
``totalPages``); request bodies also accept the snake_case field names.
"""

import uuid
from datetime import datetime
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# =============================================================================
# Envelope
# =============================================================================


class PageMeta(CamelModel):
    page: int
    limit: int
    total: int
    total_pages: int


class ApiResponse(CamelModel, Generic[T]):
    """Every endpoint answers with this shape; unset fields are omitted."""

    success: bool = True
    message: str | None = None
    data: T | None = None
    meta: PageMeta | None = None


# =============================================================================
# Auth
# =============================================================================


class LoginRequest(CamelModel):
    email: Any = None
    password: Any = None


class RefreshRequest(CamelModel):
    refresh_token: Any = None


class UserSummary(CamelModel):
    id: uuid.UUID
    name: str
    email: str
    role: str


class TokenPairResponse(CamelModel):
    access_token: str
    refresh_token: str


class LoginResponse(TokenPairResponse):
    user: UserSummary


# =============================================================================
# Users (admin directory)
# =============================================================================


class CreateUserRequest(CamelModel):
    name: Any = None
    email: Any = None
    password: Any = None
    role: Any = None


class UserResponse(CamelModel):
    """A user record without password hash."""

    id: uuid.UUID
    name: str
    email: str
    role: str
    status: str
    created_at: datetime
    updated_at: datetime


# =============================================================================
# Domains
# =============================================================================


class AddDomainRequest(CamelModel):
    domain_name: Any = None


class UpdateDomainStatusRequest(CamelModel):
    status: Any = None


class DomainResponse(CamelModel):
    id: uuid.UUID
    domain_name: str
    user_id: uuid.UUID
    status: str
    created_at: datetime
    updated_at: datetime
