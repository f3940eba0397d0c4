"""
Self-service endpoints for the authenticated user's domains.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ..auth.dependencies import AuthContext, require_auth
from ..database import get_db
from ..schemas import AddDomainRequest, ApiResponse, DomainResponse, UpdateDomainStatusRequest
from ..services import domain_service

router = APIRouter(prefix="/user", tags=["user"])


@router.get(
    "/domains",
    response_model=ApiResponse[list[DomainResponse]],
    response_model_exclude_none=True,
)
def get_my_domains(
    identity: AuthContext = Depends(require_auth),
    db: Session = Depends(get_db),
):
    domains = domain_service.get_my_domains(db, identity)
    return ApiResponse(data=[DomainResponse.model_validate(d) for d in domains])


@router.post(
    "/domains",
    status_code=status.HTTP_201_CREATED,
    response_model=ApiResponse[DomainResponse],
    response_model_exclude_none=True,
)
def add_my_domain(
    payload: AddDomainRequest,
    identity: AuthContext = Depends(require_auth),
    db: Session = Depends(get_db),
):
    """Register a domain; it is normalized and starts out active."""
    domain = domain_service.add_my_domain(db, identity, payload.domain_name)
    return ApiResponse(message="domain added", data=DomainResponse.model_validate(domain))


@router.patch(
    "/domains/{domain_id}",
    response_model=ApiResponse[DomainResponse],
    response_model_exclude_none=True,
)
def update_my_domain_status(
    domain_id: str,
    payload: UpdateDomainStatusRequest,
    identity: AuthContext = Depends(require_auth),
    db: Session = Depends(get_db),
):
    domain = domain_service.update_my_domain_status(db, identity, domain_id, payload.status)
    return ApiResponse(message="domain updated", data=DomainResponse.model_validate(domain))
