"""
Admin endpoints for hotel operator accounts.
"""

from fastapi import APIRouter, Depends, status

from venuebook.api.deps import get_current_principal, get_repositories
from venuebook.core.identity import Principal
from venuebook.repositories import Repositories
from venuebook.schemas.user import HotelAccountCreate, UserResponse
from venuebook.services.provisioning_service import (
    deactivate_hotel_account,
    list_hotel_accounts,
    provision_hotel_account,
)

router = APIRouter(prefix="/admin", tags=["Admin"])


@router.post("/hotels", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def create_hotel_account(
    account: HotelAccountCreate,
    principal: Principal = Depends(get_current_principal),
    repos: Repositories = Depends(get_repositories),
):
    """Provision a hotel operator login. 409 if the email is already registered."""
    return await provision_hotel_account(repos, principal, account)


@router.get("/hotels", response_model=list[UserResponse])
async def list_hotels(
    principal: Principal = Depends(get_current_principal),
    repos: Repositories = Depends(get_repositories),
):
    return await list_hotel_accounts(repos, principal)


@router.post("/hotels/{hotel_id}/deactivate", response_model=UserResponse)
async def deactivate_hotel(
    hotel_id: str,
    principal: Principal = Depends(get_current_principal),
    repos: Repositories = Depends(get_repositories),
):
    return await deactivate_hotel_account(repos, principal, hotel_id)
