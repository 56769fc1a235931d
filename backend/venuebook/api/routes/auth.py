"""
Authentication and profile endpoints.
"""

from fastapi import APIRouter, Depends, status

from venuebook.api.deps import get_current_principal, get_repositories
from venuebook.core.identity import Principal
from venuebook.repositories import Repositories
from venuebook.schemas.user import UserCreate, UserResponse, UserLogin, Token, ProfileUpdate
from venuebook.services.auth_service import (
    authenticate_user,
    get_profile,
    register_consumer,
    update_profile,
)

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def register(user_data: UserCreate, repos: Repositories = Depends(get_repositories)):
    """Register a consumer account. Hotel accounts are provisioned by an admin."""
    return await register_consumer(repos, user_data)


@router.post("/login", response_model=Token)
async def login(login_data: UserLogin, repos: Repositories = Depends(get_repositories)):
    """Authenticate and receive a JWT access token plus the account role."""
    token, role = await authenticate_user(repos, login_data)
    return Token(access_token=token, role=role)


@router.get("/me", response_model=UserResponse)
async def read_profile(
    principal: Principal = Depends(get_current_principal),
    repos: Repositories = Depends(get_repositories),
):
    return await get_profile(repos, principal)


@router.patch("/me", response_model=UserResponse)
async def edit_profile(
    changes: ProfileUpdate,
    principal: Principal = Depends(get_current_principal),
    repos: Repositories = Depends(get_repositories),
):
    """Update name, email or profile image."""
    return await update_profile(repos, principal, changes)
