"""
Request dependencies: injected repositories and the authenticated principal.
"""

from typing import Optional

import structlog
from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from venuebook.core.identity import Principal
from venuebook.core.security import decode_access_token
from venuebook.repositories import Repositories
from venuebook.services.auth_service import principal_for
from venuebook.services.interfaces.media import MediaStore

bearer_scheme = HTTPBearer(auto_error=False)


def get_repositories(request: Request) -> Repositories:
    return request.app.state.repositories


def get_media_store(request: Request) -> MediaStore:
    return request.app.state.media_store


async def get_optional_principal(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    repos: Repositories = Depends(get_repositories),
) -> Optional[Principal]:
    """Resolve the bearer token to a Principal, or None when no token was sent."""
    if credentials is None:
        return None

    unauthorized = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    user_id = decode_access_token(credentials.credentials)
    if user_id is None:
        raise unauthorized

    profile = await repos.profiles.get(user_id)
    if profile is None:
        raise unauthorized
    if not profile.is_active:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Account is deactivated")

    principal = principal_for(profile)
    structlog.contextvars.bind_contextvars(user_id=principal.id, role=principal.role.value)
    return principal


async def get_current_principal(
    principal: Optional[Principal] = Depends(get_optional_principal),
) -> Principal:
    if principal is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return principal
