"""
Local auth provider: consumer self-registration, login, profile reads and
updates, and the bootstrap admin account.
"""

import asyncio
from typing import Optional

from fastapi import HTTPException, status

from venuebook.core.errors import ConflictError, NotFoundError, ValidationError
from venuebook.core.identity import Capability, Principal, Role, ensure_capability
from venuebook.core.logging import get_logger
from venuebook.core.security import hash_password, verify_password, create_access_token
from venuebook.models.user import UserProfile
from venuebook.repositories import Repositories
from venuebook.schemas.user import UserCreate, UserLogin, ProfileUpdate

logger = get_logger(__name__)


def _require_text(value: Optional[str], field: str) -> str:
    if value is None or not value.strip():
        raise ValidationError(field)
    return value.strip()


def check_new_account(data: UserCreate) -> None:
    """Field checks shared by self-registration and hotel provisioning."""
    _require_text(data.full_name, "full_name")
    _require_text(data.phone_number, "phone_number")
    if not data.password:
        raise ValidationError("password")
    if len(data.password.encode("utf-8")) > 72:
        # bcrypt only hashes the first 72 bytes
        raise ValidationError("password", "password must be at most 72 bytes")
    if data.confirm_password is not None and data.confirm_password != data.password:
        raise ValidationError("confirm_password", "Passwords do not match")


async def create_account(repos: Repositories, data: UserCreate, role: Role) -> UserProfile:
    """Create credential + profile. Raises ConflictError if the email is taken."""
    check_new_account(data)

    email = data.email.strip().lower()
    if await repos.profiles.get_by_email(email):
        logger.warning("registration_failed", reason="email_exists", email=email)
        raise ConflictError("Email already registered")

    # bcrypt is CPU bound; keep it off the event loop serving live streams
    hashed = await asyncio.to_thread(hash_password, data.password)
    profile = UserProfile(
        full_name=data.full_name.strip(),
        email=email,
        phone_number=data.phone_number.strip(),
        role=role.value,
        hashed_password=hashed,
        is_active=True,
    )
    profile = await repos.profiles.add(profile)
    logger.info("account_created", user_id=profile.id, role=profile.role)
    return profile


async def register_consumer(repos: Repositories, data: UserCreate) -> UserProfile:
    """Self-registration always yields a consumer."""
    return await create_account(repos, data, Role.CONSUMER)


async def authenticate_user(repos: Repositories, login_data: UserLogin) -> tuple[str, Role]:
    """
    Authenticate user and return a JWT access token with the account's role.
    Raises 401 if credentials are invalid.
    """
    user = await repos.profiles.get_by_email(login_data.email.strip())

    valid = user is not None and await asyncio.to_thread(
        verify_password, login_data.password, user.hashed_password
    )
    if not valid:
        logger.warning("login_failed", email=login_data.email)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Account is deactivated",
        )

    token = create_access_token(data={"sub": user.id})
    logger.info("user_logged_in", user_id=user.id, role=user.role)
    return token, Role(user.role)


async def get_profile(repos: Repositories, principal: Principal) -> UserProfile:
    profile = await repos.profiles.get(principal.id)
    if profile is None:
        raise NotFoundError("Profile not found")
    return profile


async def update_profile(
    repos: Repositories,
    principal: Principal,
    changes: ProfileUpdate,
) -> UserProfile:
    """Partial update of name, email and profile image."""
    ensure_capability(principal, Capability.EDIT_PROFILE)

    values = {}
    supplied = changes.model_dump(exclude_unset=True)

    if "full_name" in supplied:
        values["full_name"] = _require_text(supplied["full_name"], "full_name")
    if "email" in supplied:
        email = _require_text(supplied["email"], "email").lower()
        existing = await repos.profiles.get_by_email(email)
        if existing and existing.id != principal.id:
            raise ConflictError("Email already registered")
        values["email"] = email
    if "profile_image_url" in supplied:
        url = supplied["profile_image_url"]
        values["profile_image_url"] = url.strip() if url and url.strip() else None

    if not values:
        return await get_profile(repos, principal)

    profile = await repos.profiles.update_fields(principal.id, values)
    if profile is None:
        raise NotFoundError("Profile not found")

    logger.info("profile_updated", user_id=profile.id, fields=sorted(values))
    return profile


async def ensure_bootstrap_admin(
    repos: Repositories,
    email: Optional[str],
    password: Optional[str],
    full_name: str = "Administrator",
) -> Optional[UserProfile]:
    """Create the admin account on first start. No-op when unset or present."""
    if not email or not password:
        return None

    existing = await repos.profiles.get_by_email(email)
    if existing:
        if existing.role != Role.ADMIN.value:
            logger.error("bootstrap_admin_email_taken", email=email, role=existing.role)
        return existing

    admin = await create_account(
        repos,
        UserCreate(full_name=full_name, email=email, phone_number="-", password=password),
        Role.ADMIN,
    )
    logger.info("bootstrap_admin_created", user_id=admin.id)
    return admin


def principal_for(profile: UserProfile) -> Principal:
    """The role always comes from the stored profile, never from the token."""
    return Principal(id=profile.id, role=Role(profile.role), email=profile.email)
