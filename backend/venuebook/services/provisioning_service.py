"""
Hotel account provisioning.
Hotel operators cannot sign themselves up; an admin creates their accounts.
"""

from venuebook.core.errors import NotFoundError
from venuebook.core.identity import Capability, Principal, Role, ensure_capability
from venuebook.core.logging import get_logger
from venuebook.models.user import UserProfile
from venuebook.repositories import Repositories
from venuebook.schemas.user import HotelAccountCreate
from venuebook.services.auth_service import create_account

logger = get_logger(__name__)


async def provision_hotel_account(
    repos: Repositories,
    admin: Principal,
    account: HotelAccountCreate,
) -> UserProfile:
    """Create a hotel operator. Raises ConflictError if the email is registered."""
    ensure_capability(admin, Capability.PROVISION_HOTELS)

    profile = await create_account(repos, account, Role.HOTEL)
    logger.info("hotel_provisioned", hotel_id=profile.id, admin_id=admin.id)
    return profile


async def list_hotel_accounts(repos: Repositories, admin: Principal) -> list[UserProfile]:
    ensure_capability(admin, Capability.PROVISION_HOTELS)
    return await repos.profiles.list_by_role(Role.HOTEL.value)


async def deactivate_hotel_account(repos: Repositories, admin: Principal, hotel_id: str) -> UserProfile:
    """Soft-disable a hotel account; its events and bookings stay in place."""
    ensure_capability(admin, Capability.PROVISION_HOTELS)

    profile = await repos.profiles.get(hotel_id)
    if profile is None or profile.role != Role.HOTEL.value:
        raise NotFoundError(f"Hotel account {hotel_id} not found")

    if not profile.is_active:
        return profile

    profile = await repos.profiles.update_fields(hotel_id, {"is_active": False})
    logger.info("hotel_deactivated", hotel_id=hotel_id, admin_id=admin.id)
    return profile
