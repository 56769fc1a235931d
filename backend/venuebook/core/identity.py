"""
Roles, principals and the capability check every service goes through.
"""

from dataclasses import dataclass
from enum import Enum

from venuebook.core.errors import AuthorizationError


class Role(str, Enum):
    CONSUMER = "consumer"
    HOTEL = "hotel"
    ADMIN = "admin"


class Capability(str, Enum):
    BROWSE_EVENTS = "browse_events"
    BOOK_EVENTS = "book_events"
    SAVE_EVENTS = "save_events"
    MANAGE_OWN_EVENTS = "manage_own_events"
    REVIEW_BOOKINGS = "review_bookings"
    VIEW_HOTEL_STATS = "view_hotel_stats"
    PROVISION_HOTELS = "provision_hotels"
    UPLOAD_MEDIA = "upload_media"
    EDIT_PROFILE = "edit_profile"


_COMMON = frozenset({
    Capability.BROWSE_EVENTS,
    Capability.SAVE_EVENTS,
    Capability.UPLOAD_MEDIA,
    Capability.EDIT_PROFILE,
})


def capabilities_for(role: Role) -> frozenset:
    match role:
        case Role.CONSUMER:
            return _COMMON | {Capability.BOOK_EVENTS}
        case Role.HOTEL:
            return _COMMON | {
                Capability.MANAGE_OWN_EVENTS,
                Capability.REVIEW_BOOKINGS,
                Capability.VIEW_HOTEL_STATS,
            }
        case Role.ADMIN:
            return _COMMON | {Capability.PROVISION_HOTELS}
        case _:
            raise AuthorizationError(f"Unknown role {role!r}")


@dataclass(frozen=True)
class Principal:
    """The authenticated caller, as resolved from its stored profile."""

    id: str
    role: Role
    email: str

    def can(self, capability: Capability) -> bool:
        return capability in capabilities_for(self.role)


def ensure_capability(principal: "Principal | None", capability: Capability) -> Principal:
    if principal is None:
        raise AuthorizationError("Sign in required")
    if not principal.can(capability):
        raise AuthorizationError(f"Not permitted: {capability.value} requires a different role")
    return principal
