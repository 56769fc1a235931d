"""
Per-hotel dashboard counts, recomputed on every request.
"""

from venuebook.core.identity import Capability, Principal, ensure_capability
from venuebook.repositories import Repositories
from venuebook.schemas.booking import BookingStatus
from venuebook.schemas.stats import HotelStats


async def hotel_stats(repos: Repositories, principal: Principal) -> HotelStats:
    ensure_capability(principal, Capability.VIEW_HOTEL_STATS)

    return HotelStats(
        total_events=await repos.events.count_by_hotel(principal.id),
        total_bookings=await repos.bookings.count_for_hotel(principal.id),
        approved_bookings=await repos.bookings.count_for_hotel(
            principal.id, status=BookingStatus.CONFIRMED.value
        ),
    )
