"""
Booking endpoints: consumers create and follow their bookings, hotels
confirm or reject them.
"""

from fastapi import APIRouter, Depends, status

from venuebook.api.deps import get_current_principal, get_repositories
from venuebook.api.streaming import live_response
from venuebook.core.identity import Principal
from venuebook.repositories import Repositories
from venuebook.schemas.booking import BookingCreate, BookingResponse, BookingStatusUpdate
from venuebook.services.booking_service import (
    create_booking,
    list_bookings_for_consumer,
    transition_status,
    watch_bookings_for_consumer,
)

router = APIRouter(prefix="/bookings", tags=["Bookings"])


@router.post("/", response_model=BookingResponse, status_code=status.HTTP_201_CREATED)
async def create_booking_endpoint(
    booking_data: BookingCreate,
    principal: Principal = Depends(get_current_principal),
    repos: Repositories = Depends(get_repositories),
):
    """Request a booking. It starts pending until the hotel reviews it."""
    return await create_booking(repos, principal, booking_data)


@router.get("/me", response_model=list[BookingResponse])
async def list_my_bookings(
    principal: Principal = Depends(get_current_principal),
    repos: Repositories = Depends(get_repositories),
):
    return await list_bookings_for_consumer(repos, principal)


@router.get("/me/stream")
async def stream_my_bookings(
    principal: Principal = Depends(get_current_principal),
    repos: Repositories = Depends(get_repositories),
):
    return live_response(watch_bookings_for_consumer(repos, principal), BookingResponse)


@router.patch("/{booking_id}/status", response_model=BookingResponse)
async def change_booking_status(
    booking_id: int,
    update: BookingStatusUpdate,
    principal: Principal = Depends(get_current_principal),
    repos: Repositories = Depends(get_repositories),
):
    """
    Confirm or reject a pending booking.

    409 with code `invalid_transition` means the booking was already reviewed,
    possibly from another session.
    """
    return await transition_status(repos, principal, booking_id, update.status)
