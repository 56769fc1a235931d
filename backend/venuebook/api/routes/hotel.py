"""
Hotel operator dashboard endpoints, always scoped to the caller.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from venuebook.api.deps import get_current_principal, get_repositories
from venuebook.api.streaming import live_response
from venuebook.core.identity import Principal
from venuebook.repositories import Repositories
from venuebook.schemas.booking import BookingResponse, BookingStatus
from venuebook.schemas.event import EventResponse
from venuebook.schemas.stats import HotelStats
from venuebook.services.booking_service import list_bookings_for_hotel, watch_bookings_for_hotel
from venuebook.services.event_service import list_events_by_hotel, watch_events_by_hotel
from venuebook.services.stats_service import hotel_stats

router = APIRouter(prefix="/hotel", tags=["Hotel"])


@router.get("/events", response_model=list[EventResponse])
async def my_events(
    principal: Principal = Depends(get_current_principal),
    repos: Repositories = Depends(get_repositories),
):
    return await list_events_by_hotel(repos, principal)


@router.get("/events/stream")
async def stream_my_events(
    principal: Principal = Depends(get_current_principal),
    repos: Repositories = Depends(get_repositories),
):
    return live_response(watch_events_by_hotel(repos, principal), EventResponse)


@router.get("/bookings", response_model=list[BookingResponse])
async def my_bookings(
    status: Optional[BookingStatus] = Query(None),
    q: Optional[str] = Query(None, max_length=100),
    principal: Principal = Depends(get_current_principal),
    repos: Repositories = Depends(get_repositories),
):
    """Bookings for the caller's events. `status=pending` is the review inbox."""
    return await list_bookings_for_hotel(repos, principal, status, q)


@router.get("/bookings/stream")
async def stream_my_bookings(
    status: Optional[BookingStatus] = Query(None),
    q: Optional[str] = Query(None, max_length=100),
    principal: Principal = Depends(get_current_principal),
    repos: Repositories = Depends(get_repositories),
):
    return live_response(watch_bookings_for_hotel(repos, principal, status, q), BookingResponse)


@router.get("/stats", response_model=HotelStats)
async def my_stats(
    principal: Principal = Depends(get_current_principal),
    repos: Repositories = Depends(get_repositories),
):
    return await hotel_stats(repos, principal)
