"""
Event catalog endpoints.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status

from venuebook.api.deps import get_current_principal, get_repositories
from venuebook.api.streaming import live_response
from venuebook.core.identity import Principal
from venuebook.repositories import Repositories
from venuebook.schemas.event import EventCreate, EventUpdate, EventResponse
from venuebook.services.event_service import (
    create_event,
    delete_event,
    get_event,
    list_active_events,
    update_event,
    watch_active_events,
)

router = APIRouter(prefix="/events", tags=["Events"])


@router.post("/", response_model=EventResponse, status_code=status.HTTP_201_CREATED)
async def create_event_endpoint(
    event_data: EventCreate,
    principal: Principal = Depends(get_current_principal),
    repos: Repositories = Depends(get_repositories),
):
    """Create an event owned by the calling hotel operator."""
    return await create_event(repos, principal, event_data)


@router.get("/", response_model=list[EventResponse])
async def list_events_endpoint(
    q: Optional[str] = Query(None, max_length=100),
    repos: Repositories = Depends(get_repositories),
):
    """Active events, newest first, optionally filtered by a search string."""
    return await list_active_events(repos, q)


@router.get("/stream")
async def stream_events_endpoint(
    q: Optional[str] = Query(None, max_length=100),
    repos: Repositories = Depends(get_repositories),
):
    """Live version of the listing as Server-Sent Events."""
    return live_response(watch_active_events(repos, q), EventResponse)


@router.get("/{event_id}", response_model=EventResponse)
async def get_event_endpoint(event_id: int, repos: Repositories = Depends(get_repositories)):
    return await get_event(repos, event_id)


@router.patch("/{event_id}", response_model=EventResponse)
async def update_event_endpoint(
    event_id: int,
    changes: EventUpdate,
    principal: Principal = Depends(get_current_principal),
    repos: Repositories = Depends(get_repositories),
):
    """Partial update. Only the owning hotel may edit."""
    return await update_event(repos, principal, event_id, changes)


@router.delete("/{event_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_event_endpoint(
    event_id: int,
    principal: Principal = Depends(get_current_principal),
    repos: Repositories = Depends(get_repositories),
):
    await delete_event(repos, principal, event_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
