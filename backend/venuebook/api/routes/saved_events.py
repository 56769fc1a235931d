"""
Saved-event (bookmark) endpoints. PUT and DELETE are idempotent.
"""

from fastapi import APIRouter, Depends, Response, status

from venuebook.api.deps import get_current_principal, get_repositories
from venuebook.core.identity import Principal
from venuebook.repositories import Repositories
from venuebook.schemas.saved_event import SavedEventResponse, SavedStatus
from venuebook.services.saved_event_service import (
    is_saved,
    list_saved_events,
    remove_saved_event,
    save_event,
)

router = APIRouter(prefix="/saved-events", tags=["Saved Events"])


@router.get("/", response_model=list[SavedEventResponse])
async def list_saved(
    principal: Principal = Depends(get_current_principal),
    repos: Repositories = Depends(get_repositories),
):
    return await list_saved_events(repos, principal)


@router.get("/{event_id}", response_model=SavedStatus)
async def saved_status(
    event_id: int,
    principal: Principal = Depends(get_current_principal),
    repos: Repositories = Depends(get_repositories),
):
    return SavedStatus(event_id=event_id, saved=await is_saved(repos, principal, event_id))


@router.put("/{event_id}", response_model=SavedStatus)
async def save(
    event_id: int,
    principal: Principal = Depends(get_current_principal),
    repos: Repositories = Depends(get_repositories),
):
    await save_event(repos, principal, event_id)
    return SavedStatus(event_id=event_id, saved=True)


@router.delete("/{event_id}", status_code=status.HTTP_204_NO_CONTENT)
async def unsave(
    event_id: int,
    principal: Principal = Depends(get_current_principal),
    repos: Repositories = Depends(get_repositories),
):
    await remove_saved_event(repos, principal, event_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
