"""
Tests for saved events (per-consumer bookmarks).
"""

import pytest
from httpx import AsyncClient

from venuebook.services.saved_event_service import is_saved, list_saved_events, remove_saved_event, save_event


@pytest.mark.asyncio
async def test_save_is_idempotent(repos, consumer, test_event):
    await save_event(repos, consumer, test_event.id)
    await save_event(repos, consumer, test_event.id)

    saved = await list_saved_events(repos, consumer)
    assert [s.event_id for s in saved] == [test_event.id]
    assert saved[0].event_title == "Jazz Night"
    assert saved[0].event_categories == "Music, Entertainment"


@pytest.mark.asyncio
async def test_remove_is_idempotent(repos, consumer, test_event):
    await save_event(repos, consumer, test_event.id)
    await remove_saved_event(repos, consumer, test_event.id)
    await remove_saved_event(repos, consumer, test_event.id)

    assert await is_saved(repos, consumer, test_event.id) is False
    assert await list_saved_events(repos, consumer) == []


@pytest.mark.asyncio
async def test_saved_sets_are_per_consumer(repos, consumer, other_consumer, test_event):
    await save_event(repos, consumer, test_event.id)

    assert await is_saved(repos, consumer, test_event.id) is True
    assert await is_saved(repos, other_consumer, test_event.id) is False
    assert await list_saved_events(repos, other_consumer) == []


@pytest.mark.asyncio
async def test_save_over_http(client: AsyncClient, consumer_headers, test_event):
    response = await client.get(f"/api/v1/saved-events/{test_event.id}", headers=consumer_headers)
    assert response.json() == {"event_id": test_event.id, "saved": False}

    response = await client.put(f"/api/v1/saved-events/{test_event.id}", headers=consumer_headers)
    assert response.status_code == 200
    assert response.json()["saved"] is True

    response = await client.get("/api/v1/saved-events/", headers=consumer_headers)
    assert [s["event_id"] for s in response.json()] == [test_event.id]

    response = await client.delete(f"/api/v1/saved-events/{test_event.id}", headers=consumer_headers)
    assert response.status_code == 204

    response = await client.get(f"/api/v1/saved-events/{test_event.id}", headers=consumer_headers)
    assert response.json()["saved"] is False


@pytest.mark.asyncio
async def test_save_unknown_event(client: AsyncClient, consumer_headers):
    response = await client.put("/api/v1/saved-events/99999", headers=consumer_headers)
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_saved_events_require_login(client: AsyncClient, test_event):
    response = await client.put(f"/api/v1/saved-events/{test_event.id}")
    assert response.status_code == 401
