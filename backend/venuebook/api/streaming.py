"""
Server-Sent Events rendering of live queries.

Each snapshot is sent as one `data:` frame holding the full JSON result set.
The live query is closed when the client disconnects (the generator is
cancelled and the `async with` exits).
"""

import json
from typing import Type

from fastapi.responses import StreamingResponse
from pydantic import BaseModel

from venuebook.core.logging import get_logger
from venuebook.services.live_service import LiveQuery

logger = get_logger(__name__)


def format_snapshot(snapshot: list, schema: Type[BaseModel]) -> str:
    payload = [schema.model_validate(item).model_dump(mode="json") for item in snapshot]
    return f"event: snapshot\ndata: {json.dumps(payload)}\n\n"


def live_response(live: LiveQuery, schema: Type[BaseModel]) -> StreamingResponse:
    async def stream():
        async with live:
            logger.info("stream_opened")
            async for snapshot in live:
                yield format_snapshot(snapshot, schema)

    return StreamingResponse(
        stream(),
        media_type="text/event-stream",
        headers={"Cache-Control": "no-cache", "X-Accel-Buffering": "no"},
    )
