"""
Server-sent refresh events for open training plan views.
"""

import asyncio
import json
from typing import AsyncIterator
from uuid import UUID

from fastapi import APIRouter, HTTPException, Request, status
from fastapi.responses import StreamingResponse

from pawplan.api.deps import CurrentUser, PetRepo
from pawplan.core.exceptions import StorageError
from pawplan.services.realtime_service import plan_events

router = APIRouter()

KEEPALIVE_SECONDS = 15


def _sse(data: str) -> str:
    return f"data: {data}\n\n"


@router.get("/pets/{pet_id}/stream")
async def stream_plan_events(
    pet_id: UUID,
    request: Request,
    user: CurrentUser,
    pet_repo: PetRepo,
) -> StreamingResponse:
    """
    Stream refresh events for one pet's training plan.

    The first event confirms the subscription. Each later event names the
    days whose tasks changed; the view reloads the pet's tasks on receipt.
    """
    try:
        pet = await pet_repo.get(user.id, pet_id)
    except StorageError as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=e.message)
    if not pet:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Pet {pet_id} not found")

    queue = plan_events.subscribe(pet_id)

    async def events() -> AsyncIterator[str]:
        try:
            yield _sse(json.dumps({"type": "subscribed", "pet_id": str(pet_id)}))
            while not await request.is_disconnected():
                try:
                    event = await asyncio.wait_for(queue.get(), timeout=KEEPALIVE_SECONDS)
                except asyncio.TimeoutError:
                    yield ": keep-alive\n\n"
                    continue
                yield _sse(event.model_dump_json())
        finally:
            plan_events.unsubscribe(pet_id, queue)

    return StreamingResponse(events(), media_type="text/event-stream")
