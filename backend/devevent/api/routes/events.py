"""
Event endpoints. Request parsing only; validation and normalization happen
in the event write pipeline.
"""

from typing import Any

from fastapi import APIRouter, Body, Depends, status

from devevent.infrastructure.store import DocumentStore
from devevent.schemas.event import EventListResponse, EventResponse
from devevent.services import event_service
from devevent.services.store_factory import get_store

router = APIRouter(prefix="/events", tags=["Events"])


@router.post("/", response_model=EventResponse, status_code=status.HTTP_201_CREATED)
async def create_event_endpoint(
    fields: dict[str, Any] = Body(...),
    store: DocumentStore = Depends(get_store),
):
    """Create an event. `image` is the URL of an already-uploaded asset."""
    event = await event_service.create_event(store, fields)
    return EventResponse.model_validate(event)


@router.get("/", response_model=EventListResponse)
async def list_events_endpoint(store: DocumentStore = Depends(get_store)):
    """List events, newest first."""
    events = await event_service.list_events(store)
    return EventListResponse(
        events=[EventResponse.model_validate(e) for e in events],
        total=len(events),
    )


@router.get("/{slug}", response_model=EventResponse)
async def get_event_endpoint(slug: str, store: DocumentStore = Depends(get_store)):
    event = await event_service.get_event_by_slug(store, slug)
    return EventResponse.model_validate(event)


@router.get("/{slug}/similar", response_model=list[EventResponse])
async def similar_events_endpoint(slug: str, store: DocumentStore = Depends(get_store)):
    """Events sharing at least one tag with the given event."""
    events = await event_service.get_similar_events_by_slug(store, slug)
    return [EventResponse.model_validate(e) for e in events]


@router.patch("/{event_id}", response_model=EventResponse)
async def update_event_endpoint(
    event_id: str,
    fields: dict[str, Any] = Body(...),
    store: DocumentStore = Depends(get_store),
):
    """Partial update. Changing the title re-derives the slug."""
    event = await event_service.update_event(store, event_id, fields)
    return EventResponse.model_validate(event)
