"""
Booking endpoints. The referenced event must exist at write time.
"""

from typing import Any

from fastapi import APIRouter, Body, Depends, status

from devevent.infrastructure.store import DocumentStore
from devevent.schemas.booking import BookingResponse
from devevent.services import booking_service
from devevent.services.store_factory import get_store

router = APIRouter(prefix="/bookings", tags=["Bookings"])


@router.post("/", response_model=BookingResponse, status_code=status.HTTP_201_CREATED)
async def create_booking_endpoint(
    fields: dict[str, Any] = Body(...),
    store: DocumentStore = Depends(get_store),
):
    """
    Book an event with `{"eventId": ..., "email": ...}`.

    Returns 422 when the body is invalid or the event does not exist.
    """
    booking = await booking_service.create_booking(store, fields)
    return BookingResponse.model_validate(booking)


@router.patch("/{booking_id}", response_model=BookingResponse)
async def update_booking_endpoint(
    booking_id: str,
    fields: dict[str, Any] = Body(...),
    store: DocumentStore = Depends(get_store),
):
    booking = await booking_service.update_booking(store, booking_id, fields)
    return BookingResponse.model_validate(booking)


@router.get("/event/{event_id}", response_model=list[BookingResponse])
async def list_event_bookings_endpoint(event_id: str, store: DocumentStore = Depends(get_store)):
    """All bookings for an event, newest first."""
    bookings = await booking_service.list_bookings_for_event(store, event_id)
    return [BookingResponse.model_validate(b) for b in bookings]
