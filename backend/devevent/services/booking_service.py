"""
Booking service with application-side referential integrity.

REFERENTIAL INTEGRITY
=====================

The document store has no foreign keys. A booking's `eventId` is a weak
reference, checked with a single existence query against the events
collection:

  - on every create
  - on updates that change `eventId`

The check and the insert are two separate store calls. An event deleted in
between leaves a dangling booking; multi-document transactions are not
assumed, so that window is accepted.
"""

from typing import Any, Optional

from devevent.core.errors import NotFoundError, ReferentialIntegrityError, StoreError, ValidationError
from devevent.core.logging import get_logger
from devevent.core.metrics import record_write
from devevent.infrastructure.store import DESCENDING, DocumentStore
from devevent.models.booking import BOOKING_COLLECTION, BOOKING_FIELDS
from devevent.models.event import EVENT_COLLECTION
from devevent.validation.booking import BookingValidator

logger = get_logger(__name__)


class ReferentialIntegrityChecker:
    """Confirms that a referenced event exists."""

    def __init__(self, store: DocumentStore):
        self.store = store

    async def exists(self, event_id: str) -> bool:
        return await self.store.exists(EVENT_COLLECTION, {"_id": event_id})

    async def ensure(self, event_id: str) -> None:
        if not await self.exists(event_id):
            raise ReferentialIntegrityError("Referenced event does not exist")


class BookingWriteInterceptor:
    """Validates a booking and checks its event reference before storage."""

    def __init__(self, store: DocumentStore, validator: Optional[BookingValidator] = None):
        self.validator = validator or BookingValidator(store.is_valid_id)
        self.integrity = ReferentialIntegrityChecker(store)

    async def prepare(self, fields: dict[str, Any], existing: Optional[dict[str, Any]] = None) -> dict[str, Any]:
        merged = {**existing, **fields} if existing is not None else dict(fields)
        values = self.validator.validate(merged).raise_for_violations()

        if existing is None or values["eventId"] != existing.get("eventId"):
            await self.integrity.ensure(values["eventId"])

        return {name: values[name] for name in BOOKING_FIELDS}


async def _prepare(
    store: DocumentStore,
    operation: str,
    fields: dict[str, Any],
    existing: Optional[dict[str, Any]] = None,
) -> dict[str, Any]:
    try:
        return await BookingWriteInterceptor(store).prepare(fields, existing)
    except ValidationError as e:
        record_write("booking", operation, "invalid")
        logger.info(
            "booking_rejected",
            operation=operation,
            errors=[v.as_dict() for v in e.violations],
        )
        raise
    except ReferentialIntegrityError:
        record_write("booking", operation, "dangling_reference")
        logger.warning("booking_event_missing", operation=operation, event_id=fields.get("eventId"))
        raise
    except StoreError:
        record_write("booking", operation, "error")
        raise


async def create_booking(store: DocumentStore, fields: dict[str, Any]) -> dict[str, Any]:
    """Book an event. Fails with ReferentialIntegrityError if the event is missing."""
    document = await _prepare(store, "create", fields)

    try:
        booking_id = await store.insert(BOOKING_COLLECTION, document)
        booking = await store.find_one(BOOKING_COLLECTION, {"_id": booking_id})
    except StoreError as e:
        record_write("booking", "create", "error")
        logger.error("booking_write_failed", operation="create", error=str(e))
        raise

    record_write("booking", "create", "success")
    logger.info("booking_created", booking_id=booking_id, event_id=document["eventId"])
    return booking


async def update_booking(store: DocumentStore, booking_id: str, fields: dict[str, Any]) -> dict[str, Any]:
    """Update a booking. The event reference is re-checked only if it changes."""
    existing = await store.find_one(BOOKING_COLLECTION, {"_id": booking_id})
    if not existing:
        raise NotFoundError(BOOKING_COLLECTION, booking_id)

    document = await _prepare(store, "update", fields, existing)

    try:
        booking = await store.replace(BOOKING_COLLECTION, booking_id, document)
    except StoreError as e:
        record_write("booking", "update", "error")
        logger.error("booking_write_failed", operation="update", error=str(e))
        raise

    record_write("booking", "update", "success")
    logger.info(
        "booking_updated",
        booking_id=booking_id,
        event_id=document["eventId"],
        event_changed=document["eventId"] != existing.get("eventId"),
    )
    return booking


async def list_bookings_for_event(store: DocumentStore, event_id: str) -> list[dict[str, Any]]:
    """All bookings referencing an event, newest first."""
    return await store.find(
        BOOKING_COLLECTION,
        {"eventId": event_id},
        sort=[("createdAt", DESCENDING)],
    )
