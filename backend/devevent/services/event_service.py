"""
Event service: write interceptor plus create/update/read operations.

WRITE PIPELINE
==============

Every create and update goes through EventWriteInterceptor.prepare before the
store is called:

  1. Merge the incoming fields over the stored document (updates only)
  2. EventValidator reports every shape violation at once -> ValidationError
  3. Slug is re-derived on create, or when the title changed / slug is missing
  4. date and time are re-normalized on every write, changed or not
  5. The first failing derivation (slug, then date, then time) aborts the write

Slug uniqueness is NOT checked here. Two requests deriving the same slug can
both pass the interceptor; the store's unique index rejects the second one,
which is surfaced as DuplicateSlugError.
"""

from contextlib import contextmanager
from typing import Any, Optional

from devevent.core.config import get_settings
from devevent.core.errors import (
    DuplicateKeyError,
    DuplicateSlugError,
    NotFoundError,
    StoreError,
    ValidationError,
    Violation,
)
from devevent.core.logging import get_logger
from devevent.core.metrics import record_write
from devevent.infrastructure.store import DESCENDING, DocumentStore
from devevent.models.event import EVENT_COLLECTION, EVENT_FIELDS
from devevent.validation.event import EventValidator
from devevent.validation.normalizers import derive_slug, normalize_date, normalize_time

logger = get_logger(__name__)


class EventWriteInterceptor:
    """Turns raw Event fields into a validated, normalized document."""

    def __init__(self, validator: Optional[EventValidator] = None):
        self.validator = validator or EventValidator()

    def prepare(self, fields: dict[str, Any], existing: Optional[dict[str, Any]] = None) -> dict[str, Any]:
        merged = {**existing, **fields} if existing is not None else dict(fields)
        values = self.validator.validate(merged).raise_for_violations()

        if existing is None or values["title"] != existing.get("title") or not existing.get("slug"):
            values["slug"] = derive_slug(values["title"])
        else:
            values["slug"] = existing["slug"]

        values["date"] = normalize_date(values["date"])
        values["time"] = normalize_time(values["time"])

        return {name: values[name] for name in EVENT_FIELDS}


_interceptor = EventWriteInterceptor()


@contextmanager
def _write(operation: str, slug: str):
    """Map store failures of an event write onto the error taxonomy."""
    try:
        yield
    except DuplicateKeyError as e:
        if e.field != "slug":
            record_write("event", operation, "error")
            raise
        record_write("event", operation, "conflict")
        logger.warning("event_duplicate_slug", slug=slug, operation=operation)
        raise DuplicateSlugError(slug) from e
    except StoreError as e:
        record_write("event", operation, "error")
        logger.error("event_write_failed", operation=operation, error=str(e))
        raise


def _prepare(operation: str, fields: dict[str, Any], existing: Optional[dict[str, Any]] = None) -> dict[str, Any]:
    try:
        return _interceptor.prepare(fields, existing)
    except ValidationError as e:
        record_write("event", operation, "invalid")
        logger.info(
            "event_rejected",
            operation=operation,
            errors=[v.as_dict() for v in e.violations],
        )
        raise


async def create_event(store: DocumentStore, fields: dict[str, Any]) -> dict[str, Any]:
    """Validate, derive slug/date/time, then insert a new event."""
    document = _prepare("create", fields)

    with _write("create", document["slug"]):
        event_id = await store.insert(EVENT_COLLECTION, document)
        event = await store.find_one(EVENT_COLLECTION, {"_id": event_id})

    record_write("event", "create", "success")
    logger.info("event_created", event_id=event_id, slug=document["slug"], date=document["date"])
    return event


async def update_event(store: DocumentStore, event_id: str, fields: dict[str, Any]) -> dict[str, Any]:
    """
    Apply a partial update. The slug follows the title only when the title
    changes; date and time are always re-normalized.
    """
    existing = await get_event(store, event_id)
    document = _prepare("update", fields, existing)

    with _write("update", document["slug"]):
        event = await store.replace(EVENT_COLLECTION, event_id, document)

    record_write("event", "update", "success")
    logger.info(
        "event_updated",
        event_id=event_id,
        slug=document["slug"],
        slug_changed=document["slug"] != existing.get("slug"),
    )
    return event


async def get_event(store: DocumentStore, event_id: str) -> dict[str, Any]:
    """Get a single event by ID."""
    event = await store.find_one(EVENT_COLLECTION, {"_id": event_id})
    if not event:
        raise NotFoundError(EVENT_COLLECTION, event_id)
    return event


async def get_event_by_slug(store: DocumentStore, slug: str) -> dict[str, Any]:
    """Look up an event by slug. The slug is trimmed and lowercased first."""
    if not isinstance(slug, str) or not slug.strip():
        raise ValidationError([Violation("slug", "Invalid or missing slug")])

    sanitized = slug.strip().lower()
    event = await store.find_one(EVENT_COLLECTION, {"slug": sanitized})
    if not event:
        raise NotFoundError(EVENT_COLLECTION, sanitized)
    return event


async def list_events(store: DocumentStore) -> list[dict[str, Any]]:
    """All events, newest first."""
    return await store.find(EVENT_COLLECTION, {}, sort=[("createdAt", DESCENDING)])


async def get_similar_events_by_slug(
    store: DocumentStore,
    slug: str,
    limit: Optional[int] = None,
) -> list[dict[str, Any]]:
    """
    Events sharing at least one tag with the event identified by `slug`,
    excluding that event. Unknown slugs yield an empty list.
    """
    event = await store.find_one(EVENT_COLLECTION, {"slug": slug.strip().lower()})
    if not event:
        return []

    return await store.find(
        EVENT_COLLECTION,
        {"_id": {"$ne": event["_id"]}, "tags": {"$in": event["tags"]}},
        limit=limit or get_settings().SIMILAR_EVENTS_LIMIT,
    )
