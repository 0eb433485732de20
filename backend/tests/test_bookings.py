"""
Tests for booking validation and referential integrity.
"""

import pytest
from bson import ObjectId
from httpx import AsyncClient
from prometheus_client import REGISTRY

from devevent.core.errors import NotFoundError, ReferentialIntegrityError, StoreError, ValidationError
from devevent.main import app
from devevent.models.booking import BOOKING_COLLECTION
from devevent.models.event import EVENT_COLLECTION
from devevent.services import booking_service, event_service
from devevent.services.booking_service import BookingWriteInterceptor, ReferentialIntegrityChecker
from devevent.services.store_factory import get_store


@pytest.mark.asyncio
async def test_create_booking(store, test_event):
    booking = await booking_service.create_booking(
        store, {"eventId": test_event["_id"], "email": "  Ada@Example.com "}
    )
    assert booking["eventId"] == test_event["_id"]
    assert booking["email"] == "ada@example.com"
    assert booking["createdAt"]


@pytest.mark.asyncio
async def test_booking_ignores_unknown_fields(store, test_event):
    booking = await booking_service.create_booking(
        store, {"eventId": test_event["_id"], "slug": test_event["slug"], "email": "ada@example.com"}
    )
    assert "slug" not in booking


@pytest.mark.asyncio
async def test_booking_unknown_event_is_not_written(store):
    with pytest.raises(ReferentialIntegrityError, match="Referenced event does not exist"):
        await booking_service.create_booking(store, {"eventId": str(ObjectId()), "email": "ada@example.com"})
    assert await store.find(BOOKING_COLLECTION, {}) == []


@pytest.mark.asyncio
async def test_invalid_booking_skips_existence_check(store):
    class CountingStore(type(store)):
        calls = 0

        async def exists(self, collection, filter):
            CountingStore.calls += 1
            return await super().exists(collection, filter)

    counting = CountingStore()
    with pytest.raises(ValidationError):
        await booking_service.create_booking(counting, {"eventId": "not-an-id", "email": "nope"})
    assert CountingStore.calls == 0


@pytest.mark.asyncio
async def test_checker_uses_exists(store, test_event):
    checker = ReferentialIntegrityChecker(store)
    assert await checker.exists(test_event["_id"])
    assert not await checker.exists(str(ObjectId()))


@pytest.mark.asyncio
async def test_update_email_skips_reference_check(store, test_event):
    booking = await booking_service.create_booking(store, {"eventId": test_event["_id"], "email": "ada@example.com"})

    # The event disappears; only eventId changes trigger a re-check
    store._collections[EVENT_COLLECTION].clear()
    updated = await booking_service.update_booking(store, booking["_id"], {"email": "GRACE@example.com"})

    assert updated["email"] == "grace@example.com"
    assert updated["eventId"] == test_event["_id"]


@pytest.mark.asyncio
async def test_update_event_reference_is_checked(store, test_event, make_event_fields):
    booking = await booking_service.create_booking(store, {"eventId": test_event["_id"], "email": "ada@example.com"})

    with pytest.raises(ReferentialIntegrityError):
        await booking_service.update_booking(store, booking["_id"], {"eventId": str(ObjectId())})

    other = await event_service.create_event(store, make_event_fields(title="PyData"))
    updated = await booking_service.update_booking(store, booking["_id"], {"eventId": other["_id"]})
    assert updated["eventId"] == other["_id"]


@pytest.mark.asyncio
async def test_update_missing_booking(store):
    with pytest.raises(NotFoundError):
        await booking_service.update_booking(store, str(ObjectId()), {"email": "ada@example.com"})


@pytest.mark.asyncio
async def test_store_error_from_existence_check_propagates(store):
    class UnreachableStore(type(store)):
        async def exists(self, collection, filter):
            raise StoreError("timed out")

    interceptor = BookingWriteInterceptor(UnreachableStore())
    with pytest.raises(StoreError, match="timed out"):
        await interceptor.prepare({"eventId": str(ObjectId()), "email": "ada@example.com"})


@pytest.mark.asyncio
async def test_list_bookings_for_event(store, test_event):
    for email in ("a@example.com", "b@example.com"):
        await booking_service.create_booking(store, {"eventId": test_event["_id"], "email": email})

    bookings = await booking_service.list_bookings_for_event(store, test_event["_id"])
    assert [b["email"] for b in bookings] == ["b@example.com", "a@example.com"]


@pytest.mark.asyncio
async def test_create_booking_endpoint(client: AsyncClient, test_event):
    response = await client.post(
        "/api/v1/bookings/",
        json={"eventId": test_event["_id"], "slug": test_event["slug"], "email": "Ada@Example.com"},
    )
    assert response.status_code == 201
    data = response.json()
    assert data["eventId"] == test_event["_id"]
    assert data["email"] == "ada@example.com"


@pytest.mark.asyncio
async def test_create_booking_endpoint_unknown_event(client: AsyncClient):
    response = await client.post(
        "/api/v1/bookings/",
        json={"eventId": str(ObjectId()), "email": "ada@example.com"},
    )
    assert response.status_code == 422
    assert response.json()["message"] == "Referenced event does not exist"


@pytest.mark.asyncio
async def test_create_booking_endpoint_invalid(client: AsyncClient):
    response = await client.post("/api/v1/bookings/", json={"eventId": "42", "email": "ada"})
    assert response.status_code == 422
    assert [e["field"] for e in response.json()["errors"]] == ["eventId", "email"]


@pytest.mark.asyncio
async def test_list_event_bookings_endpoint(client: AsyncClient, test_event):
    await client.post("/api/v1/bookings/", json={"eventId": test_event["_id"], "email": "ada@example.com"})
    response = await client.get(f"/api/v1/bookings/event/{test_event['_id']}")
    assert response.status_code == 200
    assert len(response.json()) == 1


def _sample(name: str, labels: dict) -> float:
    return REGISTRY.get_sample_value(name, labels) or 0.0


@pytest.mark.asyncio
async def test_missing_event_is_not_counted_as_validation_failure(store):
    dangling = {"entity": "booking", "operation": "create", "outcome": "dangling_reference"}
    failures_before = _sample("devevent_validation_failures_total", {"entity": "booking"})
    dangling_before = _sample("devevent_writes_total", dangling)

    with pytest.raises(ReferentialIntegrityError):
        await booking_service.create_booking(store, {"eventId": str(ObjectId()), "email": "ada@example.com"})

    assert _sample("devevent_validation_failures_total", {"entity": "booking"}) == failures_before
    assert _sample("devevent_writes_total", dangling) == dangling_before + 1


@pytest.mark.asyncio
async def test_update_booking_endpoint(client: AsyncClient, test_event):
    created = await client.post("/api/v1/bookings/", json={"eventId": test_event["_id"], "email": "ada@example.com"})
    booking_id = created.json()["id"]

    response = await client.patch(f"/api/v1/bookings/{booking_id}", json={"email": " Grace@Example.com "})
    assert response.status_code == 200
    assert response.json()["email"] == "grace@example.com"
    assert response.json()["eventId"] == test_event["_id"]

    response = await client.patch(f"/api/v1/bookings/{booking_id}", json={"eventId": str(ObjectId())})
    assert response.status_code == 422
    assert response.json()["message"] == "Referenced event does not exist"


@pytest.mark.asyncio
async def test_update_booking_endpoint_not_found(client: AsyncClient):
    response = await client.patch(f"/api/v1/bookings/{ObjectId()}", json={"email": "ada@example.com"})
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_store_failure_returns_503(client: AsyncClient, store, test_event):
    class UnreachableStore(type(store)):
        async def exists(self, collection, filter):
            raise StoreError("timed out")

    app.dependency_overrides[get_store] = lambda: UnreachableStore()
    response = await client.post("/api/v1/bookings/", json={"eventId": test_event["_id"], "email": "ada@example.com"})
    assert response.status_code == 503
    assert response.json() == {"message": "Storage unavailable", "error": "timed out"}
