"""
Pytest fixtures for the document store, HTTP client, and seed records.

Every test gets a fresh in-memory store with the production indexes
declared, so slug uniqueness behaves as it does against MongoDB.
"""

from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from devevent.main import app
from devevent.infrastructure.memory_store import MemoryDocumentStore
from devevent.services.event_service import create_event
from devevent.services.store_factory import ensure_indexes, get_store


def event_fields(**overrides) -> dict:
    fields = {
        "title": "Dev Conf 2025!",
        "description": "A day of talks about developer tooling.",
        "overview": "Developer tooling conference.",
        "image": "https://cdn.example.com/devevent/devconf.png",
        "venue": "Moscone Center",
        "location": "San Francisco, CA",
        "date": "March 5, 2025",
        "time": "9:30 AM",
        "mode": "online",
        "audience": "Developers",
        "agenda": ["Keynote", "Workshops", "Networking"],
        "organizer": "DevEvent Team",
        "tags": ["tooling", "python"],
    }
    fields.update(overrides)
    return fields


@pytest.fixture
def make_event_fields():
    return event_fields


@pytest_asyncio.fixture
async def store() -> MemoryDocumentStore:
    store = MemoryDocumentStore()
    await ensure_indexes(store)
    return store


@pytest_asyncio.fixture
async def client(store: MemoryDocumentStore) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client that overrides the store dependency with the test store."""
    app.dependency_overrides[get_store] = lambda: store

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def test_event(store: MemoryDocumentStore) -> dict:
    """A stored event with slug 'dev-conf-2025'."""
    return await create_event(store, event_fields())
