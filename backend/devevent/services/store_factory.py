"""
Document store factory.
Configures which store backend the application talks to.
"""

from typing import Optional

from devevent.core.config import get_settings
from devevent.core.logging import get_logger
from devevent.infrastructure.memory_store import MemoryDocumentStore
from devevent.infrastructure.store import DocumentStore
from devevent.models import INDEXES

logger = get_logger(__name__)


def create_store() -> DocumentStore:
    """
    Build the configured store.

    Backend selection via STORE_BACKEND:
    - memory: MemoryDocumentStore (default, tests and local runs)
    - mongo: MongoDocumentStore (MONGODB_URL / MONGODB_DB)
    """
    backend = get_settings().STORE_BACKEND

    if backend == 'mongo':
        from devevent.infrastructure.mongo_store import MongoDocumentStore
        return MongoDocumentStore()
    if backend == 'memory':
        return MemoryDocumentStore()
    raise ValueError(f"Unknown STORE_BACKEND: {backend}")


async def ensure_indexes(store: DocumentStore) -> None:
    """Declare the unique slug index and the booking lookup index."""
    for collection, indexes in INDEXES.items():
        for field, unique in indexes:
            await store.create_index(collection, field, unique=unique)


# Singleton instance
_store: Optional[DocumentStore] = None


def get_store() -> DocumentStore:
    """Get document store singleton. Used as a FastAPI dependency."""
    global _store
    if _store is None:
        _store = create_store()
        logger.info("store_created", backend=get_settings().STORE_BACKEND)
    return _store


async def close_store() -> None:
    global _store
    if _store is not None:
        await _store.close()
        _store = None
