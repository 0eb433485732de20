"""
Document store interface.
The write pipeline only depends on this contract, never on a driver.
"""

from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, Optional, Sequence

from bson import ObjectId

Document = dict[str, Any]
Filter = dict[str, Any]
Sort = Sequence[tuple[str, int]]

ASCENDING = 1
DESCENDING = -1


class DocumentStore(ABC):
    """
    Interface for document stores backing the persistence core.

    Implementations:
    - MemoryDocumentStore: in-process dicts, for tests and local runs
    - MongoDocumentStore: MongoDB through pymongo's async client

    Identifiers are 24-hex ObjectId strings. `createdAt` and `updatedAt`
    are managed here, not by callers. Driver failures surface as StoreError,
    unique index violations as DuplicateKeyError.
    """

    @abstractmethod
    async def insert(self, collection: str, document: Document) -> str:
        """Insert `document` and return its identifier."""

    @abstractmethod
    async def replace(self, collection: str, identifier: str, document: Document) -> Document:
        """Replace the document stored under `identifier` and return the stored copy."""

    @abstractmethod
    async def find_one(self, collection: str, filter: Filter) -> Optional[Document]:
        pass

    @abstractmethod
    async def find(
        self,
        collection: str,
        filter: Filter,
        sort: Optional[Sort] = None,
        limit: Optional[int] = None,
    ) -> list[Document]:
        pass

    @abstractmethod
    async def exists(self, collection: str, filter: Filter) -> bool:
        """Existence check without fetching the whole document."""

    @abstractmethod
    async def create_index(self, collection: str, field: str, unique: bool = False) -> None:
        pass

    async def close(self) -> None:
        pass

    def is_valid_id(self, value: Any) -> bool:
        return isinstance(value, str) and ObjectId.is_valid(value)

    @staticmethod
    def new_id() -> str:
        return str(ObjectId())

    @staticmethod
    def now() -> datetime:
        return datetime.now(timezone.utc)
