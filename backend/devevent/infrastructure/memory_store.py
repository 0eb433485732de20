"""
In-process document store.

Keeps collections as ordered dicts of copies. Unique indexes are enforced
under an asyncio lock, so two concurrent inserts of the same key resolve to
exactly one success and one DuplicateKeyError.
"""

import asyncio
import copy
from collections import defaultdict
from typing import Any, Optional

from devevent.core.errors import DuplicateKeyError, StoreError
from devevent.core.logging import get_logger
from devevent.infrastructure.store import DESCENDING, Document, DocumentStore, Filter, Sort

logger = get_logger(__name__)


def _equals(actual: Any, expected: Any) -> bool:
    # Array fields match when any element equals a scalar
    if isinstance(actual, list) and not isinstance(expected, list):
        return expected in actual
    return actual == expected


def _matches_condition(actual: Any, condition: Any) -> bool:
    if isinstance(condition, dict) and condition and all(k.startswith("$") for k in condition):
        for operator, operand in condition.items():
            if operator == "$ne":
                if _equals(actual, operand):
                    return False
            elif operator == "$in":
                if not any(_equals(actual, candidate) for candidate in operand):
                    return False
            else:
                raise StoreError(f"Unsupported query operator: {operator}")
        return True
    return _equals(actual, condition)


def matches(document: Document, filter: Filter) -> bool:
    return all(_matches_condition(document.get(key), condition) for key, condition in filter.items())


class MemoryDocumentStore(DocumentStore):

    def __init__(self):
        self._collections: dict[str, dict[str, Document]] = defaultdict(dict)
        self._unique: dict[str, set[str]] = defaultdict(set)
        self._lock = asyncio.Lock()

    async def insert(self, collection: str, document: Document) -> str:
        async with self._lock:
            stored = copy.deepcopy(document)
            identifier = stored.get("_id") or self.new_id()
            if identifier in self._collections[collection]:
                raise DuplicateKeyError(collection, "_id", identifier)
            self._check_unique(collection, stored, exclude=None)

            now = self.now()
            stored.update({"_id": identifier, "createdAt": now, "updatedAt": now})
            self._collections[collection][identifier] = stored
            return identifier

    async def replace(self, collection: str, identifier: str, document: Document) -> Document:
        async with self._lock:
            current = self._collections[collection].get(identifier)
            if current is None:
                raise StoreError(f"No document '{identifier}' in '{collection}'")
            stored = copy.deepcopy(document)
            self._check_unique(collection, stored, exclude=identifier)

            stored.update({
                "_id": identifier,
                "createdAt": current["createdAt"],
                "updatedAt": self.now(),
            })
            self._collections[collection][identifier] = stored
            return copy.deepcopy(stored)

    async def find_one(self, collection: str, filter: Filter) -> Optional[Document]:
        for document in self._collections[collection].values():
            if matches(document, filter):
                return copy.deepcopy(document)
        return None

    async def find(
        self,
        collection: str,
        filter: Filter,
        sort: Optional[Sort] = None,
        limit: Optional[int] = None,
    ) -> list[Document]:
        results = [d for d in self._collections[collection].values() if matches(d, filter)]
        sort = list(sort or [])
        # Ties follow insertion order in the direction of the primary key
        if sort and sort[0][1] == DESCENDING:
            results.reverse()
        # Stable sorts applied right to left so the first key wins
        for field, direction in reversed(sort):
            results.sort(
                key=lambda d: (d.get(field) is not None, d.get(field)),
                reverse=direction == DESCENDING,
            )
        documents = [copy.deepcopy(d) for d in results]
        if limit:
            documents = documents[:limit]
        return documents

    async def exists(self, collection: str, filter: Filter) -> bool:
        return any(matches(document, filter) for document in self._collections[collection].values())

    async def create_index(self, collection: str, field: str, unique: bool = False) -> None:
        if unique:
            self._unique[collection].add(field)
        logger.debug("index_created", collection=collection, field=field, unique=unique)

    def _check_unique(self, collection: str, document: Document, exclude: Optional[str]) -> None:
        for field in self._unique[collection]:
            value = document.get(field)
            if value is None:
                continue
            for identifier, other in self._collections[collection].items():
                if identifier != exclude and other.get(field) == value:
                    raise DuplicateKeyError(collection, field, value)
