"""
MongoDB document store through pymongo's asyncio client.

Identifiers cross this boundary as 24-hex strings and are stored as
ObjectId. pymongo errors are mapped onto StoreError / DuplicateKeyError.
"""

from typing import Any, Optional

from bson import ObjectId
from pymongo import AsyncMongoClient, ReturnDocument
from pymongo.errors import DuplicateKeyError as MongoDuplicateKeyError
from pymongo.errors import PyMongoError

from devevent.core.config import get_settings
from devevent.core.errors import DuplicateKeyError, StoreError
from devevent.core.logging import get_logger
from devevent.core.metrics import store_latency
from devevent.infrastructure.store import Document, DocumentStore, Filter, Sort

logger = get_logger(__name__)


def _to_object_id(value: Any) -> Any:
    if isinstance(value, str) and ObjectId.is_valid(value):
        return ObjectId(value)
    return value


def _encode_filter(filter: Filter) -> Filter:
    encoded = dict(filter)
    condition = encoded.get("_id")
    if isinstance(condition, dict):
        encoded["_id"] = {
            operator: [_to_object_id(v) for v in operand] if isinstance(operand, list) else _to_object_id(operand)
            for operator, operand in condition.items()
        }
    elif condition is not None:
        encoded["_id"] = _to_object_id(condition)
    return encoded


def _decode(document: Optional[Document]) -> Optional[Document]:
    if document is not None and isinstance(document.get("_id"), ObjectId):
        document["_id"] = str(document["_id"])
    return document


def _duplicate_key(collection: str, error: MongoDuplicateKeyError) -> DuplicateKeyError:
    key_value = (error.details or {}).get("keyValue") or {}
    field, value = next(iter(key_value.items()), (None, None))
    return DuplicateKeyError(collection, field, value)


class MongoDocumentStore(DocumentStore):

    def __init__(self, url: Optional[str] = None, database: Optional[str] = None):
        settings = get_settings()
        self.client = AsyncMongoClient(
            url or settings.MONGODB_URL,
            serverSelectionTimeoutMS=settings.MONGODB_TIMEOUT_MS,
            tz_aware=True,
        )
        self.db = self.client[database or settings.MONGODB_DB]

    async def insert(self, collection: str, document: Document) -> str:
        now = self.now()
        stored = {**document, "createdAt": now, "updatedAt": now}
        if "_id" in stored:
            stored["_id"] = _to_object_id(stored["_id"])
        try:
            with store_latency.labels(operation="insert").time():
                result = await self.db[collection].insert_one(stored)
        except MongoDuplicateKeyError as e:
            raise _duplicate_key(collection, e) from e
        except PyMongoError as e:
            logger.error("store_insert_failed", collection=collection, error=str(e))
            raise StoreError(str(e)) from e
        return str(result.inserted_id)

    async def replace(self, collection: str, identifier: str, document: Document) -> Document:
        stored = {k: v for k, v in document.items() if k not in ("_id", "createdAt")}
        stored["updatedAt"] = self.now()
        try:
            with store_latency.labels(operation="replace").time():
                result = await self.db[collection].find_one_and_update(
                    {"_id": _to_object_id(identifier)},
                    {"$set": stored},
                    return_document=ReturnDocument.AFTER,
                )
        except MongoDuplicateKeyError as e:
            raise _duplicate_key(collection, e) from e
        except PyMongoError as e:
            logger.error("store_replace_failed", collection=collection, error=str(e))
            raise StoreError(str(e)) from e
        if result is None:
            raise StoreError(f"No document '{identifier}' in '{collection}'")
        return _decode(result)

    async def find_one(self, collection: str, filter: Filter) -> Optional[Document]:
        try:
            with store_latency.labels(operation="find_one").time():
                document = await self.db[collection].find_one(_encode_filter(filter))
        except PyMongoError as e:
            raise StoreError(str(e)) from e
        return _decode(document)

    async def find(
        self,
        collection: str,
        filter: Filter,
        sort: Optional[Sort] = None,
        limit: Optional[int] = None,
    ) -> list[Document]:
        cursor = self.db[collection].find(_encode_filter(filter))
        if sort:
            cursor = cursor.sort(list(sort))
        if limit:
            cursor = cursor.limit(limit)
        try:
            with store_latency.labels(operation="find").time():
                documents = await cursor.to_list()
        except PyMongoError as e:
            raise StoreError(str(e)) from e
        return [_decode(document) for document in documents]

    async def exists(self, collection: str, filter: Filter) -> bool:
        try:
            with store_latency.labels(operation="exists").time():
                document = await self.db[collection].find_one(_encode_filter(filter), projection={"_id": 1})
        except PyMongoError as e:
            raise StoreError(str(e)) from e
        return document is not None

    async def create_index(self, collection: str, field: str, unique: bool = False) -> None:
        try:
            await self.db[collection].create_index(field, unique=unique)
        except PyMongoError as e:
            raise StoreError(str(e)) from e
        logger.info("index_created", collection=collection, field=field, unique=unique)

    async def close(self) -> None:
        await self.client.close()
