from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Tuple

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo.errors import PyMongoError

from .base import (
    BaseDocumentStore,
    DocumentSnapshot,
    DocumentStoreError,
    collection_segments,
    document_segments,
)


PARENT_FIELD = "_parent"


class MongoDocumentStore(BaseDocumentStore):
    """
    MongoDB implementation of BaseDocumentStore using motor (async driver).

    Hierarchical paths are flattened onto one Mongo collection per leaf
    collection name. Document ids are stored as string ``_id`` values and
    subcollection documents carry the path of their parent document in
    ``_parent``; ``users/u1/reviews/r1`` therefore lives in the ``reviews``
    collection as ``{"_id": "r1", "_parent": "users/u1", ...}``.
    Top-level documents have no ``_parent`` field.
    """

    def __init__(self, database: AsyncIOMotorDatabase) -> None:
        self._db = database

    @classmethod
    def from_client_uri(cls, uri: str, db_name: str) -> "MongoDocumentStore":
        client = AsyncIOMotorClient(uri)
        return cls(client[db_name])

    @staticmethod
    def _locate(segments: Tuple[str, ...]) -> Tuple[str, Dict[str, Any]]:
        collection = segments[-1]
        parent = "/".join(segments[:-1])
        if parent:
            return collection, {PARENT_FIELD: parent}
        return collection, {PARENT_FIELD: {"$exists": False}}

    @staticmethod
    def _strip(doc: Mapping[str, Any]) -> Dict[str, Any]:
        data = dict(doc)
        data.pop("_id", None)
        data.pop(PARENT_FIELD, None)
        return data

    async def get_document(self, path: str) -> DocumentSnapshot:
        segments = document_segments(path)
        document_id = segments[-1]
        collection, selector = self._locate(segments[:-1])
        try:
            doc: Optional[Mapping[str, Any]] = await self._db[collection].find_one(
                {"_id": document_id, **selector}
            )
        except PyMongoError as exc:
            raise DocumentStoreError(f"failed to read {path!r}") from exc
        if doc is None:
            return DocumentSnapshot(id=document_id, exists=False)
        return DocumentSnapshot(id=document_id, exists=True, data=self._strip(doc))

    async def query_collection(self, path: str) -> List[DocumentSnapshot]:
        collection, selector = self._locate(collection_segments(path))
        try:
            cursor = self._db[collection].find(selector)
            docs = await cursor.to_list(length=None)
        except PyMongoError as exc:
            raise DocumentStoreError(f"failed to query {path!r}") from exc
        return [
            DocumentSnapshot(id=str(d["_id"]), exists=True, data=self._strip(d))
            for d in docs
        ]
