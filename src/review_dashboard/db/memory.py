from __future__ import annotations

import copy
from typing import Any, Dict, List, Mapping

from .base import (
    BaseDocumentStore,
    DocumentSnapshot,
    collection_segments,
    document_segments,
)


class InMemoryDocumentStore(BaseDocumentStore):
    """
    Simple in-memory implementation used for tests and local development.
    NOT suitable for production, but exercises the abstraction and services.

    Documents are kept by their full path; a collection query returns the
    direct children of the collection in insertion order.
    """

    def __init__(self) -> None:
        self._documents: Dict[str, Dict[str, Any]] = {}

    @staticmethod
    def _key(segments: tuple[str, ...]) -> str:
        return "/".join(segments)

    def set_document(self, path: str, data: Mapping[str, Any]) -> None:
        key = self._key(document_segments(path))
        self._documents[key] = copy.deepcopy(dict(data))

    def add_document(self, collection_path: str, document_id: str, data: Mapping[str, Any]) -> None:
        self.set_document(f"{collection_path.strip('/')}/{document_id}", data)

    def delete_document(self, path: str) -> None:
        self._documents.pop(self._key(document_segments(path)), None)

    async def get_document(self, path: str) -> DocumentSnapshot:
        segments = document_segments(path)
        data = self._documents.get(self._key(segments))
        if data is None:
            return DocumentSnapshot(id=segments[-1], exists=False)
        return DocumentSnapshot(id=segments[-1], exists=True, data=copy.deepcopy(data))

    async def query_collection(self, path: str) -> List[DocumentSnapshot]:
        prefix = self._key(collection_segments(path)) + "/"
        snapshots: List[DocumentSnapshot] = []
        for key, data in self._documents.items():
            if not key.startswith(prefix):
                continue
            remainder = key[len(prefix):]
            if "/" in remainder:
                continue
            snapshots.append(
                DocumentSnapshot(id=remainder, exists=True, data=copy.deepcopy(data))
            )
        return snapshots
