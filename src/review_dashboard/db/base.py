from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple


class DocumentStoreError(Exception):
    """Raised by store backends when a read cannot be completed."""


@dataclass(frozen=True)
class DocumentSnapshot:
    """
    Result of a document read: the id, an existence flag and the untyped
    field map. A missing document has ``exists=False`` and no data.
    """

    id: str
    exists: bool
    data: Optional[Dict[str, Any]] = field(default=None)

    def to_dict(self) -> Dict[str, Any]:
        return dict(self.data or {})


def split_path(path: str) -> Tuple[str, ...]:
    segments = tuple(s for s in path.strip("/").split("/") if s)
    if not segments:
        raise ValueError("path must not be empty")
    return segments


def document_segments(path: str) -> Tuple[str, ...]:
    """Segments of a document path (``collection/doc[/collection/doc...]``)."""
    segments = split_path(path)
    if len(segments) % 2 != 0:
        raise ValueError(f"not a document path: {path!r}")
    return segments


def collection_segments(path: str) -> Tuple[str, ...]:
    """Segments of a collection path (``collection[/doc/collection...]``)."""
    segments = split_path(path)
    if len(segments) % 2 != 1:
        raise ValueError(f"not a collection path: {path!r}")
    return segments


class BaseDocumentStore(ABC):
    """
    Read-only, backend-agnostic async interface to the hosted document store.

    Paths follow the hierarchical ``collection/document`` convention, e.g.
    ``users/{uid}`` for a user document and ``users/{uid}/reviews`` for its
    review subcollection. Backends raise `DocumentStoreError` for failures
    and ``ValueError`` for malformed paths.
    """

    @abstractmethod
    async def get_document(self, path: str) -> DocumentSnapshot: ...

    @abstractmethod
    async def query_collection(self, path: str) -> List[DocumentSnapshot]: ...
