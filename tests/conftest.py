from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import List

import pytest

from review_dashboard.db.base import DocumentSnapshot, DocumentStoreError
from review_dashboard.db.memory import InMemoryDocumentStore
from review_dashboard.models.timestamp import StoreTimestamp


NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


def clock() -> datetime:
    return NOW


def ts(**delta) -> StoreTimestamp:
    """Store timestamp relative to NOW, e.g. ``ts(days=3)``."""
    return StoreTimestamp.from_datetime(NOW + timedelta(**delta))


class FailingStore(InMemoryDocumentStore):
    """Store whose reads fail for the configured kinds of request."""

    def __init__(self, fail_documents: bool = True, fail_queries: bool = True) -> None:
        super().__init__()
        self.fail_documents = fail_documents
        self.fail_queries = fail_queries

    async def get_document(self, path: str) -> DocumentSnapshot:
        if self.fail_documents:
            raise DocumentStoreError("backend unavailable")
        return await super().get_document(path)

    async def query_collection(self, path: str) -> List[DocumentSnapshot]:
        if self.fail_queries:
            raise DocumentStoreError("backend unavailable")
        return await super().query_collection(path)


def seed_business(store: InMemoryDocumentStore, uid: str = "user-1", **fields) -> None:
    data = {
        "businessInfo": {"businessName": "Corner Cafe", "linkClicks": 12, "responseRate": 75},
        "trialEndDate": ts(days=3),
    }
    data.update(fields)
    store.set_document(f"users/{uid}", data)


@pytest.fixture
def store() -> InMemoryDocumentStore:
    return InMemoryDocumentStore()
