from __future__ import annotations

from typing import List, Optional

from ..db.base import BaseDocumentStore
from ..models.account import UserAccount
from ..models.review import Review


async def load_account(store: BaseDocumentStore, user_id: str) -> Optional[UserAccount]:
    """Fetch and decode ``users/{user_id}``; None when the document is missing."""
    snapshot = await store.get_document(UserAccount.document_path(user_id))
    if not snapshot.exists:
        return None
    return UserAccount.from_document(snapshot.id, snapshot.data)


async def load_reviews(store: BaseDocumentStore, user_id: str) -> List[Review]:
    snapshots = await store.query_collection(Review.collection_path(user_id))
    return [Review.from_document(s.id, s.data) for s in snapshots]
