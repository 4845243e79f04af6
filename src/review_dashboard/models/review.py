from __future__ import annotations

from enum import Enum
from typing import Any, ClassVar

from pydantic import Field, field_validator, model_validator

from .base import DocumentModel
from .timestamp import coerce_epoch_seconds


class ReviewStatus(str, Enum):
    PENDING = "pending"
    PUBLISHED = "published"
    REJECTED = "rejected"


def coerce_rating(value: Any) -> int:
    """
    Read a star rating without validating its range.

    Integers are kept as they are, even outside 1..5. Floats and numeric
    strings count only when they hold a whole number ("4.0" is 4, "4.5" is 0);
    anything else becomes 0.
    """
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            return 0
    if isinstance(value, float):
        return int(value) if value.is_integer() else 0
    return 0


class Review(DocumentModel):
    """
    A customer review stored under ``users/{uid}/reviews``.

    `status` stays a plain string: moderation tooling may write values
    beyond the ones in `ReviewStatus`.
    """

    collection_name: ClassVar[str] = "reviews"

    name: str = "Anonymous"
    rating: int = 0
    review: str = ""
    created_at: int = Field(default=0, alias="createdAt", description="Epoch seconds.")
    status: str = ReviewStatus.PENDING.value
    branch_name: str = Field(default="", alias="branchname")
    replied: bool = False

    @model_validator(mode="before")
    @classmethod
    def _fallback_body(cls, data: Any) -> Any:
        if isinstance(data, dict) and not data.get("review"):
            data = {**data, "review": data.get("message") or ""}
        return data

    @field_validator("name", mode="before")
    @classmethod
    def _name(cls, value: Any) -> str:
        return value if isinstance(value, str) and value else "Anonymous"

    @field_validator("rating", mode="before")
    @classmethod
    def _rating(cls, value: Any) -> int:
        return coerce_rating(value)

    @field_validator("review", mode="before")
    @classmethod
    def _review(cls, value: Any) -> str:
        return value if isinstance(value, str) else ""

    @field_validator("created_at", mode="before")
    @classmethod
    def _created_at(cls, value: Any) -> int:
        return coerce_epoch_seconds(value)

    @field_validator("status", mode="before")
    @classmethod
    def _status(cls, value: Any) -> str:
        if isinstance(value, ReviewStatus):
            return value.value
        return value if isinstance(value, str) and value else ReviewStatus.PENDING.value

    @field_validator("branch_name", mode="before")
    @classmethod
    def _branch_name(cls, value: Any) -> str:
        return value if isinstance(value, str) else ""

    @field_validator("replied", mode="before")
    @classmethod
    def _replied(cls, value: Any) -> bool:
        return bool(value)

    @staticmethod
    def collection_path(user_id: str) -> str:
        return f"users/{user_id}/{Review.collection_name}"
