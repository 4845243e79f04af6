from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Mapping, Optional

from pydantic import BaseModel


class StoreTimestamp(BaseModel):
    """
    Timestamp value as the hosted document store hands it out.

    Mirrors the store's native type (whole seconds plus nanoseconds) so
    fixtures and the in-memory backend can produce the same shape as the
    real service.
    """

    seconds: int
    nanoseconds: int = 0

    @classmethod
    def from_datetime(cls, value: datetime) -> "StoreTimestamp":
        value = _as_utc(value)
        whole = int(value.timestamp())
        return cls(seconds=whole, nanoseconds=value.microsecond * 1000)

    def to_datetime(self) -> datetime:
        return datetime.fromtimestamp(
            self.seconds + self.nanoseconds / 1_000_000_000, tz=timezone.utc
        )


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def coerce_timestamp(value: Any) -> Optional[datetime]:
    """
    Convert any timestamp representation found in a document to an aware
    UTC datetime.

    Accepted shapes, in order: objects exposing ``to_datetime()``,
    ``datetime`` instances, mappings or objects carrying ``seconds``, and raw
    epoch seconds. Anything else (including ``None`` and booleans) yields
    ``None``.
    """
    if value is None or isinstance(value, bool):
        return None
    converter = getattr(value, "to_datetime", None)
    if callable(converter):
        return _as_utc(converter())
    if isinstance(value, datetime):
        return _as_utc(value)
    if isinstance(value, Mapping):
        seconds = value.get("seconds")
    else:
        seconds = getattr(value, "seconds", value)
    if isinstance(seconds, bool) or not isinstance(seconds, (int, float)):
        return None
    try:
        return datetime.fromtimestamp(seconds, tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        return None


def coerce_epoch_seconds(value: Any) -> int:
    """Whole epoch seconds for a timestamp value; 0 when absent or unreadable."""
    moment = coerce_timestamp(value)
    if moment is None:
        return 0
    return int(moment.timestamp())
