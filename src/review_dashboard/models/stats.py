from __future__ import annotations

from typing import List

from pydantic import BaseModel, Field


def _empty_distribution() -> List[int]:
    return [0, 0, 0, 0, 0]


class ReviewStatsSnapshot(BaseModel):
    total_reviews: int = 0
    average_rating: float = 0
    rating_distribution: List[int] = Field(
        default_factory=_empty_distribution,
        description="Review counts per star bucket, 5 stars first.",
    )
    link_clicks: int = 0
    response_rate: float = 0
