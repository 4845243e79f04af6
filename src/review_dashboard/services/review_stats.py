"""
Review statistics for the business dashboard.

Ratings are summed over every review, but only ratings 1..5 land in a
distribution bucket; a review with a 0 or out-of-range rating still counts
toward the total and the average.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Iterable, List, Mapping, Tuple, Union

from ..db.base import DocumentSnapshot
from ..models.review import Review
from ..models.stats import ReviewStatsSnapshot


RawReview = Union[Review, DocumentSnapshot, Mapping[str, Any]]


def _round_half_up(value: float, places: str) -> Decimal:
    return Decimal(repr(value)).quantize(Decimal(places), rounding=ROUND_HALF_UP)


def normalize_review(record: RawReview) -> Review:
    if isinstance(record, Review):
        return record
    if isinstance(record, DocumentSnapshot):
        return Review.from_document(record.id, record.data)
    data = dict(record)
    return Review.from_document(data.pop("id", None), data)


def bucket_index(rating: int) -> int | None:
    """Index into the distribution (5 stars first), or None outside 1..5."""
    if 1 <= rating <= 5:
        return 5 - rating
    return None


def average_rating(total_rating: int, count: int) -> float:
    if count <= 0:
        return 0
    return float(_round_half_up(total_rating / count, "0.1"))


def calculate_percentage(count: int, total: int) -> int:
    if total <= 0:
        return 0
    return int(_round_half_up(count / total * 100, "1"))


def aggregate_reviews(
    records: Iterable[RawReview],
    link_clicks: int = 0,
    response_rate: float = 0,
) -> Tuple[ReviewStatsSnapshot, List[Review]]:
    """
    Build the stats snapshot and the recency-sorted review list.

    Source records are never mutated.
    """
    reviews: List[Review] = []
    total_rating = 0
    distribution = [0, 0, 0, 0, 0]

    for record in records:
        review = normalize_review(record)
        reviews.append(review)
        total_rating += review.rating
        index = bucket_index(review.rating)
        if index is not None:
            distribution[index] += 1

    reviews.sort(key=lambda r: r.created_at, reverse=True)

    snapshot = ReviewStatsSnapshot(
        total_reviews=len(reviews),
        average_rating=average_rating(total_rating, len(reviews)),
        rating_distribution=distribution,
        link_clicks=link_clicks,
        response_rate=response_rate,
    )
    return snapshot, reviews
