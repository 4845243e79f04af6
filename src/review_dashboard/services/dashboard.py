from __future__ import annotations

import logging
import math
from datetime import datetime, timezone
from typing import Callable, List, Optional, Union

from pydantic import BaseModel

from .. import routing
from ..auth.base import AuthProvider, AuthUser, Unsubscribe
from ..db.base import BaseDocumentStore, DocumentStoreError
from ..models.review import Review, ReviewStatus
from ..models.stats import ReviewStatsSnapshot
from .access_guard import AccessGuard
from .accounts import load_account, load_reviews
from .review_stats import aggregate_reviews, calculate_percentage
from .status import utcnow


logger = logging.getLogger(__name__)

RECENT_REVIEWS_LIMIT = 5

_BADGE_LABELS = {
    ReviewStatus.PUBLISHED.value: "Published",
    ReviewStatus.PENDING.value: "Pending",
    ReviewStatus.REJECTED.value: "Rejected",
}


class StatCard(BaseModel):
    title: str
    value: Union[int, float, str]
    description: str
    filled_stars: Optional[int] = None


class ReviewItemView(BaseModel):
    id: Optional[str] = None
    name: str
    rating: int
    filled_stars: int
    review: str
    date: str
    badge: str
    branch_label: Optional[str] = None


class DistributionRow(BaseModel):
    stars: int
    count: int
    percentage: int


class DashboardView(BaseModel):
    loading: bool
    welcome_message: str
    stat_cards: List[StatCard]
    recent_reviews: List[ReviewItemView]
    rating_distribution: List[DistributionRow]
    empty_message: Optional[str] = None


def format_review_date(seconds: int) -> str:
    """Short US-style date, e.g. ``Jan 5, 2024`` (UTC)."""
    moment = datetime.fromtimestamp(seconds, tz=timezone.utc)
    return f"{moment:%b} {moment.day}, {moment.year}"


def status_badge(status: str, replied: bool) -> str:
    if replied:
        return "Replied"
    return _BADGE_LABELS.get(status, status)


def filled_stars(rating: float) -> int:
    return max(0, min(5, math.floor(rating)))


def star_bar(filled: int) -> str:
    return "★" * filled + "☆" * (5 - filled)


def welcome_message(business_name: str) -> str:
    return f"Welcome back, {business_name}" if business_name else "Welcome back"


def build_dashboard_view(
    business_name: str,
    stats: ReviewStatsSnapshot,
    reviews: List[Review],
    loading: bool = False,
) -> DashboardView:
    cards = [
        StatCard(title="Total Reviews", value=stats.total_reviews, description="All time reviews"),
        StatCard(
            title="Average Rating",
            value=stats.average_rating,
            description=star_bar(filled_stars(stats.average_rating)),
            filled_stars=filled_stars(stats.average_rating),
        ),
        StatCard(title="Link Clicks", value=stats.link_clicks, description="Total review link clicks"),
        StatCard(
            title="Response Rate",
            value=f"{stats.response_rate:g}%",
            description="Of reviews responded to",
        ),
    ]
    recent = [
        ReviewItemView(
            id=review.id,
            name=review.name,
            rating=review.rating,
            filled_stars=filled_stars(review.rating),
            review=review.review,
            date=format_review_date(review.created_at),
            badge=status_badge(review.status, review.replied),
            branch_label=f"Branch: {review.branch_name}" if review.branch_name else None,
        )
        for review in reviews[:RECENT_REVIEWS_LIMIT]
    ]
    rows = [
        DistributionRow(
            stars=5 - index,
            count=count,
            percentage=calculate_percentage(count, stats.total_reviews),
        )
        for index, count in enumerate(stats.rating_distribution)
    ]
    return DashboardView(
        loading=loading,
        welcome_message=welcome_message(business_name),
        stat_cards=cards,
        recent_reviews=recent,
        rating_distribution=rows,
        empty_message=None if recent else "No reviews yet",
    )


class DashboardScreen:
    """
    Business dashboard: review statistics and the latest reviews of the
    signed-in business.

    Every auth transition triggers a load tagged with a generation number;
    results of a load overtaken by a newer transition are discarded. The
    previous user's data is cleared before each load, so store failures and
    missing documents leave the screen on default data.
    """

    def __init__(
        self,
        auth: AuthProvider,
        store: BaseDocumentStore,
        navigator: routing.Navigator,
        guard: Optional[AccessGuard] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self._auth = auth
        self._store = store
        self._navigator = navigator
        self._clock = clock or utcnow
        self._guard = guard or AccessGuard(auth, store, navigator, clock=self._clock)
        self._unsubscribe: Optional[Unsubscribe] = None
        self._generation = 0

        self.loading = True
        self.user_id: Optional[str] = None
        self.business_name = ""
        self.stats = ReviewStatsSnapshot()
        self.reviews: List[Review] = []

    def _reset(self, user_id: Optional[str]) -> None:
        self.loading = True
        self.user_id = user_id
        self.business_name = ""
        self.stats = ReviewStatsSnapshot()
        self.reviews = []

    async def mount(self) -> None:
        if self._unsubscribe is None:
            self._unsubscribe = self._auth.subscribe(self.handle_auth_state)
        await self.handle_auth_state(self._auth.current_user)

    def unmount(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    async def __aenter__(self) -> "DashboardScreen":
        await self.mount()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        self.unmount()

    def _is_stale(self, generation: int) -> bool:
        return generation != self._generation

    async def handle_auth_state(self, user: Optional[AuthUser]) -> None:
        self._generation += 1
        generation = self._generation
        self._reset(user.uid if user is not None else None)

        if user is None:
            self._navigator.navigate(routing.LOGIN_PATH)
            return

        try:
            account = await load_account(self._store, user.uid)
            if self._is_stale(generation):
                return
            if account is None:
                logger.warning("No user document found", extra={"user_id": user.uid})
                self._navigator.navigate(routing.LOGIN_PATH)
                return

            decision = self._guard.decide(account)
            if decision.redirect_to is not None:
                self._navigator.navigate(decision.redirect_to)

            business = account.business_info
            self.business_name = business.business_name
            self.stats = ReviewStatsSnapshot(
                link_clicks=business.link_clicks,
                response_rate=business.response_rate,
            )

            reviews = await load_reviews(self._store, user.uid)
            if self._is_stale(generation):
                return
            self.stats, self.reviews = aggregate_reviews(
                reviews,
                link_clicks=business.link_clicks,
                response_rate=business.response_rate,
            )
        except DocumentStoreError:
            logger.exception("Error fetching dashboard data", extra={"user_id": user.uid})
        finally:
            if not self._is_stale(generation):
                self.loading = False

    def calculate_percentage(self, count: int) -> int:
        return calculate_percentage(count, self.stats.total_reviews)

    def render(self) -> DashboardView:
        return build_dashboard_view(
            self.business_name, self.stats, self.reviews, loading=self.loading
        )
