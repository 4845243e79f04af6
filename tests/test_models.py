from __future__ import annotations

from datetime import datetime, timezone
from types import SimpleNamespace

import pytest

from review_dashboard.models.account import UserAccount
from review_dashboard.models.review import Review
from review_dashboard.models.timestamp import StoreTimestamp, coerce_timestamp


def test_review_defaults_for_empty_document():
    review = Review.from_document("r1", {})
    assert review.id == "r1"
    assert review.name == "Anonymous"
    assert review.rating == 0
    assert review.review == ""
    assert review.created_at == 0
    assert review.status == "pending"
    assert review.branch_name == ""
    assert review.replied is False


def test_review_body_falls_back_to_message():
    review = Review.from_document("r1", {"message": "Great coffee"})
    assert review.review == "Great coffee"

    review = Review.from_document("r2", {"review": "Primary", "message": "Secondary"})
    assert review.review == "Primary"


@pytest.mark.parametrize(
    "raw, expected",
    [
        (4, 4), (4.0, 4), ("3", 3), ("4.0", 4), (" 5 ", 5), (7, 7), (4.5, 0),
        ("4.5", 0), ("nan", 0), ("abc", 0), (None, 0), (True, 0),
    ],
)
def test_review_rating_coercion(raw, expected):
    assert Review.from_document("r1", {"rating": raw}).rating == expected


@pytest.mark.parametrize(
    "raw",
    [
        StoreTimestamp(seconds=1_700_000_000),
        {"seconds": 1_700_000_000, "nanoseconds": 0},
        SimpleNamespace(seconds=1_700_000_000),
        1_700_000_000,
        datetime.fromtimestamp(1_700_000_000, tz=timezone.utc),
    ],
)
def test_review_created_at_accepts_any_timestamp_shape(raw):
    assert Review.from_document("r1", {"createdAt": raw}).created_at == 1_700_000_000


def test_review_keeps_unknown_status_and_reads_branch():
    review = Review.from_document(
        "r1", {"status": "flagged", "branchname": "Downtown", "replied": 1, "name": ""}
    )
    assert review.status == "flagged"
    assert review.branch_name == "Downtown"
    assert review.replied is True
    assert review.name == "Anonymous"


def test_document_id_wins_over_id_field():
    review = Review.from_document("r1", {"id": "spoofed"})
    assert review.id == "r1"


def test_user_account_defaults():
    account = UserAccount.from_document("user-1", {})
    assert account.business_info.business_name == ""
    assert account.business_info.link_clicks == 0
    assert account.business_info.response_rate == 0
    assert account.trial_end_date is None
    assert account.subscription_active is False
    assert account.subscription_end_date is None
    assert account.subscription_plan == ""


def test_user_account_decodes_camel_case_fields():
    account = UserAccount.from_document(
        "user-1",
        {
            "businessInfo": {"businessName": "Corner Cafe", "linkClicks": 9, "responseRate": 40.5},
            "trialEndDate": {"seconds": 1_700_000_000},
            "subscriptionActive": True,
            "subscriptionEndDate": StoreTimestamp(seconds=1_800_000_000),
            "subscriptionPlan": "Pro",
        },
    )
    assert account.business_info.business_name == "Corner Cafe"
    assert account.business_info.link_clicks == 9
    assert account.business_info.response_rate == 40.5
    assert account.trial_end_date == datetime.fromtimestamp(1_700_000_000, tz=timezone.utc)
    assert account.subscription_end_date == datetime.fromtimestamp(1_800_000_000, tz=timezone.utc)
    assert account.subscription_active is True
    assert account.subscription_plan == "Pro"


def test_user_account_tolerates_malformed_fields():
    account = UserAccount.from_document(
        "user-1",
        {
            "businessInfo": "not-a-map",
            "trialEndDate": "tomorrow",
            "subscriptionPlan": 12,
        },
    )
    assert account.business_info.business_name == ""
    assert account.trial_end_date is None
    assert account.subscription_plan == ""


def test_malformed_business_counters_default_to_zero():
    account = UserAccount.from_document(
        "user-1", {"businessInfo": {"businessName": None, "linkClicks": "many", "responseRate": None}}
    )
    assert account.business_info.business_name == ""
    assert account.business_info.link_clicks == 0
    assert account.business_info.response_rate == 0


def test_coerce_timestamp_rejects_unreadable_values():
    assert coerce_timestamp(None) is None
    assert coerce_timestamp("2024-01-01") is None
    assert coerce_timestamp(True) is None
    assert coerce_timestamp({"nanoseconds": 5}) is None
    assert coerce_timestamp(float("nan")) is None


def test_coerce_timestamp_makes_naive_datetimes_utc():
    moment = coerce_timestamp(datetime(2024, 1, 1, 9, 30))
    assert moment == datetime(2024, 1, 1, 9, 30, tzinfo=timezone.utc)


def test_store_timestamp_round_trip_keeps_microseconds():
    moment = datetime(2024, 1, 1, 9, 30, 15, 250000, tzinfo=timezone.utc)
    assert StoreTimestamp.from_datetime(moment).to_datetime() == moment
