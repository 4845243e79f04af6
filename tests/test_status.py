from __future__ import annotations

from datetime import timedelta

import pytest

from review_dashboard.models.account import UserAccount
from review_dashboard.models.timestamp import StoreTimestamp
from review_dashboard.services.status import (
    derive_access_state,
    derive_account_state,
    subscription_status_text,
    trial_status_text,
)

from conftest import NOW, ts


def test_active_subscription_rounds_days_up():
    state = derive_access_state(
        subscription_active=True,
        subscription_end_date=ts(hours=36),
        subscription_plan="Pro",
        now=NOW,
    )
    assert state.has_subscription is True
    assert state.subscription_active is True
    assert state.days_left_subscription == 2
    assert state.plan_name == "Pro"
    assert state.is_trial is False
    assert state.trial_ended is False
    assert state.has_active_access is True


def test_trial_with_less_than_a_day_left_is_last_day():
    state = derive_access_state(
        subscription_active=False, trial_end_date=ts(hours=12), now=NOW
    )
    assert state.is_trial is True
    assert state.days_left_trial == 1
    assert state.has_subscription is False
    assert trial_status_text(state.days_left_trial) == "Last day"


def test_expired_trial():
    state = derive_access_state(
        subscription_active=False, trial_end_date=ts(hours=-1), now=NOW
    )
    assert state.trial_ended is True
    assert state.is_trial is False
    assert state.has_active_access is False
    assert state.is_locked is True


def test_trial_ending_exactly_now_has_ended():
    state = derive_access_state(trial_end_date=NOW, now=NOW)
    assert state.trial_ended is True


def test_no_fields_at_all_means_trial_ended():
    state = derive_access_state(now=NOW)
    assert state.trial_ended is True
    assert state.days_left_trial == 0
    assert state.days_left_subscription == 0


def test_subscription_takes_precedence_over_trial():
    state = derive_access_state(
        trial_end_date=ts(days=10),
        subscription_active=True,
        subscription_end_date=ts(days=30),
        now=NOW,
    )
    assert state.subscription_active is True
    assert state.is_trial is False
    assert state.days_left_trial == 0
    assert state.days_left_subscription == 30


def test_active_flag_without_end_date_falls_back_to_trial():
    state = derive_access_state(
        subscription_active=True, trial_end_date=ts(days=2), now=NOW
    )
    assert state.has_subscription is False
    assert state.is_trial is True
    assert state.days_left_trial == 2


def test_inactive_subscription_with_end_date_is_ignored():
    state = derive_access_state(
        subscription_active=False, subscription_end_date=ts(days=5), now=NOW
    )
    assert state.trial_ended is True
    assert state.has_subscription is False


@pytest.mark.parametrize(
    "trial_end",
    [
        StoreTimestamp.from_datetime(NOW + timedelta(days=2)),
        {"seconds": int((NOW + timedelta(days=2)).timestamp())},
        int((NOW + timedelta(days=2)).timestamp()),
        (NOW + timedelta(days=2)).replace(tzinfo=None),
    ],
    ids=["store-timestamp", "seconds-mapping", "epoch-seconds", "naive-datetime"],
)
def test_timestamp_representations_are_equivalent(trial_end):
    state = derive_access_state(trial_end_date=trial_end, now=NOW)
    assert state.is_trial is True
    assert state.days_left_trial == 2


def test_subscription_that_ended_still_counts_as_active_with_zero_days():
    """The active flag is authoritative; the end date only feeds the countdown."""
    state = derive_access_state(
        subscription_active=True, subscription_end_date=ts(hours=-5), now=NOW
    )
    assert state.subscription_active is True
    assert state.days_left_subscription == 0
    assert subscription_status_text(state.days_left_subscription) == "Renews today"


@pytest.mark.parametrize(
    "days, expected",
    [(14, "14 days left"), (2, "2 days left"), (1, "Last day"), (0, "Ends today"), (-3, "Ends today")],
)
def test_trial_status_text(days, expected):
    assert trial_status_text(days) == expected


@pytest.mark.parametrize(
    "days, expected",
    [(30, "30 days remaining"), (2, "2 days remaining"), (1, "Renews tomorrow"), (0, "Renews today")],
)
def test_subscription_status_text(days, expected):
    assert subscription_status_text(days) == expected


def test_derive_account_state_reads_decoded_account():
    account = UserAccount.from_document(
        "user-1",
        {
            "subscriptionActive": True,
            "subscriptionEndDate": ts(days=7),
            "subscriptionPlan": "Growth",
        },
    )
    state = derive_account_state(account, now=NOW)
    assert state.plan_name == "Growth"
    assert state.days_left_subscription == 7
