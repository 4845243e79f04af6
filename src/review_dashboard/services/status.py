from __future__ import annotations

import math
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from ..models.access import DerivedAccessState
from ..models.account import UserAccount
from ..models.timestamp import coerce_timestamp


_ONE_DAY = timedelta(days=1)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def days_until(end: datetime, now: datetime) -> int:
    """Whole days remaining until `end`, rounded up."""
    return math.ceil((end - now) / _ONE_DAY)


def derive_access_state(
    trial_end_date: Any = None,
    subscription_active: Any = False,
    subscription_end_date: Any = None,
    subscription_plan: Optional[str] = None,
    now: Optional[datetime] = None,
) -> DerivedAccessState:
    """
    Compute trial/subscription standing at instant `now`.

    Timestamps may be given in any shape the document store produces (see
    `coerce_timestamp`). Precedence:

    1. an active subscription with a known end date;
    2. a trial that ends after `now`;
    3. otherwise the trial has ended.
    """
    now = coerce_timestamp(now) if now is not None else utcnow()
    trial_end = coerce_timestamp(trial_end_date)
    subscription_end = coerce_timestamp(subscription_end_date)

    if subscription_active and subscription_end is not None:
        return DerivedAccessState(
            has_subscription=True,
            subscription_active=True,
            days_left_subscription=days_until(subscription_end, now),
            plan_name=subscription_plan or "",
            subscription_end_date=subscription_end,
        )

    if trial_end is not None and trial_end > now:
        return DerivedAccessState(
            is_trial=True,
            days_left_trial=days_until(trial_end, now),
        )

    return DerivedAccessState(trial_ended=True)


def derive_account_state(account: UserAccount, now: Optional[datetime] = None) -> DerivedAccessState:
    return derive_access_state(
        trial_end_date=account.trial_end_date,
        subscription_active=account.subscription_active,
        subscription_end_date=account.subscription_end_date,
        subscription_plan=account.subscription_plan,
        now=now,
    )


def trial_status_text(days_left: int) -> str:
    if days_left > 1:
        return f"{days_left} days left"
    if days_left == 1:
        return "Last day"
    return "Ends today"


def subscription_status_text(days_left: int) -> str:
    if days_left > 1:
        return f"{days_left} days remaining"
    if days_left == 1:
        return "Renews tomorrow"
    return "Renews today"
