from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict


class DerivedAccessState(BaseModel):
    """
    Trial and subscription standing of an account at a given instant.

    At most one of the trial or the subscription drives access; an active
    subscription wins when both are present.
    """

    model_config = ConfigDict(frozen=True)

    is_trial: bool = False
    trial_ended: bool = False
    has_subscription: bool = False
    subscription_active: bool = False
    days_left_trial: int = 0
    days_left_subscription: int = 0
    plan_name: str = ""
    subscription_end_date: Optional[datetime] = None

    @property
    def has_active_access(self) -> bool:
        return self.subscription_active or self.is_trial

    @property
    def is_locked(self) -> bool:
        """True when the app should only expose the upgrade path."""
        return self.trial_ended and not self.subscription_active
