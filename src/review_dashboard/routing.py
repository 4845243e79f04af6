from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Optional


LOGIN_PATH = "/login"
UPGRADE_PATH = "/pricing"

BUSINESS_ROOT = "/components/business"
DASHBOARD_PATH = f"{BUSINESS_ROOT}/dashboard"
REVIEWS_PATH = f"{BUSINESS_ROOT}/reviews"
REVIEW_LINK_PATH = f"{BUSINESS_ROOT}/review-link"
SETTINGS_PATH = f"{BUSINESS_ROOT}/settings"
ACCOUNT_SETTINGS_PATH = f"{SETTINGS_PATH}/account"
LOCATION_SETTINGS_PATH = f"{SETTINGS_PATH}/location"
BUSINESS_USERS_SETTINGS_PATH = f"{SETTINGS_PATH}/businessusers"


class Navigator(ABC):
    """Routing collaborator: screens request navigation, never perform it."""

    @abstractmethod
    def navigate(self, path: str) -> None: ...


class RecordingNavigator(Navigator):
    """
    Navigator that only records requested paths. Used by tests and by the
    web API, which turns the last request into an HTTP redirect.
    """

    def __init__(self) -> None:
        self.history: List[str] = []

    def navigate(self, path: str) -> None:
        self.history.append(path)

    @property
    def last(self) -> Optional[str]:
        return self.history[-1] if self.history else None
