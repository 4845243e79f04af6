from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Optional

from pydantic import BaseModel

from .. import routing
from ..auth.base import AuthProvider, AuthUser, Unsubscribe
from ..db.base import BaseDocumentStore, DocumentStoreError
from ..models.access import DerivedAccessState
from .accounts import load_account
from .navigation import NavigationView, build_navigation
from .status import (
    derive_account_state,
    subscription_status_text,
    trial_status_text,
    utcnow,
)


logger = logging.getLogger(__name__)


class StatusPanel(BaseModel):
    title: str
    text: str


class SidebarView(BaseModel):
    navigation: NavigationView
    trial_panel: Optional[StatusPanel] = None
    subscription_panel: Optional[StatusPanel] = None
    trial_expired_alert: Optional[StatusPanel] = None


def build_sidebar_view(
    current_path: str,
    access: DerivedAccessState,
    settings_expanded: bool = False,
) -> SidebarView:
    trial_panel = None
    if access.is_trial and not access.subscription_active:
        trial_panel = StatusPanel(
            title="Trial Period", text=trial_status_text(access.days_left_trial)
        )

    subscription_panel = None
    if access.subscription_active:
        subscription_panel = StatusPanel(
            title=access.plan_name or "Active Plan",
            text=subscription_status_text(access.days_left_subscription),
        )

    alert = None
    if access.is_locked:
        alert = StatusPanel(
            title="Trial Expired",
            text="Please upgrade to continue using the service.",
        )

    return SidebarView(
        navigation=build_navigation(current_path, access, settings_expanded),
        trial_panel=trial_panel,
        subscription_panel=subscription_panel,
        trial_expired_alert=alert,
    )


class SidebarScreen:
    """
    Persistent business navigation with trial/subscription status.

    Every auth transition drops the previous user's status, so while a load
    is pending, after it fails, or when no user document exists the sidebar
    shows the default state (no trial, no subscription, nothing disabled).
    """

    def __init__(
        self,
        auth: AuthProvider,
        store: BaseDocumentStore,
        navigator: routing.Navigator,
        current_path: str = routing.DASHBOARD_PATH,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self._auth = auth
        self._store = store
        self._navigator = navigator
        self._clock = clock or utcnow
        self._unsubscribe: Optional[Unsubscribe] = None
        self._generation = 0

        self.current_path = current_path
        self.settings_expanded = routing.SETTINGS_PATH in current_path
        self.access = DerivedAccessState()
        self.loading = True

    async def mount(self) -> None:
        if self._unsubscribe is None:
            self._unsubscribe = self._auth.subscribe(self.handle_auth_state)
        await self.handle_auth_state(self._auth.current_user)

    def unmount(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    async def __aenter__(self) -> "SidebarScreen":
        await self.mount()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        self.unmount()

    async def handle_auth_state(self, user: Optional[AuthUser]) -> None:
        self._generation += 1
        generation = self._generation
        self.access = DerivedAccessState()
        if user is None:
            self.loading = True
            return

        try:
            account = await load_account(self._store, user.uid)
        except DocumentStoreError:
            logger.exception("Error checking user status", extra={"user_id": user.uid})
            account = None
        else:
            if account is None:
                logger.info("No user document found", extra={"user_id": user.uid})

        if generation != self._generation:
            return
        if account is not None:
            self.access = derive_account_state(account, now=self._clock())
        self.loading = False

    def set_path(self, current_path: str) -> None:
        self.current_path = current_path
        if routing.SETTINGS_PATH in current_path:
            self.settings_expanded = True

    def toggle_settings(self) -> bool:
        self.settings_expanded = not self.settings_expanded
        return self.settings_expanded

    def navigate(self, name: str) -> Optional[str]:
        """
        Follow the menu entry `name`. Disabled entries do nothing and
        return None.
        """
        target = self.render().navigation.resolve(name)
        if target is not None:
            self._navigator.navigate(target)
            self.set_path(target)
        return target

    async def logout(self) -> None:
        await self._auth.sign_out()
        self._navigator.navigate(routing.LOGIN_PATH)

    def render(self) -> SidebarView:
        return build_sidebar_view(self.current_path, self.access, self.settings_expanded)
