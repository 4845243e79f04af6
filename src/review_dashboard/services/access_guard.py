from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Optional

from pydantic import BaseModel

from .. import routing
from ..auth.base import AuthProvider, AuthUser, Unsubscribe
from ..db.base import BaseDocumentStore, DocumentStoreError
from ..models.access import DerivedAccessState
from ..models.account import UserAccount
from .accounts import load_account
from .status import derive_account_state, utcnow


logger = logging.getLogger(__name__)


class AccessDecision(BaseModel):
    allowed: bool
    redirect_to: Optional[str] = None
    state: Optional[DerivedAccessState] = None


class AccessGuard:
    """
    Gates the business screens on live access: an active subscription or an
    unexpired trial.

    `start` evaluates the current user and then re-evaluates on every
    auth-state transition; a check that resolves after a newer transition
    is dropped without navigating.
    """

    def __init__(
        self,
        auth: AuthProvider,
        store: BaseDocumentStore,
        navigator: routing.Navigator,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self._auth = auth
        self._store = store
        self._navigator = navigator
        self._clock = clock or utcnow
        self._unsubscribe: Optional[Unsubscribe] = None
        self._generation = 0

    def decide(self, account: Optional[UserAccount]) -> AccessDecision:
        if account is None:
            return AccessDecision(allowed=False, redirect_to=routing.LOGIN_PATH)
        state = derive_account_state(account, now=self._clock())
        if state.has_active_access:
            return AccessDecision(allowed=True, state=state)
        return AccessDecision(allowed=False, redirect_to=routing.UPGRADE_PATH, state=state)

    async def check(self, user_id: str) -> AccessDecision:
        """One-shot check. Store failures propagate as `DocumentStoreError`."""
        account = await load_account(self._store, user_id)
        return self.decide(account)

    async def start(self) -> None:
        if self._unsubscribe is None:
            self._unsubscribe = self._auth.subscribe(self.handle_auth_state)
        await self.handle_auth_state(self._auth.current_user)

    def stop(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    async def handle_auth_state(self, user: Optional[AuthUser]) -> None:
        self._generation += 1
        generation = self._generation
        if user is None:
            logger.info("No authenticated user, redirecting to %s", routing.LOGIN_PATH)
            self._navigator.navigate(routing.LOGIN_PATH)
            return

        try:
            decision = await self.check(user.uid)
        except DocumentStoreError:
            logger.exception("Error checking access", extra={"user_id": user.uid})
            return

        if generation != self._generation:
            logger.debug("Discarding stale access check", extra={"user_id": user.uid})
            return
        if decision.redirect_to is not None:
            logger.info(
                "Access denied, redirecting to %s",
                decision.redirect_to,
                extra={"user_id": user.uid},
            )
            self._navigator.navigate(decision.redirect_to)
