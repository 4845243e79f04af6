"""
Starlette middleware that applies the access guard to business pages.

Flow:
  1. Requests outside the business pages, and Settings pages, pass through.
  2. No user identity in the header -> redirect to the login page.
  3. The user's document is read and the trial/subscription state derived;
     without live access -> redirect to the upgrade page.
  4. A store failure is logged and the request proceeds; the page itself
     falls back to default data.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Callable, Optional

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import RedirectResponse, Response

from .. import routing
from ..auth.header import HeaderAuthProvider
from ..db.base import BaseDocumentStore, DocumentStoreError
from ..services.access_guard import AccessGuard
from ..services.navigation import is_settings_path


logger = logging.getLogger(__name__)


def is_guarded_path(path: str) -> bool:
    """Business pages need live access; Settings stays open so users can upgrade."""
    if path != routing.BUSINESS_ROOT and not path.startswith(routing.BUSINESS_ROOT + "/"):
        return False
    return not is_settings_path(path)


class AccessGuardMiddleware(BaseHTTPMiddleware):
    def __init__(
        self,
        app: Any,
        store: BaseDocumentStore,
        *,
        user_id_header: str = "X-User-Id",
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        super().__init__(app)
        self.store = store
        self.user_id_header = user_id_header
        self.clock = clock

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Any]
    ) -> Response:
        if not is_guarded_path(request.url.path):
            return await call_next(request)

        auth = HeaderAuthProvider.from_headers(request.headers, self.user_id_header)
        user = auth.current_user
        if user is None:
            return RedirectResponse(routing.LOGIN_PATH)

        guard = AccessGuard(auth, self.store, routing.RecordingNavigator(), clock=self.clock)
        try:
            decision = await guard.check(user.uid)
        except DocumentStoreError:
            logger.exception(
                "Access guard: could not read user document",
                extra={"path": request.url.path, "user_id": user.uid},
            )
            return await call_next(request)

        if decision.redirect_to is not None:
            logger.info(
                "Access guard: redirecting to %s",
                decision.redirect_to,
                extra={"path": request.url.path, "user_id": user.uid},
            )
            return RedirectResponse(decision.redirect_to)

        request.state.access_state = decision.state
        return await call_next(request)
