from __future__ import annotations

import asyncio
from typing import List, Optional

from .base import AuthProvider, AuthStateListener, AuthUser, Unsubscribe


class InMemoryAuthProvider(AuthProvider):
    """
    In-memory auth provider used for tests and as a reference implementation.

    `sign_in` and `sign_out` notify every listener concurrently and return
    once all of them have finished.
    """

    def __init__(self, user: Optional[AuthUser] = None) -> None:
        self._user = user
        self._listeners: List[AuthStateListener] = []

    @property
    def current_user(self) -> Optional[AuthUser]:
        return self._user

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def subscribe(self, listener: AuthStateListener) -> Unsubscribe:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def sign_in(self, user: AuthUser) -> None:
        await self._set_user(user)

    async def sign_out(self) -> None:
        await self._set_user(None)

    async def _set_user(self, user: Optional[AuthUser]) -> None:
        self._user = user
        await asyncio.gather(*(listener(user) for listener in list(self._listeners)))
