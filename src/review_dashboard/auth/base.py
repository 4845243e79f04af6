from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional


@dataclass(frozen=True)
class AuthUser:
    """Handle for the signed-in user; `uid` is stable across sessions."""

    uid: str
    email: Optional[str] = None


AuthStateListener = Callable[[Optional[AuthUser]], Awaitable[None]]
Unsubscribe = Callable[[], None]


class AuthProvider(ABC):
    """
    Authentication collaborator.

    Listeners are invoked with the current user (or ``None``) on every
    auth-state transition: sign-in, sign-out and token refresh with a new
    user. Credentials are never handled here.
    """

    @property
    @abstractmethod
    def current_user(self) -> Optional[AuthUser]: ...

    @abstractmethod
    def subscribe(self, listener: AuthStateListener) -> Unsubscribe:
        """Register `listener` and return a callable that removes it."""
        ...

    @abstractmethod
    async def sign_out(self) -> None: ...
