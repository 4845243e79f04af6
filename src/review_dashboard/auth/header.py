from __future__ import annotations

from typing import Mapping

from .base import AuthUser
from .memory import InMemoryAuthProvider


class HeaderAuthProvider(InMemoryAuthProvider):
    """
    Request-scoped provider for the web API: the signed-in user is whatever
    identity the upstream gateway put in the user header.
    """

    @classmethod
    def from_headers(
        cls, headers: Mapping[str, str], header_name: str = "X-User-Id"
    ) -> "HeaderAuthProvider":
        uid = (headers.get(header_name) or "").strip()
        return cls(AuthUser(uid=uid) if uid else None)
