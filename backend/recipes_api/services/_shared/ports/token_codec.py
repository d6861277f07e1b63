from __future__ import annotations

from typing import Protocol

from recipes_api.services.auth.dto import Claims


class TokenCodec(Protocol):
    """Port for signing claim sets into tokens and verifying them back."""

    def issue(self, claims: Claims) -> str:
        """Sign ``claims``; ``claims.expires_at`` must lie in the future."""
        ...

    def parse(self, token: str, *, allow_expired: bool = False) -> Claims:
        """
        Verify ``token`` and return its claims.

        :raises InvalidSignatureError: Signature mismatch (checked first).
        :raises MalformedTokenError: Not a well-formed claim set.
        :raises TokenExpiredError: Expired and ``allow_expired`` is false.
        """
        ...
