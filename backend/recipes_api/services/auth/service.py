# recipes_api/services/auth/service.py
from __future__ import annotations

import logging
from datetime import timedelta

from recipes_api.core.config import AuthSettings
from recipes_api.services._shared.base import BaseService, ServiceContext
from recipes_api.services._shared.errors import (
    InvalidCredentialsError,
    NotFoundError,
    RefreshTooEarlyError,
    UsernameTakenError,
)
from recipes_api.services._shared.ports import CredentialStore, TokenCodec
from recipes_api.services.auth.dto import Claims, CredentialsIn, IssuedToken, UserRecord
from recipes_api.services.auth.passwords import digest_password

log = logging.getLogger(__name__)


class AuthService(BaseService):
    """
    Authentication lifecycle service (sign-in / sign-up / refresh).

    Tokens are stateless: nothing is recorded server-side when one is issued,
    so there is no logout and expiry is the only way a token stops working.
    """

    def __init__(
        self,
        *,
        store: CredentialStore,
        codec: TokenCodec,
        settings: AuthSettings,
        ctx: ServiceContext | None = None,
    ) -> None:
        """
        Initialize the service with its dependencies.

        :param store: Credential store adapter (lookup / insert of user records).
        :param codec: Token codec used to sign and verify claim sets.
        :param settings: Token lifetimes and refresh window.
        :param ctx: Optional request-scoped context.
        """
        super().__init__(ctx=ctx)
        self.store = store
        self.codec = codec
        self.settings = settings

    # ------------------------------------------------------------------ #
    # Sign-in
    # ------------------------------------------------------------------ #

    def sign_in(self, dto: CredentialsIn) -> IssuedToken:
        """
        Verify credentials and issue a token valid for ``settings.sign_in_ttl``.

        :param dto: Username and raw password.
        :returns: Signed token and its expiry.
        :raises InvalidCredentialsError: Unknown user or wrong password; both
            cases raise the same error with the same message.
        """
        digest = digest_password(dto.password)
        user = self.store.find_by_credentials(dto.username, digest)
        if user is None:
            log.warning("auth.sign_in.rejected", extra={"username": dto.username})
            raise InvalidCredentialsError()

        issued = self._issue(user.username, self.settings.sign_in_ttl)
        log.info("auth.sign_in.ok", extra={"username": user.username})
        return issued

    # ------------------------------------------------------------------ #
    # Sign-up
    # ------------------------------------------------------------------ #

    def sign_up(self, dto: CredentialsIn) -> UserRecord:
        """
        Register a new user.

        :param dto: Username and raw password.
        :returns: The stored record, digest included.
        :raises UsernameTakenError: The username is already registered.
        :raises StoreError: The store failed while reading or writing.
        """
        if self.store.get_by_username(dto.username) is not None:
            log.warning("auth.sign_up.taken", extra={"username": dto.username})
            raise UsernameTakenError()

        record = self.store.add(dto.username, digest_password(dto.password))
        log.info("auth.sign_up.ok", extra={"username": record.username})
        return record

    # ------------------------------------------------------------------ #
    # Refresh
    # ------------------------------------------------------------------ #

    def refresh(self, token: str) -> IssuedToken:
        """
        Exchange a token that is about to expire for a new one.

        Only tokens whose remaining lifetime is at most
        ``settings.refresh_window`` are accepted. The new token lives for
        ``settings.refresh_ttl``, shorter than a sign-in token.

        :param token: Encoded token from the ``Authorization`` header.
        :returns: New token for the same username.
        :raises TokenError: The token is malformed, tampered with or expired.
        :raises RefreshTooEarlyError: The token is still outside the window.
        """
        claims = self.codec.parse(token)

        remaining = claims.expires_at - self.now_utc()
        if remaining > self.settings.refresh_window:
            log.info(
                "auth.refresh.too_early",
                extra={
                    "username": claims.username,
                    "reason": f"ttl={remaining.total_seconds():.0f}s",
                },
            )
            raise RefreshTooEarlyError()

        issued = self._issue(claims.username, self.settings.refresh_ttl)
        log.info("auth.refresh.ok", extra={"username": claims.username})
        return issued

    # ------------------------------------------------------------------ #
    # Lookup
    # ------------------------------------------------------------------ #

    def get_user(self, username: str) -> UserRecord:
        """
        Return the stored record for ``username``.

        :raises NotFoundError: No such user.
        """
        record = self.store.get_by_username(username)
        if record is None:
            raise NotFoundError("User", username, "User not found!")
        return record

    # ------------------------------------------------------------------ #
    # Utilities
    # ------------------------------------------------------------------ #

    def _issue(self, username: str, ttl: timedelta) -> IssuedToken:
        # exp is encoded in whole seconds; truncate so the response matches it
        expires_at = (self.now_utc() + ttl).replace(microsecond=0)
        token = self.codec.issue(Claims(username=username, expires_at=expires_at))
        return IssuedToken(token=token, expires=expires_at)
