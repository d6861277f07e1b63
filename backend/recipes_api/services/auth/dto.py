# recipes_api/services/auth/dto.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

# ---------------------------- Input DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class CredentialsIn:
    """
    Input DTO for sign-in and sign-up.

    :param username: Login name, used verbatim.
    :type username: str
    :param password: Raw password (digested before any lookup).
    :type password: str
    """

    username: str
    password: str

    def __repr__(self) -> str:
        return f"CredentialsIn(username={self.username!r}, password=***)"


# --------------------------- Domain values -------------------------------- #


@dataclass(frozen=True, slots=True)
class Claims:
    """
    Signed payload identifying a principal.

    :param username: Authenticated username.
    :type username: str
    :param expires_at: Timezone-aware UTC expiry; the only validity criterion.
    :type expires_at: datetime
    """

    username: str
    expires_at: datetime


@dataclass(frozen=True, slots=True)
class UserRecord:
    """
    Stored credential pair.

    :param username: Unique login name.
    :type username: str
    :param password: SHA-256 hex digest of the password.
    :type password: str
    """

    username: str
    password: str


# --------------------------- Output DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class IssuedToken:
    """
    Token handed back to the client. No server-side session is kept.

    :param token: Encoded, signed token.
    :type token: str
    :param expires: Expiry instant embedded in ``token``.
    :type expires: datetime
    """

    token: str
    expires: datetime
