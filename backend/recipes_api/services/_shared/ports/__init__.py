"""
recipes_api.services._shared.ports
==================================

*Ports* (hexagonal interfaces) the service layer depends on.

Modules
-------
- :mod:`token_codec`:
    Defines :class:`~.TokenCodec`, signing and verification of claim sets.

- :mod:`credential_store`:
    Defines :class:`~.CredentialStore` and the in-memory double
    :class:`~.InMemoryCredentialStore`.

- :mod:`recipe_cache`:
    Defines :class:`~.RecipeCache`, the listing cache used by recipe reads.

Concrete adapters (flask-jwt-extended, SQLAlchemy, Redis) live under
``recipes_api.infra``.
"""

from __future__ import annotations

from .credential_store import CredentialStore, InMemoryCredentialStore
from .recipe_cache import RecipeCache
from .token_codec import TokenCodec

__all__ = [
    "CredentialStore",
    "InMemoryCredentialStore",
    "RecipeCache",
    "TokenCodec",
]
