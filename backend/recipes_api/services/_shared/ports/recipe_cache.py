from __future__ import annotations

from typing import Protocol


class RecipeCache(Protocol):
    """
    Read-through cache for the serialized recipe listing.

    The payload is an opaque JSON string; invalidation is all-or-nothing.
    """

    def get_listing(self) -> str | None: ...

    def set_listing(self, payload: str) -> None: ...

    def clear_listing(self) -> None: ...
