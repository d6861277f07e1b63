from typing import cast

import redis  # type: ignore[import-untyped]


class RedisRecipeCache:
    """
    Recipe listing cache stored under a single Redis key with no TTL.

    Redis failures propagate as ``redis.exceptions.RedisError``.
    """

    def __init__(self, r: redis.Redis, key: str = "recipes"):
        self.r = r
        self.key = key

    def get_listing(self) -> str | None:
        raw = cast(bytes | str | None, self.r.get(self.key))
        if raw is None:
            return None
        return raw.decode("utf-8") if isinstance(raw, bytes) else raw

    def set_listing(self, payload: str) -> None:
        self.r.set(self.key, payload)

    def clear_listing(self) -> None:
        self.r.delete(self.key)
