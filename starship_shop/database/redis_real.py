"""
Real Redis-backed key-value storage, used when REDIS_URL is set.
Implements the same interface as starship_shop.database.storage (in-memory).
"""

from __future__ import annotations

from typing import Any, Optional

import redis

from starship_shop.error_handler import StorageError


class RedisStorage:
    """
    Redis-backed storage. Values are plain strings with no TTL.
    """

    def __init__(self, url: Optional[str] = None, client: Any = None, prefix: str = "starship_shop:") -> None:
        if client is None and not url:
            raise ValueError("RedisStorage needs a url or a client")
        self._client = client or redis.from_url(url, decode_responses=True)
        self._prefix = prefix

    def _key(self, key: str) -> str:
        return f"{self._prefix}{key}"

    def get_item(self, key: str) -> Optional[str]:
        try:
            raw = self._client.get(self._key(key))
        except redis.RedisError as exc:
            raise StorageError(f"Redis read failed for {key}: {exc}") from exc
        if raw is None:
            return None
        return raw.decode("utf-8") if isinstance(raw, bytes) else str(raw)

    def set_item(self, key: str, value: str) -> None:
        try:
            self._client.set(self._key(key), str(value))
        except redis.RedisError as exc:
            raise StorageError(f"Redis write failed for {key}: {exc}") from exc

    def remove_item(self, key: str) -> None:
        try:
            self._client.delete(self._key(key))
        except redis.RedisError as exc:
            raise StorageError(f"Redis delete failed for {key}: {exc}") from exc

    def ping(self) -> bool:
        try:
            return bool(self._client.ping())
        except redis.RedisError:
            return False
