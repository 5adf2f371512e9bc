"""Redis-backed pending store.

Each pending tuple is a plain string key holding the tuple as JSON. Sliding
expiration maps directly onto key TTLs: ``SET PX`` on register and
``GETEX PX`` on lookup. Redis expires keys itself, so ``sweep`` is a no-op.
"""

from __future__ import annotations

import logging
from urllib.parse import urlparse, urlunparse

from stormspout.core.tuple import OutboundTuple

try:
    import redis.asyncio as redis
except ImportError as e:
    raise ImportError(
        "Redis pending store requires the 'redis' package. "
        "Install it with: pip install stormspout[redis]"
    ) from e

logger = logging.getLogger("stormspout.pending.redis")


def _sanitize_url(url: str) -> str:
    """Mask password in Redis URL for logging."""
    try:
        parsed = urlparse(url)
        if parsed.password:
            netloc = f"{parsed.username}:****@{parsed.hostname}"
            if parsed.port:
                netloc += f":{parsed.port}"
            return urlunparse(
                (parsed.scheme, netloc, parsed.path, parsed.params, parsed.query, parsed.fragment)
            )
        return f"{parsed.hostname}:{parsed.port or 6379}"
    except ValueError:
        return "<url>"


class RedisPendingStore:
    """Pending store keeping tuples in Redis with per-key sliding TTLs.

    Args:
        url: Redis connection URL (default: redis://localhost:6379)
        key_prefix: Prefix for pending keys. Use one prefix per spout so
            instances do not see each other's ids.
    """

    def __init__(
        self,
        url: str = "redis://localhost:6379",
        key_prefix: str = "stormspout:pending",
    ) -> None:
        self._url = url
        self._url_safe = _sanitize_url(url)
        self.key_prefix = key_prefix
        self._client: redis.Redis | None = None

    def _key(self, tuple_id: str) -> str:
        return f"{self.key_prefix}:{tuple_id}"

    def _ttl_key(self, tuple_id: str) -> str:
        return f"{self.key_prefix}:{tuple_id}:ttl"

    async def _ensure_connected(self) -> redis.Redis:
        if self._client is None:
            self._client = redis.from_url(self._url, decode_responses=True)
            logger.info("Connected to Redis at %s", self._url_safe)
        return self._client

    async def register(self, tuple_id: str, tuple_: OutboundTuple, ttl: float) -> None:
        if ttl <= 0:
            raise ValueError(f"ttl must be positive, got {ttl!r}")
        client = await self._ensure_connected()
        await client.set(self._key(tuple_id), tuple_.model_dump_json(), px=int(ttl * 1000))
        # The window is per entry, so remember it for sliding refreshes
        await client.set(self._ttl_key(tuple_id), str(int(ttl * 1000)), px=int(ttl * 1000))

    async def contains(self, tuple_id: str) -> bool:
        client = await self._ensure_connected()
        return bool(await client.exists(self._key(tuple_id)))

    async def get(self, tuple_id: str) -> OutboundTuple | None:
        client = await self._ensure_connected()
        ttl_ms = await client.get(self._ttl_key(tuple_id))
        if ttl_ms is None:
            return None
        raw = await client.getex(self._key(tuple_id), px=int(ttl_ms))
        if raw is None:
            return None
        await client.pexpire(self._ttl_key(tuple_id), int(ttl_ms))
        return OutboundTuple.model_validate_json(raw)

    async def remove(self, tuple_id: str) -> None:
        client = await self._ensure_connected()
        await client.delete(self._key(tuple_id), self._ttl_key(tuple_id))

    async def sweep(self) -> int:
        return 0

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None
