"""Shared cache backend on Redis for multi-instance deployments."""

import logging
from collections.abc import Mapping
from typing import Any

from pydantic import TypeAdapter, ValidationError
from redis.asyncio import Redis
from redis.exceptions import RedisError

from zoo.application.interfaces import MISS, CacheBackend, CacheRegion, RegionPolicy
from zoo.domain.entities import Animal, Room
from zoo.domain.exceptions import CacheUnavailableError

logger = logging.getLogger(__name__)

_SCAN_COUNT = 500

# Values are stored as JSON validated against the region's type, never pickled.
_ADAPTERS: dict[CacheRegion, TypeAdapter] = {
    CacheRegion.ANIMALS_BY_ID: TypeAdapter(Animal),
    CacheRegion.ROOMS_BY_ID: TypeAdapter(Room),
    CacheRegion.FAVORITE_COUNTS: TypeAdapter(dict[str, int]),
}

# KEYS[1] value key, KEYS[2] generation key; ARGV value, ttl ms, expected generation.
_SET_IF_GENERATION = """
if (redis.call('GET', KEYS[2]) or '0') == ARGV[3] then
    redis.call('SET', KEYS[1], ARGV[1], 'PX', ARGV[2])
    return 1
end
return 0
"""


class RedisCacheBackend(CacheBackend):
    """Region-prefixed keys with a per-region ``PX`` expiry.

    Each region's generation lives in its own counter key outside the
    region's key pattern, so clearing a region never resets it. Capacity
    bounds are left to the server's ``maxmemory-policy``. Failures are
    raised as ``CacheUnavailableError``; nothing is retried here.
    """

    def __init__(
        self,
        client: Redis,
        policies: Mapping[CacheRegion, RegionPolicy],
        key_prefix: str = "zoo",
    ):
        self._client = client
        self._policies = dict(policies)
        self._prefix = key_prefix

    @classmethod
    def from_url(
        cls,
        url: str,
        policies: Mapping[CacheRegion, RegionPolicy],
        key_prefix: str = "zoo",
        socket_timeout: float | None = None,
    ) -> "RedisCacheBackend":
        client = Redis.from_url(
            url,
            socket_timeout=socket_timeout,
            socket_connect_timeout=socket_timeout,
        )
        return cls(client, policies, key_prefix)

    def _key(self, region: CacheRegion, key: str) -> str:
        return f"{self._prefix}:{region.value}:{key}"

    def _generation_key(self, region: CacheRegion) -> str:
        return f"{self._prefix}:gen:{region.value}"

    def _ttl_ms(self, region: CacheRegion) -> int:
        try:
            policy = self._policies[region]
        except KeyError:
            raise ValueError(f"Cache region '{region.value}' is not configured") from None
        return max(1, int(policy.ttl_seconds * 1000))

    async def generation(self, region: CacheRegion) -> int:
        try:
            raw = await self._client.get(self._generation_key(region))
        except RedisError as exc:
            logger.error("Redis GET failed for %s: %s", self._generation_key(region), exc)
            raise CacheUnavailableError("generation", exc) from exc
        return int(raw) if raw is not None else 0

    async def get(self, region: CacheRegion, key: str) -> Any:
        try:
            raw = await self._client.get(self._key(region, key))
        except RedisError as exc:
            logger.error("Redis GET failed for %s: %s", self._key(region, key), exc)
            raise CacheUnavailableError("get", exc) from exc
        if raw is None:
            return MISS
        try:
            return _ADAPTERS[region].validate_json(raw)
        except (ValidationError, UnicodeDecodeError) as exc:
            logger.warning(
                "Ignoring undecodable cache entry %s: %s", self._key(region, key), exc
            )
            return MISS

    async def put(
        self,
        region: CacheRegion,
        key: str,
        value: Any,
        generation: int | None = None,
    ) -> bool:
        ttl_ms = self._ttl_ms(region)
        payload = _ADAPTERS[region].dump_json(value)
        try:
            if generation is None:
                await self._client.set(self._key(region, key), payload, px=ttl_ms)
                return True
            stored = await self._client.eval(
                _SET_IF_GENERATION,
                2,
                self._key(region, key),
                self._generation_key(region),
                payload,
                ttl_ms,
                str(generation),
            )
        except RedisError as exc:
            logger.error("Redis SET failed for %s: %s", self._key(region, key), exc)
            raise CacheUnavailableError("put", exc) from exc
        if not stored:
            logger.debug("Dropped stale write to %s", self._key(region, key))
        return bool(stored)

    async def evict(self, region: CacheRegion, key: str) -> None:
        try:
            # Bump first: a conditional put racing this call either sees the
            # new generation or lands before the DEL below.
            await self._client.incr(self._generation_key(region))
            await self._client.delete(self._key(region, key))
        except RedisError as exc:
            logger.error("Redis DEL failed for %s: %s", self._key(region, key), exc)
            raise CacheUnavailableError("evict", exc) from exc

    async def evict_all(self, region: CacheRegion) -> None:
        pattern = self._key(region, "*")
        try:
            await self._client.incr(self._generation_key(region))
            batch: list[Any] = []
            async for key in self._client.scan_iter(match=pattern, count=_SCAN_COUNT):
                batch.append(key)
                if len(batch) >= _SCAN_COUNT:
                    await self._client.delete(*batch)
                    batch.clear()
            if batch:
                await self._client.delete(*batch)
        except RedisError as exc:
            logger.error("Redis region clear failed for %s: %s", pattern, exc)
            raise CacheUnavailableError("evict_all", exc) from exc
        logger.debug("Cleared cache region %s", region.value)

    async def close(self) -> None:
        await self._client.aclose()
