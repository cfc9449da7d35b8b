import json
import logging
import time
from typing import Awaitable, Callable, Optional, Type, TypeVar

import redis.asyncio as aioredis

from pokedex_web.config import CACHE_RETENTION, get_redis_url
from pokedex_web.models import PageProps

logger = logging.getLogger(__name__)

P = TypeVar("P", bound=PageProps)

# Receives a coroutine function and its arguments, e.g. BackgroundTasks.add_task
Scheduler = Callable[..., None]


class PageCache:
    """
    Stale-while-revalidate cache for generated page props.

    Each entry records when it goes stale (``props.revalidate`` seconds after
    generation). Stale entries are still served, and regeneration is handed to
    the scheduler so the request that noticed it does not wait.
    """

    KEY_PREFIX = "page"
    # Lets another request retry if a regeneration dies without releasing the marker
    REGENERATION_LOCK_TTL = 60

    def __init__(self, redis_url: str = None):
        if redis_url is None:
            redis_url = get_redis_url()
        self.redis = aioredis.from_url(redis_url, decode_responses=True)
        self.clock = time.time

    def _key(self, kind: str, slug: str) -> str:
        return f"{self.KEY_PREFIX}:{kind}:{slug}"

    def _lock_key(self, kind: str, slug: str) -> str:
        # Held while a stale page is regenerated, so only one request schedules the work
        return f"{self._key(kind, slug)}:regenerating"

    async def get_or_generate(
        self,
        kind: str,
        slug: str,
        generate: Callable[[], Awaitable[P]],
        props_type: Type[P],
        schedule: Optional[Scheduler] = None,
    ) -> P:
        cache_key = self._key(kind, slug)
        cached = await self.redis.get(cache_key)
        if not cached:
            # Fallback generation: first request for this page builds it now
            logger.info(f"Cache miss for page: {cache_key}")
            return await self.regenerate(kind, slug, generate)

        entry = json.loads(cached)
        props = props_type.model_validate(entry["props"])
        fresh_for = max(0, int(entry["stale_at"] - self.clock()))
        if fresh_for > 0:
            logger.info(f"Cache hit for page: {cache_key}")
        elif schedule is None:
            logger.info(f"Serving stale page without revalidation: {cache_key}")
        elif await self.redis.set(self._lock_key(kind, slug), "1", nx=True, ex=self.REGENERATION_LOCK_TTL):
            logger.info(f"Serving stale page, revalidating in background: {cache_key}")
            schedule(self.regenerate, kind, slug, generate)
        else:
            logger.info(f"Serving stale page, revalidation already running: {cache_key}")
        return props.model_copy(update={"fresh_for": fresh_for})

    async def regenerate(self, kind: str, slug: str, generate: Callable[[], Awaitable[P]]) -> P:
        try:
            props = await generate()
            await self.store(kind, slug, props)
        finally:
            await self.redis.delete(self._lock_key(kind, slug))
        return props.model_copy(update={"fresh_for": props.revalidate})

    async def store(self, kind: str, slug: str, props: PageProps):
        entry = {
            "props": props.model_dump(mode="json"),
            "stale_at": self.clock() + props.revalidate,
        }
        await self.redis.setex(self._key(kind, slug), CACHE_RETENTION, json.dumps(entry))

    async def clear_cache(self):
        """Clear all cached pages. Useful for testing."""
        keys = await self.redis.keys(f"{self.KEY_PREFIX}:*")
        if keys:
            await self.redis.delete(*keys)

    async def close(self):
        """Close Redis connection (call on app shutdown)."""
        await self.redis.aclose()
