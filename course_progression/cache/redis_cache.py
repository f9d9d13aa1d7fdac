"""Redis-backed cache of paginated course listings.

Each listing is stored as a JSON array of pages under
``<prefix>:<listing_key>``. Patching scans the prefix and rewrites every
listing that contains the patched course.
"""

import json

import redis.asyncio as redis
import structlog

from course_progression.config import Settings, get_settings

from .base import Item, Page, PatchMode, patch_pages


logger = structlog.get_logger(__name__)


class RedisCourseListCache:
    """Course listings shared through Redis."""

    def __init__(self, redis_client: redis.Redis, settings: Settings | None = None):
        """Initialize with a Redis client (decode_responses=True expected)."""
        settings = settings or get_settings()
        self.redis = redis_client
        self.prefix = settings.course_list_cache_prefix
        self.ttl = settings.course_list_cache_ttl

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "RedisCourseListCache":
        settings = settings or get_settings()
        client = redis.from_url(settings.redis_url, decode_responses=True)
        return cls(client, settings)

    def _key(self, listing_key: str) -> str:
        return f"{self.prefix}:{listing_key}"

    async def store(self, listing_key: str, pages: list[Page]) -> None:
        await self.redis.setex(
            self._key(listing_key), self.ttl, json.dumps(pages, default=str)
        )

    async def get(self, listing_key: str) -> list[Page] | None:
        cached = await self.redis.get(self._key(listing_key))
        return json.loads(cached) if cached else None

    async def patch(
        self,
        item: Item,
        mode: PatchMode | str,
        children: str | None = None,
        pin: bool = False,
    ) -> int:
        """Patch every cached listing; returns the number of listings changed."""
        changed_count = 0
        keys = [key async for key in self.redis.scan_iter(match=f"{self.prefix}:*")]

        for key in keys:
            cached = await self.redis.get(key)
            if not cached:
                continue
            patched, changed = patch_pages(json.loads(cached), item, mode, children, pin)
            if not changed:
                continue
            await self.redis.setex(key, self.ttl, json.dumps(patched, default=str))
            changed_count += 1

        logger.debug(
            "course_list_cache_patched",
            item_id=item.get("id"),
            mode=PatchMode(mode).value,
            listings_scanned=len(keys),
            listings_changed=changed_count,
        )
        return changed_count
