"""Tests for the Redis-backed course listing cache."""

import fnmatch
import json
from unittest.mock import AsyncMock, MagicMock

import pytest

from course_progression.cache.redis_cache import RedisCourseListCache
from course_progression.config import Settings


@pytest.fixture
def redis_client() -> MagicMock:
    """Redis mock backed by a plain dict."""
    store: dict[str, str] = {}
    client = MagicMock()
    client.store = store

    async def scan_iter(match: str = "*"):
        for key in list(store):
            if fnmatch.fnmatch(key, match):
                yield key

    async def get(key: str) -> str | None:
        return store.get(key)

    async def setex(key: str, ttl: int, value: str) -> None:
        store[key] = value

    client.scan_iter = MagicMock(side_effect=scan_iter)
    client.get = AsyncMock(side_effect=get)
    client.setex = AsyncMock(side_effect=setex)
    return client


@pytest.fixture
def cache(redis_client) -> RedisCourseListCache:
    settings = Settings(course_list_cache_prefix="courses:list", course_list_cache_ttl=60)
    return RedisCourseListCache(redis_client, settings)


class TestRedisCourseListCache:
    """Tests for RedisCourseListCache."""

    @pytest.mark.asyncio
    async def test_store_and_get(self, cache, redis_client) -> None:
        """Listings should round-trip under the prefixed key with the TTL."""
        pages = [{"items": [{"id": "c1"}], "page": 1, "total": 1}]

        await cache.store("mine", pages)

        redis_client.setex.assert_awaited_once_with(
            "courses:list:mine", 60, json.dumps(pages)
        )
        assert await cache.get("mine") == pages
        assert await cache.get("missing") is None

    @pytest.mark.asyncio
    async def test_patch_rewrites_matching_listings(self, cache, redis_client) -> None:
        """Only listings containing the course should be rewritten."""
        await cache.store("mine", [{"items": [{"id": "c1", "progress": 0}], "total": 1}])
        await cache.store("other", [{"items": [{"id": "c2"}], "total": 1}])
        redis_client.store["unrelated:key"] = "not json"
        redis_client.setex.reset_mock()

        changed = await cache.patch({"id": "c1", "progress": 40}, "update")

        assert changed == 1
        redis_client.setex.assert_awaited_once()
        assert (await cache.get("mine"))[0]["items"][0]["progress"] == 40
        redis_client.scan_iter.assert_called_once_with(match="courses:list:*")

    @pytest.mark.asyncio
    async def test_patch_skips_empty_values(self, cache, redis_client) -> None:
        """Keys that expired between scan and get should be skipped."""
        redis_client.store["courses:list:gone"] = ""

        assert await cache.patch({"id": "c1"}, "delete") == 0
        redis_client.setex.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_redis_errors_propagate(self, cache, redis_client) -> None:
        """Redis failures should surface to the caller."""
        await cache.store("mine", [{"items": [{"id": "c1"}], "total": 1}])
        redis_client.get.side_effect = ConnectionError("redis down")

        with pytest.raises(ConnectionError):
            await cache.patch({"id": "c1"}, "update")
