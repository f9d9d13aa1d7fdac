"""Caches of paginated course listings patched on learning updates."""

from .base import CourseListCache, PatchMode, patch_pages
from .memory import InMemoryCourseListCache
from .redis_cache import RedisCourseListCache


__all__ = [
    "CourseListCache",
    "InMemoryCourseListCache",
    "PatchMode",
    "RedisCourseListCache",
    "patch_pages",
]
