"""Flattening of lessons into the canonical resource traversal order.

Lessons are walked in the given order and the resources of each lesson in
their given order; every resource receives the next integer index. The
resulting maps are rebuilt wholesale whenever the lesson list changes.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field

import structlog

from course_progression.courses.models import ResourceStatus
from course_progression.courses.schemas import (
    LessonDisplayResponse,
    ResourceDisplayResponse,
    ResourceLocation,
)


logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class ResourceType:
    """Kind of a resource, used to pick its viewer."""

    kind: str
    sub_kind: str | None = None


@dataclass(frozen=True)
class ResourceMeta:
    """Display and completion data of a resource."""

    title: str
    thumbnail: str
    passed: bool | None
    status: str | None

    @property
    def is_passed(self) -> bool:
        return self.passed is True

    @property
    def is_grading(self) -> bool:
        return self.status == ResourceStatus.GRADING

    @property
    def is_complete(self) -> bool:
        """Passed, or submitted and awaiting grading."""
        return self.is_passed or self.is_grading


@dataclass
class ResourceMaps:
    """Lookup maps keyed by ``<lesson_id>::<resource_id>``."""

    types: dict[str, ResourceType] = field(default_factory=dict)
    metas: dict[str, ResourceMeta] = field(default_factory=dict)
    indices: dict[str, int] = field(default_factory=dict)
    locations: dict[str, ResourceLocation] = field(default_factory=dict)
    # Index -> key; None marks the slot of a key that was later overwritten
    order: list[str | None] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.indices)

    def ordered_keys(self) -> list[str]:
        """Keys sorted by traversal index."""
        return [key for key in self.order if key is not None]

    def key_at(self, index: int) -> str | None:
        if 0 <= index < len(self.order):
            return self.order[index]
        return None

    def first_key(self) -> str | None:
        return self.key_at(0)

    def index_of(self, location: ResourceLocation | None) -> int | None:
        if location is None:
            return None
        return self.indices.get(location.key)

    def contains(self, location: ResourceLocation | None) -> bool:
        return self.index_of(location) is not None

    def location_at(self, index: int) -> ResourceLocation | None:
        key = self.key_at(index)
        return self.locations[key] if key is not None else None


def _resource_key(
    lesson: LessonDisplayResponse, resource: ResourceDisplayResponse
) -> str | None:
    if not lesson.id or not resource.id:
        return None
    return ResourceLocation(lesson_id=lesson.id, resource_id=resource.id).key


def build_resource_maps(lessons: Iterable[LessonDisplayResponse]) -> ResourceMaps:
    """Build type, meta, index and location maps in a single ordered pass.

    A resource without a derivable key is skipped. A key seen twice keeps the
    data of its last occurrence.
    """
    maps = ResourceMaps()
    index = 0

    for lesson in lessons:
        for resource in lesson.resource_displays:
            key = _resource_key(lesson, resource)
            if key is None:
                logger.debug(
                    "resource_without_key_skipped",
                    lesson_id=lesson.id,
                    resource_id=resource.id,
                )
                continue

            if key in maps.indices:
                logger.warning("duplicate_resource_key", key=key)
                maps.order[maps.indices[key]] = None

            maps.locations[key] = ResourceLocation(
                lesson_id=lesson.id, resource_id=resource.id
            )
            maps.types[key] = ResourceType(
                kind=str(getattr(resource.kind, "value", resource.kind)),
                sub_kind=resource.sub_kind,
            )
            maps.metas[key] = ResourceMeta(
                title=resource.title,
                thumbnail=resource.thumbnail,
                passed=resource.passed,
                status=getattr(resource.status, "value", resource.status),
            )
            maps.indices[key] = index
            maps.order.append(key)
            index += 1

    return maps
