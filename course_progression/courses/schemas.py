"""Pydantic schemas for the learning server payloads.

Models for:
- Resource locations (lesson/resource composite keys)
- Course view with learning state
- Lesson displays with their resource displays
- Learning update request
"""

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from course_progression.courses.models import (
    GradingMethod,
    ResourceKind,
    ResourceStatus,
)


KEY_SEPARATOR = "::"

ItemT = TypeVar("ItemT")


# ==============================================================================
# Resource Location
# ==============================================================================


class ResourceLocation(BaseModel):
    """Position of a learner: one resource inside one lesson."""

    model_config = ConfigDict(frozen=True, coerce_numbers_to_str=True)

    lesson_id: str = Field(..., description="Lesson ID")
    resource_id: str = Field(..., description="Resource ID")

    @property
    def key(self) -> str:
        """Composite key ``<lesson_id>::<resource_id>``."""
        return f"{self.lesson_id}{KEY_SEPARATOR}{self.resource_id}"

    @classmethod
    def from_key(cls, key: str) -> "ResourceLocation | None":
        """Parse a composite key, returning None when it is malformed."""
        parts = key.split(KEY_SEPARATOR)
        if len(parts) != 2:  # noqa: PLR2004
            return None
        lesson_id, resource_id = parts
        if not lesson_id or not resource_id:
            return None
        return cls(lesson_id=lesson_id, resource_id=resource_id)

    def __str__(self) -> str:
        return self.key


def location_key(location: ResourceLocation | None) -> str | None:
    """Key of a location, or None when there is no location."""
    return location.key if location is not None else None


# ==============================================================================
# Course Schemas
# ==============================================================================


class CourseViewResponse(BaseModel):
    """Course as seen by an enrolled learner."""

    model_config = ConfigDict(from_attributes=True, coerce_numbers_to_str=True)

    id: str
    title: str = ""
    enrolled: bool = True
    sequential_learning: bool = False
    cutoff_progress: float = Field(0, ge=0, le=100, description="Minimum progress %")
    cutoff_score: float = Field(0, ge=0, le=100, description="Minimum score %")
    progress: float | None = Field(None, ge=0, le=100)
    score: float | None = Field(None, ge=0, le=100)
    passed: bool | None = None
    resource_location: ResourceLocation | None = Field(
        None, description="Last persisted position"
    )
    certificate_enabled: bool = False
    certificates: list[str] = Field(default_factory=list)


# ==============================================================================
# Lesson Schemas
# ==============================================================================


class ResourceDisplayResponse(BaseModel):
    """Resource summary inside a lesson."""

    model_config = ConfigDict(from_attributes=True, coerce_numbers_to_str=True)

    id: str
    kind: ResourceKind | str
    sub_kind: str | None = None
    title: str = ""
    thumbnail: str = ""
    passed: bool | None = None
    status: ResourceStatus | str | None = None


class LessonDisplayResponse(BaseModel):
    """Lesson with grading data and ordered resources."""

    model_config = ConfigDict(from_attributes=True, coerce_numbers_to_str=True)

    id: str
    title: str = ""
    grading_method: GradingMethod = GradingMethod.NONE
    weight: float | None = Field(None, ge=0, le=100)
    passed: bool | None = None
    progress: float | None = Field(None, ge=0, le=100)
    score: float | None = Field(None, ge=0, le=100)
    resource_displays: list[ResourceDisplayResponse] = Field(default_factory=list)


class PageResponse(BaseModel, Generic[ItemT]):
    """One page of a paginated listing."""

    items: list[ItemT] = Field(default_factory=list)
    page: int = 1
    total: int = 0


# ==============================================================================
# Learning Update
# ==============================================================================


class UpdateLearningRequest(BaseModel):
    """Learning state written back to the server."""

    progress: float | None = None
    score: float | None = None
    passed: bool | None = None
    resource_location: ResourceLocation | None = None
