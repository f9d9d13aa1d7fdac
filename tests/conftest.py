"""Shared fixtures: factories for courses, lessons and resources."""

from collections.abc import Callable
from typing import Any

import pytest

from course_progression.courses.models import GradingMethod
from course_progression.courses.schemas import (
    CourseViewResponse,
    LessonDisplayResponse,
    ResourceDisplayResponse,
    ResourceLocation,
)


@pytest.fixture
def make_resource() -> Callable[..., ResourceDisplayResponse]:
    """Factory for resource displays."""

    def _make(
        resource_id: str,
        passed: bool | None = None,
        status: str | None = None,
        kind: str = "video",
        **extra: Any,
    ) -> ResourceDisplayResponse:
        return ResourceDisplayResponse(
            id=resource_id,
            kind=kind,
            title=extra.pop("title", f"Resource {resource_id}"),
            thumbnail=extra.pop("thumbnail", f"https://cdn.test/{resource_id}.png"),
            passed=passed,
            status=status,
            **extra,
        )

    return _make


@pytest.fixture
def make_lesson() -> Callable[..., LessonDisplayResponse]:
    """Factory for lesson displays."""

    def _make(
        lesson_id: str,
        resources: list[ResourceDisplayResponse] | None = None,
        grading_method: GradingMethod | str = GradingMethod.NONE,
        **extra: Any,
    ) -> LessonDisplayResponse:
        return LessonDisplayResponse(
            id=lesson_id,
            title=extra.pop("title", f"Lesson {lesson_id}"),
            grading_method=grading_method,
            resource_displays=resources or [],
            **extra,
        )

    return _make


@pytest.fixture
def make_course() -> Callable[..., CourseViewResponse]:
    """Factory for course views."""

    def _make(course_id: str = "c1", **fields: Any) -> CourseViewResponse:
        return CourseViewResponse(id=course_id, title="Course", **fields)

    return _make


@pytest.fixture
def loc() -> Callable[[str, str], ResourceLocation]:
    """Shortcut for building resource locations."""

    def _make(lesson_id: str, resource_id: str) -> ResourceLocation:
        return ResourceLocation(lesson_id=lesson_id, resource_id=resource_id)

    return _make


@pytest.fixture
def sequential_lessons(make_lesson, make_resource) -> list[LessonDisplayResponse]:
    """Three resources: first passed, second open, third not started.

    Layout: L1 = [r1 (passed), r2], L2 = [r3]
    """
    return [
        make_lesson(
            "L1",
            [make_resource("r1", passed=True), make_resource("r2", passed=False)],
        ),
        make_lesson("L2", [make_resource("r3")]),
    ]
