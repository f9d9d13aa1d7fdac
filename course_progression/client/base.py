"""Interfaces of the learning server consumed by the player."""

from typing import Any, Protocol

from course_progression.courses.schemas import (
    CourseViewResponse,
    LessonDisplayResponse,
    UpdateLearningRequest,
)


class CourseProvider(Protocol):
    async def get_course(self, course_id: str) -> CourseViewResponse: ...


class LessonProvider(Protocol):
    async def get_lessons(self, course_id: str) -> list[LessonDisplayResponse]: ...


class LearningUpdater(Protocol):
    async def update_learning(
        self, course_id: str, request: UpdateLearningRequest
    ) -> dict[str, Any]: ...
