"""Push-when-changed synchronization of learning state.

The synchronizer remembers the last snapshot it pushed and writes to the
server only when a newly observed snapshot differs from it. Local state is
updated optimistically without waiting for the write; a failed write is
logged and never rolled back. The next distinct snapshot heals it.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

import structlog

from course_progression.courses.schemas import (
    CourseViewResponse,
    ResourceLocation,
    UpdateLearningRequest,
)


if TYPE_CHECKING:
    from course_progression.cache.base import CourseListCache
    from course_progression.client.base import LearningUpdater
    from course_progression.progress.scoring import LearningStats


logger = structlog.get_logger(__name__)

CourseListener = Callable[[CourseViewResponse], None]


@dataclass(frozen=True)
class LearningSnapshot:
    """Learning state as written to the server."""

    progress: float
    score: float
    passed: bool
    resource_location: ResourceLocation

    def to_request(self) -> UpdateLearningRequest:
        return UpdateLearningRequest(
            progress=self.progress,
            score=self.score,
            passed=self.passed,
            resource_location=self.resource_location,
        )


class LearningStateSynchronizer:
    """Writes learning state to the server at most once per distinct snapshot."""

    def __init__(
        self,
        updater: LearningUpdater,
        list_caches: Sequence[CourseListCache] = (),
        on_course_updated: CourseListener | None = None,
    ):
        """Initialize synchronizer.

        Args:
            updater: Learning API write operation
            list_caches: Cached course listings patched optimistically
            on_course_updated: Receives the optimistically updated course
        """
        self.updater = updater
        self.list_caches = list(list_caches)
        self.on_course_updated = on_course_updated

        self._last_pushed: LearningSnapshot | None = None
        self._pending: set[asyncio.Task] = set()

        # Counters for monitoring
        self._writes_started = 0
        self._writes_failed = 0

    @property
    def last_pushed(self) -> LearningSnapshot | None:
        return self._last_pushed

    @property
    def pending_writes(self) -> int:
        return len(self._pending)

    async def observe(
        self,
        course: CourseViewResponse | None,
        stats: LearningStats | None,
        location: ResourceLocation | None,
    ) -> asyncio.Task | None:
        """Observe the current state and push it if it changed.

        Args:
            course: Loaded course, or None while loading
            stats: Aggregated stats, or None until lessons are loaded
            location: Current learner position

        Returns:
            The in-flight write task, or None when nothing was pushed
        """
        if course is None or stats is None or location is None:
            return None

        snapshot = LearningSnapshot(
            progress=stats.progress,
            score=stats.score,
            passed=stats.passed,
            resource_location=location,
        )
        if snapshot == self._last_pushed:
            return None

        # Recorded before any await so concurrent observers cannot push twice
        self._last_pushed = snapshot

        task = asyncio.create_task(
            self._write(course.id, snapshot),
            name=f"learning_update:{course.id}",
        )
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        self._writes_started += 1

        self._update_local_course(course, snapshot)
        await self._patch_list_caches(course.id, snapshot)

        return task

    async def drain(self) -> None:
        """Wait for in-flight writes to settle."""
        if self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    # ==========================================================================
    # Internals
    # ==========================================================================

    async def _write(self, course_id: str, snapshot: LearningSnapshot) -> None:
        try:
            await self.updater.update_learning(course_id, snapshot.to_request())
        except Exception:
            self._writes_failed += 1
            logger.exception(
                "learning_update_failed",
                course_id=course_id,
                location=snapshot.resource_location.key,
            )
            return

        logger.info(
            "learning_state_pushed",
            course_id=course_id,
            progress=snapshot.progress,
            score=snapshot.score,
            passed=snapshot.passed,
            location=snapshot.resource_location.key,
        )

    def _update_local_course(
        self, course: CourseViewResponse, snapshot: LearningSnapshot
    ) -> None:
        if self.on_course_updated is None:
            return
        updated = course.model_copy(
            update={
                "progress": snapshot.progress,
                "score": snapshot.score,
                "passed": snapshot.passed,
                "resource_location": snapshot.resource_location,
            }
        )
        self.on_course_updated(updated)

    async def _patch_list_caches(
        self, course_id: str, snapshot: LearningSnapshot
    ) -> None:
        item = {
            "id": course_id,
            "progress": snapshot.progress,
            "score": snapshot.score,
            "passed": snapshot.passed,
            "resource_location": snapshot.resource_location.model_dump(),
        }
        for cache in self.list_caches:
            try:
                await cache.patch(item, "update")
            except Exception:
                logger.exception(
                    "course_list_cache_patch_failed",
                    course_id=course_id,
                    cache=type(cache).__name__,
                )

    def get_stats(self) -> dict:
        """Get synchronizer statistics for monitoring."""
        return {
            "writes_started": self._writes_started,
            "writes_failed": self._writes_failed,
            "pending_writes": len(self._pending),
            "last_pushed": self._last_pushed,
        }
