"""Course player session.

Wires the progression engine together for one course:
- Loads the course and its lessons from the learning server
- Rebuilds resource maps whenever the lesson list changes
- Resolves the starting position and drives navigation
- Pushes changed learning state back through the synchronizer
"""

from collections.abc import Sequence

import structlog

from course_progression.cache.base import CourseListCache
from course_progression.client.base import CourseProvider, LearningUpdater, LessonProvider
from course_progression.config import Settings, get_settings
from course_progression.core.context import LearningContext, generate_session_id
from course_progression.core.exceptions import CourseNotLoadedError
from course_progression.courses.models import CertificateStatus
from course_progression.courses.schemas import (
    CourseViewResponse,
    LessonDisplayResponse,
    ResourceLocation,
)
from course_progression.player.access import ResourceState
from course_progression.player.graph import ResourceMaps, build_resource_maps
from course_progression.player.location_state import ActiveResourceLocation
from course_progression.player.navigation import NavigationController
from course_progression.progress.scoring import (
    LearningStats,
    ScoreBreakdown,
    calculate_learning_stats,
    certificate_status,
    score_breakdown,
)
from course_progression.progress.sync import LearningStateSynchronizer


logger = structlog.get_logger(__name__)


class CoursePlayerSession:
    """One learner playing one course."""

    def __init__(
        self,
        course_id: str,
        course_provider: CourseProvider,
        lesson_provider: LessonProvider,
        updater: LearningUpdater,
        list_caches: Sequence[CourseListCache] = (),
        active_location: ActiveResourceLocation | None = None,
        settings: Settings | None = None,
        user_id: str | None = None,
    ):
        settings = settings or get_settings()
        self.course_id = course_id
        self.user_id = user_id
        self.course_provider = course_provider
        self.lesson_provider = lesson_provider

        self.course: CourseViewResponse | None = None
        self.lessons: list[LessonDisplayResponse] = []
        self.maps = ResourceMaps()

        self.active_location = active_location or ActiveResourceLocation()
        self.navigation = NavigationController(
            self.maps,
            sequential_learning=False,
            active_location=self.active_location,
            warning_message=settings.navigation_warning_message,
        )
        self.synchronizer = LearningStateSynchronizer(
            updater,
            list_caches=list_caches,
            on_course_updated=self._on_course_updated,
        )
        self.session_id = generate_session_id()

    # ==========================================================================
    # Loading
    # ==========================================================================

    @property
    def is_loaded(self) -> bool:
        return self.course is not None

    async def load(
        self, start_hint: ResourceLocation | None = None
    ) -> ResourceLocation | None:
        """Fetch course and lessons, then resolve where the learner starts.

        Args:
            start_hint: Location requested by the caller; defaults to the
                course's last persisted location, then to the first
                resource the learner should open

        Returns:
            Starting location, or None when the course is complete
        """
        with self._bind_context():
            course = await self.course_provider.get_course(self.course_id)
            lessons = (
                await self.lesson_provider.get_lessons(self.course_id)
                if course.enrolled
                else []
            )

            self.course = course
            self._apply_lessons(lessons)

            start = self.navigation.initialize(self._start_location(start_hint))
            logger.info(
                "course_session_loaded",
                lesson_count=len(lessons),
                resource_count=self.maps.count,
                start=str(start) if start else None,
            )

            await self.sync()
            return start

    async def refresh_lessons(self) -> None:
        """Refetch lessons (e.g. after grading) and re-derive state."""
        self._require_course()
        with self._bind_context():
            lessons = await self.lesson_provider.get_lessons(self.course_id)
            self._apply_lessons(lessons)
            if self.navigation.current is None:
                self.navigation.initialize(self._start_location())
            await self.sync()

    def _start_location(
        self, start_hint: ResourceLocation | None = None
    ) -> ResourceLocation | None:
        if start_hint is not None:
            return start_hint
        if self.course is not None and self.course.resource_location is not None:
            return self.course.resource_location
        return self.navigation.default_start()

    def _apply_lessons(self, lessons: list[LessonDisplayResponse]) -> None:
        self.lessons = lessons
        self.maps = build_resource_maps(lessons)
        self.navigation.update_maps(
            self.maps,
            sequential_learning=self.course.sequential_learning if self.course else False,
        )

    def _bind_context(self) -> LearningContext:
        return LearningContext(
            course_id=self.course_id, user_id=self.user_id, session_id=self.session_id
        )

    def _on_course_updated(self, course: CourseViewResponse) -> None:
        self.course = course

    def _require_course(self) -> CourseViewResponse:
        if self.course is None:
            raise CourseNotLoadedError
        return self.course

    # ==========================================================================
    # Derived state
    # ==========================================================================

    @property
    def stats(self) -> LearningStats | None:
        return calculate_learning_stats(self.course, self.lessons)

    @property
    def location(self) -> ResourceLocation | None:
        """Current position, falling back to the persisted one."""
        if self.navigation.current is not None:
            return self.navigation.current
        return self.course.resource_location if self.course else None

    @property
    def can_go_forward(self) -> bool:
        return self.navigation.can_go_forward

    @property
    def can_go_backward(self) -> bool:
        return self.navigation.can_go_backward

    def score_breakdown(self) -> ScoreBreakdown:
        self._require_course()
        return score_breakdown(self.lessons)

    def certificate_status(self) -> CertificateStatus | None:
        return certificate_status(self._require_course(), self.stats)

    def resource_state(self, location: ResourceLocation) -> ResourceState | None:
        if not self.maps.contains(location):
            return None
        return self.navigation.gate.state_of(location.key)

    # ==========================================================================
    # Navigation
    # ==========================================================================

    async def navigate(self, location: ResourceLocation, emit_warning: bool = True) -> bool:
        moved = self.navigation.set_location(location, emit_warning)
        if moved:
            await self.sync()
        return moved

    async def forward(self) -> bool:
        moved = self.navigation.forward()
        if moved:
            await self.sync()
        return moved

    async def backward(self) -> bool:
        moved = self.navigation.backward()
        if moved:
            await self.sync()
        return moved

    async def handle_key(self, key: str) -> bool:
        """Apply a keyboard shortcut; returns whether to prevent the default."""
        handled = self.navigation.handle_key(key)
        if handled:
            await self.sync()
        return handled

    # ==========================================================================
    # Sync
    # ==========================================================================

    async def sync(self) -> None:
        with self._bind_context():
            await self.synchronizer.observe(self.course, self.stats, self.location)

    async def close(self) -> None:
        """Push the current state if it changed and wait for in-flight writes."""
        await self.sync()
        with self._bind_context():
            await self.synchronizer.drain()
            logger.info("course_session_closed", **self.synchronizer.get_stats())
