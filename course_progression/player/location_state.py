"""Shared "active resource location" slot.

One navigation controller writes the slot; any number of consumers read
``value`` or subscribe to changes. The slot is passed by reference to its
writer and readers.
"""

from collections.abc import Callable

import structlog

from course_progression.courses.schemas import ResourceLocation


logger = structlog.get_logger(__name__)

LocationListener = Callable[[ResourceLocation | None], None]


class ActiveResourceLocation:
    """Single-writer broadcast value holding the learner's current resource."""

    def __init__(self, initial: ResourceLocation | None = None) -> None:
        self._value = initial
        self._listeners: list[LocationListener] = []

    @property
    def value(self) -> ResourceLocation | None:
        return self._value

    def set(self, location: ResourceLocation | None) -> None:
        """Replace the value and notify subscribers when it changed."""
        if location == self._value:
            return
        self._value = location
        for listener in list(self._listeners):
            try:
                listener(location)
            except Exception:
                logger.exception(
                    "location_listener_error",
                    location=str(location) if location else None,
                )

    def subscribe(self, listener: LocationListener) -> Callable[[], None]:
        """Register a listener; returns a callable that unsubscribes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def is_inside(self, lesson_id: str, resource_id: str | None = None) -> bool:
        """Check whether the learner is currently inside a lesson or resource."""
        if self._value is None or self._value.lesson_id != lesson_id:
            return False
        return resource_id is None or self._value.resource_id == resource_id

    @property
    def subscriber_count(self) -> int:
        return len(self._listeners)
