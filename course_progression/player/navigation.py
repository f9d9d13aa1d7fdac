"""Navigation state machine for the course player.

Holds the learner's current resource, resolves where a session starts,
moves forward/backward through the traversal order and rejects jumps past
incomplete work when the course enforces sequential learning.
"""

from collections.abc import Callable
from dataclasses import dataclass

import structlog

from course_progression.courses.schemas import ResourceLocation, location_key
from course_progression.player.access import AccessibilityGate
from course_progression.player.graph import ResourceMaps, ResourceMeta, ResourceType
from course_progression.player.location_state import ActiveResourceLocation


logger = structlog.get_logger(__name__)

DEFAULT_WARNING_MESSAGE = "You must proceed in order."

FORWARD_KEYS = frozenset({"ArrowRight", "ArrowDown"})
BACKWARD_KEYS = frozenset({"ArrowLeft", "ArrowUp"})


@dataclass(frozen=True)
class NavigationWarning:
    """Emitted when a navigation attempt is blocked by the sequential rule."""

    message: str
    requested: ResourceLocation


WarningListener = Callable[[NavigationWarning], None]


class NavigationController:
    """Current-position state machine over a set of resource maps.

    Invalid locations are ignored rather than raised: lesson data can change
    shape between fetches, so callers may hold stale locations.
    """

    def __init__(
        self,
        maps: ResourceMaps,
        sequential_learning: bool,
        active_location: ActiveResourceLocation | None = None,
        warning_message: str = DEFAULT_WARNING_MESSAGE,
    ):
        """Initialize the controller.

        Args:
            maps: Resource maps of the current lesson list
            sequential_learning: Whether the course enforces order
            active_location: Shared slot published on every committed move
            warning_message: Message carried by blocked-navigation warnings
        """
        self.maps = maps
        self.gate = AccessibilityGate(maps, sequential_learning)
        self.active_location = active_location or ActiveResourceLocation()
        self.warning_message = warning_message
        self._current: ResourceLocation | None = None
        self._warning_listeners: list[WarningListener] = []

    # ==========================================================================
    # State
    # ==========================================================================

    @property
    def sequential_learning(self) -> bool:
        return self.gate.sequential_learning

    @property
    def current(self) -> ResourceLocation | None:
        return self._current

    @property
    def current_key(self) -> str | None:
        return location_key(self._current)

    @property
    def current_index(self) -> int | None:
        return self.maps.index_of(self._current)

    @property
    def current_type(self) -> ResourceType | None:
        key = self.current_key
        return self.maps.types.get(key) if key is not None else None

    @property
    def current_meta(self) -> ResourceMeta | None:
        key = self.current_key
        return self.maps.metas.get(key) if key is not None else None

    def update_maps(
        self, maps: ResourceMaps, sequential_learning: bool | None = None
    ) -> None:
        """Swap in maps rebuilt from a new lesson list.

        The current location is dropped if it no longer exists.
        """
        self.maps = maps
        self.gate = AccessibilityGate(
            maps,
            self.sequential_learning
            if sequential_learning is None
            else sequential_learning,
        )
        if self._current is not None and not maps.contains(self._current):
            logger.info("current_location_invalidated", location=str(self._current))
            self._current = None
            self.active_location.set(None)

    # ==========================================================================
    # Transitions
    # ==========================================================================

    def initialize(self, start_location: ResourceLocation | None) -> ResourceLocation | None:
        """Resolve the starting position from a caller-supplied hint.

        Returns:
            The resolved location, or None when the hint is unknown or the
            course has nothing left to complete.
        """
        resolved = self.resolve_start(start_location)
        self._current = resolved
        self.active_location.set(resolved)

        logger.debug(
            "navigation_initialized",
            requested=str(start_location) if start_location else None,
            resolved=str(resolved) if resolved else None,
        )
        return resolved

    def resolve_start(
        self, start_location: ResourceLocation | None
    ) -> ResourceLocation | None:
        """Pure start-position resolution; does not change state."""
        if not self.maps.contains(start_location):
            return None
        if not self.sequential_learning:
            return start_location
        if self.gate.is_accessible(start_location.key):
            return start_location

        fallback = self.gate.first_incomplete_key()
        return self.maps.locations[fallback] if fallback is not None else None

    def default_start(self) -> ResourceLocation | None:
        """Start for a learner with no saved position.

        Sequential courses open at the first incomplete resource, everything
        else at the first resource.
        """
        if self.sequential_learning:
            key = self.gate.first_incomplete_key()
            if key is not None:
                return self.maps.locations[key]
        return self.maps.location_at(0)

    def set_location(
        self, new_location: ResourceLocation | None, emit_warning: bool = True
    ) -> bool:
        """Move to ``new_location`` if it is known and unlocked.

        Args:
            new_location: Requested location
            emit_warning: Notify warning listeners when the move is blocked

        Returns:
            True if the location was committed
        """
        if not self.maps.contains(new_location):
            logger.debug(
                "navigation_ignored_unknown_location",
                location=str(new_location) if new_location else None,
            )
            return False

        if not self.gate.is_accessible(new_location.key):
            logger.info("navigation_blocked", location=str(new_location))
            if emit_warning:
                self._emit_warning(
                    NavigationWarning(message=self.warning_message, requested=new_location)
                )
            return False

        self._current = new_location
        self.active_location.set(new_location)
        return True

    def forward(self) -> bool:
        """Move to the next resource in traversal order."""
        return self._step(1)

    def backward(self) -> bool:
        """Move to the previous resource in traversal order."""
        return self._step(-1)

    def _step(self, offset: int) -> bool:
        index = self.current_index
        if index is None:
            return False
        target = self.maps.location_at(index + offset)
        if target is None:
            return False
        return self.set_location(target)

    @property
    def can_go_forward(self) -> bool:
        index = self.current_index
        if index is None or index >= self.maps.count - 1:
            return False
        if not self.sequential_learning:
            return True
        meta = self.current_meta
        return meta is not None and meta.is_complete

    @property
    def can_go_backward(self) -> bool:
        index = self.current_index
        return index is not None and index > 0

    # ==========================================================================
    # Keyboard
    # ==========================================================================

    def handle_key(self, key: str) -> bool:
        """Apply a keyboard shortcut.

        Returns:
            True if the key is a navigation key and its default action must
            be prevented.
        """
        if self._current is None:
            return False
        if key in FORWARD_KEYS:
            self.forward()
            return True
        if key in BACKWARD_KEYS:
            self.backward()
            return True
        return False

    # ==========================================================================
    # Next-up indicator
    # ==========================================================================

    @property
    def next_meta(self) -> ResourceMeta | None:
        """Meta of the resource after the current one."""
        index = self.current_index
        if index is None:
            return None
        key = self.maps.key_at(index + 1)
        return self.maps.metas.get(key) if key is not None else None

    @property
    def position_label(self) -> str | None:
        """1-based position of the next resource, e.g. ``"3 / 10"``."""
        index = self.current_index
        if index is None:
            return None
        return f"{index + 2} / {self.maps.count}"

    # ==========================================================================
    # Warnings
    # ==========================================================================

    def on_warning(self, listener: WarningListener) -> Callable[[], None]:
        """Register a blocked-navigation listener; returns an unsubscriber."""
        self._warning_listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._warning_listeners:
                self._warning_listeners.remove(listener)

        return unsubscribe

    def _emit_warning(self, warning: NavigationWarning) -> None:
        for listener in list(self._warning_listeners):
            try:
                listener(warning)
            except Exception:
                logger.exception("navigation_warning_listener_error")
