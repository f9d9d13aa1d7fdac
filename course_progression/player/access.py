"""Sequential-learning accessibility rule.

Under sequential learning a resource unlocks only once every resource before
it is passed or awaiting grading. The check walks the traversal order on
every call; metas change as grading completes, so no result is cached.
"""

from collections.abc import Mapping
from enum import Enum

from course_progression.player.graph import ResourceMaps, ResourceMeta


class ResourceState(str, Enum):
    """Display state of a resource in a course outline."""

    PASSED = "passed"
    GRADING = "grading"
    AVAILABLE = "available"
    LOCKED = "locked"


def is_resource_accessible(
    key: str,
    indices: Mapping[str, int],
    metas: Mapping[str, ResourceMeta],
    sequential_learning: bool,
) -> bool:
    """Check whether the resource under ``key`` may be opened.

    Args:
        key: Composite resource key
        indices: Traversal index per key
        metas: Completion data per key
        sequential_learning: Whether the course enforces order

    Returns:
        True if the resource is unlocked. Unknown keys are never accessible.
    """
    if not sequential_learning:
        return True

    current_index = indices.get(key)
    if current_index is None:
        return False
    if current_index == 0:
        return True

    for other_key, index in indices.items():
        if index >= current_index:
            continue
        meta = metas.get(other_key)
        if meta is None or not meta.is_complete:
            return False

    return True


class AccessibilityGate:
    """Accessibility rule bound to the current resource maps."""

    def __init__(self, maps: ResourceMaps, sequential_learning: bool):
        self.maps = maps
        self.sequential_learning = sequential_learning

    def is_accessible(self, key: str) -> bool:
        return is_resource_accessible(
            key, self.maps.indices, self.maps.metas, self.sequential_learning
        )

    def state_of(self, key: str) -> ResourceState:
        """Classify a resource for outline display."""
        meta = self.maps.metas.get(key)
        if meta is not None and meta.is_passed:
            return ResourceState.PASSED
        if meta is not None and meta.is_grading:
            return ResourceState.GRADING
        if self.is_accessible(key):
            return ResourceState.AVAILABLE
        return ResourceState.LOCKED

    def first_incomplete_key(self) -> str | None:
        """First key in traversal order that is neither passed nor grading."""
        for key in self.maps.ordered_keys():
            meta = self.maps.metas.get(key)
            if meta is None or not meta.is_complete:
                return key
        return None
