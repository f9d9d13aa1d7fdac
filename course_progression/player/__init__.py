"""Course player progression engine.

Provides:
- Resource graph flattening (traversal order and lookup maps)
- Sequential-learning accessibility rule
- Navigation state machine with keyboard shortcuts
- Shared active-location slot
- Player session wiring load, navigation and sync
"""

from .access import AccessibilityGate, ResourceState, is_resource_accessible
from .graph import ResourceMaps, ResourceMeta, ResourceType, build_resource_maps
from .location_state import ActiveResourceLocation
from .navigation import NavigationController, NavigationWarning
from .session import CoursePlayerSession


__all__ = [
    "AccessibilityGate",
    "ActiveResourceLocation",
    "CoursePlayerSession",
    "NavigationController",
    "NavigationWarning",
    "ResourceMaps",
    "ResourceMeta",
    "ResourceState",
    "ResourceType",
    "build_resource_maps",
    "is_resource_accessible",
]
