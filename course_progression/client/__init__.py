"""Learning server access.

Provides:
- Provider/updater protocols consumed by the player
- httpx-based implementation of those protocols
"""

from .base import CourseProvider, LearningUpdater, LessonProvider
from .http import LearningApiClient


__all__ = [
    "CourseProvider",
    "LearningApiClient",
    "LearningUpdater",
    "LessonProvider",
]
