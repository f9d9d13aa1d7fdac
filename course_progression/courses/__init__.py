"""Course, lesson and resource records consumed by the player.

Provides:
- Grading, resource and certificate enumerations
- Pydantic schemas for server payloads
- The ResourceLocation composite key
"""

from .models import CertificateStatus, GradingMethod, ResourceKind, ResourceStatus
from .schemas import (
    CourseViewResponse,
    LessonDisplayResponse,
    PageResponse,
    ResourceDisplayResponse,
    ResourceLocation,
    UpdateLearningRequest,
    location_key,
)


__all__ = [
    "CertificateStatus",
    "CourseViewResponse",
    "GradingMethod",
    "LessonDisplayResponse",
    "PageResponse",
    "ResourceDisplayResponse",
    "ResourceKind",
    "ResourceLocation",
    "ResourceStatus",
    "UpdateLearningRequest",
    "location_key",
]
