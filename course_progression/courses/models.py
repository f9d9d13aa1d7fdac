"""Enumerations shared by course, lesson and resource records."""

from enum import Enum


class GradingMethod(str, Enum):
    """How a lesson contributes to course-level progress and score."""

    PROGRESS = "progress"  # Counted in course progress, scored by lesson progress
    SCORE = "score"  # Scored by lesson score
    NONE = "none"  # Ungraded, earns its full weight


class ResourceKind(str, Enum):
    """Kinds of resources a lesson can hold."""

    VIDEO = "video"
    ASSET = "asset"
    QUIZ = "quiz"
    SURVEY = "survey"
    EXAM = "exam"


class ResourceStatus(str, Enum):
    """Distinguished resource statuses."""

    GRADING = "grading"  # Submitted, awaiting human grading


class CertificateStatus(str, Enum):
    """Certificate state derived from course progress."""

    ISSUED = "issued"
    ELIGIBLE = "eligible"
