# Core infrastructure
from course_progression.core.context import (
    LearningContext,
    clear_context,
    get_context,
    get_course_id,
    get_session_id,
    get_user_id,
    set_course_id,
    set_session_id,
    set_user_id,
)
from course_progression.core.exceptions import (
    CourseNotLoadedError,
    LearningApiError,
    ProgressionError,
)
from course_progression.core.logging import configure_structlog, get_logger


__all__ = [
    "CourseNotLoadedError",
    "LearningApiError",
    "LearningContext",
    "ProgressionError",
    "clear_context",
    "configure_structlog",
    "get_context",
    "get_course_id",
    "get_logger",
    "get_session_id",
    "get_user_id",
    "set_course_id",
    "set_session_id",
    "set_user_id",
]
