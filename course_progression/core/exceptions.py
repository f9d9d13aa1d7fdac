"""Exceptions shared across the progression engine."""


class ProgressionError(Exception):
    """Base progression error."""

    def __init__(self, message: str, code: str = "progression_error"):
        self.message = message
        self.code = code
        super().__init__(message)


class LearningApiError(ProgressionError):
    """Learning server request failed."""

    def __init__(
        self,
        message: str = "Learning API request failed",
        code: str = "api_error",
        status_code: int | None = None,
    ):
        self.status_code = status_code
        super().__init__(message, code)


class CourseNotLoadedError(ProgressionError):
    """Session used before its course and lessons were loaded."""

    def __init__(self, message: str = "Course has not been loaded"):
        super().__init__(message, "course_not_loaded")
