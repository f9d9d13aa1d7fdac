"""Learning context management using contextvars.

Each player session binds the course it plays, the learner and a session ID
so that every log line emitted while loading, navigating or syncing can be
correlated without passing those values around explicitly.
"""

from contextvars import ContextVar
from typing import Any
from uuid import UUID, uuid4


# Context variables for session tracking
session_id_var: ContextVar[str] = ContextVar("session_id", default="")
course_id_var: ContextVar[str | None] = ContextVar("course_id", default=None)
user_id_var: ContextVar[str | None] = ContextVar("user_id", default=None)


def generate_session_id() -> str:
    """Generate a new unique session ID."""
    return str(uuid4())


def get_session_id() -> str:
    """Get the current session ID."""
    return session_id_var.get()


def set_session_id(session_id: str | None = None) -> str:
    """Set the session ID for the current context.

    Args:
        session_id: Optional session ID. If not provided, generates a new one.

    Returns:
        The session ID that was set.
    """
    sid = session_id or generate_session_id()
    session_id_var.set(sid)
    return sid


def get_course_id() -> str | None:
    """Get the current course ID."""
    return course_id_var.get()


def set_course_id(course_id: str | UUID | None) -> None:
    """Set the course ID for the current context."""
    course_id_var.set(str(course_id) if course_id is not None else None)


def get_user_id() -> str | None:
    """Get the current user ID."""
    return user_id_var.get()


def set_user_id(user_id: str | UUID | None) -> None:
    """Set the user ID for the current context."""
    user_id_var.set(str(user_id) if user_id is not None else None)


def get_context() -> dict[str, Any]:
    """Get all context variables as a dictionary.

    Returns:
        Dictionary with session_id, course_id and user_id (unset values omitted).
    """
    context: dict[str, Any] = {}

    session_id = get_session_id()
    if session_id:
        context["session_id"] = session_id

    course_id = get_course_id()
    if course_id:
        context["course_id"] = course_id

    user_id = get_user_id()
    if user_id:
        context["user_id"] = user_id

    return context


def clear_context() -> None:
    """Clear all context variables."""
    session_id_var.set("")
    course_id_var.set(None)
    user_id_var.set(None)


class LearningContext:
    """Context manager for a player session scope.

    Usage:
        with LearningContext(course_id="...", user_id="..."):
            log.info("doing something")  # Will include session_id, course_id
    """

    def __init__(
        self,
        course_id: str | UUID | None = None,
        user_id: str | UUID | None = None,
        session_id: str | None = None,
    ) -> None:
        self.course_id = course_id
        self.user_id = user_id
        self.session_id = session_id
        self._tokens: dict[str, Any] = {}

    def __enter__(self) -> "LearningContext":
        """Enter context and set variables."""
        self._tokens["session_id"] = session_id_var.set(
            self.session_id or generate_session_id()
        )

        if self.course_id is not None:
            self._tokens["course_id"] = course_id_var.set(str(self.course_id))

        if self.user_id is not None:
            self._tokens["user_id"] = user_id_var.set(str(self.user_id))

        return self

    def __exit__(self, *_: object) -> None:
        """Exit context and restore previous values."""
        for var_name, token in self._tokens.items():
            if var_name == "session_id":
                session_id_var.reset(token)
            elif var_name == "course_id":
                course_id_var.reset(token)
            elif var_name == "user_id":
                user_id_var.reset(token)
        self._tokens.clear()
