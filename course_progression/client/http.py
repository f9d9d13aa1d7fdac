"""HTTP client for the learning server.

Endpoints:
- GET  /course/{id}            course view with learning state
- GET  /lesson?course={id}     paginated lesson displays
- PUT  /course/{id}/learning   learning state update
"""

from typing import Any

import httpx
import structlog

from course_progression.config import Settings, get_settings
from course_progression.core.exceptions import LearningApiError
from course_progression.courses.schemas import (
    CourseViewResponse,
    LessonDisplayResponse,
    PageResponse,
    UpdateLearningRequest,
)


logger = structlog.get_logger(__name__)


class LearningApiClient:
    """Async client implementing the course, lesson and learning operations."""

    def __init__(
        self,
        settings: Settings | None = None,
        client: httpx.AsyncClient | None = None,
    ):
        """Initialize client.

        Args:
            settings: Settings providing base URL, timeout and token
            client: Preconfigured httpx client (owned by the caller)
        """
        self.settings = settings or get_settings()
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            base_url=self.settings.api_base_url,
            timeout=self.settings.api_timeout_seconds,
            headers=self._default_headers(),
        )

    def _default_headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.settings.api_token:
            headers["Authorization"] = f"Bearer {self.settings.api_token}"
        return headers

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "LearningApiClient":
        return self

    async def __aexit__(self, *_: object) -> None:
        await self.aclose()

    # ==========================================================================
    # Operations
    # ==========================================================================

    async def get_course(self, course_id: str) -> CourseViewResponse:
        data = await self._request("GET", f"/course/{course_id}")
        return CourseViewResponse.model_validate(data)

    async def get_lessons(self, course_id: str) -> list[LessonDisplayResponse]:
        """Fetch every lesson of a course, following pagination."""
        lessons: list[LessonDisplayResponse] = []
        page = 1
        page_size = self.settings.api_page_size

        while True:
            data = await self._request(
                "GET",
                "/lesson",
                params={"course": course_id, "page": page, "size": page_size},
            )
            result = PageResponse[LessonDisplayResponse].model_validate(data)
            lessons.extend(result.items)

            if not result.items or len(lessons) >= result.total:
                break
            page += 1

        logger.debug(
            "lessons_fetched",
            course_id=course_id,
            lesson_count=len(lessons),
            pages=page,
        )
        return lessons

    async def update_learning(
        self, course_id: str, request: UpdateLearningRequest
    ) -> dict[str, Any]:
        return await self._request(
            "PUT",
            f"/course/{course_id}/learning",
            json=request.model_dump(mode="json"),
        )

    # ==========================================================================
    # Transport
    # ==========================================================================

    async def _request(self, method: str, url: str, **kwargs: Any) -> Any:
        try:
            response = await self._client.request(method, url, **kwargs)
        except httpx.TimeoutException as e:
            logger.error("learning_api_timeout", method=method, url=url, error=str(e))
            raise LearningApiError("Learning API timeout", "api_timeout") from e
        except httpx.RequestError as e:
            logger.error("learning_api_request_error", method=method, url=url, error=str(e))
            raise LearningApiError(
                f"Learning API request error: {e}", "api_unavailable"
            ) from e

        if response.is_error:
            logger.error(
                "learning_api_request_failed",
                method=method,
                url=url,
                status_code=response.status_code,
                response_text=response.text[:500],
            )
            raise LearningApiError(
                f"Learning API error: {response.status_code}",
                status_code=response.status_code,
            )

        if not response.content:
            return {}
        return response.json()
