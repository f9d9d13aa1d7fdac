"""Tests for course, lesson and location schemas."""

import pytest
from pydantic import ValidationError

from course_progression.courses.models import GradingMethod, ResourceKind, ResourceStatus
from course_progression.courses.schemas import (
    CourseViewResponse,
    LessonDisplayResponse,
    ResourceLocation,
    UpdateLearningRequest,
    location_key,
)


class TestResourceLocation:
    """Tests for the composite lesson/resource key."""

    def test_key_format(self) -> None:
        """Key should join lesson and resource IDs with '::'."""
        location = ResourceLocation(lesson_id="L1", resource_id="r1")
        assert location.key == "L1::r1"
        assert str(location) == "L1::r1"

    def test_from_key(self) -> None:
        """A well-formed key should parse back to the same location."""
        location = ResourceLocation.from_key("L1::r1")
        assert location == ResourceLocation(lesson_id="L1", resource_id="r1")

    @pytest.mark.parametrize("key", ["L1", "L1::r1::x", "::r1", "L1::", ""])
    def test_from_key_malformed(self, key: str) -> None:
        """Malformed keys should parse to None instead of raising."""
        assert ResourceLocation.from_key(key) is None

    def test_hashable_and_frozen(self) -> None:
        """Locations should be usable as dict keys and immutable."""
        a = ResourceLocation(lesson_id="L1", resource_id="r1")
        b = ResourceLocation(lesson_id="L1", resource_id="r1")
        assert {a: 1}[b] == 1
        with pytest.raises(ValidationError):
            a.lesson_id = "L2"

    def test_numeric_ids_coerced(self) -> None:
        """Numeric IDs from the server should be coerced to strings."""
        location = ResourceLocation.model_validate({"lesson_id": 7, "resource_id": 9})
        assert location.key == "7::9"

    def test_location_key_helper(self) -> None:
        """location_key should pass None through."""
        assert location_key(None) is None
        assert location_key(ResourceLocation(lesson_id="a", resource_id="b")) == "a::b"


class TestLessonDisplayResponse:
    """Tests for lesson payload parsing."""

    def test_parse_payload(self) -> None:
        """Server payload should parse including nested resources."""
        lesson = LessonDisplayResponse.model_validate(
            {
                "id": "L1",
                "title": "Intro",
                "grading_method": "score",
                "weight": 40,
                "score": 75,
                "resource_displays": [
                    {"id": "v1", "kind": "video", "sub_kind": "youtube", "title": "V"},
                    {"id": "e1", "kind": "exam", "status": "grading"},
                    {"id": "x1", "kind": "hologram"},
                ],
            }
        )
        assert lesson.grading_method == GradingMethod.SCORE
        assert lesson.resource_displays[0].kind == ResourceKind.VIDEO
        assert lesson.resource_displays[0].sub_kind == "youtube"
        assert lesson.resource_displays[1].status == ResourceStatus.GRADING
        assert lesson.resource_displays[2].kind == "hologram"

    def test_weight_out_of_range(self) -> None:
        """Weights above 100 should be rejected."""
        with pytest.raises(ValidationError):
            LessonDisplayResponse(id="L1", weight=120)


class TestCourseViewResponse:
    """Tests for course payload parsing."""

    def test_defaults(self) -> None:
        """Optional learning fields should default to unset."""
        course = CourseViewResponse(id="c1")
        assert course.sequential_learning is False
        assert course.progress is None
        assert course.passed is None
        assert course.resource_location is None
        assert course.certificates == []

    def test_resource_location_parsed(self) -> None:
        """Persisted location should parse into a ResourceLocation."""
        course = CourseViewResponse.model_validate(
            {"id": "c1", "resource_location": {"lesson_id": "L1", "resource_id": "r2"}}
        )
        assert course.resource_location.key == "L1::r2"


class TestUpdateLearningRequest:
    """Tests for the learning update payload."""

    def test_json_dump(self) -> None:
        """Request should serialize the location as a nested object."""
        request = UpdateLearningRequest(
            progress=50.0,
            score=70.0,
            passed=False,
            resource_location=ResourceLocation(lesson_id="L1", resource_id="r1"),
        )
        assert request.model_dump(mode="json") == {
            "progress": 50.0,
            "score": 70.0,
            "passed": False,
            "resource_location": {"lesson_id": "L1", "resource_id": "r1"},
        }
