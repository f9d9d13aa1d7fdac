"""Course-level progress, score and pass computation.

The result is provisional: the server recomputes authoritative values. The
client mirrors the same formula to decide whether a sync is needed and to
render optimistic progress.

Formulas:
- progress = passed progress-graded lessons / progress-graded lessons * 100
- score = sum(weight/100 * value) / sum(weight) * 100 over lessons with weight > 0,
  where value is the lesson progress, the lesson score, or 100 when ungraded
"""

from collections.abc import Sequence
from dataclasses import dataclass

from course_progression.courses.models import CertificateStatus, GradingMethod
from course_progression.courses.schemas import CourseViewResponse, LessonDisplayResponse


FULL_MARKS = 100.0


@dataclass(frozen=True)
class LearningStats:
    """Aggregated learning state of a course."""

    progress: float
    score: float
    passed: bool


@dataclass(frozen=True)
class LessonScoreRow:
    """One weighted lesson in a score breakdown."""

    title: str
    weight: float
    method: GradingMethod
    value: float
    share: float  # Percentage of the total weight


@dataclass(frozen=True)
class ScoreBreakdown:
    """Explanation of how progress and score were computed."""

    progress: float
    score: float
    total_weight: float
    rows: list[LessonScoreRow]
    progress_formula: str
    score_formula: str


def lesson_value(lesson: LessonDisplayResponse) -> float:
    """Value a weighted lesson contributes, before weighting."""
    if lesson.grading_method == GradingMethod.PROGRESS:
        return lesson.progress or 0.0
    if lesson.grading_method == GradingMethod.SCORE:
        return lesson.score or 0.0
    return FULL_MARKS


def calculate_progress(lessons: Sequence[LessonDisplayResponse]) -> float:
    progress_lessons = [
        lesson for lesson in lessons if lesson.grading_method == GradingMethod.PROGRESS
    ]
    if not progress_lessons:
        return 0.0
    passed = sum(1 for lesson in progress_lessons if lesson.passed)
    return passed / len(progress_lessons) * 100


def calculate_score(lessons: Sequence[LessonDisplayResponse]) -> float:
    total_weight = 0.0
    total_score = 0.0
    for lesson in lessons:
        weight = lesson.weight or 0.0
        if weight <= 0:
            continue
        total_weight += weight
        total_score += (weight / 100) * lesson_value(lesson)

    if not total_weight:
        return 0.0
    return total_score / total_weight * 100


def calculate_learning_stats(
    course: CourseViewResponse | None,
    lessons: Sequence[LessonDisplayResponse] | None,
) -> LearningStats | None:
    """Aggregate lesson grading into course progress, score and pass state.

    Returns:
        None until both the course and at least one lesson are loaded.
    """
    if course is None or not lessons:
        return None

    progress = calculate_progress(lessons)
    score = calculate_score(lessons)
    passed = (
        progress >= course.cutoff_progress
        and score >= course.cutoff_score
        and all(
            lesson.passed is True or lesson.grading_method == GradingMethod.NONE
            for lesson in lessons
        )
    )
    return LearningStats(progress=progress, score=score, passed=passed)


def _fmt(value: float) -> str:
    """Format a percentage with at most one decimal, dropping a trailing .0."""
    rounded = round(value, 1)
    return str(int(rounded)) if rounded == int(rounded) else f"{rounded}"


def score_breakdown(lessons: Sequence[LessonDisplayResponse]) -> ScoreBreakdown:
    """Build the per-lesson explanation shown next to the weighted score."""
    progress = calculate_progress(lessons)
    score = calculate_score(lessons)

    weighted = [lesson for lesson in lessons if (lesson.weight or 0) > 0]
    total_weight = sum(lesson.weight or 0.0 for lesson in weighted)
    rows = [
        LessonScoreRow(
            title=lesson.title,
            weight=lesson.weight or 0.0,
            method=lesson.grading_method,
            value=lesson_value(lesson),
            share=(lesson.weight or 0.0) / total_weight * 100,
        )
        for lesson in weighted
    ]

    progress_lessons = [
        lesson for lesson in lessons if lesson.grading_method == GradingMethod.PROGRESS
    ]
    passed_count = sum(1 for lesson in progress_lessons if lesson.passed)
    progress_formula = (
        f"{passed_count} ÷ {len(progress_lessons)} × 100 = {_fmt(progress)}"
    )
    if rows:
        score_formula = " + ".join(
            f"{_fmt(row.value)}% × {_fmt(row.share)}%" for row in rows
        )
    else:
        score_formula = "No lessons with weight"

    return ScoreBreakdown(
        progress=progress,
        score=score,
        total_weight=total_weight,
        rows=rows,
        progress_formula=progress_formula,
        score_formula=score_formula,
    )


def certificate_status(
    course: CourseViewResponse, stats: LearningStats | None
) -> CertificateStatus | None:
    """Derive certificate state from issued certificates and cutoffs."""
    if course.certificates:
        return CertificateStatus.ISSUED
    if not course.certificate_enabled or stats is None:
        return None
    if stats.progress >= course.cutoff_progress and stats.score >= course.cutoff_score:
        return CertificateStatus.ELIGIBLE
    return None
