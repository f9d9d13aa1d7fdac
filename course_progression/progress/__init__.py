"""Course-level learning progress.

Provides:
- Progress/score/pass aggregation from lesson grading
- Score breakdown and certificate eligibility
- Push-when-changed synchronization with the learning server
"""

from .scoring import (
    LearningStats,
    LessonScoreRow,
    ScoreBreakdown,
    calculate_learning_stats,
    certificate_status,
    score_breakdown,
)
from .sync import LearningSnapshot, LearningStateSynchronizer


__all__ = [
    "LearningSnapshot",
    "LearningStateSynchronizer",
    "LearningStats",
    "LessonScoreRow",
    "ScoreBreakdown",
    "calculate_learning_stats",
    "certificate_status",
    "score_breakdown",
]
