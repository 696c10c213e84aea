# /app/services/progress_service.py

"""
Business logic for the cached per-(student, class) progress rows.

Progress is derived state: every function that writes it recomputes from the
assignment and submission rows and overwrites the cached row, so running a
recomputation twice with unchanged scores yields the same figures. Store
errors are logged and re-raised; nothing here retries.
"""

import logging
from statistics import mean
from typing import Dict, List, Optional

from ..core.utils import utcnow
from ..models.progress_model import ClassRanking, ClassStatistics, StudentAverage
from .database_service import DatabaseService
from .grading_helpers import aggregation, ranking
from .grading_helpers.class_statistics import calculate_class_statistics

logger = logging.getLogger(__name__)

_PROGRESS_FIELDS = ("total_assignments", "completed_assignments", "average_score", "current_grade")


def _progress_fields(summary: Dict) -> Dict:
    fields = {key: summary[key] for key in _PROGRESS_FIELDS}
    fields["last_updated"] = utcnow()
    return fields


def recompute_student_progress(db: DatabaseService, student_id: str, class_id: str):
    """Re-derives one student's progress in one class and upserts the cached row."""
    try:
        assignments = db.read_assignments(class_id=class_id)
        scores = db.read_scores(student_ids=[student_id], assignment_ids=[a["id"] for a in assignments])

        summary = aggregation.summarize_student(student_id, assignments, scores)
        row = db.upsert_progress(student_id=student_id, class_id=class_id, fields=_progress_fields(summary))
    except Exception:
        logger.exception("Failed to recompute progress for student %s in class %s", student_id, class_id)
        raise

    logger.info(
        "Progress for student %s in class %s: %s%% (%s)",
        student_id, class_id, summary["average_score"], summary["current_grade"],
    )
    return row


def recompute_class_progress(db: DatabaseService, class_id: str) -> List:
    """Recomputes progress for every actively enrolled student of a class."""
    try:
        enrollments = db.read_enrollments(class_id=class_id, status="active")
        student_ids = list(dict.fromkeys(e["student_id"] for e in enrollments))
        if not student_ids:
            return []

        assignments = db.read_assignments(class_id=class_id)
        scores = db.read_scores(student_ids=student_ids, assignment_ids=[a["id"] for a in assignments])

        summaries = aggregation.summarize_scores(assignments, scores, student_ids=student_ids)
        rows = [
            db.upsert_progress(student_id=s["student_id"], class_id=class_id, fields=_progress_fields(s))
            for s in summaries
        ]
    except Exception:
        logger.exception("Failed to recompute progress for class %s", class_id)
        raise

    logger.info("Recomputed progress for %d students in class %s", len(rows), class_id)
    return rows


def get_student_progress(db: DatabaseService, student_id: str, class_id: str):
    """The cached progress row, or None if it has never been computed."""
    return db.get_progress(student_id=student_id, class_id=class_id)


def get_student_ranking(db: DatabaseService, student_id: str, class_id: str) -> Optional[ClassRanking]:
    """The student's 1-based rank within the class, or None without a progress row."""
    rows = db.get_progress_by_class(class_id=class_id)
    found = ranking.find_rank(rows, student_id)
    if found is None:
        return None
    rank, total = found
    return ClassRanking(student_id=student_id, class_id=class_id, rank=rank, total=total)


def get_class_statistics(db: DatabaseService, class_id: str) -> ClassStatistics:
    """Per-student averages with names resolved, plus class-wide aggregates."""
    rows = db.get_progress_by_class(class_id=class_id)
    if not rows:
        return ClassStatistics(class_id=class_id)

    names = {u.id: u.name for u in db.get_users_by_ids([r.student_id for r in rows])}
    students = [
        StudentAverage(
            student_id=r.student_id,
            name=names.get(r.student_id, "Unknown Student"),
            average_score=r.average_score,
            total_assignments=r.total_assignments,
            current_grade=r.current_grade,
        )
        for r in rows
    ]

    stats = calculate_class_statistics([s.model_dump() for s in students])
    return ClassStatistics(class_id=class_id, students=students, **stats)


def get_assignment_average(db: DatabaseService, assignment_id: str) -> Optional[float]:
    """Mean raw grade over graded submissions of one assignment; None when nothing is graded."""
    grades = db.get_grades_for_assignment(assignment_id)
    if not grades:
        return None
    return round(mean(grades), 2)
