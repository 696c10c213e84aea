# /app/services/assignment_service.py

"""
Business logic for assignments and the submission lifecycle.

A submission moves draft -> submitted (or late, when handed in after the due
date) -> graded. Grading is allowed from any state, always stamps
`graded_by`/`graded_at`, and may be repeated. Any change to a grade triggers
a recomputation of that student's cached progress in the assignment's class.
"""

import logging
from datetime import datetime
from typing import Dict, List, Optional

from ..core.utils import as_naive_utc, new_id, utcnow
from ..models import assignment_model
from ..models.assignment_model import SubmissionStatus
from .database_service import DatabaseService
from . import progress_service

logger = logging.getLogger(__name__)


# --- Assignments ---

# Columns that may be changed but never cleared.
_REQUIRED_ASSIGNMENT_FIELDS = ("title", "total_points", "assignment_type")


def list_class_assignments(db: DatabaseService, class_id: str) -> List:
    return db.get_assignments_by_class_id(class_id)


def create_assignment(db: DatabaseService, assignment_data: assignment_model.AssignmentCreate):
    if not db.get_class_by_id(assignment_data.class_id):
        raise ValueError(f"Class with ID {assignment_data.class_id} not found")

    record = assignment_data.model_dump()
    record["id"] = new_id("asg")
    record["due_date"] = as_naive_utc(record["due_date"])
    created = db.add_assignment(record)
    # Every enrolled student now has one more assignment in the class.
    progress_service.recompute_class_progress(db, created.class_id)
    return created


def update_assignment(db: DatabaseService, assignment_id: str, assignment_update: assignment_model.AssignmentUpdate):
    update_data = assignment_update.model_dump(exclude_unset=True)
    if not update_data:
        raise ValueError("No update data provided.")
    cleared = [field for field in _REQUIRED_ASSIGNMENT_FIELDS if field in update_data and update_data[field] is None]
    if cleared:
        raise ValueError(f"These fields cannot be null: {', '.join(cleared)}.")
    if "due_date" in update_data:
        update_data["due_date"] = as_naive_utc(update_data["due_date"])

    updated = db.update_assignment(assignment_id, update_data)
    # Max points feed the percentages, so cached progress is stale now.
    if updated is not None and "total_points" in update_data:
        progress_service.recompute_class_progress(db, updated.class_id)
    return updated


# --- Submissions ---

def list_submissions(db: DatabaseService, assignment_id: Optional[str] = None, student_id: Optional[str] = None) -> List:
    return db.get_submissions(assignment_id=assignment_id, student_id=student_id)


def _get_assignment_or_raise(db: DatabaseService, assignment_id: str):
    assignment = db.get_assignment_by_id(assignment_id)
    if not assignment:
        raise ValueError(f"Assignment with ID {assignment_id} not found")
    return assignment


def _write_submission(db: DatabaseService, student_id: str, assignment_id: str, data: Dict):
    existing = db.get_submission(student_id=student_id, assignment_id=assignment_id)
    if existing is not None:
        if existing.status == SubmissionStatus.GRADED.value:
            raise ValueError("This submission has already been graded and can no longer be changed.")
        return db.update_submission(existing.id, data)

    record = {"id": new_id("sub"), "student_id": student_id, "assignment_id": assignment_id, **data}
    return db.add_submission(record)


def save_draft(db: DatabaseService, student_id: str, submission_data: assignment_model.SubmissionCreate):
    _get_assignment_or_raise(db, submission_data.assignment_id)
    data = {
        "submission_text": submission_data.submission_text,
        "attachment_url": submission_data.attachment_url,
        "status": SubmissionStatus.DRAFT.value,
    }
    return _write_submission(db, student_id, submission_data.assignment_id, data)


def submit_assignment(
    db: DatabaseService,
    student_id: str,
    submission_data: assignment_model.SubmissionCreate,
    now: Optional[datetime] = None,
):
    """Hands in the student's work, marking it late when past the due date."""
    assignment = _get_assignment_or_raise(db, submission_data.assignment_id)
    submitted_at = now or utcnow()

    due_date = as_naive_utc(assignment.due_date)
    status = SubmissionStatus.LATE if due_date is not None and submitted_at > due_date else SubmissionStatus.SUBMITTED

    data = {
        "submission_text": submission_data.submission_text,
        "attachment_url": submission_data.attachment_url,
        "submitted_at": submitted_at,
        "status": status.value,
    }
    submission = _write_submission(db, student_id, submission_data.assignment_id, data)
    logger.info("Student %s submitted assignment %s (%s)", student_id, submission_data.assignment_id, status.value)
    return submission


def _validate_grade(grade: float, assignment) -> None:
    if grade < 0 or grade > assignment.total_points:
        raise ValueError(f"Grade must be between 0 and {assignment.total_points:g}.")


def grade_submission(
    db: DatabaseService,
    submission_id: str,
    grade_data: assignment_model.GradeSubmission,
    graded_by: str,
):
    """Grades (or re-grades) a submission. Returns None if it does not exist."""
    submission = db.get_submission_by_id(submission_id)
    if submission is None:
        return None

    assignment = _get_assignment_or_raise(db, submission.assignment_id)
    _validate_grade(grade_data.grade, assignment)

    graded = db.update_submission(submission_id, {
        "grade": grade_data.grade,
        "feedback": grade_data.feedback,
        "graded_by": graded_by,
        "graded_at": utcnow(),
        "status": SubmissionStatus.GRADED.value,
    })
    progress_service.recompute_student_progress(db, student_id=graded.student_id, class_id=assignment.class_id)
    return graded


def upsert_score(db: DatabaseService, score_data: assignment_model.ScoreUpsert, graded_by: str):
    """Direct score entry keyed on (student_id, assignment_id); last write wins."""
    assignment = _get_assignment_or_raise(db, score_data.assignment_id)
    enrollment = db.get_enrollment(class_id=assignment.class_id, student_id=score_data.student_id)
    if enrollment is None or enrollment.status != "active":
        raise ValueError(f"Student with ID {score_data.student_id} is not enrolled in this class.")
    _validate_grade(score_data.score, assignment)

    submission = db.upsert_score({
        "student_id": score_data.student_id,
        "assignment_id": score_data.assignment_id,
        "grade": score_data.score,
        "feedback": score_data.feedback,
        "graded_by": graded_by,
        "graded_at": utcnow(),
        "status": SubmissionStatus.GRADED.value,
    })
    progress_service.recompute_student_progress(db, student_id=score_data.student_id, class_id=assignment.class_id)
    return submission
