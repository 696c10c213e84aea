# /app/routers/submissions_router.py

"""
Endpoints for the submission lifecycle: students save drafts and hand in
work; teachers grade submissions or enter scores directly.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status

from ..core.deps import get_current_session, require_role
from ..models import assignment_model
from ..models.user_model import UserRole
from ..services import assignment_service, class_service
from ..services.auth_service import UserSession
from ..services.database_service import DatabaseService, get_db_service

router = APIRouter()

_manage_roles = require_role(UserRole.TEACHER, UserRole.HEAD_TEACHER)


def _assignment_class(assignment_id: str, db: DatabaseService):
    assignment = db.get_assignment_by_id(assignment_id)
    if assignment is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Assignment with ID {assignment_id} not found")
    return db.get_class_by_id(assignment.class_id)


def _require_manager(assignment_id: str, db: DatabaseService, session: UserSession) -> None:
    class_record = _assignment_class(assignment_id, db)
    if class_record is None or not class_service.can_manage_class(class_record, session.user):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="You do not have permission to grade this assignment.")


def _require_enrolled(assignment_id: str, db: DatabaseService, session: UserSession) -> None:
    class_record = _assignment_class(assignment_id, db)
    if class_record is None or not class_service.can_view_class(db, class_record, session.user):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="You are not enrolled in this class.")


@router.get("", response_model=List[assignment_model.Submission], summary="List Submissions")
def list_submissions(
    assignment_id: Optional[str] = None,
    student_id: Optional[str] = None,
    db: DatabaseService = Depends(get_db_service),
    session: UserSession = Depends(get_current_session),
):
    if session.role == UserRole.STUDENT.value:
        # Students only ever see their own work.
        return assignment_service.list_submissions(db, assignment_id=assignment_id, student_id=session.user_id)
    if assignment_id is None:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail="assignment_id is required.")
    _require_manager(assignment_id, db, session)
    return assignment_service.list_submissions(db, assignment_id=assignment_id, student_id=student_id)


@router.post("/draft", response_model=assignment_model.Submission, summary="Save a Draft")
def save_draft(
    submission: assignment_model.SubmissionCreate,
    db: DatabaseService = Depends(get_db_service),
    session: UserSession = Depends(require_role(UserRole.STUDENT)),
):
    _require_enrolled(submission.assignment_id, db, session)
    try:
        return assignment_service.save_draft(db, student_id=session.user_id, submission_data=submission)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.post("/submit", response_model=assignment_model.Submission, status_code=status.HTTP_201_CREATED, summary="Hand In an Assignment")
def submit_assignment(
    submission: assignment_model.SubmissionCreate,
    db: DatabaseService = Depends(get_db_service),
    session: UserSession = Depends(require_role(UserRole.STUDENT)),
):
    _require_enrolled(submission.assignment_id, db, session)
    try:
        return assignment_service.submit_assignment(db, student_id=session.user_id, submission_data=submission)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.post("/{submission_id}/grade", response_model=assignment_model.Submission, summary="Grade a Submission")
def grade_submission(
    submission_id: str,
    grade: assignment_model.GradeSubmission,
    db: DatabaseService = Depends(get_db_service),
    session: UserSession = Depends(_manage_roles),
):
    existing = db.get_submission_by_id(submission_id)
    if existing is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Submission with ID {submission_id} not found")
    _require_manager(existing.assignment_id, db, session)
    try:
        return assignment_service.grade_submission(db, submission_id, grade, graded_by=session.user_id)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.post("/scores", response_model=assignment_model.Submission, status_code=status.HTTP_201_CREATED, summary="Enter a Score Directly")
def upsert_score(
    score: assignment_model.ScoreUpsert,
    db: DatabaseService = Depends(get_db_service),
    session: UserSession = Depends(_manage_roles),
):
    _require_manager(score.assignment_id, db, session)
    try:
        return assignment_service.upsert_score(db, score, graded_by=session.user_id)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
