# /app/routers/progress_router.py

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from ..core.deps import get_current_session, require_role
from ..models import progress_model
from ..models.user_model import UserRole
from ..services import class_service, progress_service
from ..services.auth_service import UserSession
from ..services.database_service import DatabaseService, get_db_service

router = APIRouter()

_manage_roles = require_role(UserRole.TEACHER, UserRole.HEAD_TEACHER)


def _get_class_or_404(class_id: str, db: DatabaseService):
    class_record = db.get_class_by_id(class_id)
    if class_record is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Class with ID {class_id} not found")
    return class_record


def _check_student_access(class_id: str, student_id: str, db: DatabaseService, session: UserSession) -> None:
    """Students may read their own figures; managers of the class may read anyone's."""
    class_record = _get_class_or_404(class_id, db)
    if session.role == UserRole.STUDENT.value and session.user_id == student_id:
        return
    if not class_service.can_manage_class(class_record, session.user):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="You do not have access to this student's progress.")


def _check_manager(class_id: str, db: DatabaseService, session: UserSession) -> None:
    if not class_service.can_manage_class(_get_class_or_404(class_id, db), session.user):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="You do not have permission to manage this class.")


@router.get("/{class_id}/students/{student_id}", response_model=progress_model.StudentProgress, summary="Get a Student's Progress")
def get_student_progress(
    class_id: str,
    student_id: str,
    db: DatabaseService = Depends(get_db_service),
    session: UserSession = Depends(get_current_session),
):
    _check_student_access(class_id, student_id, db, session)
    progress = progress_service.get_student_progress(db, student_id=student_id, class_id=class_id)
    if progress is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No progress recorded for this student in this class.")
    return progress


@router.post("/{class_id}/students/{student_id}/recompute", response_model=progress_model.StudentProgress, summary="Recompute a Student's Progress")
def recompute_student_progress(
    class_id: str,
    student_id: str,
    db: DatabaseService = Depends(get_db_service),
    session: UserSession = Depends(_manage_roles),
):
    _check_manager(class_id, db, session)
    return progress_service.recompute_student_progress(db, student_id=student_id, class_id=class_id)


@router.post("/{class_id}/recompute", response_model=List[progress_model.StudentProgress], summary="Recompute Progress for a Class")
def recompute_class_progress(
    class_id: str,
    db: DatabaseService = Depends(get_db_service),
    session: UserSession = Depends(_manage_roles),
):
    _check_manager(class_id, db, session)
    return progress_service.recompute_class_progress(db, class_id=class_id)


@router.get("/{class_id}/students/{student_id}/ranking", response_model=progress_model.ClassRanking, summary="Get a Student's Rank in a Class")
def get_student_ranking(
    class_id: str,
    student_id: str,
    db: DatabaseService = Depends(get_db_service),
    session: UserSession = Depends(get_current_session),
):
    _check_student_access(class_id, student_id, db, session)
    ranking = progress_service.get_student_ranking(db, student_id=student_id, class_id=class_id)
    if ranking is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No progress recorded for this student in this class.")
    return ranking


@router.get("/{class_id}/statistics", response_model=progress_model.ClassStatistics, summary="Get Class Statistics")
def get_class_statistics(
    class_id: str,
    db: DatabaseService = Depends(get_db_service),
    session: UserSession = Depends(_manage_roles),
):
    _check_manager(class_id, db, session)
    return progress_service.get_class_statistics(db, class_id=class_id)
