# /app/routers/assignments_router.py

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status

from ..core.deps import get_current_session, require_role
from ..models import assignment_model
from ..models.user_model import UserRole
from ..services import assignment_service, class_service, progress_service
from ..services.auth_service import UserSession
from ..services.database_service import DatabaseService, get_db_service

router = APIRouter()

_manage_roles = require_role(UserRole.TEACHER, UserRole.HEAD_TEACHER)


def _check_class_access(class_id: str, db: DatabaseService, session: UserSession, manage: bool):
    class_record = db.get_class_by_id(class_id)
    if class_record is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Class with ID {class_id} not found")
    allowed = (
        class_service.can_manage_class(class_record, session.user)
        if manage else class_service.can_view_class(db, class_record, session.user)
    )
    if not allowed:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="You do not have access to this class.")
    return class_record


@router.get("", response_model=List[assignment_model.Assignment], summary="List a Class's Assignments")
def list_assignments(class_id: str, db: DatabaseService = Depends(get_db_service), session: UserSession = Depends(get_current_session)):
    _check_class_access(class_id, db, session, manage=False)
    return assignment_service.list_class_assignments(db, class_id)


@router.post("", response_model=assignment_model.Assignment, status_code=status.HTTP_201_CREATED, summary="Create an Assignment")
def create_assignment(
    assignment_create: assignment_model.AssignmentCreate,
    db: DatabaseService = Depends(get_db_service),
    session: UserSession = Depends(_manage_roles),
):
    _check_class_access(assignment_create.class_id, db, session, manage=True)
    try:
        return assignment_service.create_assignment(db, assignment_create)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.put("/{assignment_id}", response_model=assignment_model.Assignment, summary="Update an Assignment")
def update_assignment(
    assignment_id: str,
    assignment_update: assignment_model.AssignmentUpdate,
    db: DatabaseService = Depends(get_db_service),
    session: UserSession = Depends(_manage_roles),
):
    assignment = db.get_assignment_by_id(assignment_id)
    if assignment is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Assignment with ID {assignment_id} not found")
    _check_class_access(assignment.class_id, db, session, manage=True)
    try:
        return assignment_service.update_assignment(db, assignment_id, assignment_update)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.get("/{assignment_id}/average", summary="Get the Average Raw Grade of an Assignment")
def get_assignment_average(
    assignment_id: str,
    db: DatabaseService = Depends(get_db_service),
    session: UserSession = Depends(_manage_roles),
) -> dict:
    assignment = db.get_assignment_by_id(assignment_id)
    if assignment is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Assignment with ID {assignment_id} not found")
    _check_class_access(assignment.class_id, db, session, manage=True)
    average: Optional[float] = progress_service.get_assignment_average(db, assignment_id)
    return {"assignment_id": assignment_id, "average": average}
