# /app/routers/classes_router.py

from fastapi import APIRouter, Depends, HTTPException, status, Response
from typing import List

from ..core.deps import get_current_session, require_role
from ..models import class_model
from ..models.user_model import UserRole
from ..services import class_service
from ..services.auth_service import UserSession
from ..services.database_service import DatabaseService, get_db_service

router = APIRouter()

_manage_roles = require_role(UserRole.TEACHER, UserRole.HEAD_TEACHER)


def _get_managed_class(class_id: str, db: DatabaseService, session: UserSession):
    class_record = db.get_class_by_id(class_id)
    if class_record is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Class with ID {class_id} not found")
    if not class_service.can_manage_class(class_record, session.user):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="You do not have permission to manage this class.")
    return class_record


# --- CLASS COLLECTION ENDPOINTS (/api/classes) ---

@router.get("", response_model=List[class_model.ClassSummary], summary="Get Visible Classes with Student Counts")
def get_all_classes(db: DatabaseService = Depends(get_db_service), session: UserSession = Depends(get_current_session)):
    return class_service.get_all_classes_with_summary(user=session.user, db=db)


@router.post("", response_model=class_model.Class, status_code=status.HTTP_201_CREATED, summary="Create a New Class")
def create_new_class(
    class_create: class_model.ClassCreate,
    db: DatabaseService = Depends(get_db_service),
    session: UserSession = Depends(_manage_roles),
):
    return class_service.create_class(class_data=class_create, db=db, teacher_id=session.user_id)


# --- INDIVIDUAL CLASS RESOURCE ENDPOINTS (/api/classes/{class_id}) ---

@router.get("/{class_id}", response_model=class_model.ClassDetails, summary="Get a Single Class with Enrolled Students")
def get_class_by_id(class_id: str, db: DatabaseService = Depends(get_db_service), session: UserSession = Depends(get_current_session)):
    class_record = db.get_class_by_id(class_id)
    if class_record is None or not class_service.can_view_class(db, class_record, session.user):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Class with ID {class_id} not found")
    return class_service.get_class_details_by_id(class_id=class_id, db=db)


@router.put("/{class_id}", response_model=class_model.Class, summary="Update a Class")
def update_class_details(
    class_id: str,
    class_update: class_model.ClassUpdate,
    db: DatabaseService = Depends(get_db_service),
    session: UserSession = Depends(_manage_roles),
):
    _get_managed_class(class_id, db, session)
    try:
        return class_service.update_class(class_id=class_id, class_update=class_update, db=db)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.delete("/{class_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete a Class")
def delete_class(class_id: str, db: DatabaseService = Depends(get_db_service), session: UserSession = Depends(_manage_roles)):
    _get_managed_class(class_id, db, session)
    class_service.delete_class_by_id(class_id=class_id, db=db)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# --- ENROLLMENT SUB-RESOURCE ENDPOINTS ---

@router.post("/{class_id}/enrollments", response_model=class_model.Enrollment, status_code=status.HTTP_201_CREATED, summary="Enroll a Student")
def enroll_student(
    class_id: str,
    enrollment: class_model.EnrollmentCreate,
    db: DatabaseService = Depends(get_db_service),
    session: UserSession = Depends(_manage_roles),
):
    _get_managed_class(class_id, db, session)
    try:
        return class_service.enroll_student(class_id=class_id, student_id=enrollment.student_id, db=db)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.delete("/{class_id}/enrollments/{student_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Withdraw a Student")
def withdraw_student(
    class_id: str,
    student_id: str,
    db: DatabaseService = Depends(get_db_service),
    session: UserSession = Depends(_manage_roles),
):
    _get_managed_class(class_id, db, session)
    if not class_service.withdraw_student(class_id=class_id, student_id=student_id, db=db):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Student with ID {student_id} is not enrolled in class {class_id}")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
