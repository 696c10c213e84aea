# /app/routers/users_router.py

from typing import List

from fastapi import APIRouter, Depends

from ..core.deps import require_role
from ..models.user_model import User, UserRole
from ..services.database_service import DatabaseService, get_db_service

router = APIRouter()


@router.get("", response_model=List[User], summary="List All Users")
def list_users(
    db: DatabaseService = Depends(get_db_service),
    _session=Depends(require_role(UserRole.HEAD_TEACHER)),
):
    return db.get_all_users()


@router.get("/role/{role}", response_model=List[User], summary="List Users by Role")
def list_users_by_role(
    role: UserRole,
    db: DatabaseService = Depends(get_db_service),
    _session=Depends(require_role(UserRole.TEACHER, UserRole.HEAD_TEACHER)),
):
    return db.get_users_by_role(role.value)


@router.get("/class/{class_id}/students", response_model=List[User], summary="List Students Whose Home Class Is This Class")
def list_students_by_home_class(
    class_id: str,
    db: DatabaseService = Depends(get_db_service),
    _session=Depends(require_role(UserRole.TEACHER, UserRole.HEAD_TEACHER)),
):
    return db.get_students_by_class_id(class_id)
