# /app/routers/dashboard_router.py

# --- Core FastAPI Imports ---
from fastapi import APIRouter, Depends, HTTPException, status

# --- Service and Model Imports ---
from ..core.deps import get_current_session, require_role
from ..models.dashboard_model import DashboardResponse, HeadTeacherDashboard, StudentDashboard, TeacherDashboard
from ..models.user_model import UserRole
from ..services import dashboard_service
from ..services.auth_service import UserSession
from ..services.database_service import DatabaseService, get_db_service

# --- APIRouter Instance ---
router = APIRouter()


# --- Endpoint Definitions ---
# Each endpoint is a thin wrapper: resolve the session, delegate to the
# dashboard service, and let FastAPI validate against the response_model.

@router.get("/me", response_model=DashboardResponse, summary="Get the Dashboard for the Signed-in Role")
def get_my_dashboard(db: DatabaseService = Depends(get_db_service), session: UserSession = Depends(get_current_session)):
    try:
        return dashboard_service.get_dashboard_for_session(db=db, session=session)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.get("/teacher", response_model=TeacherDashboard, summary="Get Teacher Dashboard")
def get_teacher_dashboard(
    db: DatabaseService = Depends(get_db_service),
    session: UserSession = Depends(require_role(UserRole.TEACHER)),
):
    return dashboard_service.get_teacher_dashboard(db=db, teacher_id=session.user_id)


@router.get("/student", response_model=StudentDashboard, summary="Get Student Dashboard")
def get_student_dashboard(
    db: DatabaseService = Depends(get_db_service),
    session: UserSession = Depends(require_role(UserRole.STUDENT)),
):
    return dashboard_service.get_student_dashboard(db=db, student_id=session.user_id)


@router.get("/head-teacher", response_model=HeadTeacherDashboard, summary="Get School-wide Dashboard")
def get_head_teacher_dashboard(
    db: DatabaseService = Depends(get_db_service),
    _session: UserSession = Depends(require_role(UserRole.HEAD_TEACHER)),
):
    return dashboard_service.get_head_teacher_dashboard(db=db)
