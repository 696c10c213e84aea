# /app/services/dashboard_service.py

# --- Core Imports ---
import logging
from typing import List

from ..core.config import DASHBOARD_LIST_LIMIT
from ..core.utils import utcnow
from ..models.assignment_model import AssignmentWithClass
from ..models.dashboard_model import (
    DashboardResponse,
    HeadTeacherDashboard,
    RecentGrade,
    StudentDashboard,
    TeacherDashboard,
)
from ..models.progress_model import ClassProgress, StudentProgress
from ..models.user_model import UserRole
from .database_service import DatabaseService

logger = logging.getLogger(__name__)

# The composers below issue several independent reads without a surrounding
# transaction, so counts may reflect slightly different moments. A failure in
# any read fails the whole dashboard; there is no partial payload.


def _with_class_name(assignment, class_record) -> AssignmentWithClass:
    data = AssignmentWithClass.model_validate(assignment).model_dump()
    data["class_name"] = class_record.name if class_record is not None else None
    return AssignmentWithClass(**data)


# --- Core Public Functions ---

def get_teacher_dashboard(db: DatabaseService, teacher_id: str) -> TeacherDashboard:
    """
    Summarizes the classes a teacher owns: class and enrollment counts, the
    assignments due soonest, and how many of their submissions await grading.
    """
    try:
        # 1. DELEGATE DATA RETRIEVAL
        classes = db.get_all_classes(teacher_id=teacher_id)
        class_ids = [c.id for c in classes]

        total_students = db.count_enrollments(class_ids=class_ids) if class_ids else 0
        total_assignments = db.count_assignments(class_ids=class_ids) if class_ids else 0
        recent = db.get_assignments_with_class(class_ids, limit=DASHBOARD_LIST_LIMIT) if class_ids else []

        assignment_ids = [assignment.id for assignment, _ in recent]
        needing_grading = (
            db.count_submissions(assignment_ids=assignment_ids, status="submitted") if assignment_ids else 0
        )

        # 2. CONSTRUCT & VALIDATE
        return TeacherDashboard(
            totalClasses=len(classes),
            totalStudents=total_students,
            totalAssignments=total_assignments,
            submissionsNeedingGrading=needing_grading,
            recentAssignments=[_with_class_name(a, c) for a, c in recent],
        )
    except Exception:
        logger.exception("Failed to compose teacher dashboard for %s", teacher_id)
        raise


def _overall_average(progress_rows: List) -> float:
    if not progress_rows:
        return 0.0
    total = sum(p.average_score or 0 for p in progress_rows)
    return round(total / len(progress_rows), 2)


def get_student_dashboard(db: DatabaseService, student_id: str) -> StudentDashboard:
    """
    Summarizes a student's active classes, upcoming work, latest grades and
    per-class progress.
    """
    try:
        enrollments = db.read_enrollments(student_id=student_id, status="active")
        class_ids = list(dict.fromkeys(e["class_id"] for e in enrollments))

        upcoming = (
            db.get_assignments_with_class(class_ids, limit=DASHBOARD_LIST_LIMIT, due_after=utcnow())
            if class_ids else []
        )
        recent_graded = db.get_recent_graded(student_id, limit=DASHBOARD_LIST_LIMIT)
        progress_rows = db.get_progress_by_student(student_id)

        # Class names for progress rows, matched by id.
        class_names = {c.id: c.name for c in db.get_classes_by_ids([p.class_id for p in progress_rows])}

        recent_grades = [
            RecentGrade(
                id=submission.id,
                grade=submission.grade,
                graded_at=submission.graded_at,
                assignment_id=assignment.id,
                assignment_title=assignment.title,
                total_points=assignment.total_points,
                class_id=class_record.id,
                class_name=class_record.name,
            )
            for submission, assignment, class_record in recent_graded
        ]
        class_progress = [
            ClassProgress(
                **StudentProgress.model_validate(p).model_dump(),
                class_name=class_names.get(p.class_id),
            )
            for p in progress_rows
        ]

        return StudentDashboard(
            totalClasses=len(class_ids),
            overallAverage=_overall_average(progress_rows),
            upcomingAssignments=[_with_class_name(a, c) for a, c in upcoming],
            recentGrades=recent_grades,
            classProgress=class_progress,
        )
    except Exception:
        logger.exception("Failed to compose student dashboard for %s", student_id)
        raise


def get_head_teacher_dashboard(db: DatabaseService) -> HeadTeacherDashboard:
    """School-wide counts across every class."""
    try:
        return HeadTeacherDashboard(
            totalClasses=db.count_classes(),
            totalStudents=db.count_users_by_role(UserRole.STUDENT.value),
            totalTeachers=db.count_users_by_role(UserRole.TEACHER.value),
            totalAssignments=db.count_assignments(),
            submissionsNeedingGrading=db.count_submissions(status="submitted"),
        )
    except Exception:
        logger.exception("Failed to compose head teacher dashboard")
        raise


def get_dashboard_for_session(db: DatabaseService, session) -> DashboardResponse:
    """Builds the dashboard matching the role of the signed-in user."""
    role = session.role
    if role == UserRole.TEACHER.value:
        return DashboardResponse(role=role, teacher=get_teacher_dashboard(db, session.user_id))
    if role == UserRole.STUDENT.value:
        return DashboardResponse(role=role, student=get_student_dashboard(db, session.user_id))
    if role == UserRole.HEAD_TEACHER.value:
        return DashboardResponse(role=role, headTeacher=get_head_teacher_dashboard(db))
    raise ValueError(f"Unknown role '{role}'")
