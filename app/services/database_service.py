# /app/services/database_service.py

"""
The single data-access facade handed to every service function.

It owns one repository per table group and exposes their methods as thin
one-line delegates, so services and tests depend on one object rather than on
individual repositories. Four of the delegates form the store contract the
grading and dashboard logic is written against: `read_scores`,
`read_assignments`, `upsert_progress` and `read_enrollments`.
"""

from datetime import datetime
from typing import List, Dict, Optional, Generator, Tuple

from fastapi import Depends
from sqlalchemy.orm import Session

# --- Core Database Setup ---
from app.db.database import get_db

# --- Repository Imports ---
from .database_helpers.user_repository_sql import UserRepositorySQL
from .database_helpers.class_repository_sql import ClassRepositorySQL
from .database_helpers.assignment_repository_sql import AssignmentRepositorySQL
from .database_helpers.progress_repository_sql import ProgressRepositorySQL


class DatabaseService:
    def __init__(self, db_session: Session):
        self.session = db_session
        self.user_repo = UserRepositorySQL(db_session)
        self.class_repo = ClassRepositorySQL(db_session)
        self.assignment_repo = AssignmentRepositorySQL(db_session)
        self.progress_repo = ProgressRepositorySQL(db_session)

    # --- STORE CONTRACT ---
    def read_scores(self, student_ids: Optional[List[str]] = None, assignment_ids: Optional[List[str]] = None, class_id: Optional[str] = None) -> List[Dict]:
        return self.assignment_repo.read_scores(student_ids=student_ids, assignment_ids=assignment_ids, class_id=class_id)
    def read_assignments(self, class_id: str) -> List[Dict]: return self.assignment_repo.read_assignments(class_id)
    def upsert_progress(self, student_id: str, class_id: str, fields: Dict): return self.progress_repo.upsert_progress(student_id, class_id, fields)
    def read_enrollments(self, student_id: Optional[str] = None, class_id: Optional[str] = None, status: Optional[str] = None) -> List[Dict]:
        return self.class_repo.read_enrollments(student_id=student_id, class_id=class_id, status=status)

    # --- USER METHODS (DELEGATED) ---
    def get_user_by_id(self, user_id: str): return self.user_repo.get_user_by_id(user_id)
    def get_user_by_email(self, email: str): return self.user_repo.get_user_by_email(email)
    def get_users_by_ids(self, user_ids: List[str]) -> List: return self.user_repo.get_users_by_ids(user_ids)
    def get_all_users(self) -> List: return self.user_repo.get_all_users()
    def get_users_by_role(self, role: str) -> List: return self.user_repo.get_users_by_role(role)
    def get_students_by_class_id(self, class_id: str) -> List: return self.user_repo.get_students_by_class_id(class_id)
    def count_users_by_role(self, role: str) -> int: return self.user_repo.count_users_by_role(role)
    def add_user(self, record: Dict): return self.user_repo.add_user(record)
    def update_user(self, user_id: str, data: Dict): return self.user_repo.update_user(user_id, data)
    def add_revoked_token(self, jti: str, user_id: str, expires_at: datetime): return self.user_repo.add_revoked_token(jti, user_id, expires_at)
    def is_token_revoked(self, jti: str) -> bool: return self.user_repo.is_token_revoked(jti)

    # --- CLASS & ENROLLMENT METHODS (DELEGATED) ---
    def get_all_classes(self, teacher_id: Optional[str] = None) -> List: return self.class_repo.get_all_classes(teacher_id=teacher_id)
    def get_class_by_id(self, class_id: str): return self.class_repo.get_class_by_id(class_id)
    def get_classes_by_ids(self, class_ids: List[str]) -> List: return self.class_repo.get_classes_by_ids(class_ids)
    def count_classes(self) -> int: return self.class_repo.count_classes()
    def add_class(self, record: Dict): return self.class_repo.add_class(record)
    def update_class(self, class_id: str, data: Dict): return self.class_repo.update_class(class_id, data)
    def delete_class(self, class_id: str) -> bool: return self.class_repo.delete_class(class_id)
    def add_enrollment(self, record: Dict): return self.class_repo.add_enrollment(record)
    def get_enrollment(self, class_id: str, student_id: str): return self.class_repo.get_enrollment(class_id, student_id)
    def update_enrollment_status(self, class_id: str, student_id: str, status: str): return self.class_repo.update_enrollment_status(class_id, student_id, status)
    def count_enrollments(self, class_ids: Optional[List[str]] = None) -> int: return self.class_repo.count_enrollments(class_ids)
    def get_enrolled_students(self, class_id: str, status: Optional[str] = "active") -> List: return self.class_repo.get_enrolled_students(class_id, status)

    # --- ASSIGNMENT & SUBMISSION METHODS (DELEGATED) ---
    def get_assignment_by_id(self, assignment_id: str): return self.assignment_repo.get_assignment_by_id(assignment_id)
    def get_assignments_by_class_id(self, class_id: str) -> List: return self.assignment_repo.get_assignments_by_class_id(class_id)
    def add_assignment(self, record: Dict): return self.assignment_repo.add_assignment(record)
    def update_assignment(self, assignment_id: str, data: Dict): return self.assignment_repo.update_assignment(assignment_id, data)
    def count_assignments(self, class_ids: Optional[List[str]] = None) -> int: return self.assignment_repo.count_assignments(class_ids)
    def get_assignments_with_class(self, class_ids: List[str], limit: int, due_after: Optional[datetime] = None) -> List[Tuple]:
        return self.assignment_repo.get_assignments_with_class(class_ids, limit, due_after=due_after)
    def get_submission_by_id(self, submission_id: str): return self.assignment_repo.get_submission_by_id(submission_id)
    def get_submission(self, student_id: str, assignment_id: str): return self.assignment_repo.get_submission(student_id, assignment_id)
    def get_submissions(self, assignment_id: Optional[str] = None, student_id: Optional[str] = None) -> List:
        return self.assignment_repo.get_submissions(assignment_id=assignment_id, student_id=student_id)
    def add_submission(self, record: Dict): return self.assignment_repo.add_submission(record)
    def update_submission(self, submission_id: str, data: Dict): return self.assignment_repo.update_submission(submission_id, data)
    def upsert_score(self, record: Dict): return self.assignment_repo.upsert_score(record)
    def count_submissions(self, assignment_ids: Optional[List[str]] = None, status: Optional[str] = None) -> int:
        return self.assignment_repo.count_submissions(assignment_ids=assignment_ids, status=status)
    def get_recent_graded(self, student_id: str, limit: int) -> List[Tuple]: return self.assignment_repo.get_recent_graded(student_id, limit)
    def get_grades_for_assignment(self, assignment_id: str) -> List[float]: return self.assignment_repo.get_grades_for_assignment(assignment_id)

    # --- PROGRESS METHODS (DELEGATED) ---
    def get_progress(self, student_id: str, class_id: str): return self.progress_repo.get_progress(student_id, class_id)
    def get_progress_by_student(self, student_id: str) -> List: return self.progress_repo.get_progress_by_student(student_id)
    def get_progress_by_class(self, class_id: str) -> List: return self.progress_repo.get_progress_by_class(class_id)


# --- DEPENDENCY PROVIDER ---
def get_db_service(db: Session = Depends(get_db)) -> Generator[DatabaseService, None, None]:
    """FastAPI dependency that provides a DatabaseService bound to the request's session."""
    yield DatabaseService(db_session=db)
