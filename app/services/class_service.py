# /app/services/class_service.py

"""
This service module is the business logic layer for classes and enrollments.

It is a facade over the `crud` helpers and the `DatabaseService`, and it owns
the visibility rules the routers enforce: head teachers see every class,
teachers see the classes they teach, and students see the classes they are
actively enrolled in.
"""

from typing import List, Dict, Optional

import pandas as pd

from ..models import class_model, user_model
from ..models.user_model import UserRole
from .database_service import DatabaseService
from .class_helpers import crud


# --- Access Rules ---

def can_manage_class(class_record, user) -> bool:
    """Head teachers manage every class; teachers manage the classes they teach."""
    if user.role == UserRole.HEAD_TEACHER.value:
        return True
    return user.role == UserRole.TEACHER.value and class_record.teacher_id == user.id


def can_view_class(db: DatabaseService, class_record, user) -> bool:
    if can_manage_class(class_record, user):
        return True
    if user.role == UserRole.STUDENT.value:
        enrollment = db.get_enrollment(class_id=class_record.id, student_id=user.id)
        return enrollment is not None and enrollment.status == "active"
    return False


# --- Facade Methods for CRUD Operations ---

def create_class(class_data: class_model.ClassCreate, db: DatabaseService, teacher_id: str):
    return crud.create_class(class_data=class_data, db=db, teacher_id=teacher_id)


def update_class(class_id: str, class_update: class_model.ClassUpdate, db: DatabaseService):
    return crud.update_class(class_id=class_id, class_update=class_update, db=db)


def delete_class_by_id(class_id: str, db: DatabaseService) -> bool:
    return crud.delete_class_by_id(class_id=class_id, db=db)


def enroll_student(class_id: str, student_id: str, db: DatabaseService):
    return crud.enroll_student(class_id=class_id, student_id=student_id, db=db)


def withdraw_student(class_id: str, student_id: str, db: DatabaseService) -> bool:
    return crud.withdraw_student(class_id=class_id, student_id=student_id, db=db)


# --- Data Assembly ---

def get_visible_classes(user, db: DatabaseService) -> List:
    if user.role == UserRole.HEAD_TEACHER.value:
        return db.get_all_classes()
    if user.role == UserRole.TEACHER.value:
        return db.get_all_classes(teacher_id=user.id)

    enrollments = db.read_enrollments(student_id=user.id, status="active")
    return db.get_classes_by_ids([e["class_id"] for e in enrollments])


def get_all_classes_with_summary(user, db: DatabaseService) -> List[Dict]:
    """The classes visible to `user`, each with its active student count."""
    classes = get_visible_classes(user, db)
    if not classes:
        return []

    enrollments_df = pd.DataFrame(db.read_enrollments(status="active"))
    student_counts = {}
    if not enrollments_df.empty and 'class_id' in enrollments_df.columns:
        student_counts = enrollments_df.groupby('class_id').size().to_dict()

    return [
        {
            "id": cls.id,
            "name": cls.name,
            "description": cls.description,
            "academic_year": cls.academic_year,
            "teacher_id": cls.teacher_id,
            "studentCount": int(student_counts.get(cls.id, 0)),
        }
        for cls in classes
    ]


def get_class_details_by_id(class_id: str, db: DatabaseService) -> Optional[Dict]:
    """A class with its actively enrolled students."""
    class_info = db.get_class_by_id(class_id)
    if not class_info:
        return None

    details = class_model.Class.model_validate(class_info).model_dump()
    details["students"] = [user_model.User.model_validate(s) for s in db.get_enrolled_students(class_id=class_id)]
    return details
