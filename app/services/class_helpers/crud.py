# /app/services/class_helpers/crud.py

from typing import Dict, Optional

from ...core.utils import new_id
from ...models import class_model
from ...models.user_model import UserRole
from ..database_service import DatabaseService
from ...db.models.class_models import Class, ClassEnrollment


# --- CLASS-RELATED CORE BUSINESS LOGIC ---

def create_class(class_data: class_model.ClassCreate, db: DatabaseService, teacher_id: str) -> Class:
    """Creates a new class record owned by `teacher_id`."""
    new_class_record = class_data.model_dump()
    new_class_record['id'] = new_id("cls")
    new_class_record['teacher_id'] = teacher_id
    return db.add_class(new_class_record)


def update_class(class_id: str, class_update: class_model.ClassUpdate, db: DatabaseService) -> Optional[Class]:
    update_data = class_update.model_dump(exclude_unset=True)
    if not update_data:
        raise ValueError("No update data provided.")
    if "name" in update_data and update_data["name"] is None:
        raise ValueError("A class name cannot be null.")
    return db.update_class(class_id, update_data)


def delete_class_by_id(class_id: str, db: DatabaseService) -> bool:
    return db.delete_class(class_id)


# --- ENROLLMENT-RELATED CORE BUSINESS LOGIC ---

def enroll_student(class_id: str, student_id: str, db: DatabaseService) -> ClassEnrollment:
    """
    Enrolls a student in a class. Re-enrolling a withdrawn student reactivates
    the existing row; enrolling an active student returns it unchanged.
    """
    if not db.get_class_by_id(class_id):
        raise ValueError(f"Class with ID {class_id} not found")

    student = db.get_user_by_id(student_id)
    if not student or student.role != UserRole.STUDENT.value:
        raise ValueError(f"Student with ID {student_id} not found")

    existing = db.get_enrollment(class_id=class_id, student_id=student_id)
    if existing:
        if existing.status == "active":
            return existing
        return db.update_enrollment_status(class_id=class_id, student_id=student_id, status="active")

    record: Dict = {"id": new_id("enr"), "class_id": class_id, "student_id": student_id, "status": "active"}
    return db.add_enrollment(record)


def withdraw_student(class_id: str, student_id: str, db: DatabaseService) -> bool:
    """Marks an enrollment inactive. Progress rows are kept."""
    enrollment = db.update_enrollment_status(class_id=class_id, student_id=student_id, status="inactive")
    return enrollment is not None
