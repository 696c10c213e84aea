# /app/services/database_helpers/class_repository_sql.py

"""
Raw SQLAlchemy queries for the `classes` and `class_enrollments` tables.

Ownership checks (teacher vs. head teacher) live in the service layer; this
module only filters by the keys it is given.
"""

from typing import List, Dict, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.db.models.class_models import Class, ClassEnrollment
from app.db.models.user_model import User


class ClassRepositorySQL:
    def __init__(self, db_session: Session):
        self.db = db_session

    # --- Class Methods ---

    def get_all_classes(self, teacher_id: Optional[str] = None) -> List[Class]:
        """All classes, or only those taught by `teacher_id`, newest first."""
        query = self.db.query(Class)
        if teacher_id is not None:
            query = query.filter(Class.teacher_id == teacher_id)
        return query.order_by(Class.created_at.desc()).all()

    def get_class_by_id(self, class_id: str) -> Optional[Class]:
        return self.db.query(Class).filter(Class.id == class_id).first()

    def get_classes_by_ids(self, class_ids: List[str]) -> List[Class]:
        if not class_ids:
            return []
        return self.db.query(Class).filter(Class.id.in_(class_ids)).all()

    def count_classes(self) -> int:
        return self.db.query(func.count(Class.id)).scalar() or 0

    def add_class(self, record: Dict) -> Class:
        new_class = Class(**record)
        self.db.add(new_class)
        self.db.commit()
        self.db.refresh(new_class)
        return new_class

    def update_class(self, class_id: str, data: Dict) -> Optional[Class]:
        db_class = self.get_class_by_id(class_id)
        if db_class:
            for key, value in data.items():
                setattr(db_class, key, value)
            self.db.commit()
            self.db.refresh(db_class)
        return db_class

    def delete_class(self, class_id: str) -> bool:
        db_class = self.get_class_by_id(class_id)
        if db_class:
            # Enrollments, assignments and progress rows go with it (cascade).
            self.db.delete(db_class)
            self.db.commit()
            return True
        return False

    # --- Enrollment Methods ---

    def add_enrollment(self, record: Dict) -> ClassEnrollment:
        enrollment = ClassEnrollment(**record)
        self.db.add(enrollment)
        self.db.commit()
        self.db.refresh(enrollment)
        return enrollment

    def get_enrollment(self, class_id: str, student_id: str) -> Optional[ClassEnrollment]:
        return (
            self.db.query(ClassEnrollment)
            .filter(ClassEnrollment.class_id == class_id, ClassEnrollment.student_id == student_id)
            .first()
        )

    def update_enrollment_status(self, class_id: str, student_id: str, status: str) -> Optional[ClassEnrollment]:
        enrollment = self.get_enrollment(class_id, student_id)
        if enrollment:
            enrollment.status = status
            self.db.commit()
            self.db.refresh(enrollment)
        return enrollment

    def read_enrollments(
        self,
        student_id: Optional[str] = None,
        class_id: Optional[str] = None,
        status: Optional[str] = None,
    ) -> List[Dict]:
        query = self.db.query(ClassEnrollment)
        if student_id is not None:
            query = query.filter(ClassEnrollment.student_id == student_id)
        if class_id is not None:
            query = query.filter(ClassEnrollment.class_id == class_id)
        if status is not None:
            query = query.filter(ClassEnrollment.status == status)
        return [
            {"class_id": e.class_id, "student_id": e.student_id, "status": e.status}
            for e in query.order_by(ClassEnrollment.enrolled_at).all()
        ]

    def count_enrollments(self, class_ids: Optional[List[str]] = None) -> int:
        """Enrollment rows, optionally restricted to a set of classes."""
        query = self.db.query(func.count(ClassEnrollment.id))
        if class_ids is not None:
            if not class_ids:
                return 0
            query = query.filter(ClassEnrollment.class_id.in_(class_ids))
        return query.scalar() or 0

    def get_enrolled_students(self, class_id: str, status: Optional[str] = "active") -> List[User]:
        query = (
            self.db.query(User)
            .join(ClassEnrollment, ClassEnrollment.student_id == User.id)
            .filter(ClassEnrollment.class_id == class_id)
        )
        if status is not None:
            query = query.filter(ClassEnrollment.status == status)
        return query.order_by(User.name).all()
