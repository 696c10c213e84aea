# /app/services/database_helpers/progress_repository_sql.py

from typing import List, Dict, Optional

from sqlalchemy.orm import Session

from app.core.utils import new_id
from app.db.models.progress_model import StudentProgress
from .sql_upsert import upsert


class ProgressRepositorySQL:
    def __init__(self, db_session: Session):
        self.db = db_session

    def get_progress(self, student_id: str, class_id: str) -> Optional[StudentProgress]:
        return (
            self.db.query(StudentProgress)
            .filter(StudentProgress.student_id == student_id, StudentProgress.class_id == class_id)
            .first()
        )

    def get_progress_by_student(self, student_id: str) -> List[StudentProgress]:
        return self.db.query(StudentProgress).filter(StudentProgress.student_id == student_id).all()

    def get_progress_by_class(self, class_id: str) -> List[StudentProgress]:
        """Progress rows of a class, oldest first. Ranking ties fall back to this order."""
        return (
            self.db.query(StudentProgress)
            .filter(StudentProgress.class_id == class_id)
            .order_by(StudentProgress.created_at, StudentProgress.id)
            .all()
        )

    def upsert_progress(self, student_id: str, class_id: str, fields: Dict) -> StudentProgress:
        """Creates or overwrites the row keyed on (student_id, class_id)."""
        values = {"id": new_id("prog"), "student_id": student_id, "class_id": class_id, **fields}
        upsert(self.db, StudentProgress, values, ("student_id", "class_id"), list(fields))
        self.db.commit()
        return self.get_progress(student_id, class_id)
