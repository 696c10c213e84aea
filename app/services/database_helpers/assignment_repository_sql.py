# /app/services/database_helpers/assignment_repository_sql.py

"""
Raw SQLAlchemy queries for the `assignments` and `submissions` tables.

The `read_*` methods return plain dictionaries in the flat row shape the
grading helpers consume; everything else returns ORM objects.
"""

from datetime import datetime
from typing import List, Dict, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.core.utils import new_id
from app.db.models.assignment_models import Assignment, Submission
from app.db.models.class_models import Class
from .sql_upsert import upsert


class AssignmentRepositorySQL:
    def __init__(self, db_session: Session):
        self.db = db_session

    # --- Assignment Methods ---

    def get_assignment_by_id(self, assignment_id: str) -> Optional[Assignment]:
        return self.db.query(Assignment).filter(Assignment.id == assignment_id).first()

    def get_assignments_by_class_id(self, class_id: str) -> List[Assignment]:
        return (
            self.db.query(Assignment)
            .filter(Assignment.class_id == class_id)
            .order_by(Assignment.due_date.asc().nulls_last())
            .all()
        )

    def read_assignments(self, class_id: str) -> List[Dict]:
        return [
            {"id": a.id, "max_points": a.total_points, "due_date": a.due_date}
            for a in self.get_assignments_by_class_id(class_id)
        ]

    def add_assignment(self, record: Dict) -> Assignment:
        new_assignment = Assignment(**record)
        self.db.add(new_assignment)
        self.db.commit()
        self.db.refresh(new_assignment)
        return new_assignment

    def update_assignment(self, assignment_id: str, data: Dict) -> Optional[Assignment]:
        assignment = self.get_assignment_by_id(assignment_id)
        if assignment:
            for key, value in data.items():
                setattr(assignment, key, value)
            self.db.commit()
            self.db.refresh(assignment)
        return assignment

    def count_assignments(self, class_ids: Optional[List[str]] = None) -> int:
        query = self.db.query(func.count(Assignment.id))
        if class_ids is not None:
            if not class_ids:
                return 0
            query = query.filter(Assignment.class_id.in_(class_ids))
        return query.scalar() or 0

    def get_assignments_with_class(
        self,
        class_ids: List[str],
        limit: int,
        due_after: Optional[datetime] = None,
    ) -> List[Tuple[Assignment, Class]]:
        """Assignments of the given classes joined with their class, soonest due first."""
        if not class_ids:
            return []
        query = (
            self.db.query(Assignment, Class)
            .join(Class, Assignment.class_id == Class.id)
            .filter(Assignment.class_id.in_(class_ids))
        )
        if due_after is not None:
            query = query.filter(Assignment.due_date >= due_after)
        return query.order_by(Assignment.due_date.asc().nulls_last()).limit(limit).all()

    # --- Submission Methods ---

    def get_submission_by_id(self, submission_id: str) -> Optional[Submission]:
        return self.db.query(Submission).filter(Submission.id == submission_id).first()

    def get_submission(self, student_id: str, assignment_id: str) -> Optional[Submission]:
        return (
            self.db.query(Submission)
            .filter(Submission.student_id == student_id, Submission.assignment_id == assignment_id)
            .first()
        )

    def get_submissions(self, assignment_id: Optional[str] = None, student_id: Optional[str] = None) -> List[Submission]:
        query = self.db.query(Submission)
        if assignment_id is not None:
            query = query.filter(Submission.assignment_id == assignment_id)
        if student_id is not None:
            query = query.filter(Submission.student_id == student_id)
        return query.all()

    def add_submission(self, record: Dict) -> Submission:
        submission = Submission(**record)
        self.db.add(submission)
        self.db.commit()
        self.db.refresh(submission)
        return submission

    def update_submission(self, submission_id: str, data: Dict) -> Optional[Submission]:
        submission = self.get_submission_by_id(submission_id)
        if submission:
            for key, value in data.items():
                setattr(submission, key, value)
            self.db.commit()
            self.db.refresh(submission)
        return submission

    def upsert_score(self, record: Dict) -> Submission:
        """
        Writes a graded score for (student_id, assignment_id), creating the
        submission row if the student never submitted.
        """
        values = {"id": new_id("sub"), **record}
        update_columns = [k for k in record if k not in ("student_id", "assignment_id")]
        upsert(self.db, Submission, values, ("student_id", "assignment_id"), update_columns)
        self.db.commit()
        return self.get_submission(record["student_id"], record["assignment_id"])

    def read_scores(
        self,
        student_ids: Optional[List[str]] = None,
        assignment_ids: Optional[List[str]] = None,
        class_id: Optional[str] = None,
    ) -> List[Dict]:
        query = self.db.query(Submission)
        if class_id is not None:
            query = query.join(Assignment, Submission.assignment_id == Assignment.id).filter(Assignment.class_id == class_id)
        if student_ids is not None:
            if not student_ids:
                return []
            query = query.filter(Submission.student_id.in_(student_ids))
        if assignment_ids is not None:
            if not assignment_ids:
                return []
            query = query.filter(Submission.assignment_id.in_(assignment_ids))
        return [
            {"student_id": s.student_id, "assignment_id": s.assignment_id, "score": s.grade, "status": s.status}
            for s in query.all()
        ]

    def count_submissions(self, assignment_ids: Optional[List[str]] = None, status: Optional[str] = None) -> int:
        query = self.db.query(func.count(Submission.id))
        if assignment_ids is not None:
            if not assignment_ids:
                return 0
            query = query.filter(Submission.assignment_id.in_(assignment_ids))
        if status is not None:
            query = query.filter(Submission.status == status)
        return query.scalar() or 0

    def get_recent_graded(self, student_id: str, limit: int) -> List[Tuple[Submission, Assignment, Class]]:
        """The student's graded submissions, most recently graded first, with assignment and class."""
        return (
            self.db.query(Submission, Assignment, Class)
            .join(Assignment, Submission.assignment_id == Assignment.id)
            .join(Class, Assignment.class_id == Class.id)
            .filter(Submission.student_id == student_id, Submission.status == "graded")
            .order_by(Submission.graded_at.desc())
            .limit(limit)
            .all()
        )

    def get_grades_for_assignment(self, assignment_id: str) -> List[float]:
        rows = (
            self.db.query(Submission.grade)
            .filter(Submission.assignment_id == assignment_id, Submission.grade.isnot(None))
            .all()
        )
        return [row[0] for row in rows]
