# /app/db/models/progress_model.py

from sqlalchemy import Column, String, Integer, Float, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship

from ..base_class import Base
from ...core.utils import utcnow


class StudentProgress(Base):
    """
    Cached per-(student, class) summary of completion and average score.

    Always re-derivable from the submissions table; recomputation overwrites
    the row keyed on (student_id, class_id).
    """
    __tablename__ = "student_progress"
    __table_args__ = (UniqueConstraint("student_id", "class_id", name="uq_progress_student_class"),)

    id = Column(String, primary_key=True, index=True)
    student_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    class_id = Column(String, ForeignKey("classes.id", ondelete="CASCADE"), nullable=False, index=True)
    total_assignments = Column(Integer, nullable=False, default=0)
    completed_assignments = Column(Integer, nullable=False, default=0)
    average_score = Column(Float, nullable=False, default=0)
    current_grade = Column(String(1), nullable=True)
    last_updated = Column(DateTime, nullable=False, default=utcnow)
    # Set on first insert only; upserts never overwrite it.
    created_at = Column(DateTime, nullable=False, default=utcnow, index=True)

    class_ = relationship("Class", back_populates="progress")
