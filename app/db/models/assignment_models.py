# /app/db/models/assignment_models.py

"""
SQLAlchemy models for assignments and the student submissions graded against them.
"""

from sqlalchemy import Column, String, Float, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship

from ..base_class import Base
from ...core.utils import utcnow


class Assignment(Base):
    __tablename__ = "assignments"

    id = Column(String, primary_key=True, index=True)
    class_id = Column(String, ForeignKey("classes.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String, nullable=False)
    description = Column(String, nullable=True)
    due_date = Column(DateTime, nullable=True, index=True)
    total_points = Column(Float, nullable=False, default=100)
    assignment_type = Column(String, nullable=False, default="homework")
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    class_ = relationship("Class", back_populates="assignments")
    submissions = relationship("Submission", back_populates="assignment", cascade="all, delete-orphan")


class Submission(Base):
    """
    One student's response to one assignment. The (student_id, assignment_id)
    pair is unique, so score entry is always an upsert on that key.
    """
    __tablename__ = "submissions"
    __table_args__ = (UniqueConstraint("student_id", "assignment_id", name="uq_submission_student_assignment"),)

    id = Column(String, primary_key=True, index=True)
    assignment_id = Column(String, ForeignKey("assignments.id", ondelete="CASCADE"), nullable=False, index=True)
    student_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    submission_text = Column(String, nullable=True)
    attachment_url = Column(String, nullable=True)
    submitted_at = Column(DateTime, nullable=True)
    # draft | submitted | late | graded
    status = Column(String, index=True, nullable=False, default="draft")
    grade = Column(Float, nullable=True)
    feedback = Column(String, nullable=True)
    graded_by = Column(String, ForeignKey("users.id"), nullable=True)
    graded_at = Column(DateTime, nullable=True)

    assignment = relationship("Assignment", back_populates="submissions")
    student = relationship("User", foreign_keys=[student_id])
