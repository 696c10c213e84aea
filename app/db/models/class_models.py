# /app/db/models/class_models.py

"""
SQLAlchemy models for classes and the enrollment rows linking students to them.
"""

from sqlalchemy import Column, String, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship

from ..base_class import Base
from ...core.utils import utcnow


class Class(Base):
    """A roster taught by one teacher for one academic year."""
    __tablename__ = "classes"

    id = Column(String, primary_key=True, index=True)
    name = Column(String, index=True, nullable=False)
    description = Column(String, nullable=True)
    subject = Column(String, nullable=True)
    grade_level = Column(String, nullable=True)
    academic_year = Column(String, nullable=True)
    teacher_id = Column(String, ForeignKey("users.id"), nullable=False, index=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    teacher = relationship("User", back_populates="classes", foreign_keys=[teacher_id])

    # Deleting a class removes everything that hangs off it.
    enrollments = relationship("ClassEnrollment", back_populates="class_", cascade="all, delete-orphan")
    assignments = relationship("Assignment", back_populates="class_", cascade="all, delete-orphan")
    progress = relationship("StudentProgress", back_populates="class_", cascade="all, delete-orphan")


class ClassEnrollment(Base):
    __tablename__ = "class_enrollments"
    __table_args__ = (UniqueConstraint("class_id", "student_id", name="uq_enrollment_class_student"),)

    id = Column(String, primary_key=True, index=True)
    class_id = Column(String, ForeignKey("classes.id", ondelete="CASCADE"), nullable=False, index=True)
    student_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    # active | inactive
    status = Column(String, nullable=False, default="active")
    enrolled_at = Column(DateTime, nullable=False, default=utcnow)

    class_ = relationship("Class", back_populates="enrollments")
    student = relationship("User")
