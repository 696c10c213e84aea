# /app/db/models/user_model.py

"""
SQLAlchemy models for user accounts and revoked access tokens.

A `User` row is both the login identity and the profile the rest of the
application reads: its `role` decides which dashboard and which routes are
available, and for students `class_id` records their home class.
"""

from sqlalchemy import Column, String, Boolean, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from ..base_class import Base
from ...core.utils import utcnow


class User(Base):
    __tablename__ = "users"

    id = Column(String, primary_key=True, index=True)
    email = Column(String, unique=True, index=True, nullable=False)
    name = Column(String, nullable=False)
    # One of: student, teacher, head_teacher
    role = Column(String, index=True, nullable=False)
    # Only populated for students.
    class_id = Column(String, nullable=True, index=True)
    hashed_password = Column(String, nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    classes = relationship(
        "Class",
        back_populates="teacher",
        foreign_keys="Class.teacher_id",
        cascade="all, delete-orphan",
    )


class RevokedToken(Base):
    """A signed-out access token, identified by its `jti` claim."""
    __tablename__ = "revoked_tokens"

    id = Column(String, primary_key=True, index=True)
    jti = Column(String(36), unique=True, nullable=False, index=True)
    user_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    expires_at = Column(DateTime, nullable=False)
    revoked_at = Column(DateTime, nullable=False, default=utcnow)
