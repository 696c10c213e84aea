# /app/models/class_model.py

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, ConfigDict

from .user_model import User


class ClassBase(BaseModel):
    name: str = Field(..., min_length=1, description="The display name of the class.")
    description: Optional[str] = None
    subject: Optional[str] = None
    grade_level: Optional[str] = None
    academic_year: Optional[str] = Field(default=None, examples=["2025-2026"])


class ClassCreate(ClassBase):
    """Payload for creating a class. The teacher is taken from the session."""
    pass


class ClassUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    subject: Optional[str] = None
    grade_level: Optional[str] = None
    academic_year: Optional[str] = None


class Class(ClassBase):
    model_config = ConfigDict(from_attributes=True)

    id: str
    teacher_id: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ClassSummary(BaseModel):
    """A class plus the number of actively enrolled students, for list views."""
    id: str
    name: str
    description: Optional[str] = None
    academic_year: Optional[str] = None
    teacher_id: str
    studentCount: int = 0


class EnrollmentCreate(BaseModel):
    student_id: str


class Enrollment(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    class_id: str
    student_id: str
    status: str
    enrolled_at: Optional[datetime] = None


class ClassDetails(Class):
    students: List[User] = Field(default_factory=list)
