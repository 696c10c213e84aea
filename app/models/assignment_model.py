# /app/models/assignment_model.py

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, ConfigDict


class SubmissionStatus(str, Enum):
    DRAFT = "draft"
    SUBMITTED = "submitted"
    LATE = "late"
    GRADED = "graded"


class AssignmentCreate(BaseModel):
    class_id: str
    title: str = Field(..., min_length=1)
    description: Optional[str] = None
    due_date: Optional[datetime] = None
    total_points: float = Field(default=100, gt=0, description="Maximum points for the assignment.")
    assignment_type: str = Field(default="homework")


class AssignmentUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    due_date: Optional[datetime] = None
    total_points: Optional[float] = Field(default=None, gt=0)
    assignment_type: Optional[str] = None


class Assignment(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    class_id: str
    title: str
    description: Optional[str] = None
    due_date: Optional[datetime] = None
    total_points: float
    assignment_type: str
    created_at: Optional[datetime] = None


class AssignmentWithClass(Assignment):
    """An assignment with the owning class name resolved, for dashboards."""
    class_name: Optional[str] = None


class SubmissionCreate(BaseModel):
    assignment_id: str
    submission_text: Optional[str] = None
    attachment_url: Optional[str] = None


class GradeSubmission(BaseModel):
    grade: float = Field(..., ge=0)
    feedback: Optional[str] = None


class ScoreUpsert(BaseModel):
    """Direct score entry by a teacher, keyed on (student_id, assignment_id)."""
    assignment_id: str
    student_id: str
    score: float = Field(..., ge=0)
    feedback: Optional[str] = None


class Submission(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    assignment_id: str
    student_id: str
    submission_text: Optional[str] = None
    attachment_url: Optional[str] = None
    submitted_at: Optional[datetime] = None
    status: SubmissionStatus
    grade: Optional[float] = None
    feedback: Optional[str] = None
    graded_by: Optional[str] = None
    graded_at: Optional[datetime] = None
