# /app/models/progress_model.py

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, Field, ConfigDict


class StudentProgress(BaseModel):
    """The cached per-(student, class) progress row."""
    model_config = ConfigDict(from_attributes=True)

    id: str
    student_id: str
    class_id: str
    total_assignments: int
    completed_assignments: int
    average_score: float = Field(..., ge=0, description="Mean of per-assignment percentages, 0-100.")
    current_grade: Optional[str] = None
    last_updated: datetime


class ClassProgress(StudentProgress):
    class_name: Optional[str] = None


class ClassRanking(BaseModel):
    student_id: str
    class_id: str
    rank: int = Field(..., ge=1)
    total: int = Field(..., ge=1)


class StudentAverage(BaseModel):
    student_id: str
    name: str
    average_score: float
    total_assignments: int
    current_grade: Optional[str] = None


class ClassStatistics(BaseModel):
    class_id: str
    students: List[StudentAverage] = Field(default_factory=list)
    classAverage: float = 0
    medianScore: float = 0
    gradeDistribution: Dict[str, int] = Field(default_factory=dict)
