# /app/models/dashboard_model.py

# --- Core Imports ---
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from .assignment_model import AssignmentWithClass
from .progress_model import ClassProgress


# --- Model Definitions ---

class TeacherDashboard(BaseModel):
    """
    Defines the data contract for the teacher dashboard. Every number is
    scoped to the classes the teacher owns.
    """
    totalClasses: int = Field(..., description="The number of classes the teacher owns.", examples=[4])
    totalStudents: int = Field(..., description="Enrollment rows across the teacher's classes.", examples=[112])
    totalAssignments: int = Field(..., description="Assignments across the teacher's classes.", examples=[18])
    submissionsNeedingGrading: int = Field(
        ...,
        description="Submissions in status 'submitted' among the recent assignments.",
        examples=[7],
    )
    recentAssignments: List[AssignmentWithClass] = Field(default_factory=list)


class RecentGrade(BaseModel):
    id: str
    grade: Optional[float] = None
    graded_at: Optional[datetime] = None
    assignment_id: str
    assignment_title: str
    total_points: float
    class_id: str
    class_name: Optional[str] = None


class StudentDashboard(BaseModel):
    """Defines the data contract for the student dashboard."""
    totalClasses: int = Field(..., description="Active enrollments of the student.", examples=[5])
    overallAverage: float = Field(..., description="Mean of the student's class averages, 2 decimals.", examples=[86.25])
    upcomingAssignments: List[AssignmentWithClass] = Field(default_factory=list)
    recentGrades: List[RecentGrade] = Field(default_factory=list)
    classProgress: List[ClassProgress] = Field(default_factory=list)


class HeadTeacherDashboard(BaseModel):
    """School-wide counts for the head teacher."""
    totalClasses: int
    totalStudents: int
    totalTeachers: int
    totalAssignments: int
    submissionsNeedingGrading: int


class DashboardResponse(BaseModel):
    """The role-dispatched dashboard: exactly one of the views is populated."""
    role: str
    teacher: Optional[TeacherDashboard] = None
    student: Optional[StudentDashboard] = None
    headTeacher: Optional[HeadTeacherDashboard] = None
