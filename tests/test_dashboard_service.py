# /tests/test_dashboard_service.py

from datetime import datetime
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from app.services import dashboard_service
from app.services.database_service import DatabaseService


# --- Test Data Fixtures ---

@pytest.fixture
def mock_db():
    return MagicMock(spec=DatabaseService)


@pytest.fixture
def algebra():
    return SimpleNamespace(id="cls_1", name="Algebra I")


@pytest.fixture
def quiz():
    """An assignment row as the repository would return it."""
    return SimpleNamespace(
        id="asg_1",
        class_id="cls_1",
        title="Quiz 1",
        description=None,
        due_date=datetime(2030, 1, 10),
        total_points=50.0,
        assignment_type="quiz",
        created_at=datetime(2029, 12, 1),
    )


# --- Teacher ---

def test_teacher_dashboard_counts_owned_classes(mock_db, algebra, quiz):
    mock_db.get_all_classes.return_value = [algebra]
    mock_db.count_enrollments.return_value = 24
    mock_db.count_assignments.return_value = 9
    mock_db.get_assignments_with_class.return_value = [(quiz, algebra)]
    mock_db.count_submissions.return_value = 3

    dashboard = dashboard_service.get_teacher_dashboard(mock_db, teacher_id="usr_t")

    mock_db.get_all_classes.assert_called_once_with(teacher_id="usr_t")
    mock_db.count_submissions.assert_called_once_with(assignment_ids=["asg_1"], status="submitted")
    assert dashboard.totalClasses == 1
    assert dashboard.totalStudents == 24
    assert dashboard.totalAssignments == 9
    assert dashboard.submissionsNeedingGrading == 3
    assert dashboard.recentAssignments[0].class_name == "Algebra I"


def test_teacher_without_classes_gets_zeros(mock_db):
    mock_db.get_all_classes.return_value = []

    dashboard = dashboard_service.get_teacher_dashboard(mock_db, teacher_id="usr_t")

    assert dashboard.totalClasses == 0
    assert dashboard.totalStudents == 0
    assert dashboard.recentAssignments == []
    mock_db.count_enrollments.assert_not_called()
    mock_db.count_submissions.assert_not_called()


def test_teacher_dashboard_fails_as_a_whole(mock_db):
    mock_db.get_all_classes.side_effect = RuntimeError("db down")

    with pytest.raises(RuntimeError):
        dashboard_service.get_teacher_dashboard(mock_db, teacher_id="usr_t")


# --- Student ---

def test_student_dashboard(mock_db, algebra, quiz):
    mock_db.read_enrollments.return_value = [{"class_id": "cls_1", "student_id": "stu_1", "status": "active"}]
    mock_db.get_assignments_with_class.return_value = [(quiz, algebra)]
    graded = SimpleNamespace(id="sub_1", grade=40.0, graded_at=datetime(2030, 1, 12))
    mock_db.get_recent_graded.return_value = [(graded, quiz, algebra)]
    mock_db.get_progress_by_student.return_value = [
        SimpleNamespace(
            id="prog_1", student_id="stu_1", class_id="cls_1", total_assignments=2,
            completed_assignments=1, average_score=80.0, current_grade="B",
            last_updated=datetime(2030, 1, 12),
        ),
        SimpleNamespace(
            id="prog_2", student_id="stu_1", class_id="cls_2", total_assignments=1,
            completed_assignments=1, average_score=91.0, current_grade="A",
            last_updated=datetime(2030, 1, 12),
        ),
    ]
    mock_db.get_classes_by_ids.return_value = [algebra]

    dashboard = dashboard_service.get_student_dashboard(mock_db, student_id="stu_1")

    assert mock_db.get_assignments_with_class.call_args.kwargs["due_after"] is not None
    assert dashboard.totalClasses == 1
    assert dashboard.overallAverage == 85.5
    assert dashboard.recentGrades[0].assignment_title == "Quiz 1"
    assert dashboard.recentGrades[0].class_name == "Algebra I"
    assert [p.class_name for p in dashboard.classProgress] == ["Algebra I", None]


def test_student_without_progress_has_zero_average(mock_db):
    mock_db.read_enrollments.return_value = []
    mock_db.get_recent_graded.return_value = []
    mock_db.get_progress_by_student.return_value = []
    mock_db.get_classes_by_ids.return_value = []

    dashboard = dashboard_service.get_student_dashboard(mock_db, student_id="stu_1")

    assert dashboard.totalClasses == 0
    assert dashboard.overallAverage == 0.0
    mock_db.get_assignments_with_class.assert_not_called()


# --- Head Teacher & Dispatch ---

def test_head_teacher_dashboard(mock_db):
    mock_db.count_classes.return_value = 12
    mock_db.count_users_by_role.side_effect = lambda role: {"student": 300, "teacher": 15}[role]
    mock_db.count_assignments.return_value = 140
    mock_db.count_submissions.return_value = 22

    dashboard = dashboard_service.get_head_teacher_dashboard(mock_db)

    assert dashboard.totalStudents == 300
    assert dashboard.totalTeachers == 15
    assert dashboard.submissionsNeedingGrading == 22


def test_dashboard_for_session_dispatches_on_role(mock_db):
    mock_db.count_classes.return_value = 0
    mock_db.count_users_by_role.return_value = 0
    mock_db.count_assignments.return_value = 0
    mock_db.count_submissions.return_value = 0
    session = SimpleNamespace(role="head_teacher", user_id="usr_h")

    response = dashboard_service.get_dashboard_for_session(mock_db, session)

    assert response.role == "head_teacher"
    assert response.headTeacher is not None
    assert response.teacher is None and response.student is None


def test_dashboard_for_unknown_role_raises(mock_db):
    with pytest.raises(ValueError):
        dashboard_service.get_dashboard_for_session(mock_db, SimpleNamespace(role="janitor", user_id="usr_x"))
