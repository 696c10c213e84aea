# /tests/test_api.py

"""End-to-end requests through the FastAPI app against an in-memory database."""

import pytest
from fastapi.testclient import TestClient

from app.db.database import get_db
from app.main import app
from app.services.auth_service import SessionManager


@pytest.fixture
def client(db_session):
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.state.session_manager = SessionManager()
    app.state.session_manager.start()
    # Not entered as a context manager, so the lifespan (and its on-disk
    # database setup) does not run.
    yield TestClient(app)
    app.state.session_manager.shutdown()
    app.dependency_overrides.clear()


def _register(client, email, role, name="Test User", password="password123"):
    response = client.post("/api/auth/register", json={"email": email, "password": password, "name": name, "role": role})
    assert response.status_code == 201, response.text
    return response.json()


def _login(client, email, password="password123"):
    response = client.post("/api/auth/token", data={"username": email, "password": password})
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


@pytest.fixture
def classroom(client):
    """A teacher with one class, one enrolled student, and one 50-point assignment."""
    teacher = _register(client, "teacher@school.test", "teacher", name="Ms. Rivera")
    student = _register(client, "alice@school.test", "student", name="Alice")
    teacher_headers = _login(client, "teacher@school.test")
    student_headers = _login(client, "alice@school.test")

    class_response = client.post("/api/classes", json={"name": "Algebra I"}, headers=teacher_headers)
    assert class_response.status_code == 201, class_response.text
    class_id = class_response.json()["id"]

    enroll = client.post(f"/api/classes/{class_id}/enrollments", json={"student_id": student["id"]}, headers=teacher_headers)
    assert enroll.status_code == 201, enroll.text

    assignment = client.post(
        "/api/assignments",
        json={"class_id": class_id, "title": "Quiz 1", "total_points": 50, "due_date": "2099-01-01T00:00:00Z"},
        headers=teacher_headers,
    )
    assert assignment.status_code == 201, assignment.text

    return {
        "teacher": teacher,
        "student": student,
        "teacher_headers": teacher_headers,
        "student_headers": student_headers,
        "class_id": class_id,
        "assignment_id": assignment.json()["id"],
    }


def test_health_check(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.json()["version"] == "1.0.0"


def test_protected_route_requires_token(client):
    response = client.get("/api/dashboard/me")
    assert response.status_code == 401


def test_session_is_null_when_signed_out(client):
    response = client.get("/api/auth/session")
    assert response.status_code == 200
    assert response.json()["user"] is None


def test_logout_revokes_token(client):
    _register(client, "bob@school.test", "student", name="Bob")
    headers = _login(client, "bob@school.test")

    assert client.get("/api/auth/me", headers=headers).status_code == 200
    assert client.post("/api/auth/logout", headers=headers).status_code == 200
    assert client.get("/api/auth/me", headers=headers).status_code == 401


def test_student_cannot_create_class(client):
    _register(client, "bob@school.test", "student", name="Bob")
    headers = _login(client, "bob@school.test")

    response = client.post("/api/classes", json={"name": "Bob's Class"}, headers=headers)

    assert response.status_code == 403


def test_submit_grade_and_dashboards(client, classroom):
    submit = client.post(
        "/api/submissions/submit",
        json={"assignment_id": classroom["assignment_id"], "submission_text": "x = 4"},
        headers=classroom["student_headers"],
    )
    assert submit.status_code == 201, submit.text
    assert submit.json()["status"] == "submitted"

    teacher_view = client.get("/api/dashboard/me", headers=classroom["teacher_headers"]).json()
    assert teacher_view["role"] == "teacher"
    assert teacher_view["teacher"]["totalStudents"] == 1
    assert teacher_view["teacher"]["submissionsNeedingGrading"] == 1

    grade = client.post(
        f"/api/submissions/{submit.json()['id']}/grade",
        json={"grade": 40, "feedback": "Nice work"},
        headers=classroom["teacher_headers"],
    )
    assert grade.status_code == 200, grade.text
    assert grade.json()["status"] == "graded"

    student_view = client.get("/api/dashboard/student", headers=classroom["student_headers"])
    assert student_view.status_code == 200, student_view.text
    body = student_view.json()
    assert body["totalClasses"] == 1
    assert body["overallAverage"] == 80.0
    assert body["recentGrades"][0]["class_name"] == "Algebra I"
    assert body["classProgress"][0]["current_grade"] == "B"

    ranking = client.get(
        f"/api/progress/{classroom['class_id']}/students/{classroom['student']['id']}/ranking",
        headers=classroom["student_headers"],
    )
    assert ranking.json() == {
        "student_id": classroom["student"]["id"],
        "class_id": classroom["class_id"],
        "rank": 1,
        "total": 1,
    }


def test_grade_out_of_range_is_a_bad_request(client, classroom):
    submit = client.post(
        "/api/submissions/submit",
        json={"assignment_id": classroom["assignment_id"]},
        headers=classroom["student_headers"],
    )

    response = client.post(
        f"/api/submissions/{submit.json()['id']}/grade",
        json={"grade": 75},
        headers=classroom["teacher_headers"],
    )

    assert response.status_code == 400


def test_student_cannot_read_another_students_progress(client, classroom):
    other = _register(client, "carol@school.test", "student", name="Carol")

    response = client.get(
        f"/api/progress/{classroom['class_id']}/students/{other['id']}",
        headers=classroom["student_headers"],
    )

    assert response.status_code == 403


def test_class_statistics(client, classroom):
    client.post(
        "/api/submissions/scores",
        json={"assignment_id": classroom["assignment_id"], "student_id": classroom["student"]["id"], "score": 45},
        headers=classroom["teacher_headers"],
    )

    response = client.get(f"/api/progress/{classroom['class_id']}/statistics", headers=classroom["teacher_headers"])

    assert response.status_code == 200, response.text
    stats = response.json()
    assert stats["classAverage"] == 90.0
    assert stats["gradeDistribution"]["A"] == 1
    assert stats["students"][0]["name"] == "Alice"


def test_score_for_student_outside_the_class_is_a_bad_request(client, classroom):
    outsider = _register(client, "dave@school.test", "student", name="Dave")

    for student_id in (outsider["id"], "usr_ghost"):
        response = client.post(
            "/api/submissions/scores",
            json={"assignment_id": classroom["assignment_id"], "student_id": student_id, "score": 30},
            headers=classroom["teacher_headers"],
        )
        assert response.status_code == 400

    stats = client.get(f"/api/progress/{classroom['class_id']}/statistics", headers=classroom["teacher_headers"]).json()
    assert [s["name"] for s in stats["students"]] == ["Alice"]


def test_null_total_points_is_a_bad_request(client, classroom):
    response = client.put(
        f"/api/assignments/{classroom['assignment_id']}",
        json={"total_points": None},
        headers=classroom["teacher_headers"],
    )

    assert response.status_code == 400
