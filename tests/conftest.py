# /tests/conftest.py

from datetime import datetime
from types import SimpleNamespace

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.db import base  # noqa: F401  (registers every model on Base.metadata)
from app.db import database  # noqa: F401  (turns on SQLite foreign key enforcement)
from app.db.base_class import Base
from app.services.database_service import DatabaseService


@pytest.fixture
def db_session():
    """
    A session bound to a fresh in-memory SQLite database. StaticPool keeps the
    single connection alive so every query sees the same tables.
    """
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def db_service(db_session):
    return DatabaseService(db_session)


@pytest.fixture
def school(db_service):
    """
    Seeds one teacher, two students, one class with both students enrolled,
    and two assignments (50 and 100 points). Returns the ids.
    """
    for user_id, role, name in (
        ("usr_teacher", "teacher", "Ms. Rivera"),
        ("usr_alice", "student", "Alice"),
        ("usr_bob", "student", "Bob"),
    ):
        db_service.add_user({
            "id": user_id,
            "email": f"{user_id}@school.test",
            "name": name,
            "role": role,
            "hashed_password": "not-a-real-hash",
            "is_active": True,
        })

    db_service.add_class({"id": "cls_math", "name": "Algebra I", "teacher_id": "usr_teacher"})
    for student_id in ("usr_alice", "usr_bob"):
        db_service.add_enrollment({
            "id": f"enr_{student_id}",
            "class_id": "cls_math",
            "student_id": student_id,
            "status": "active",
        })

    db_service.add_assignment({
        "id": "asg_quiz",
        "class_id": "cls_math",
        "title": "Quiz 1",
        "total_points": 50,
        "due_date": datetime(2030, 1, 10, 23, 59),
    })
    db_service.add_assignment({
        "id": "asg_exam",
        "class_id": "cls_math",
        "title": "Midterm",
        "total_points": 100,
        "due_date": datetime(2030, 2, 1, 9, 0),
    })

    return SimpleNamespace(
        teacher_id="usr_teacher",
        student_ids=["usr_alice", "usr_bob"],
        class_id="cls_math",
        quiz_id="asg_quiz",
        exam_id="asg_exam",
    )
