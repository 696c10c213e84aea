# /tests/test_assignment_service.py

from datetime import datetime

import pytest

from app.models.assignment_model import (
    AssignmentCreate,
    AssignmentUpdate,
    GradeSubmission,
    ScoreUpsert,
    SubmissionCreate,
)
from app.services import assignment_service


def test_create_assignment_for_missing_class_raises(db_service, school):
    with pytest.raises(ValueError):
        assignment_service.create_assignment(db_service, AssignmentCreate(class_id="cls_nope", title="Essay"))


def test_create_assignment_defaults(db_service, school):
    created = assignment_service.create_assignment(db_service, AssignmentCreate(class_id=school.class_id, title="Essay"))

    assert created.id.startswith("asg_")
    assert created.total_points == 100
    assert created.assignment_type == "homework"


def test_submit_on_time_and_late(db_service, school):
    on_time = assignment_service.submit_assignment(
        db_service, "usr_alice", SubmissionCreate(assignment_id=school.quiz_id, submission_text="x = 2"),
        now=datetime(2030, 1, 10, 12, 0),
    )
    late = assignment_service.submit_assignment(
        db_service, "usr_bob", SubmissionCreate(assignment_id=school.quiz_id),
        now=datetime(2030, 1, 11, 0, 0),
    )

    assert on_time.status == "submitted"
    assert late.status == "late"
    assert late.submitted_at == datetime(2030, 1, 11, 0, 0)


def test_draft_then_submit_reuses_the_row(db_service, school):
    draft = assignment_service.save_draft(db_service, "usr_alice", SubmissionCreate(assignment_id=school.exam_id, submission_text="wip"))
    submitted = assignment_service.submit_assignment(
        db_service, "usr_alice", SubmissionCreate(assignment_id=school.exam_id, submission_text="done"),
        now=datetime(2030, 1, 20),
    )

    assert draft.status == "draft"
    assert submitted.id == draft.id
    assert submitted.submission_text == "done"


def test_grading_updates_progress(db_service, school):
    submission = assignment_service.submit_assignment(
        db_service, "usr_alice", SubmissionCreate(assignment_id=school.quiz_id), now=datetime(2030, 1, 1),
    )

    graded = assignment_service.grade_submission(
        db_service, submission.id, GradeSubmission(grade=40, feedback="Good"), graded_by=school.teacher_id,
    )

    assert graded.status == "graded"
    assert graded.graded_by == school.teacher_id
    assert graded.graded_at is not None
    progress = db_service.get_progress("usr_alice", school.class_id)
    assert progress.completed_assignments == 1
    assert progress.average_score == 80.0
    assert progress.current_grade == "B"


def test_regrade_replaces_the_score(db_service, school):
    submission = assignment_service.submit_assignment(
        db_service, "usr_alice", SubmissionCreate(assignment_id=school.quiz_id), now=datetime(2030, 1, 1),
    )
    assignment_service.grade_submission(db_service, submission.id, GradeSubmission(grade=40), graded_by=school.teacher_id)
    assignment_service.grade_submission(db_service, submission.id, GradeSubmission(grade=46), graded_by=school.teacher_id)

    progress = db_service.get_progress("usr_alice", school.class_id)
    assert progress.average_score == 92.0
    assert progress.current_grade == "A"


def test_graded_submission_cannot_be_resubmitted(db_service, school):
    submission = assignment_service.submit_assignment(
        db_service, "usr_alice", SubmissionCreate(assignment_id=school.quiz_id), now=datetime(2030, 1, 1),
    )
    assignment_service.grade_submission(db_service, submission.id, GradeSubmission(grade=40), graded_by=school.teacher_id)

    with pytest.raises(ValueError):
        assignment_service.save_draft(db_service, "usr_alice", SubmissionCreate(assignment_id=school.quiz_id))


def test_grade_above_total_points_is_rejected(db_service, school):
    submission = assignment_service.submit_assignment(
        db_service, "usr_alice", SubmissionCreate(assignment_id=school.quiz_id), now=datetime(2030, 1, 1),
    )

    with pytest.raises(ValueError):
        assignment_service.grade_submission(db_service, submission.id, GradeSubmission(grade=51), graded_by=school.teacher_id)


def test_grade_missing_submission_returns_none(db_service, school):
    assert assignment_service.grade_submission(db_service, "sub_nope", GradeSubmission(grade=1), graded_by=school.teacher_id) is None


def test_upsert_score_without_a_submission(db_service, school):
    submission = assignment_service.upsert_score(
        db_service, ScoreUpsert(assignment_id=school.exam_id, student_id="usr_bob", score=65), graded_by=school.teacher_id,
    )

    assert submission.status == "graded"
    assert submission.grade == 65
    assert db_service.get_progress("usr_bob", school.class_id).current_grade == "D"


def test_changing_total_points_recomputes_class_progress(db_service, school):
    assignment_service.upsert_score(
        db_service, ScoreUpsert(assignment_id=school.quiz_id, student_id="usr_alice", score=40), graded_by=school.teacher_id,
    )
    assert db_service.get_progress("usr_alice", school.class_id).average_score == 80.0

    assignment_service.update_assignment(db_service, school.quiz_id, AssignmentUpdate(total_points=100))

    progress = db_service.get_progress("usr_alice", school.class_id)
    assert progress.average_score == 40.0
    assert progress.current_grade == "F"
    # Bob is enrolled but has nothing graded.
    assert db_service.get_progress("usr_bob", school.class_id).average_score == 0.0


def test_empty_assignment_update_raises(db_service, school):
    with pytest.raises(ValueError):
        assignment_service.update_assignment(db_service, school.quiz_id, AssignmentUpdate())


def test_grading_recomputes_only_the_graded_student(db_service, school, mocker):
    recompute = mocker.patch("app.services.assignment_service.progress_service.recompute_student_progress")
    submission = assignment_service.submit_assignment(
        db_service, "usr_bob", SubmissionCreate(assignment_id=school.exam_id), now=datetime(2030, 1, 1),
    )

    assignment_service.grade_submission(db_service, submission.id, GradeSubmission(grade=70), graded_by=school.teacher_id)

    recompute.assert_called_once_with(db_service, student_id="usr_bob", class_id=school.class_id)


def test_null_for_a_required_field_is_rejected(db_service, school):
    with pytest.raises(ValueError):
        assignment_service.update_assignment(db_service, school.quiz_id, AssignmentUpdate(total_points=None))
    with pytest.raises(ValueError):
        assignment_service.update_assignment(db_service, school.quiz_id, AssignmentUpdate(title=None))

    assert db_service.get_assignment_by_id(school.quiz_id).total_points == 50


def test_optional_fields_can_still_be_cleared(db_service, school):
    updated = assignment_service.update_assignment(db_service, school.quiz_id, AssignmentUpdate(due_date=None))

    assert updated.due_date is None


def test_new_assignment_refreshes_cached_totals(db_service, school):
    assignment_service.upsert_score(
        db_service, ScoreUpsert(assignment_id=school.quiz_id, student_id="usr_alice", score=40), graded_by=school.teacher_id,
    )
    assert db_service.get_progress("usr_alice", school.class_id).total_assignments == 2

    assignment_service.create_assignment(db_service, AssignmentCreate(class_id=school.class_id, title="Quiz 2"))

    progress = db_service.get_progress("usr_alice", school.class_id)
    assert progress.total_assignments == 3
    assert progress.completed_assignments == 1
    assert db_service.get_progress("usr_bob", school.class_id).total_assignments == 3


def test_score_for_unenrolled_student_is_rejected(db_service, school):
    db_service.add_user({
        "id": "usr_carol", "email": "carol@school.test", "name": "Carol",
        "role": "student", "hashed_password": "not-a-real-hash", "is_active": True,
    })

    with pytest.raises(ValueError):
        assignment_service.upsert_score(
            db_service, ScoreUpsert(assignment_id=school.quiz_id, student_id="usr_carol", score=40), graded_by=school.teacher_id,
        )
    with pytest.raises(ValueError):
        assignment_service.upsert_score(
            db_service, ScoreUpsert(assignment_id=school.quiz_id, student_id="usr_ghost", score=40), graded_by=school.teacher_id,
        )

    assert db_service.get_submissions(assignment_id=school.quiz_id) == []
    assert db_service.get_progress_by_class(school.class_id) == []


def test_score_for_withdrawn_student_is_rejected(db_service, school):
    db_service.update_enrollment_status(class_id=school.class_id, student_id="usr_bob", status="inactive")

    with pytest.raises(ValueError):
        assignment_service.upsert_score(
            db_service, ScoreUpsert(assignment_id=school.quiz_id, student_id="usr_bob", score=40), graded_by=school.teacher_id,
        )
