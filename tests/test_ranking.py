# /tests/test_ranking.py

from types import SimpleNamespace

from app.services.grading_helpers.ranking import find_rank, rank_students


def test_students_are_ranked_best_first():
    rows = [
        {"student_id": "s1", "average_score": 72.5},
        {"student_id": "s2", "average_score": 91.0},
        {"student_id": "s3", "average_score": 85.25},
    ]

    ranking = rank_students(rows)

    assert [entry["student_id"] for entry in ranking] == ["s2", "s3", "s1"]
    assert [entry["rank"] for entry in ranking] == [1, 2, 3]


def test_ties_keep_the_order_rows_were_supplied_in():
    rows = [
        {"student_id": "first", "average_score": 80.0},
        {"student_id": "top", "average_score": 95.0},
        {"student_id": "second", "average_score": 80.0},
        {"student_id": "third", "average_score": 80.0},
    ]

    ranking = rank_students(rows)

    assert [entry["student_id"] for entry in ranking] == ["top", "first", "second", "third"]
    assert find_rank(rows, "second") == (3, 4)


def test_find_rank_accepts_orm_like_rows():
    rows = [
        SimpleNamespace(student_id="s1", average_score=60.0),
        SimpleNamespace(student_id="s2", average_score=None),
    ]

    assert find_rank(rows, "s1") == (1, 2)
    assert find_rank(rows, "s2") == (2, 2)


def test_find_rank_returns_none_for_unknown_student():
    rows = [{"student_id": "s1", "average_score": 60.0}]

    assert find_rank(rows, "nobody") is None
    assert find_rank([], "s1") is None
