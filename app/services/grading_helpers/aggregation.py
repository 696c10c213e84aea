# /app/services/grading_helpers/aggregation.py

"""
Pure functions that reduce flat score rows to per-student progress figures.

Inputs are the row shapes returned by the store contract:
- assignments: ``{"id", "max_points", ...}``
- score rows:  ``{"student_id", "assignment_id", "score", "status"}``

Nothing here touches the database; the progress service performs the reads
and the upsert around these calls.
"""

from typing import Dict, Iterable, List, Optional

# Lower bounds are inclusive: 90.00 is an A, 89.99 is a B.
GRADE_BOUNDARIES = (
    (90, "A"),
    (80, "B"),
    (70, "C"),
    (60, "D"),
)
FAILING_GRADE = "F"

# Used when an assignment has no (or zero) max points recorded.
DEFAULT_MAX_POINTS = 100

GRADED_STATUS = "graded"


def letter_grade(average_score: float) -> str:
    """Maps a 0-100 average to its letter grade."""
    for lower_bound, letter in GRADE_BOUNDARIES:
        if average_score >= lower_bound:
            return letter
    return FAILING_GRADE


def score_to_percentage(score: float, max_points: Optional[float]) -> float:
    """Normalizes a raw score to a percentage of the assignment's max points."""
    points = max_points or DEFAULT_MAX_POINTS
    return score / points * 100


def summarize_student(student_id: str, assignments: List[Dict], score_rows: Iterable[Dict]) -> Dict:
    """
    Computes one student's progress figures for one class.

    The average is the mean of per-assignment percentages (each score is
    normalized before averaging), taken over non-null scores only; missing
    or ungraded work is left out of the denominator rather than counted as
    zero. A student with no graded scores averages 0 and therefore gets an F.
    """
    max_points_by_id = {a["id"]: a.get("max_points") for a in assignments}

    own_rows = [
        row for row in score_rows
        if row["student_id"] == student_id and row["assignment_id"] in max_points_by_id
    ]

    completed = sum(1 for row in own_rows if row.get("status") == GRADED_STATUS)
    percentages = [
        score_to_percentage(row["score"], max_points_by_id[row["assignment_id"]])
        for row in own_rows
        if row.get("score") is not None
    ]

    average = round(sum(percentages) / len(percentages), 2) if percentages else 0.0

    return {
        "student_id": student_id,
        "total_assignments": len(assignments),
        "completed_assignments": completed,
        "average_score": average,
        "current_grade": letter_grade(average),
    }


def summarize_scores(
    assignments: List[Dict],
    score_rows: List[Dict],
    student_ids: Optional[List[str]] = None,
) -> List[Dict]:
    """
    Summarizes every student in `student_ids`, or every student that appears
    in `score_rows` (in order of first appearance) when no list is given.
    """
    if student_ids is None:
        student_ids = list(dict.fromkeys(row["student_id"] for row in score_rows))

    rows_by_student: Dict[str, List[Dict]] = {sid: [] for sid in student_ids}
    for row in score_rows:
        if row["student_id"] in rows_by_student:
            rows_by_student[row["student_id"]].append(row)

    return [summarize_student(sid, assignments, rows_by_student[sid]) for sid in student_ids]
