# /app/services/grading_helpers/ranking.py

"""
Ranking of students within a class by average score.

Ties are not broken by any secondary key: equal averages keep the order in
which the rows were supplied (Python's sort is stable, including with
``reverse=True``).
"""

from typing import Any, Dict, List, Optional, Tuple


def _field(row: Any, name: str):
    # Rows may be plain dicts (tests, store contract) or ORM objects.
    if isinstance(row, dict):
        return row.get(name)
    return getattr(row, name, None)


def rank_students(progress_rows: List[Any]) -> List[Dict]:
    """Returns ``{"rank", "student_id", "average_score"}`` entries, best first, ranks from 1."""
    ordered = sorted(progress_rows, key=lambda row: _field(row, "average_score") or 0, reverse=True)
    return [
        {
            "rank": position,
            "student_id": _field(row, "student_id"),
            "average_score": _field(row, "average_score") or 0,
        }
        for position, row in enumerate(ordered, start=1)
    ]


def find_rank(progress_rows: List[Any], student_id: str) -> Optional[Tuple[int, int]]:
    """``(rank, total_students)`` for `student_id`, or None when it has no row."""
    ranking = rank_students(progress_rows)
    for entry in ranking:
        if entry["student_id"] == student_id:
            return entry["rank"], len(ranking)
    return None
