# /app/services/grading_helpers/class_statistics.py

from typing import Dict, List

import pandas as pd

from .aggregation import FAILING_GRADE, GRADE_BOUNDARIES

_EMPTY_STATISTICS = {"classAverage": 0, "medianScore": 0, "gradeDistribution": {}}


def calculate_class_statistics(student_averages: List[Dict]) -> Dict:
    """
    Class-level aggregates over per-student averages: mean, median and the
    number of students per letter grade.
    """
    df = pd.DataFrame(student_averages)

    if df.empty or "average_score" not in df.columns:
        return dict(_EMPTY_STATISTICS)

    scores = pd.to_numeric(df["average_score"], errors="coerce").dropna()
    if scores.empty:
        return dict(_EMPTY_STATISTICS)

    # Bins mirror letter_grade(): [0, 60) F, [60, 70) D, ... [90, inf) A.
    lower_bounds = sorted(bound for bound, _ in GRADE_BOUNDARIES)
    bins = [0] + lower_bounds + [float("inf")]
    labels = [FAILING_GRADE] + [letter for _, letter in sorted(GRADE_BOUNDARIES)]
    counts = pd.cut(scores, bins=bins, labels=labels, right=False).value_counts()

    letters = [letter for _, letter in GRADE_BOUNDARIES] + [FAILING_GRADE]
    return {
        "classAverage": round(float(scores.mean()), 2),
        "medianScore": round(float(scores.median()), 2),
        "gradeDistribution": {letter: int(counts.get(letter, 0)) for letter in letters},
    }
