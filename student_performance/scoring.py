from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import List, Mapping, Optional, Sequence, Tuple, TypeVar

import numpy as np

from student_performance.subjects import Tier, tier_for_grade

T = TypeVar("T")

# ------------------------
# Core logic
# ------------------------

def round_2dp_half_up(x: float) -> float:
    return float(Decimal(str(x)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def weighted_average(marks: Mapping[str, float], weights: Mapping[str, float]) -> float:
    """
    marks:   subject -> mark
    weights: subject -> weight fraction, same keys as marks
    returns: sum(mark * weight) / sum(weight)
    """
    subjects = list(marks.keys())
    m = np.array([marks[s] for s in subjects], dtype=float)
    w = np.array([weights[s] for s in subjects], dtype=float)
    total_weight = float(w.sum())
    if total_weight == 0:
        return float("nan")
    return float(np.dot(m, w) / total_weight)


def format_mark(mark: float) -> str:
    """Mark as entered: whole numbers without ".0", fractions in full."""
    if mark.is_integer():
        return str(int(mark))
    return repr(mark)


# (threshold, label), highest first
GRADE_BANDS: List[Tuple[float, str]] = [
    (90, "A+"),
    (80, "A"),
    (70, "B"),
    (60, "C"),
    (50, "D"),
]
FAIL_GRADE = "F"

RANK_BANDS: List[Tuple[float, Tuple[str, str]]] = [
    (90, ("Top 5%", "Excellent")),
    (80, ("Top 20%", "Very Good")),
    (70, ("Top 50%", "Good")),
    (60, ("Top 75%", "Average")),
]
BOTTOM_RANK = ("Below 75%", "Needs Improvement")


def first_band(value: float, bands: Sequence[Tuple[float, T]], default: T) -> T:
    """Label of the highest threshold that value meets (inclusive), else default."""
    for threshold, label in sorted(bands, key=lambda b: b[0], reverse=True):
        if value >= threshold:
            return label
    return default


def letter_grade(average: float) -> str:
    return first_band(average, GRADE_BANDS, FAIL_GRADE)


def predict_performance(average: float, attendance: float) -> Tuple[str, str]:
    """
    Scale the average by the attendance fraction, then band it.
    returns: (rank, performance)
    """
    adjusted = average * (attendance / 100)
    return first_band(adjusted, RANK_BANDS, BOTTOM_RANK)


@dataclass(frozen=True)
class Report:
    grade_level: int
    tier: Tier
    weighted_average: float
    letter_grade: str
    attendance: float
    rank: str
    performance: str
    breakdown: Tuple[Tuple[str, float], ...]

    def breakdown_lines(self) -> List[str]:
        return [f"{subject}: {format_mark(mark)}" for subject, mark in self.breakdown]


def score_student(
    grade_level: int,
    marks: Mapping[str, float],
    attendance: float,
    tier: Optional[Tier] = None,
) -> Report:
    """
    Build the performance report for one student.

    Inputs are assumed to be validated already: grade_level in [1, 12],
    attendance and every mark in [0, 100], and marks keyed by exactly the
    subjects of the tier. No range checks happen here.

    The letter grade and rank come from the unrounded average; rounding to two
    decimals only applies to the numbers stored on the report.
    """
    if tier is None:
        tier = tier_for_grade(grade_level)

    ordered = tuple((subject, float(marks[subject])) for subject in tier.subjects)
    average = weighted_average(dict(ordered), tier.weights)
    rank, performance = predict_performance(average, attendance)

    return Report(
        grade_level=grade_level,
        tier=tier,
        weighted_average=round_2dp_half_up(average),
        letter_grade=letter_grade(average),
        attendance=round_2dp_half_up(attendance),
        rank=rank,
        performance=performance,
        breakdown=ordered,
    )
