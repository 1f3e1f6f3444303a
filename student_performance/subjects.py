from enum import Enum
from typing import Dict, Optional, Tuple

import numpy as np

from student_performance.parsing import parse_number

# ------------------------
# Subject tiers
# ------------------------

HIGH_GRADE_CUTOFF = 8


class Tier(Enum):
    """
    Subject/weight set for a grade level.

    Each member carries its ordered (subject, weight) pairs; the order is the
    order subjects are shown on the form and in the report.
    """

    HIGH = (
        ("Maths", 0.15),
        ("Biology", 0.10),
        ("Chemistry", 0.10),
        ("Physics", 0.10),
        ("History", 0.10),
        ("Geography", 0.10),
        ("Economics", 0.10),
        ("English", 0.15),
        ("Tamil", 0.10),
    )
    LOW = (
        ("Maths", 0.25),
        ("Social", 0.25),
        ("Science", 0.25),
        ("English", 0.15),
        ("Tamil", 0.10),
    )

    @property
    def subjects(self) -> Tuple[str, ...]:
        return tuple(name for name, _ in self.value)

    @property
    def weights(self) -> Dict[str, float]:
        return dict(self.value)

    @property
    def fields(self) -> Tuple[str, ...]:
        return tuple(field_name(name) for name in self.subjects)


# Every subject slot on the form, in display order
ALL_SUBJECTS = (
    "Maths",
    "Biology",
    "Chemistry",
    "Physics",
    "History",
    "Geography",
    "Economics",
    "Social",
    "Science",
    "English",
    "Tamil",
)


def field_name(subject: str) -> str:
    return subject.strip().lower()


SUBJECT_FIELDS = tuple(field_name(s) for s in ALL_SUBJECTS)


def tier_for_grade(grade: int) -> Tier:
    """Grades 9-12 take the nine-subject set; 8 and below take the five-subject set."""
    return Tier.HIGH if grade > HIGH_GRADE_CUTOFF else Tier.LOW


def tier_for_display(raw_grade: Optional[str]) -> Optional[Tier]:
    """
    Which tier's fields to show while the grade is still being typed.

    A blank grade counts as low. Text that isn't a number shows neither
    tier-specific group. Fractions are compared as-is (8.5 shows the high set),
    since this only drives visibility and never validation.
    """
    if raw_grade is None or not raw_grade.strip():
        return Tier.LOW
    value = parse_number(raw_grade)
    if np.isnan(value):
        return None
    return Tier.HIGH if value > HIGH_GRADE_CUTOFF else Tier.LOW


def visible_fields(raw_grade: Optional[str]) -> Tuple[str, ...]:
    tier = tier_for_display(raw_grade)
    shared = set(Tier.HIGH.fields) & set(Tier.LOW.fields)
    shown = set(shared) if tier is None else set(tier.fields)
    return tuple(f for f in SUBJECT_FIELDS if f in shown)
