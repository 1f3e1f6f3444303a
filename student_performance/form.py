import logging
from dataclasses import dataclass, fields
from typing import Dict, Optional

import numpy as np

from student_performance.parsing import parse_number
from student_performance.scoring import Report, score_student
from student_performance.subjects import Tier, tier_for_grade

logger = logging.getLogger(__name__)

# ------------------------
# Validation errors
# ------------------------

class FormValidationError(ValueError):
    category = ""
    message = ""

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.message)

    @property
    def text(self) -> str:
        return str(self)


class InvalidGrade(FormValidationError):
    category = "grade"
    message = "Please enter a valid grade between 1 and 12."


class InvalidAttendance(FormValidationError):
    category = "attendance"
    message = "Please enter a valid attendance percentage."


class InvalidMarks(FormValidationError):
    category = "marks"
    message = "Please enter valid marks between 0 and 100 for all subjects."


# ------------------------
# Form state
# ------------------------

@dataclass
class FormInput:
    grade: Optional[str] = None
    maths: Optional[str] = None
    biology: Optional[str] = None
    chemistry: Optional[str] = None
    physics: Optional[str] = None
    history: Optional[str] = None
    geography: Optional[str] = None
    economics: Optional[str] = None
    social: Optional[str] = None
    science: Optional[str] = None
    english: Optional[str] = None
    tamil: Optional[str] = None
    attendance: Optional[str] = None

    @classmethod
    def field_names(cls):
        return tuple(f.name for f in fields(cls))

    def set(self, name: str, value: Optional[str]) -> None:
        if name not in self.field_names():
            raise KeyError(f"Unknown form field: {name}")
        setattr(self, name, value)

    def get(self, name: str) -> Optional[str]:
        if name not in self.field_names():
            raise KeyError(f"Unknown form field: {name}")
        return getattr(self, name)


def parse_grade(raw: Optional[str]) -> int:
    """
    Whole-number grade in [1, 12].
    "9" and "9.0" are accepted; "9.5", blanks and text are not.
    """
    value = parse_number(raw)
    if np.isnan(value) or not value.is_integer():
        raise InvalidGrade()
    grade = int(value)
    if grade < 1 or grade > 12:
        raise InvalidGrade()
    return grade


def parse_attendance(raw: Optional[str]) -> float:
    value = parse_number(raw)
    if np.isnan(value) or value < 0 or value > 100:
        raise InvalidAttendance()
    return value


def parse_marks(form: FormInput, tier: Tier) -> Dict[str, float]:
    """
    Marks for every subject of the tier, keyed by subject name in tier order.
    One bad mark fails the lot; the error doesn't say which subject it was.
    """
    marks = {subject: parse_number(form.get(field)) for subject, field in zip(tier.subjects, tier.fields)}
    if any(np.isnan(m) or m < 0 or m > 100 for m in marks.values()):
        raise InvalidMarks()
    return marks


# ------------------------
# Controller
# ------------------------

class FormController:
    """
    Holds the raw form values, the last report and the current error.

    submit() validates in order grade -> attendance -> marks and stops at the
    first failing category. A failed submission leaves the previous report in
    place; a successful one replaces it.
    """

    def __init__(self) -> None:
        self.input = FormInput()
        self.report: Optional[Report] = None
        self.errors: Dict[str, str] = {}
        self.in_progress = False

    def update(self, name: str, value: Optional[str]) -> None:
        self.input.set(name, value)

    def submit(self) -> Optional[Report]:
        self.in_progress = True
        self.errors = {}
        try:
            grade = parse_grade(self.input.grade)
            attendance = parse_attendance(self.input.attendance)
            tier = tier_for_grade(grade)
            marks = parse_marks(self.input, tier)
            report = score_student(grade, marks, attendance, tier=tier)
        except FormValidationError as exc:
            logger.info("Submission rejected (%s)", exc.category)
            self.errors = {exc.category: exc.text}
            return None
        finally:
            self.in_progress = False

        logger.info(
            "Report generated: grade=%d tier=%s average=%.2f letter=%s rank=%s",
            report.grade_level,
            report.tier.name,
            report.weighted_average,
            report.letter_grade,
            report.rank,
        )
        self.report = report
        return report

    @property
    def error_message(self) -> Optional[str]:
        for category in ("grade", "attendance", "marks"):
            if category in self.errors:
                return self.errors[category]
        return None
