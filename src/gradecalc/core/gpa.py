from __future__ import annotations

from dataclasses import dataclass
from fractions import Fraction
from typing import Iterable

from gradecalc.core.grades import classify
from gradecalc.core.subjects import Number, Subject


@dataclass(frozen=True)
class CourseResult:
    credits: Number
    grade_point: int


@dataclass(frozen=True)
class GpaSummary:
    sgpa: float
    percentage: float
    total_credits: Number


def _weighted_totals(courses: Iterable[CourseResult]) -> tuple[Fraction, Fraction]:
    # exact sums, so very large credit values cannot overflow a float
    weighted = Fraction(0)
    total_credits = Fraction(0)
    for c in courses:
        weighted += Fraction(c.credits) * c.grade_point
        total_credits += Fraction(c.credits)
    return weighted, total_credits


def calc_sgpa(courses: Iterable[CourseResult]) -> float:
    """Unrounded credit-weighted mean of grade points; 0 when no credits count."""
    weighted, total_credits = _weighted_totals(courses)
    if total_credits <= 0:
        return 0.0
    return float(weighted / total_credits)


def course_results(subjects: Iterable[Subject]) -> list[CourseResult]:
    """Subjects without marks are left out entirely, credits included."""
    return [
        CourseResult(credits=s.credits, grade_point=classify(s.marks).points)
        for s in subjects
        if s.marks is not None
    ]


def _total_credits(courses: Iterable[CourseResult]) -> Number:
    total: Number = 0
    for c in courses:
        total += c.credits
    return total


def aggregate(subjects: Iterable[Subject]) -> GpaSummary:
    courses = course_results(subjects)
    sgpa = calc_sgpa(courses)
    return GpaSummary(
        sgpa=round(sgpa, 2),
        percentage=round(sgpa * 10, 2),
        total_credits=_total_credits(courses),
    )
