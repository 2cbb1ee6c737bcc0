from dataclasses import dataclass
from typing import List, Tuple


@dataclass(frozen=True)
class Grade:
    letter: str
    points: int


# (lower bound inclusive, letter, points), highest band first
GRADE_BANDS: List[Tuple[int, str, int]] = [
    (90, "O", 10),
    (80, "A+", 9),
    (70, "A", 8),
    (60, "B+", 7),
    (50, "B", 6),
    (40, "C", 5),
    (35, "P", 4),
    (0, "F", 0),
]

MIN_MARKS = 0
MAX_MARKS = 100


def is_valid_marks(marks: float) -> bool:
    return MIN_MARKS <= marks <= MAX_MARKS


def classify(marks: float) -> Grade:
    """
    Map marks out of 100 to a letter grade and its grade point.
    Bands are matched on their lower bound, so 89.5 is still A+.
    """
    if not is_valid_marks(marks):
        raise ValueError(f"Marks must be between {MIN_MARKS} and {MAX_MARKS}, got {marks}")

    # the last band starts at 0, so a valid mark always matches one
    return next(Grade(letter, points) for low, letter, points in GRADE_BANDS if marks >= low)
