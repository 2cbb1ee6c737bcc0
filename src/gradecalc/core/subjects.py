from __future__ import annotations

import math
import re
import uuid
from dataclasses import dataclass, replace
from typing import Union

from gradecalc.core.grades import Grade, classify, is_valid_marks

Number = Union[int, float]

DEFAULT_CREDITS = 4
MAX_EXACT_INT = 2**53

_DECIMAL = re.compile(r"[+-]?([0-9]+\.?[0-9]*|\.[0-9]+)([eE][+-]?[0-9]+)?")


@dataclass(frozen=True)
class Subject:
    id: str
    name: str = ""
    credits: Number = DEFAULT_CREDITS
    marks: Number | None = None

    @property
    def has_marks(self) -> bool:
        return self.marks is not None

    @property
    def grade(self) -> Grade | None:
        if self.marks is None:
            return None
        return classify(self.marks)


def new_subject_id() -> str:
    return str(uuid.uuid4())


def new_subject() -> Subject:
    return Subject(id=new_subject_id())


def normalize_number(value: Number) -> Number:
    """
    Integral values below 2**53 come back as int so "4" stays 4 rather than
    4.0. Anything larger stays a float, which keeps mixed int/float sums from
    overflowing. Raises OverflowError for ints too large for a float.
    """
    if isinstance(value, int):
        return value if abs(value) < MAX_EXACT_INT else float(value)
    if value.is_integer() and abs(value) < MAX_EXACT_INT:
        return int(value)
    return value


def parse_number(raw: str) -> Number | None:
    """
    Parse user text into a finite number.
    Only plain decimal notation is accepted: no "1_000", no non-ASCII digits,
    no "nan" or "inf". Returns None for anything else.
    """
    text = raw.strip()
    if not _DECIMAL.fullmatch(text):
        return None
    value = float(text)
    if not math.isfinite(value):
        return None
    return normalize_number(value)


def edit_name(subject: Subject, raw: str) -> Subject:
    return replace(subject, name=raw)


def edit_credits(subject: Subject, raw: str) -> Subject:
    value = parse_number(raw)
    if value is None or value < 0:
        return subject
    return replace(subject, credits=value)


def edit_marks(subject: Subject, raw: str) -> Subject:
    if not raw.strip():
        return replace(subject, marks=None)

    value = parse_number(raw)
    if value is None or not is_valid_marks(value):
        return subject
    return replace(subject, marks=value)


def clear_subject(subject: Subject) -> Subject:
    return replace(subject, name="", marks=None)
