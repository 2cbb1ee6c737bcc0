import json
import logging
from typing import Any, Dict, List, Literal, Optional, Protocol, Sequence, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictFloat,
    StrictInt,
    TypeAdapter,
    ValidationError,
    field_validator,
)

from gradecalc.core.grades import is_valid_marks
from gradecalc.core.subjects import Subject, normalize_number


logger = logging.getLogger(__name__)

STORAGE_KEY = "grade-calculator-data"


class StorageServiceError(Exception):
    pass


class KeyValueBackend(Protocol):
    """The part of Flet's page.client_storage the store relies on."""

    def get(self, key: str) -> Any: ...

    def set(self, key: str, value: Any) -> Any: ...


class StoredSubject(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    id: str = Field(min_length=1)
    name: str = ""
    credits: Union[StrictInt, StrictFloat]
    # unset marks are written as "" by the web version of the calculator
    marks: Union[StrictInt, StrictFloat, Literal[""], None] = None

    @field_validator("credits")
    @classmethod
    def _credits_non_negative(cls, value: Union[int, float]) -> Union[int, float]:
        if not value >= 0:
            raise ValueError("credits must be non-negative")
        try:
            return normalize_number(value)
        except OverflowError as exc:
            raise ValueError("credits are too large") from exc

    @field_validator("marks")
    @classmethod
    def _marks_in_range(cls, value: Union[int, float, str, None]) -> Optional[Union[int, float]]:
        if value is None or value == "":
            return None
        if not is_valid_marks(value):
            raise ValueError("marks must be between 0 and 100")
        return value

    def to_subject(self) -> Subject:
        return Subject(id=self.id, name=self.name, credits=self.credits, marks=self.marks)


_SUBJECT_LIST = TypeAdapter(List[StoredSubject])


def encode_subjects(subjects: Sequence[Subject]) -> str:
    records: List[Dict[str, Any]] = [
        {
            "id": s.id,
            "name": s.name,
            "credits": s.credits,
            "marks": "" if s.marks is None else s.marks,
        }
        for s in subjects
    ]
    return json.dumps(records)


def decode_subjects(raw: Any) -> List[Subject]:
    """
    Accepts either the JSON text written by encode_subjects or an already
    decoded list, since client storage backends differ in what get() returns.
    """
    try:
        if isinstance(raw, (str, bytes)):
            records = _SUBJECT_LIST.validate_json(raw)
        else:
            records = _SUBJECT_LIST.validate_python(raw)
    except ValidationError as exc:
        raise StorageServiceError(f"Stored subjects are invalid ({exc.error_count()} errors)") from exc

    ids = [r.id for r in records]
    if len(set(ids)) != len(ids):
        raise StorageServiceError("Stored subjects contain duplicate ids")
    return [r.to_subject() for r in records]


class SessionStore:
    def __init__(self, backend: KeyValueBackend, key: str = STORAGE_KEY) -> None:
        self.backend = backend
        self.key = key

    @classmethod
    def from_page(cls, page: Any) -> "SessionStore":
        return cls(page.client_storage)

    def load(self) -> Optional[List[Subject]]:
        try:
            raw = self.backend.get(self.key)
        except Exception:
            logger.exception("Failed to read %r from client storage", self.key)
            return None

        if raw is None:
            return None

        try:
            subjects = decode_subjects(raw)
        except StorageServiceError as exc:
            logger.warning("Discarding stored subjects under %r: %s", self.key, exc)
            return None

        return subjects or None

    def save(self, subjects: Sequence[Subject]) -> None:
        try:
            self.backend.set(self.key, encode_subjects(subjects))
        except Exception:
            logger.exception("Failed to save %d subjects to client storage", len(subjects))
