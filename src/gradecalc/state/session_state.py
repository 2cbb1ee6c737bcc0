from dataclasses import dataclass, field
from typing import Callable, List, Optional

from gradecalc.core import subjects as policy
from gradecalc.core.gpa import GpaSummary, aggregate
from gradecalc.core.subjects import Subject, new_subject
from gradecalc.services.storage_service import SessionStore


Listener = Callable[["SessionState"], None]


@dataclass
class SessionState:
    """
    The one in-memory subject list. Every accepted mutation is saved to the
    store and then pushed to listeners; rejected edits and no-op actions are
    not.
    """

    store: Optional[SessionStore] = None
    subjects: List[Subject] = field(default_factory=lambda: [new_subject()])
    _listeners: List[Listener] = field(default_factory=list, init=False, repr=False)

    def load(self) -> None:
        stored = self.store.load() if self.store is not None else None
        self.subjects = list(stored) if stored else [new_subject()]
        self._commit()

    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    @property
    def is_pristine(self) -> bool:
        """A lone subject with no name and no marks; nothing to reset."""
        if len(self.subjects) != 1:
            return False
        only = self.subjects[0]
        return not only.name and only.marks is None

    def summary(self) -> GpaSummary:
        return aggregate(self.subjects)

    def index_of(self, subject_id: str) -> int:
        for index, subject in enumerate(self.subjects):
            if subject.id == subject_id:
                return index
        return -1

    def get(self, subject_id: str) -> Optional[Subject]:
        index = self.index_of(subject_id)
        return self.subjects[index] if index >= 0 else None

    def add_subject(self) -> Subject:
        subject = new_subject()
        self.subjects.append(subject)
        self._commit()
        return subject

    def remove_subject(self, subject_id: str) -> bool:
        if len(self.subjects) <= 1:
            return False
        index = self.index_of(subject_id)
        if index < 0:
            return False
        del self.subjects[index]
        self._commit()
        return True

    def clear_subject(self, subject_id: str) -> bool:
        return self._apply(subject_id, policy.clear_subject)

    def reset(self) -> None:
        self.subjects = [new_subject()]
        self._commit()

    def edit_name(self, subject_id: str, raw: str) -> bool:
        return self._apply(subject_id, lambda s: policy.edit_name(s, raw))

    def edit_credits(self, subject_id: str, raw: str) -> bool:
        return self._apply(subject_id, lambda s: policy.edit_credits(s, raw))

    def edit_marks(self, subject_id: str, raw: str) -> bool:
        return self._apply(subject_id, lambda s: policy.edit_marks(s, raw))

    def next_focus(self, index: int) -> int:
        """
        Row to focus after Enter on row `index`. Enter on the last row
        appends a fresh subject and moves to it.
        """
        if index >= len(self.subjects) - 1:
            self.add_subject()
            return len(self.subjects) - 1
        return index + 1

    def _apply(self, subject_id: str, edit: Callable[[Subject], Subject]) -> bool:
        index = self.index_of(subject_id)
        if index < 0:
            return False
        current = self.subjects[index]
        updated = edit(current)
        if updated == current:
            return False
        self.subjects[index] = updated
        self._commit()
        return True

    def _commit(self) -> None:
        if self.store is not None:
            self.store.save(self.subjects)
        for listener in list(self._listeners):
            listener(self)
