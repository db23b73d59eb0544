"""Data classes for course content and learner progress."""
from dataclasses import dataclass, field
from typing import Optional

STATUS_NEW = "new"
STATUS_COMPLETED = "completed"
STATUS_FAIL = "fail"
PROGRESS_STATUSES = (STATUS_NEW, STATUS_COMPLETED, STATUS_FAIL)


@dataclass
class Question:
    text: str
    options: list[str] = field(default_factory=list)
    correct_index: int = 0

    def is_correct(self, selected: int) -> bool:
        return selected == self.correct_index


@dataclass
class Chapter:
    id: int
    title: str
    content: str = ""
    questions: list[Question] = field(default_factory=list)

    @property
    def has_quiz(self) -> bool:
        return bool(self.questions)


@dataclass
class Course:
    # Position in this list is the progression key; Chapter.id is display-only.
    chapters: list[Chapter] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.chapters

    @property
    def last_index(self) -> int:
        return len(self.chapters) - 1


@dataclass
class ProgressRecord:
    user_id: int
    chapter_index: int
    status: str = STATUS_NEW
    score: int = 0
    updated_at: Optional[str] = None
