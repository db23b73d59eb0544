"""Learner progression through a course.

Progress is keyed by chapter position in the course, never by Chapter.id.
The store only ever sees whole-chapter outcomes: a pass writes
("completed", 100), three wrong answers write ("fail", 0). Individual answers
are not persisted.
"""
import logging
from dataclasses import dataclass
from typing import Optional, Protocol

from course_player.models import STATUS_COMPLETED, STATUS_FAIL, Chapter, Course
from course_player.quiz import Effect, QuizState, answer_question

logger = logging.getLogger(__name__)

PASS_SCORE = 100
FAIL_SCORE = 0


class ProgressStore(Protocol):
    def get_last_progress(self, user_id: int) -> tuple[int, str]:
        """Return (chapter_index, status) of the highest-indexed record, or (-1, "")."""
        ...

    def save_progress(self, user_id: int, chapter_index: int, score: int, status: str) -> None:
        ...


@dataclass(frozen=True)
class ResumePoint:
    chapter_index: int
    course_complete: bool = False


def compute_resume_point(last_index: int, last_status: str, chapter_count: int) -> ResumePoint:
    """Decide where a learner continues from their last saved chapter.

    No record starts at 0. A completed chapter moves to the next one, staying
    on the last chapter once the course is finished. Any other status repeats
    the same chapter. An index that no longer fits the course starts over.
    """
    if chapter_count <= 0 or last_index < 0:
        return ResumePoint(0)
    if last_status == STATUS_COMPLETED:
        index = last_index + 1
        if index >= chapter_count:
            return ResumePoint(chapter_count - 1, course_complete=True)
        return ResumePoint(index)
    if last_index >= chapter_count:
        return ResumePoint(0)
    return ResumePoint(last_index)


class ProgressEngine:
    """Drives one learner's session over a loaded course."""

    def __init__(self, store: ProgressStore, course: Course, user_id: int):
        self.store = store
        self.course = course
        self.user_id = user_id
        self.chapter_index = 0
        self.course_complete = False
        self.quiz_state: Optional[QuizState] = None

    @property
    def current_chapter(self) -> Chapter:
        return self.course.chapters[self.chapter_index]

    @property
    def in_quiz(self) -> bool:
        return self.quiz_state is not None

    def resume(self) -> ResumePoint:
        last_index, last_status = self.store.get_last_progress(self.user_id)
        point = compute_resume_point(last_index, last_status, len(self.course.chapters))
        self.chapter_index = point.chapter_index
        self.course_complete = point.course_complete
        self.quiz_state = None
        logger.info("User %d resumes at chapter index %d", self.user_id, point.chapter_index)
        return point

    def start_quiz(self) -> bool:
        """Begin the current chapter's quiz. False if it has no questions."""
        if self.course.is_empty or not self.current_chapter.has_quiz:
            return False
        self.quiz_state = QuizState()
        return True

    def submit_answer(self, selected: int) -> Effect:
        if self.quiz_state is None:
            raise RuntimeError("No quiz in progress")
        self.quiz_state, effect = answer_question(self.quiz_state, self.current_chapter, selected)
        if effect is Effect.CHAPTER_PASSED:
            self.store.save_progress(self.user_id, self.chapter_index, PASS_SCORE, STATUS_COMPLETED)
            logger.info("User %d passed chapter index %d", self.user_id, self.chapter_index)
            self.quiz_state = None
            self._advance()
        elif effect is Effect.CHAPTER_FAILED:
            self.store.save_progress(self.user_id, self.chapter_index, FAIL_SCORE, STATUS_FAIL)
            logger.info("User %d failed chapter index %d", self.user_id, self.chapter_index)
            self.quiz_state = None
        return effect

    def skip_empty_chapter(self) -> bool:
        """Move past a chapter without questions. Nothing is saved."""
        if self.course.is_empty or self.current_chapter.has_quiz:
            return False
        self._advance()
        return True

    def _advance(self) -> None:
        point = compute_resume_point(self.chapter_index, STATUS_COMPLETED, len(self.course.chapters))
        self.chapter_index = point.chapter_index
        self.course_complete = point.course_complete
