"""Chapter quiz state machine: three wrong answers fail the chapter."""
from dataclasses import dataclass
from enum import Enum

from course_player.models import Chapter

MAX_ERRORS = 3


class Effect(Enum):
    CONTINUE = "continue"
    CHAPTER_PASSED = "chapter_passed"
    CHAPTER_FAILED = "chapter_failed"
    CLEAR_SELECTION = "clear_selection"


@dataclass(frozen=True)
class QuizState:
    question_index: int = 0
    error_count: int = 0


def answer_question(state: QuizState, chapter: Chapter, selected: int) -> tuple[QuizState, Effect]:
    """Apply one answer to the current question.

    A correct answer moves to the next question, or passes the chapter after
    the last one. A wrong answer stays on the question; errors carry over
    between questions and the third one fails the chapter with a fresh state.
    """
    total = len(chapter.questions)
    if not 0 <= state.question_index < total:
        raise ValueError(f"No question {state.question_index} in a chapter with {total} questions")
    question = chapter.questions[state.question_index]
    if question.is_correct(selected):
        next_state = QuizState(state.question_index + 1, state.error_count)
        if next_state.question_index == total:
            return next_state, Effect.CHAPTER_PASSED
        return next_state, Effect.CONTINUE
    errors = state.error_count + 1
    if errors >= MAX_ERRORS:
        return QuizState(), Effect.CHAPTER_FAILED
    return QuizState(state.question_index, errors), Effect.CLEAR_SELECTION
