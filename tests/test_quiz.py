# tests/test_quiz.py
import pytest

from course_player.models import Chapter
from course_player.quiz import MAX_ERRORS, Effect, QuizState, answer_question

from conftest import make_chapter


def test_correct_answer_moves_to_next_question():
    chapter = make_chapter(0)
    state, effect = answer_question(QuizState(), chapter, 0)
    assert state == QuizState(question_index=1, error_count=0)
    assert effect is Effect.CONTINUE


def test_last_correct_answer_passes_chapter():
    chapter = make_chapter(0, question_count=3)
    state = QuizState()
    effects = []
    for _ in range(3):
        state, effect = answer_question(state, chapter, 0)
        effects.append(effect)
    assert effects == [Effect.CONTINUE, Effect.CONTINUE, Effect.CHAPTER_PASSED]
    assert state.question_index == 3


def test_wrong_answer_stays_on_question():
    chapter = make_chapter(0)
    state, effect = answer_question(QuizState(question_index=1), chapter, 2)
    assert state == QuizState(question_index=1, error_count=1)
    assert effect is Effect.CLEAR_SELECTION


def test_third_wrong_answer_fails_and_resets():
    chapter = make_chapter(0)
    state = QuizState()
    state, first = answer_question(state, chapter, 1)
    state, second = answer_question(state, chapter, 1)
    state, third = answer_question(state, chapter, 2)
    assert [first, second, third] == [Effect.CLEAR_SELECTION, Effect.CLEAR_SELECTION, Effect.CHAPTER_FAILED]
    assert state == QuizState()


def test_errors_carry_across_questions():
    chapter = make_chapter(0)
    state = QuizState()
    state, _ = answer_question(state, chapter, 1)
    state, _ = answer_question(state, chapter, 0)
    state, _ = answer_question(state, chapter, 1)
    assert state == QuizState(question_index=1, error_count=2)
    state, effect = answer_question(state, chapter, 1)
    assert effect is Effect.CHAPTER_FAILED
    assert MAX_ERRORS == 3


def test_state_is_immutable():
    state = QuizState()
    answer_question(state, make_chapter(0), 0)
    assert state == QuizState()
    with pytest.raises(AttributeError):
        state.error_count = 2


def test_chapter_without_questions_rejected():
    with pytest.raises(ValueError):
        answer_question(QuizState(), Chapter(id=1, title="Empty"), 0)


def test_answering_after_pass_rejected():
    chapter = make_chapter(0, question_count=1)
    state, effect = answer_question(QuizState(), chapter, 0)
    assert effect is Effect.CHAPTER_PASSED
    with pytest.raises(ValueError):
        answer_question(state, chapter, 0)
