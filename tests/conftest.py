import pytest

from course_player.models import Chapter, Course, Question


@pytest.fixture
def tmp_db(tmp_path):
    """Provide a temporary SQLite database path for tests."""
    db_path = str(tmp_path / "test_course.db")
    return db_path


def make_chapter(index: int, question_count: int = 3) -> Chapter:
    questions = [
        Question(text=f"Q{index}.{n}", options=["right", "wrong", "also wrong"], correct_index=0)
        for n in range(question_count)
    ]
    return Chapter(id=index + 10, title=f"Chapter {index}", content=f"<p>Theory {index}</p>", questions=questions)


@pytest.fixture
def course():
    """Five chapters with three questions each; option 0 is always right."""
    return Course(chapters=[make_chapter(i) for i in range(5)])


@pytest.fixture
def mixed_course():
    """Covers the awkward cases: unicode, empty strings, a chapter without questions."""
    return Course(chapters=[
        Chapter(id=1, title="Введение", content="Теория <b>прокси</b> 🚀", questions=[
            Question(text="Что такое прокси?", options=["Посредник", "Сервер"], correct_index=0),
            Question(text="", options=["", ""], correct_index=1),
        ]),
        Chapter(id=-7, title="", content="", questions=[]),
        Chapter(id=3, title="Delimiters | ; , \n \x00", content="\"quoted\"", questions=[
            Question(text="No options", options=[], correct_index=0),
        ]),
    ])


class FakeStore:
    """In-memory ProgressStore that records every save."""

    def __init__(self, records=None):
        self.records = dict(records or {})
        self.saves = []

    def get_last_progress(self, user_id):
        if not self.records:
            return (-1, "")
        index = max(self.records)
        return index, self.records[index]

    def save_progress(self, user_id, chapter_index, score, status):
        self.saves.append((user_id, chapter_index, score, status))
        self.records[chapter_index] = status


@pytest.fixture
def store():
    return FakeStore()
