"""Admin edits to course content."""
import logging
from dataclasses import replace
from pathlib import Path
from typing import Optional

from course_player.container import write_container
from course_player.errors import ValidationError
from course_player.models import Course

logger = logging.getLogger(__name__)


def update_chapter(course: Course, index: int, title: str, content: str) -> Course:
    """Return a copy of course with one chapter's title and content replaced."""
    if not 0 <= index < len(course.chapters):
        raise ValidationError(f"No chapter at position {index + 1}")
    title = title.strip()
    if not title:
        raise ValidationError("Chapter title cannot be empty")
    chapters = list(course.chapters)
    chapters[index] = replace(chapters[index], title=title, content=content)
    return replace(course, chapters=chapters)


def save_chapter_edit(
    course: Course, index: int, title: str, content: str, path: str | Path, key: str,
) -> Optional[Course]:
    """Apply a chapter edit and rewrite the whole container.

    Returns None if the edit is invalid or the container could not be written.
    """
    try:
        updated = update_chapter(course, index, title, content)
    except ValidationError as e:
        logger.warning("Edit rejected: %s", e)
        return None
    if not write_container(updated, path, key):
        return None
    return updated


def course_problems(course: Course) -> list[str]:
    """List questions that break the option/answer rules."""
    problems = []
    for ch_pos, chapter in enumerate(course.chapters, 1):
        for q_pos, question in enumerate(chapter.questions, 1):
            where = f"Chapter {ch_pos} question {q_pos}"
            if len(question.options) < 2:
                problems.append(f"{where}: needs at least 2 options, has {len(question.options)}")
            if not 0 <= question.correct_index < len(question.options):
                problems.append(f"{where}: correct_index {question.correct_index} out of range")
    return problems
