"""Build the course container from the source document on first run."""
import logging
from pathlib import Path

from course_player.container import container_exists, write_container
from course_player.editor import course_problems
from course_player.importer import read_course_document

logger = logging.getLogger(__name__)


def is_seeded(container_path: str | Path) -> bool:
    """Check whether the course container has already been created."""
    return container_exists(container_path)


def seed_container(source_path: str | Path, container_path: str | Path, key: str) -> bool:
    """Convert the source document into an encrypted container if none exists.

    Returns False when the source yields no chapters or the write fails.
    """
    if is_seeded(container_path):
        return True
    course = read_course_document(source_path)
    if course.is_empty:
        logger.warning("No chapters loaded from %s", source_path)
        return False
    for problem in course_problems(course):
        logger.warning("%s", problem)
    return write_container(course, container_path, key)
