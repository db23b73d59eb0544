"""Read structured course documents from disk."""
import logging
from pathlib import Path

from course_player.codec import decode_structured_document
from course_player.models import Course

logger = logging.getLogger(__name__)

YAML_SUFFIXES = (".yaml", ".yml")


def document_format(file_path: str | Path) -> str:
    """Return "yaml" for YAML files, "json" for everything else."""
    return "yaml" if Path(file_path).suffix.lower() in YAML_SUFFIXES else "json"


def read_course_document(file_path: str | Path) -> Course:
    """Load a Course from a JSON or YAML chapter list.

    Returns an empty Course when the file is missing or unparsable.
    """
    path = Path(file_path)
    try:
        # utf-8-sig tolerates a byte order mark from Windows editors
        text = path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("Cannot read course document %s: %s", path, e)
        return Course()
    course = decode_structured_document(text, fmt=document_format(path))
    logger.info("Read %d chapters from %s", len(course.chapters), path)
    return course
