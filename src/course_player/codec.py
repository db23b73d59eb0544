"""Course content conversions: structured documents and the binary form.

The binary form is big-endian throughout:

    version   u8      FORMAT_VERSION
    chapters  u32 count, then per chapter:
        id        i32
        title     str
        content   str
        questions u32 count, then per question:
            text           str
            options        u32 count, then str each
            correct_index  i32

where ``str`` is a u32 UTF-8 byte length followed by the bytes.
"""
import json
import logging
import struct
from typing import Any

from course_player.errors import FormatError
from course_player.models import Chapter, Course, Question

logger = logging.getLogger(__name__)

FORMAT_VERSION = 1

_U8 = struct.Struct(">B")
_U32 = struct.Struct(">I")
_I32 = struct.Struct(">i")
_I32_MIN = -(2 ** 31)
_I32_MAX = 2 ** 31 - 1


# --- structured documents ---


def _as_int(value: Any) -> int:
    if isinstance(value, bool):
        return 0
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if isinstance(value, int) and _I32_MIN <= value <= _I32_MAX:
        return value
    return 0


def _as_str(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _as_list(value: Any) -> list:
    return value if isinstance(value, list) else []


def _question_from_dict(raw: dict) -> Question:
    return Question(
        text=_as_str(raw.get("q_text")),
        options=[_as_str(option) for option in _as_list(raw.get("options"))],
        correct_index=_as_int(raw.get("correct_index")),
    )


def _chapter_from_dict(raw: dict) -> Chapter:
    questions = [
        _question_from_dict(item)
        for item in _as_list(raw.get("questions"))
        if isinstance(item, dict)
    ]
    return Chapter(
        id=_as_int(raw.get("id")),
        title=_as_str(raw.get("title")),
        content=_as_str(raw.get("content")),
        questions=questions,
    )


def course_from_document(data: Any) -> Course:
    """Build a Course from a parsed document: a list of chapter objects.

    Parsing is lenient. Entries that are not objects are skipped and missing
    or mistyped fields fall back to 0, "" or []. Anything other than a list at
    the top level gives an empty Course.
    """
    if not isinstance(data, list):
        logger.warning("Course document is not an array (got %s)", type(data).__name__)
        return Course()
    chapters = [_chapter_from_dict(item) for item in data if isinstance(item, dict)]
    skipped = len(data) - len(chapters)
    if skipped:
        logger.warning("Skipped %d non-object chapter entries", skipped)
    return Course(chapters=chapters)


def decode_structured_document(text: str | bytes, fmt: str = "json") -> Course:
    """Parse JSON (or YAML when fmt is "yaml") text into a Course.

    Returns an empty Course if the text cannot be parsed.
    """
    if fmt == "yaml":
        import yaml
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as e:
            logger.warning("YAML parse error: %s", e)
            return Course()
    else:
        try:
            data = json.loads(text)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.warning("JSON parse error: %s", e)
            return Course()
    return course_from_document(data)


# --- binary form ---


def _pack_i32(out: bytearray, value: int) -> None:
    try:
        out += _I32.pack(value)
    except struct.error as e:
        raise FormatError(f"Cannot store {value!r} as a 32-bit integer") from e


def _pack_str(out: bytearray, value: str) -> None:
    try:
        raw = value.encode("utf-8")
    except UnicodeEncodeError as e:
        raise FormatError(f"Text is not valid UTF-8: {e}") from e
    out += _U32.pack(len(raw))
    out += raw


def _pack_question(out: bytearray, question: Question) -> None:
    _pack_str(out, question.text)
    out += _U32.pack(len(question.options))
    for option in question.options:
        _pack_str(out, option)
    _pack_i32(out, question.correct_index)


def _pack_chapter(out: bytearray, chapter: Chapter) -> None:
    _pack_i32(out, chapter.id)
    _pack_str(out, chapter.title)
    _pack_str(out, chapter.content)
    out += _U32.pack(len(chapter.questions))
    for question in chapter.questions:
        _pack_question(out, question)


def encode_binary(course: Course) -> bytes:
    """Serialize a Course to the versioned binary form.

    Raises FormatError for text that cannot be UTF-8 encoded or an id or
    correct_index outside the signed 32-bit range.
    """
    out = bytearray(_U8.pack(FORMAT_VERSION))
    out += _U32.pack(len(course.chapters))
    for chapter in course.chapters:
        _pack_chapter(out, chapter)
    return bytes(out)


class _Reader:
    """Bounds-checked cursor over a binary payload."""

    def __init__(self, payload: bytes):
        self.payload = payload
        self.offset = 0

    @property
    def remaining(self) -> int:
        return len(self.payload) - self.offset

    def _unpack(self, fmt: struct.Struct) -> int:
        if self.remaining < fmt.size:
            raise FormatError(f"Truncated payload at offset {self.offset}")
        (value,) = fmt.unpack_from(self.payload, self.offset)
        self.offset += fmt.size
        return value

    def u8(self) -> int:
        return self._unpack(_U8)

    def i32(self) -> int:
        return self._unpack(_I32)

    def count(self) -> int:
        value = self._unpack(_U32)
        # every element takes at least one byte
        if value > self.remaining:
            raise FormatError(f"Sequence length {value} exceeds remaining payload")
        return value

    def string(self) -> str:
        size = self._unpack(_U32)
        if size > self.remaining:
            raise FormatError(f"String length {size} exceeds remaining payload")
        raw = self.payload[self.offset:self.offset + size]
        self.offset += size
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise FormatError(f"Invalid UTF-8 in string: {e}") from e


def _read_question(reader: _Reader) -> Question:
    text = reader.string()
    options = [reader.string() for _ in range(reader.count())]
    return Question(text=text, options=options, correct_index=reader.i32())


def _read_chapter(reader: _Reader) -> Chapter:
    chapter_id = reader.i32()
    title = reader.string()
    content = reader.string()
    questions = [_read_question(reader) for _ in range(reader.count())]
    return Chapter(id=chapter_id, title=title, content=content, questions=questions)


def decode_binary(payload: bytes) -> Course:
    """Deserialize the binary form produced by encode_binary.

    Raises FormatError for an unknown version, truncated data, invalid text or
    trailing bytes.
    """
    reader = _Reader(payload)
    version = reader.u8()
    if version != FORMAT_VERSION:
        raise FormatError(f"Unsupported format version {version}")
    chapters = [_read_chapter(reader) for _ in range(reader.count())]
    if reader.remaining:
        raise FormatError(f"{reader.remaining} trailing bytes after course data")
    return Course(chapters=chapters)
