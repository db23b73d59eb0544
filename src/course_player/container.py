"""Encrypted course container files.

Layout (big-endian):

    magic    u32   MAGIC_NUMBER ("CORS")
    length   u32   size of the encrypted payload
    payload        xor_transform(encode_binary(course), key)
"""
import logging
import os
import struct
import tempfile
from pathlib import Path

from course_player.cipher import xor_transform
from course_player.codec import decode_binary, encode_binary
from course_player.errors import CourseError, FormatError, IOFailure
from course_player.models import Course

logger = logging.getLogger(__name__)

MAGIC_NUMBER = 0x434F5253
HEADER = struct.Struct(">II")


def pack_container(course: Course, key: str) -> bytes:
    payload = xor_transform(encode_binary(course), key)
    return HEADER.pack(MAGIC_NUMBER, len(payload)) + payload


def unpack_container(data: bytes, key: str) -> Course:
    """Decode container bytes. Raises FormatError on any problem."""
    if len(data) < HEADER.size:
        raise FormatError("File is shorter than the container header")
    magic, length = HEADER.unpack_from(data)
    if magic != MAGIC_NUMBER:
        raise FormatError(f"Magic number mismatch: {magic:#010x}")
    payload = data[HEADER.size:HEADER.size + length]
    if len(payload) != length:
        raise FormatError(f"Payload truncated: expected {length} bytes, got {len(payload)}")
    return decode_binary(xor_transform(payload, key))


def _write_atomic(path: Path, data: bytes) -> None:
    """Write data next to path and swap it into place."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    except OSError as e:
        raise IOFailure(f"Cannot write {path}: {e}") from e
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
        os.replace(tmp_name, path)
    except OSError as e:
        Path(tmp_name).unlink(missing_ok=True)
        raise IOFailure(f"Cannot write {path}: {e}") from e


def write_container(course: Course, path: str | Path, key: str) -> bool:
    """Encrypt and write a course, replacing any existing file.

    Returns False if the course cannot be encoded or the file could not be
    written; an existing container is left as it was.
    """
    path = Path(path)
    try:
        _write_atomic(path, pack_container(course, key))
    except CourseError as e:
        logger.warning("%s", e)
        return False
    logger.info("Wrote %d chapters to %s", len(course.chapters), path)
    return True


def read_container(path: str | Path, key: str) -> Course:
    """Read and decrypt a course container.

    Returns an empty Course if the file is missing, is not a container, or
    does not decode with this key. A wrong key cannot be told apart from a
    corrupt file.
    """
    path = Path(path)
    try:
        try:
            data = path.read_bytes()
        except OSError as e:
            raise IOFailure(f"Cannot read {path}: {e}") from e
        course = unpack_container(data, key)
    except CourseError as e:
        logger.warning("Failed to load course from %s: %s", path, e)
        return Course()
    logger.info("Loaded %d chapters from %s", len(course.chapters), path)
    return course


def container_exists(path: str | Path) -> bool:
    return Path(path).is_file()
