"""Error taxonomy for course loading, saving and editing."""


class CourseError(Exception):
    """Base class for course player errors."""


class IOFailure(CourseError):
    """A course file could not be read or written."""


class FormatError(CourseError):
    """Course data is not in the expected format."""


class ValidationError(CourseError):
    """User-supplied values were rejected."""
