"""Runtime settings read from the environment and an optional .env file."""
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

DEFAULT_HOME = Path.home() / ".course_player"
DEFAULT_DB_PATH = str(DEFAULT_HOME / "course.db")
DEFAULT_CONTAINER_PATH = str(DEFAULT_HOME / "course.bin")
DEFAULT_SOURCE_PATH = "data/course_source.json"
DEFAULT_KEY = "SECRET_KEY_123"


@dataclass(frozen=True)
class Settings:
    db_path: str = DEFAULT_DB_PATH
    container_path: str = DEFAULT_CONTAINER_PATH
    source_path: str = DEFAULT_SOURCE_PATH
    key: str = DEFAULT_KEY
    log_level: str = "WARNING"


def load_settings(env_file: str | None = None) -> Settings:
    """Build Settings from COURSE_PLAYER_* variables.

    Variables already set in the environment win over the .env file.
    """
    load_dotenv(env_file)
    home = Path(os.environ.get("COURSE_PLAYER_HOME", str(DEFAULT_HOME))).expanduser()
    return Settings(
        db_path=os.environ.get("COURSE_PLAYER_DB", str(home / "course.db")),
        container_path=os.environ.get("COURSE_PLAYER_CONTAINER", str(home / "course.bin")),
        source_path=os.environ.get("COURSE_PLAYER_SOURCE", DEFAULT_SOURCE_PATH),
        key=os.environ.get("COURSE_PLAYER_KEY", DEFAULT_KEY),
        log_level=os.environ.get("COURSE_PLAYER_LOG_LEVEL", "WARNING").upper(),
    )
