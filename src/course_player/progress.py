"""Per-user chapter progress records."""
import logging
from datetime import datetime

from course_player.db import get_connection
from course_player.models import PROGRESS_STATUSES, ProgressRecord

logger = logging.getLogger(__name__)

NO_PROGRESS = (-1, "")


def get_last_progress(db_path: str, user_id: int) -> tuple[int, str]:
    """Return (chapter_index, status) for the user's highest chapter index.

    Returns NO_PROGRESS when the user has no records.
    """
    conn = get_connection(db_path)
    row = conn.execute(
        """SELECT chapter_index, status FROM study_progress
        WHERE user_id = ? ORDER BY chapter_index DESC LIMIT 1""",
        (user_id,),
    ).fetchone()
    conn.close()
    if row is None:
        return NO_PROGRESS
    return row["chapter_index"], row["status"]


def save_progress(db_path: str, user_id: int, chapter_index: int, score: int, status: str) -> None:
    if status not in PROGRESS_STATUSES:
        raise ValueError(f"Unknown progress status: {status!r}")
    conn = get_connection(db_path)
    conn.execute(
        """INSERT INTO study_progress (user_id, chapter_index, status, score, updated_at)
        VALUES (?, ?, ?, ?, ?)
        ON CONFLICT(user_id, chapter_index) DO UPDATE
        SET status = excluded.status, score = excluded.score, updated_at = excluded.updated_at""",
        (user_id, chapter_index, status, score, datetime.now().isoformat()),
    )
    conn.commit()
    conn.close()
    logger.debug("Saved progress user=%d chapter=%d status=%s", user_id, chapter_index, status)


def get_progress_records(db_path: str, user_id: int) -> list[ProgressRecord]:
    conn = get_connection(db_path)
    rows = conn.execute(
        "SELECT * FROM study_progress WHERE user_id = ? ORDER BY chapter_index",
        (user_id,),
    ).fetchall()
    conn.close()
    return [
        ProgressRecord(
            user_id=row["user_id"],
            chapter_index=row["chapter_index"],
            status=row["status"],
            score=row["score"],
            updated_at=row["updated_at"],
        )
        for row in rows
    ]


class SQLiteProgressStore:
    """ProgressStore backed by the study_progress table."""

    def __init__(self, db_path: str):
        self.db_path = db_path

    def get_last_progress(self, user_id: int) -> tuple[int, str]:
        return get_last_progress(self.db_path, user_id)

    def save_progress(self, user_id: int, chapter_index: int, score: int, status: str) -> None:
        save_progress(self.db_path, user_id, chapter_index, score, status)
