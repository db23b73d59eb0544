"""Learner progress overview."""
from course_player.models import STATUS_COMPLETED, STATUS_FAIL, Course
from course_player.progress import get_progress_records

NOT_STARTED = "not started"


def get_status_color(status: str) -> str:
    if status == STATUS_COMPLETED:
        return "green"
    elif status == NOT_STARTED:
        return "dim"
    elif status == STATUS_FAIL:
        return "red"
    return "yellow"


def get_chapter_overview(db_path: str, user_id: int, course: Course) -> list[dict]:
    records = {r.chapter_index: r for r in get_progress_records(db_path, user_id)}
    overview = []
    for index, chapter in enumerate(course.chapters):
        record = records.get(index)
        overview.append({
            "index": index,
            "title": chapter.title,
            "questions": len(chapter.questions),
            "status": record.status if record else NOT_STARTED,
            "score": record.score if record else None,
            "updated_at": record.updated_at if record else None,
        })
    return overview


def calc_completion(db_path: str, user_id: int, course: Course) -> float:
    """Percentage of the course's chapters marked completed."""
    if course.is_empty:
        return 0.0
    done = sum(
        1 for r in get_progress_records(db_path, user_id)
        if r.status == STATUS_COMPLETED and r.chapter_index < len(course.chapters)
    )
    return round(done / len(course.chapters) * 100, 1)
