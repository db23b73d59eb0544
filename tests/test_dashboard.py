# tests/test_dashboard.py
from course_player.accounts import authenticate, register_user
from course_player.dashboard import (
    NOT_STARTED, calc_completion, get_chapter_overview, get_status_color,
)
from course_player.db import init_db
from course_player.models import Course
from course_player.progress import save_progress


def _user(tmp_db):
    init_db(tmp_db)
    register_user(tmp_db, "learner", "hash")
    return authenticate(tmp_db, "learner", "hash")[1]


def test_overview_without_progress(tmp_db, course):
    user_id = _user(tmp_db)
    overview = get_chapter_overview(tmp_db, user_id, course)
    assert len(overview) == 5
    assert all(row["status"] == NOT_STARTED for row in overview)
    assert overview[0]["questions"] == 3


def test_overview_with_progress(tmp_db, course):
    user_id = _user(tmp_db)
    save_progress(tmp_db, user_id, 0, 100, "completed")
    save_progress(tmp_db, user_id, 1, 0, "fail")
    overview = get_chapter_overview(tmp_db, user_id, course)
    assert (overview[0]["status"], overview[0]["score"]) == ("completed", 100)
    assert (overview[1]["status"], overview[1]["score"]) == ("fail", 0)
    assert overview[2]["score"] is None


def test_calc_completion(tmp_db, course):
    user_id = _user(tmp_db)
    assert calc_completion(tmp_db, user_id, course) == 0.0
    save_progress(tmp_db, user_id, 0, 100, "completed")
    save_progress(tmp_db, user_id, 1, 100, "completed")
    save_progress(tmp_db, user_id, 2, 0, "fail")
    assert calc_completion(tmp_db, user_id, course) == 40.0


def test_calc_completion_ignores_chapters_past_course_end(tmp_db, course):
    user_id = _user(tmp_db)
    save_progress(tmp_db, user_id, 9, 100, "completed")
    assert calc_completion(tmp_db, user_id, course) == 0.0


def test_calc_completion_empty_course(tmp_db):
    user_id = _user(tmp_db)
    assert calc_completion(tmp_db, user_id, Course()) == 0.0


def test_status_colors():
    assert get_status_color("completed") == "green"
    assert get_status_color("fail") == "red"
    assert get_status_color(NOT_STARTED) == "dim"
    assert get_status_color("new") == "yellow"
