"""User registration and login against the users table."""
import logging
import sqlite3
from datetime import datetime

from course_player.db import get_connection
from course_player.errors import ValidationError

logger = logging.getLogger(__name__)

ROLE_ADMIN = "admin"
ROLE_STUDENT = "student"
ROLES = (ROLE_ADMIN, ROLE_STUDENT)

MIN_LOGIN_LENGTH = 3
MIN_PASSWORD_LENGTH = 4


def validate_credentials(login: str, password: str) -> None:
    if not login or not password:
        raise ValidationError("Please fill in both login and password")
    if len(login) < MIN_LOGIN_LENGTH:
        raise ValidationError(f"Login must be at least {MIN_LOGIN_LENGTH} characters")
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")


def register_user(db_path: str, login: str, password_hash: str, role: str = ROLE_STUDENT) -> bool:
    """Insert a new user. Returns False if the login is taken or the role is unknown."""
    if role not in ROLES:
        logger.warning("Refusing to register %s with unknown role %r", login, role)
        return False
    conn = get_connection(db_path)
    try:
        with conn:
            conn.execute(
                "INSERT INTO users (login, password_hash, role, created_at) VALUES (?, ?, ?, ?)",
                (login, password_hash, role, datetime.now().isoformat()),
            )
    except sqlite3.IntegrityError:
        logger.warning("Login already exists: %s", login)
        return False
    finally:
        conn.close()
    logger.info("Registered %s as %s", login, role)
    return True


def authenticate(db_path: str, login: str, password_hash: str) -> tuple[str, int] | None:
    """Return (role, user_id) for matching credentials, else None."""
    conn = get_connection(db_path)
    row = conn.execute(
        "SELECT id, role FROM users WHERE login = ? AND password_hash = ?",
        (login, password_hash),
    ).fetchone()
    conn.close()
    if row is None:
        logger.info("Authentication failed for %s", login)
        return None
    return row["role"], row["id"]


def has_admin(db_path: str) -> bool:
    conn = get_connection(db_path)
    count = conn.execute("SELECT COUNT(*) FROM users WHERE role = ?", (ROLE_ADMIN,)).fetchone()[0]
    conn.close()
    return count > 0
