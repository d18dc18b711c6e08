"""
CRUD operations for users and their job applications.

Rows returned from here never include the password hash.
"""

import logging
from typing import Any, Dict, List, Mapping

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from jobly.core.database import run_query
from jobly.core.exceptions import DuplicateError, NotFoundError, UnauthorizedError
from jobly.core.security import get_password_hash, verify_password
from jobly.core.sql import sql_for_partial_update

logger = logging.getLogger(__name__)

COLUMNS = "username, first_name, last_name, email, is_admin"

COLUMN_NAMES = {
    "firstName": "first_name",
    "lastName": "last_name",
}


def authenticate(db: Session, username: str, password: str) -> Dict[str, Any]:
    """
    Check a username/password pair.

    Returns:
        The user row on success

    Raises:
        UnauthorizedError: If the user does not exist or the password is wrong
    """
    rows = run_query(db, f"SELECT {COLUMNS}, password FROM users WHERE username = $1", [username])

    if rows and verify_password(password, rows[0]["password"]):
        user = rows[0]
        del user["password"]
        return user

    logger.info(f"Failed login for {username}")
    raise UnauthorizedError("Invalid username/password")


def register(db: Session, data: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Create a user with a hashed password.

    Args:
        db: Database session
        data: { username, password, firstName, lastName, email, isAdmin }

    Raises:
        DuplicateError: If the username is taken
    """
    username = data["username"]

    if run_query(db, "SELECT username FROM users WHERE username = $1", [username]):
        raise DuplicateError(f"Duplicate username: {username}")

    try:
        rows = run_query(
            db,
            f"""INSERT INTO users (username, password, first_name, last_name, email, is_admin)
                VALUES ($1, $2, $3, $4, $5, $6)
                RETURNING {COLUMNS}""",
            [
                username,
                get_password_hash(data["password"]),
                data["firstName"],
                data["lastName"],
                data["email"],
                bool(data.get("isAdmin", False)),
            ],
        )
        db.commit()
    except IntegrityError:
        db.rollback()
        raise DuplicateError(f"Duplicate username: {username}")

    logger.info(f"Registered user {username} (admin={rows[0]['is_admin']})")
    return rows[0]


def find_all(db: Session) -> List[Dict[str, Any]]:
    """List users ordered by username."""
    return run_query(db, f"SELECT {COLUMNS} FROM users ORDER BY username")


def get(db: Session, username: str) -> Dict[str, Any]:
    """
    Get a user and the ids of the jobs they applied to.

    Raises:
        NotFoundError: If no such user
    """
    rows = run_query(db, f"SELECT {COLUMNS} FROM users WHERE username = $1", [username])
    if not rows:
        raise NotFoundError(f"No user: {username}")

    user = rows[0]
    applications = run_query(
        db,
        "SELECT job_id FROM applications WHERE username = $1 ORDER BY job_id",
        [username],
    )
    user["jobs"] = [row["job_id"] for row in applications]
    return user


def update(db: Session, username: str, data: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Partially update a user. A supplied password is hashed before storing.

    Args:
        db: Database session
        username: User to update
        data: Any of { firstName, lastName, password, email }

    Raises:
        BadRequestError: If data is empty
        NotFoundError: If no such user
    """
    data = dict(data)
    if data.get("password"):
        data["password"] = get_password_hash(data["password"])

    clause = sql_for_partial_update(data, COLUMN_NAMES)
    username_idx = len(clause.values) + 1

    rows = run_query(
        db,
        f"""UPDATE users
            SET {clause.fragment}
            WHERE username = ${username_idx}
            RETURNING {COLUMNS}""",
        [*clause.values, username],
    )
    if not rows:
        db.rollback()
        raise NotFoundError(f"No user: {username}")

    db.commit()
    logger.info(f"Updated user {username}: {', '.join(data)}")
    return rows[0]


def remove(db: Session, username: str) -> None:
    """
    Delete a user (their applications go with them).

    Raises:
        NotFoundError: If no such user
    """
    rows = run_query(db, "DELETE FROM users WHERE username = $1 RETURNING username", [username])
    if not rows:
        db.rollback()
        raise NotFoundError(f"No user: {username}")

    db.commit()
    logger.info(f"Deleted user {username}")


def apply_to_job(db: Session, username: str, job_id: int) -> None:
    """
    Record that a user applied to a job.

    Raises:
        NotFoundError: If the job or the user does not exist
        DuplicateError: If the user already applied to this job
    """
    if not run_query(db, "SELECT id FROM jobs WHERE id = $1", [job_id]):
        raise NotFoundError(f"No job: {job_id}")

    if not run_query(db, "SELECT username FROM users WHERE username = $1", [username]):
        raise NotFoundError(f"No user: {username}")

    try:
        run_query(
            db,
            "INSERT INTO applications (job_id, username) VALUES ($1, $2)",
            [job_id, username],
        )
        db.commit()
    except IntegrityError:
        db.rollback()
        raise DuplicateError(f"{username} already applied to job {job_id}")

    logger.info(f"{username} applied to job {job_id}")
