"""
CRUD operations for companies.

Each function takes the request's database session first and returns plain
dict rows. Inputs use the API's field names (``numEmployees``, ``logoUrl``);
rows use storage column names.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from jobly.core.database import run_query
from jobly.core.exceptions import BadRequestError, DuplicateError, NotFoundError
from jobly.core.sql import FilterField, SqlClause, contains, sql_for_filters, sql_for_partial_update

logger = logging.getLogger(__name__)

COLUMNS = "handle, name, description, num_employees, logo_url"

# Order here fixes the order of predicates in the generated WHERE clause
FILTERS = (
    FilterField("minEmployees", "num_employees >= {}"),
    FilterField("maxEmployees", "num_employees <= {}"),
    FilterField("name", "name ILIKE {}", transform=contains),
)

COLUMN_NAMES = {
    "numEmployees": "num_employees",
    "logoUrl": "logo_url",
}


def create(db: Session, data: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Create a company.

    Args:
        db: Database session
        data: { handle, name, description, numEmployees, logoUrl }

    Returns:
        The new company row

    Raises:
        DuplicateError: If the handle (or name) is already taken
    """
    handle = data["handle"]

    if run_query(db, "SELECT handle FROM companies WHERE handle = $1", [handle]):
        raise DuplicateError(f"Duplicate company: {handle}")

    try:
        rows = run_query(
            db,
            f"""INSERT INTO companies (handle, name, description, num_employees, logo_url)
                VALUES ($1, $2, $3, $4, $5)
                RETURNING {COLUMNS}""",
            [
                handle,
                data["name"],
                data["description"],
                data.get("numEmployees"),
                data.get("logoUrl"),
            ],
        )
        db.commit()
    except IntegrityError:
        # Lost a race with a concurrent create, or the name is taken
        db.rollback()
        raise DuplicateError(f"Duplicate company: {handle}")

    logger.info(f"Created company {handle}")
    return rows[0]


def where_filters(criteria: Mapping[str, Any]) -> SqlClause:
    """
    Build the WHERE clause for ``find_all``.

    Recognizes ``minEmployees``, ``maxEmployees`` and ``name`` (case-insensitive
    substring). Does not check that the range is sensible.
    """
    return sql_for_filters(criteria, FILTERS)


def find_all(db: Session, criteria: Optional[Mapping[str, Any]] = None) -> List[Dict[str, Any]]:
    """
    List companies ordered by name, optionally filtered.

    Raises:
        BadRequestError: If minEmployees is greater than maxEmployees
    """
    criteria = criteria or {}

    min_employees = criteria.get("minEmployees")
    max_employees = criteria.get("maxEmployees")
    if min_employees is not None and max_employees is not None and min_employees > max_employees:
        raise BadRequestError("minEmployees cannot be greater than maxEmployees")

    where = where_filters(criteria)
    logger.debug(f"Company filters: {where.fragment!r} {where.values!r}")

    return run_query(
        db,
        f"SELECT {COLUMNS} FROM companies {where.fragment} ORDER BY name",
        where.values,
    )


def get(db: Session, handle: str) -> Dict[str, Any]:
    """
    Get a company and its jobs.

    Returns:
        { handle, name, description, num_employees, logo_url, jobs }
        where jobs is [{ id, title, salary, equity }, ...]

    Raises:
        NotFoundError: If no such company
    """
    rows = run_query(db, f"SELECT {COLUMNS} FROM companies WHERE handle = $1", [handle])
    if not rows:
        raise NotFoundError(f"No company: {handle}")

    company = rows[0]
    company["jobs"] = run_query(
        db,
        "SELECT id, title, salary, equity FROM jobs WHERE company_handle = $1 ORDER BY id",
        [handle],
    )
    return company


def update(db: Session, handle: str, data: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Partially update a company; only the supplied fields change.

    Args:
        db: Database session
        handle: Company to update
        data: Any of { name, description, numEmployees, logoUrl }

    Raises:
        BadRequestError: If data is empty or conflicts with another company
        NotFoundError: If no such company
    """
    clause = sql_for_partial_update(data, COLUMN_NAMES)
    handle_idx = len(clause.values) + 1

    try:
        rows = run_query(
            db,
            f"""UPDATE companies
                SET {clause.fragment}
                WHERE handle = ${handle_idx}
                RETURNING {COLUMNS}""",
            [*clause.values, handle],
        )
    except IntegrityError:
        db.rollback()
        raise BadRequestError(f"Cannot update company {handle}: conflicting data")

    if not rows:
        db.rollback()
        raise NotFoundError(f"No company: {handle}")

    db.commit()
    logger.info(f"Updated company {handle}: {', '.join(data)}")
    return rows[0]


def remove(db: Session, handle: str) -> None:
    """
    Delete a company (its jobs go with it).

    Raises:
        NotFoundError: If no such company
    """
    rows = run_query(db, "DELETE FROM companies WHERE handle = $1 RETURNING handle", [handle])
    if not rows:
        db.rollback()
        raise NotFoundError(f"No company: {handle}")

    db.commit()
    logger.info(f"Deleted company {handle}")
