"""
CRUD operations for jobs.

Inputs use the API's field names (``companyHandle``, ``minSalary``); rows use
storage column names.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from jobly.core.database import run_query
from jobly.core.exceptions import BadRequestError, DuplicateError, NotFoundError
from jobly.core.sql import FilterField, SqlClause, contains, sql_for_filters, sql_for_partial_update

logger = logging.getLogger(__name__)

COLUMNS = "id, title, salary, equity, company_handle"

# hasEquity only narrows when true; false or absent lists every job
FILTERS = (
    FilterField("title", "title ILIKE {}", transform=contains),
    FilterField("minSalary", "salary >= {}"),
    FilterField("hasEquity", "equity > 0", binds_value=False),
)

# Job fields are stored under their own names; companyHandle is not updatable
COLUMN_NAMES: Dict[str, str] = {}


def create(db: Session, data: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Create a job.

    Args:
        db: Database session
        data: { title, salary, equity, companyHandle }

    Returns:
        The new job row, including its generated id

    Raises:
        DuplicateError: If an identical job already exists
        BadRequestError: If the store rejects the job (e.g. unknown company)
    """
    values = [data["title"], data.get("salary"), data.get("equity"), data["companyHandle"]]

    # NULL salary/equity must match NULL, which plain = never does
    duplicate = run_query(
        db,
        """SELECT id FROM jobs
           WHERE title = $1
             AND (salary = $2 OR (salary IS NULL AND $2 IS NULL))
             AND (equity = $3 OR (equity IS NULL AND $3 IS NULL))
             AND company_handle = $4""",
        values,
    )
    if duplicate:
        raise DuplicateError(f"Duplicate job: {', '.join(str(v) for v in values)}")

    try:
        rows = run_query(
            db,
            f"""INSERT INTO jobs (title, salary, equity, company_handle)
                VALUES ($1, $2, $3, $4)
                RETURNING {COLUMNS}""",
            values,
        )
        db.commit()
    except IntegrityError:
        db.rollback()
        raise BadRequestError(f"Cannot create job for company: {data['companyHandle']}")

    job = rows[0]
    logger.info(f"Created job {job['id']} for {job['company_handle']}")
    return job


def where_filters(criteria: Mapping[str, Any]) -> SqlClause:
    """
    Build the WHERE clause for ``find_all``.

    Recognizes ``title`` (case-insensitive substring), ``minSalary`` and
    ``hasEquity``. The equity test is a fixed comparison and binds nothing.
    """
    return sql_for_filters(criteria, FILTERS)


def find_all(db: Session, criteria: Optional[Mapping[str, Any]] = None) -> List[Dict[str, Any]]:
    """List jobs ordered by id, optionally filtered."""
    where = where_filters(criteria or {})
    logger.debug(f"Job filters: {where.fragment!r} {where.values!r}")

    return run_query(
        db,
        f"SELECT {COLUMNS} FROM jobs {where.fragment} ORDER BY id",
        where.values,
    )


def get(db: Session, job_id: int) -> Dict[str, Any]:
    """
    Get a job by id.

    Raises:
        NotFoundError: If no such job
    """
    rows = run_query(db, f"SELECT {COLUMNS} FROM jobs WHERE id = $1", [job_id])
    if not rows:
        raise NotFoundError(f"No job: {job_id}")
    return rows[0]


def update(db: Session, job_id: int, data: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Partially update a job; only the supplied fields change.

    Args:
        db: Database session
        job_id: Job to update
        data: Any of { title, salary, equity }

    Raises:
        BadRequestError: If data is empty or rejected by the store
        NotFoundError: If no such job
    """
    clause = sql_for_partial_update(data, COLUMN_NAMES)
    id_idx = len(clause.values) + 1

    try:
        rows = run_query(
            db,
            f"""UPDATE jobs
                SET {clause.fragment}
                WHERE id = ${id_idx}
                RETURNING {COLUMNS}""",
            [*clause.values, job_id],
        )
    except IntegrityError:
        db.rollback()
        raise BadRequestError(f"Cannot update job {job_id}: invalid data")

    if not rows:
        db.rollback()
        raise NotFoundError(f"No job: {job_id}")

    db.commit()
    logger.info(f"Updated job {job_id}: {', '.join(data)}")
    return rows[0]


def remove(db: Session, job_id: int) -> None:
    """
    Delete a job.

    Raises:
        NotFoundError: If no such job
    """
    rows = run_query(db, "DELETE FROM jobs WHERE id = $1 RETURNING id", [job_id])
    if not rows:
        db.rollback()
        raise NotFoundError(f"No job: {job_id}")

    db.commit()
    logger.info(f"Deleted job {job_id}")
