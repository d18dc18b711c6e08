"""
CRUD operations (Create, Read, Update, Delete) for the Jobly entities.

This layer provides a clean separation between API routes and database operations,
following the Repository pattern. Filters and partial updates are compiled by
jobly.core.sql into parameterized SQL.
"""

from jobly.crud import company, job, user

__all__ = ["company", "job", "user"]
