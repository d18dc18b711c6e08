"""
Builders for parameterized SQL fragments.

Both builders return a ``SqlClause`` whose fragment only ever contains
``$1..$n`` placeholders; the values travel separately in ``values`` so that
client input is never interpolated into SQL text. Placeholder ``$i`` binds
``values[i - 1]``.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, List, Mapping, Optional, Sequence

from jobly.core.exceptions import BadRequestError


@dataclass(frozen=True)
class SqlClause:
    """A SQL fragment plus the ordered values for its placeholders."""
    fragment: str = ""
    values: List[Any] = field(default_factory=list)


@dataclass(frozen=True)
class FilterField:
    """
    One recognized filter criterion.

    Attributes:
        key: Criteria key as sent by clients (e.g. ``minEmployees``)
        predicate: SQL predicate; ``{}`` marks where the placeholder goes
        transform: Optional callable applied to the value before binding
        binds_value: False for fixed comparisons that take no parameter
    """
    key: str
    predicate: str
    transform: Optional[Callable[[Any], Any]] = None
    binds_value: bool = True


def contains(value: Any) -> str:
    """Wrap a value for a substring ``LIKE``/``ILIKE`` match."""
    return f"%{value}%"


def sql_for_filters(criteria: Mapping[str, Any], fields: Sequence[FilterField]) -> SqlClause:
    """
    Compile optional filter criteria into a ``WHERE`` clause.

    Predicates follow the order of ``fields``, not of ``criteria``, so equal
    criteria always give the same SQL. Falsy values count as not supplied,
    and keys missing from ``fields`` are ignored.

    Example:
        sql_for_filters({"name": "jobly", "minEmployees": 10}, COMPANY_FILTERS)
        => SqlClause('WHERE num_employees >= $1 AND name ILIKE $2', [10, '%jobly%'])
    """
    predicates = []
    values = []

    for flt in fields:
        value = criteria.get(flt.key)
        if not value:
            continue

        if flt.binds_value:
            values.append(flt.transform(value) if flt.transform else value)
            predicates.append(flt.predicate.format(f"${len(values)}"))
        else:
            predicates.append(flt.predicate)

    if not predicates:
        return SqlClause()
    return SqlClause(f"WHERE {' AND '.join(predicates)}", values)


def sql_for_partial_update(data: Mapping[str, Any], column_names: Mapping[str, str]) -> SqlClause:
    """
    Compile a partial update into the body of a ``SET`` clause.

    Args:
        data: External field name -> new value; ``None`` clears the column
        column_names: External field name -> storage column, for names that differ

    Returns:
        SqlClause like ``'"first_name"=$1, "age"=$2'`` with ``['Aliya', 32]``.
        Callers bind the row key as ``$len(values) + 1``.

    Raises:
        BadRequestError: If ``data`` is empty
    """
    if not data:
        raise BadRequestError("No data")

    columns = [
        f'"{column_names.get(key, key)}"=${position}'
        for position, key in enumerate(data, start=1)
    ]
    return SqlClause(", ".join(columns), list(data.values()))
