"""
SQL fragment builders used by the data-access layer.

- sql_for_partial_update: payload + rename table -> SET clause and values
- sql_for_filter_companies / sql_for_filter_jobs: optional filters -> a full
  SELECT statement

Placeholders are written as $1..$n; app.core.database.run_query binds them.
The filter builders can alternatively write the filter values straight into
the statement (interpolate=True) for callers that rely on the legacy query
text. That form does not escape anything and must never see untrusted input.
"""

from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional, Tuple

from app.core.errors import InvalidRequestError

COMPANY_FILTER_SELECT = (
    'SELECT handle, name, description, num_employees AS "numEmployees", '
    'logo_url AS "logoUrl" FROM companies WHERE '
)
JOB_FILTER_SELECT = (
    'SELECT id, title, salary, equity, company_handle AS "companyHandle" '
    'FROM jobs WHERE '
)


@dataclass
class PartialUpdate:
    """SET clause plus the values for its placeholders, in order."""
    set_cols: str
    values: List[Any]


@dataclass
class FilterQuery:
    """A complete statement and the values for its placeholders."""
    text: str
    params: List[Any] = field(default_factory=list)


def sql_for_partial_update(
    data_to_update: Mapping[str, Any],
    js_to_sql: Mapping[str, str]
) -> PartialUpdate:
    """
    Build the SET clause of a partial UPDATE.

    Keys missing from `js_to_sql` are used as column names unchanged.

        sql_for_partial_update({"firstName": "Aliya", "age": 32},
                               {"firstName": "first_name"})
        -> PartialUpdate(set_cols='"first_name"=$1, "age"=$2',
                         values=["Aliya", 32])

    Raises:
        InvalidRequestError: If `data_to_update` is empty
    """
    keys = list(data_to_update)
    if not keys:
        raise InvalidRequestError("No data")

    cols = [
        f'"{js_to_sql.get(col_name) or col_name}"=${idx + 1}'
        for idx, col_name in enumerate(keys)
    ]

    return PartialUpdate(
        set_cols=", ".join(cols),
        values=[data_to_update[key] for key in keys],
    )


def _where(
    predicates: List[Tuple[str, Any]],
    interpolate: bool
) -> Tuple[str, List[Any]]:
    # Each predicate is (sql prefix, value); a value of None means the
    # prefix is already a complete condition.
    clauses = []
    params: List[Any] = []
    for prefix, value in predicates:
        if value is None:
            clauses.append(prefix)
        elif interpolate:
            literal = f"'{value}'" if isinstance(value, str) else f"{value}"
            clauses.append(f"{prefix} {literal}")
        else:
            params.append(value)
            clauses.append(f"{prefix} ${len(params)}")
    return " AND ".join(clauses), params


def sql_for_filter_companies(
    name: Optional[str] = None,
    min_employees: Optional[int] = None,
    max_employees: Optional[int] = None,
    interpolate: bool = False
) -> FilterQuery:
    """
    Build the company search statement.

    Conditions are added in the order name, min_employees, max_employees and
    only for truthy filters; results are ordered by name.

    Raises:
        InvalidRequestError: If every filter is falsy
    """
    if not name and not min_employees and not max_employees:
        raise InvalidRequestError("No data")

    predicates = []
    if name:
        predicates.append(("name =", name))
    if min_employees:
        predicates.append(("num_employees >=", min_employees))
    if max_employees:
        predicates.append(("num_employees <=", max_employees))

    where, params = _where(predicates, interpolate)
    return FilterQuery(text=f"{COMPANY_FILTER_SELECT}{where} ORDER BY name", params=params)


def sql_for_filter_jobs(
    title: Optional[str] = None,
    min_salary: Optional[int] = None,
    has_equity: Optional[bool] = None,
    interpolate: bool = False
) -> FilterQuery:
    """
    Build the job search statement.

    A truthy `has_equity` adds `equity > 0`; a falsy one adds nothing, so
    has_equity=False on its own counts as no filter at all.

    Raises:
        InvalidRequestError: If every filter is falsy
    """
    if not title and not min_salary and not has_equity:
        raise InvalidRequestError("No filter")

    predicates = []
    if title:
        predicates.append(("title =", title))
    if min_salary:
        predicates.append(("salary >=", min_salary))
    if has_equity:
        predicates.append(("equity > 0", None))

    where, params = _where(predicates, interpolate)
    return FilterQuery(text=f"{JOB_FILTER_SELECT}{where} ORDER BY title", params=params)
