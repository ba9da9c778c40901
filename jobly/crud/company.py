"""
CRUD operations for Company model.

Lookups go through the ORM; partial updates and list filters are assembled
as parameterized SQL fragments by the helpers in jobly.core.sql.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional, Tuple

from sqlalchemy import text
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from jobly.core.exceptions import BadRequestError, NotFoundError
from jobly.core.sql import check_filter_keys, parse_int_filter, sql_for_partial_update
from jobly.models.company import Company
from jobly.schemas.company import CompanyCreateRequest

logger = logging.getLogger(__name__)

COMPANY_FILTERS = ("minEmployees", "maxEmployees", "nameLike")

JS_TO_SQL = {
    "numEmployees": "num_employees",
    "logoUrl": "logo_url",
}


def create(db: Session, company_data: CompanyCreateRequest) -> Company:
    """
    Create a company.

    Raises:
        BadRequestError: If the handle (or name) is already taken
    """
    if db.get(Company, company_data.handle) is not None:
        raise BadRequestError(f"Duplicate company: {company_data.handle}")

    db_company = Company(
        handle=company_data.handle,
        name=company_data.name,
        description=company_data.description,
        num_employees=company_data.num_employees,
        logo_url=company_data.logo_url,
    )
    db.add(db_company)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise BadRequestError(f"Duplicate company: {company_data.handle}")
    db.refresh(db_company)

    logger.info(f"Created company {db_company.handle}")
    return db_company


def find_all(db: Session, filters: Optional[Mapping[str, Any]] = None) -> List[Company]:
    """
    List companies ordered by name, optionally filtered.

    Args:
        filters: Any of minEmployees, maxEmployees, nameLike

    Raises:
        BadRequestError: On unknown or malformed filters
    """
    query = db.query(Company)

    if filters:
        where_cols, values = _sql_for_filtering_companies(filters)
        if where_cols:
            query = query.filter(text(where_cols)).params(**values)

    return query.order_by(Company.name).all()


def _sql_for_filtering_companies(filters: Mapping[str, Any]) -> Tuple[str, Dict[str, Any]]:
    """
    Build the WHERE clause for a filtered company search.

    {"minEmployees": "2", "nameLike": "c"} =>
        ('"num_employees" >= :p1 AND lower("name") LIKE lower(:p2)',
         {"p1": 2, "p2": "%c%"})
    """
    check_filter_keys(filters, COMPANY_FILTERS)

    min_employees = parse_int_filter(filters, "minEmployees")
    max_employees = parse_int_filter(filters, "maxEmployees")
    if min_employees is not None and max_employees is not None and min_employees > max_employees:
        raise BadRequestError("minEmployees cannot be greater than maxEmployees")

    clauses = []
    values = {}

    def bind(value):
        name = f"p{len(values) + 1}"
        values[name] = value
        return f":{name}"

    if min_employees is not None:
        clauses.append(f'"num_employees" >= {bind(min_employees)}')
    if max_employees is not None:
        clauses.append(f'"num_employees" <= {bind(max_employees)}')
    if filters.get("nameLike") is not None:
        clauses.append(f'lower("name") LIKE lower({bind("%" + str(filters["nameLike"]) + "%")})')

    return " AND ".join(clauses), values


def get(db: Session, handle: str) -> Company:
    """
    Retrieve a company by handle.

    Raises:
        NotFoundError: If no such company
    """
    company = db.query(Company).filter(Company.handle == handle).first()
    if not company:
        raise NotFoundError(f"No company: {handle}")
    return company


def update(db: Session, handle: str, data: Mapping[str, Any]) -> Company:
    """
    Partially update a company; only the fields present in `data` change.

    Args:
        data: Any of name, description, numEmployees, logoUrl

    Raises:
        BadRequestError: If `data` is empty or violates a constraint
        NotFoundError: If no such company
    """
    set_cols, values = sql_for_partial_update(data, JS_TO_SQL)
    query_sql = text(f'UPDATE companies SET {set_cols} WHERE "handle" = :handle')

    try:
        result = db.execute(query_sql, {**values, "handle": handle})
    except IntegrityError as e:
        db.rollback()
        logger.warning(f"Rejected update for company {handle}: {e.orig}")
        raise BadRequestError(f"Invalid update for company {handle}")

    if result.rowcount == 0:
        db.rollback()
        raise NotFoundError(f"No company: {handle}")

    db.commit()
    logger.info(f"Updated company {handle}: {', '.join(data)}")
    return get(db, handle)


def remove(db: Session, handle: str) -> None:
    """
    Delete a company and its jobs.

    Raises:
        NotFoundError: If no such company
    """
    company = get(db, handle)
    db.delete(company)
    db.commit()
    logger.info(f"Deleted company {handle}")
