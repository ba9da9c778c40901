"""
CRUD operations for Job model.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional, Tuple

from sqlalchemy import text
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from jobly.core.exceptions import BadRequestError, NotFoundError
from jobly.core.sql import check_filter_keys, parse_int_filter, sql_for_partial_update
from jobly.models.company import Company
from jobly.models.job import Job
from jobly.schemas.job import JobCreateRequest

logger = logging.getLogger(__name__)

JOB_FILTERS = ("title", "minSalary", "hasEquity")


def create(db: Session, job_data: JobCreateRequest) -> Job:
    """
    Create a job for an existing company.

    Raises:
        NotFoundError: If the company does not exist
    """
    if db.get(Company, job_data.company_handle) is None:
        raise NotFoundError(f"No such company: {job_data.company_handle}")

    db_job = Job(
        title=job_data.title,
        salary=job_data.salary,
        equity=job_data.equity,
        company_handle=job_data.company_handle,
    )

    db.add(db_job)
    db.commit()
    db.refresh(db_job)

    logger.info(f"Created job {db_job.id} for {db_job.company_handle}")
    return db_job


def find_all(db: Session, filters: Optional[Mapping[str, Any]] = None) -> List[Job]:
    """
    List jobs ordered by id, optionally filtered by title, minSalary, hasEquity.
    """
    query = db.query(Job)

    if filters:
        where_cols, values = _sql_for_filtering_jobs(filters)
        if where_cols:
            query = query.filter(text(where_cols)).params(**values)

    return query.order_by(Job.id).all()


def _sql_for_filtering_jobs(filters: Mapping[str, Any]) -> Tuple[str, Dict[str, Any]]:
    """
    Build the WHERE clause for a filtered job search.

    hasEquity=true keeps jobs with non-zero equity; hasEquity=false is the
    same as leaving it out.
    """
    check_filter_keys(filters, JOB_FILTERS)

    clauses = []
    values = {}

    if filters.get("title") is not None:
        values[f"p{len(values) + 1}"] = f"%{filters['title']}%"
        clauses.append(f'lower("title") LIKE lower(:p{len(values)})')

    min_salary = parse_int_filter(filters, "minSalary")
    if min_salary is not None:
        values[f"p{len(values) + 1}"] = min_salary
        clauses.append(f'"salary" >= :p{len(values)}')

    has_equity = filters.get("hasEquity")
    if has_equity is not None:
        if str(has_equity).lower() not in ("true", "false"):
            raise BadRequestError("hasEquity must be true or false")
        if str(has_equity).lower() == "true":
            clauses.append('"equity" > 0')

    return " AND ".join(clauses), values


def get(db: Session, job_id: int) -> Job:
    """
    Retrieve a job by its ID.

    Raises:
        NotFoundError: If no such job
    """
    job = db.query(Job).filter(Job.id == job_id).first()
    if not job:
        raise NotFoundError(f"No such job: {job_id}")
    return job


def update(db: Session, job_id: int, data: Mapping[str, Any]) -> Job:
    """
    Partially update a job.

    Args:
        data: Any of title, salary, equity

    Raises:
        BadRequestError: If `data` is empty or violates a constraint
        NotFoundError: If no such job
    """
    set_cols, values = sql_for_partial_update(data, {})
    query_sql = text(f'UPDATE jobs SET {set_cols} WHERE "id" = :id')

    try:
        result = db.execute(query_sql, {**values, "id": job_id})
    except IntegrityError as e:
        db.rollback()
        logger.warning(f"Rejected update for job {job_id}: {e.orig}")
        raise BadRequestError(f"Invalid update for job {job_id}")

    if result.rowcount == 0:
        db.rollback()
        raise NotFoundError(f"No such job: {job_id}")

    db.commit()
    logger.info(f"Updated job {job_id}: {', '.join(data)}")
    return get(db, job_id)


def remove(db: Session, job_id: int) -> None:
    """
    Delete a job by ID.

    Raises:
        NotFoundError: If no such job
    """
    job = get(db, job_id)
    db.delete(job)
    db.commit()
    logger.info(f"Deleted job {job_id}")
