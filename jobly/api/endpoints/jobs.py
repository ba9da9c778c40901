from typing import Optional

from fastapi import APIRouter, Depends, Path, Query, Request, status
from sqlalchemy.orm import Session

from jobly.core.database import get_db
from jobly.core.deps import ensure_admin
from jobly.core.sql import check_filter_keys
from jobly.crud import job as job_crud
from jobly.schemas.job import (
    JobCreateRequest,
    JobUpdateRequest,
    JobResponse,
    JobDetailResponse,
    JobListResponse,
    JobDeleteResponse,
)

router = APIRouter(prefix="/jobs", tags=["Jobs"])

# Largest value of the INTEGER id column
MAX_JOB_ID = 2**31 - 1


@router.post("", status_code=status.HTTP_201_CREATED, response_model=JobDetailResponse)
def create_job(
    request: JobCreateRequest,
    db: Session = Depends(get_db),
    admin: dict = Depends(ensure_admin)
):
    """
    Create a job posting. Admin only.

    Body: { title, salary, equity, company_handle }
    """
    job = job_crud.create(db, request)
    return {"job": JobResponse.model_validate(job)}


@router.get("", response_model=JobListResponse)
def list_jobs(
    request: Request,
    title: Optional[str] = Query(None, description="Case-insensitive match on part of the title"),
    min_salary: Optional[int] = Query(None, alias="minSalary", description="Salary of at least this much"),
    has_equity: Optional[str] = Query(None, alias="hasEquity", description='"true" for jobs with non-zero equity only'),
    db: Session = Depends(get_db)
):
    """
    List jobs, optionally filtered by title, minSalary and hasEquity.

    Any other query param is a 400.
    """
    check_filter_keys(request.query_params, job_crud.JOB_FILTERS)
    filters = {"title": title, "minSalary": min_salary, "hasEquity": has_equity}
    jobs = job_crud.find_all(db, {k: v for k, v in filters.items() if v is not None})
    return {"jobs": [JobResponse.model_validate(j) for j in jobs]}


@router.get("/{job_id}", response_model=JobDetailResponse)
def get_job(job_id: int = Path(..., le=MAX_JOB_ID), db: Session = Depends(get_db)):
    """Retrieve a job by ID."""
    job = job_crud.get(db, job_id)
    return {"job": JobResponse.model_validate(job)}


@router.patch("/{job_id}", response_model=JobDetailResponse)
def update_job(
    request: JobUpdateRequest,
    job_id: int = Path(..., le=MAX_JOB_ID),
    db: Session = Depends(get_db),
    admin: dict = Depends(ensure_admin)
):
    """
    Partially update a job. Admin only.

    Body: any of { title, salary, equity }
    """
    data = request.model_dump(exclude_unset=True)
    job = job_crud.update(db, job_id, data)
    return {"job": JobResponse.model_validate(job)}


@router.delete("/{job_id}", response_model=JobDeleteResponse)
def delete_job(
    job_id: int = Path(..., le=MAX_JOB_ID),
    db: Session = Depends(get_db),
    admin: dict = Depends(ensure_admin)
):
    """Delete a job by ID. Admin only."""
    job_crud.remove(db, job_id)
    return {"deleted": job_id}
