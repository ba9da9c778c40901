from typing import Optional

from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.orm import Session

from jobly.core.database import get_db
from jobly.core.deps import ensure_admin
from jobly.core.sql import check_filter_keys
from jobly.crud import company as company_crud
from jobly.schemas.company import (
    CompanyCreateRequest,
    CompanyUpdateRequest,
    CompanyResponse,
    CompanyDetailResponse,
    CompanyListResponse,
    CompanyDeleteResponse,
)

router = APIRouter(prefix="/companies", tags=["Companies"])


@router.post("", status_code=status.HTTP_201_CREATED, response_model=CompanyDetailResponse)
def create_company(
    request: CompanyCreateRequest,
    db: Session = Depends(get_db),
    admin: dict = Depends(ensure_admin)
):
    """
    Create a company. Admin only.

    Body: { handle, name, description, numEmployees, logoUrl }
    """
    company = company_crud.create(db, request)
    return {"company": CompanyResponse.model_validate(company)}


@router.get("", response_model=CompanyListResponse)
def list_companies(
    request: Request,
    min_employees: Optional[int] = Query(None, alias="minEmployees", description="At least this many employees"),
    max_employees: Optional[int] = Query(None, alias="maxEmployees", description="At most this many employees"),
    name_like: Optional[str] = Query(None, alias="nameLike", description="Case-insensitive match on part of the name"),
    db: Session = Depends(get_db)
):
    """
    List companies, optionally filtered by minEmployees, maxEmployees and nameLike.

    Any other query param is a 400.
    """
    check_filter_keys(request.query_params, company_crud.COMPANY_FILTERS)
    filters = {"minEmployees": min_employees, "maxEmployees": max_employees, "nameLike": name_like}
    companies = company_crud.find_all(db, {k: v for k, v in filters.items() if v is not None})
    return {"companies": [CompanyResponse.model_validate(c) for c in companies]}


@router.get("/{handle}", response_model=CompanyDetailResponse)
def get_company(handle: str, db: Session = Depends(get_db)):
    """Retrieve a company by handle."""
    company = company_crud.get(db, handle)
    return {"company": CompanyResponse.model_validate(company)}


@router.patch("/{handle}", response_model=CompanyDetailResponse)
def update_company(
    handle: str,
    request: CompanyUpdateRequest,
    db: Session = Depends(get_db),
    admin: dict = Depends(ensure_admin)
):
    """
    Partially update a company. Admin only.

    Body: any of { name, description, numEmployees, logoUrl }
    """
    data = request.model_dump(exclude_unset=True, by_alias=True)
    company = company_crud.update(db, handle, data)
    return {"company": CompanyResponse.model_validate(company)}


@router.delete("/{handle}", response_model=CompanyDeleteResponse)
def delete_company(
    handle: str,
    db: Session = Depends(get_db),
    admin: dict = Depends(ensure_admin)
):
    """Delete a company and its jobs. Admin only."""
    company_crud.remove(db, handle)
    return {"deleted": handle}
