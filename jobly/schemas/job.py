from pydantic import BaseModel, Field, field_validator
from typing import List, Optional
from decimal import Decimal


class JobCreateRequest(BaseModel):
    """Schema for creating a new job"""
    title: str = Field(..., min_length=1)
    salary: Optional[int] = Field(None, ge=0)
    equity: Optional[float] = Field(None, ge=0, le=1, description="Fraction of the company, 0 to 1")
    company_handle: str = Field(..., min_length=1, max_length=25)

    class Config:
        extra = "forbid"
        strict = True


class JobUpdateRequest(BaseModel):
    """Schema for a partial job update; id and company cannot change"""
    title: Optional[str] = Field(None, min_length=1)
    salary: Optional[int] = Field(None, ge=0)
    equity: Optional[float] = Field(None, ge=0, le=1)

    @field_validator("title")
    @classmethod
    def reject_null_title(cls, v: Optional[str]) -> str:
        if v is None:
            raise ValueError("title cannot be null")
        return v

    class Config:
        extra = "forbid"
        strict = True


class JobResponse(BaseModel):
    """Schema for job response"""
    id: int
    title: str
    salary: Optional[int] = None
    equity: Optional[Decimal] = None
    company_handle: str

    class Config:
        from_attributes = True  # Allows conversion from SQLAlchemy models


class JobDetailResponse(BaseModel):
    job: JobResponse


class JobListResponse(BaseModel):
    jobs: List[JobResponse]


class JobDeleteResponse(BaseModel):
    deleted: int
