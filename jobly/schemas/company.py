"""
Pydantic schemas for Company API requests/responses.

Request bodies use camelCase field names (numEmployees, logoUrl); responses
are serialized back to the same names.
"""

from typing import List, Optional
from pydantic import BaseModel, Field, field_validator
import re

URL_PATTERN = re.compile(r"^https?://\S+$")


def _check_logo_url(v: Optional[str]) -> Optional[str]:
    if v is not None and not URL_PATTERN.match(v):
        raise ValueError('logoUrl must be an http(s) URL')
    return v


class CompanyCreateRequest(BaseModel):
    """Schema for creating a new company"""
    handle: str = Field(..., min_length=1, max_length=25)
    name: str = Field(..., min_length=1)
    description: str
    num_employees: Optional[int] = Field(None, alias="numEmployees", ge=0)
    logo_url: Optional[str] = Field(None, alias="logoUrl")

    @field_validator('logo_url')
    @classmethod
    def validate_logo_url(cls, v: Optional[str]) -> Optional[str]:
        return _check_logo_url(v)

    class Config:
        populate_by_name = True
        extra = "forbid"
        strict = True


class CompanyUpdateRequest(BaseModel):
    """Schema for a partial company update; the handle cannot change."""
    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    num_employees: Optional[int] = Field(None, alias="numEmployees", ge=0)
    logo_url: Optional[str] = Field(None, alias="logoUrl")

    @field_validator('logo_url')
    @classmethod
    def validate_logo_url(cls, v: Optional[str]) -> Optional[str]:
        return _check_logo_url(v)

    @field_validator("name", "description")
    @classmethod
    def reject_null(cls, v: Optional[str]) -> str:
        if v is None:
            raise ValueError("cannot be null")
        return v

    class Config:
        populate_by_name = True
        extra = "forbid"
        strict = True


class CompanyResponse(BaseModel):
    handle: str
    name: str
    description: str
    num_employees: Optional[int] = Field(None, serialization_alias="numEmployees")
    logo_url: Optional[str] = Field(None, serialization_alias="logoUrl")

    class Config:
        from_attributes = True


class CompanyDetailResponse(BaseModel):
    company: CompanyResponse


class CompanyListResponse(BaseModel):
    companies: List[CompanyResponse]


class CompanyDeleteResponse(BaseModel):
    deleted: str
