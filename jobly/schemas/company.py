from pydantic import Field
from typing import List, Optional
from decimal import Decimal

from jobly.schemas.base import CamelModel, RequestModel


class CompanyCreateRequest(RequestModel):
    """Schema for creating a new company"""
    handle: str = Field(..., min_length=1, max_length=25)
    name: str = Field(..., min_length=1)
    description: str
    num_employees: Optional[int] = Field(None, ge=0)
    logo_url: Optional[str] = None


class CompanyUpdateRequest(RequestModel):
    """
    Schema for a partial company update.

    ``name`` and ``description`` may be omitted but not nulled;
    ``num_employees`` and ``logo_url`` accept null to clear them.
    The handle cannot be changed.
    """
    name: str = Field(None, min_length=1)
    description: str = None
    num_employees: Optional[int] = Field(None, ge=0)
    logo_url: Optional[str] = None


class CompanyFilter(RequestModel):
    """Query-string filters for listing companies"""
    min_employees: Optional[int] = Field(None, ge=0)
    max_employees: Optional[int] = Field(None, ge=0)
    name: Optional[str] = Field(None, min_length=1)


class CompanyJob(CamelModel):
    """Job as listed inside a company"""
    id: int
    title: str
    salary: Optional[int] = None
    equity: Optional[Decimal] = None


class CompanyResponse(CamelModel):
    """Schema for company response"""
    handle: str
    name: str
    description: str
    num_employees: Optional[int] = None
    logo_url: Optional[str] = None


class CompanyDetailResponse(CompanyResponse):
    """Company with its jobs"""
    jobs: List[CompanyJob] = []


class CompanyEnvelope(CamelModel):
    company: CompanyResponse


class CompanyDetailEnvelope(CamelModel):
    company: CompanyDetailResponse


class CompanyListEnvelope(CamelModel):
    companies: List[CompanyResponse]
