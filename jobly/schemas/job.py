from pydantic import Field
from typing import List, Optional
from decimal import Decimal

from jobly.schemas.base import CamelModel, RequestModel

# Fraction between 0 and 1, sent as a string to keep it exact ("0.25", "1.0")
EQUITY_PATTERN = r"^(0(\.\d+)?|1(\.0+)?)$"


class JobCreateRequest(RequestModel):
    """Schema for creating a new job"""
    title: str = Field(..., min_length=1)
    salary: Optional[int] = Field(None, ge=0)
    equity: Optional[str] = Field(None, pattern=EQUITY_PATTERN)
    company_handle: str = Field(..., min_length=1, max_length=25)


class JobUpdateRequest(RequestModel):
    """Schema for a partial job update; id and company handle are fixed."""
    title: str = Field(None, min_length=1)
    salary: Optional[int] = Field(None, ge=0)
    equity: Optional[str] = Field(None, pattern=EQUITY_PATTERN)


class JobFilter(RequestModel):
    """Query-string filters for listing jobs"""
    title: Optional[str] = Field(None, min_length=1)
    min_salary: Optional[int] = Field(None, ge=0)
    has_equity: Optional[bool] = None


class JobResponse(CamelModel):
    """Schema for job response"""
    id: int
    title: str
    salary: Optional[int] = None
    equity: Optional[Decimal] = None
    company_handle: str


class JobEnvelope(CamelModel):
    job: JobResponse


class JobListEnvelope(CamelModel):
    jobs: List[JobResponse]
