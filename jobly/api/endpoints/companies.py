import logging
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from jobly.core.database import get_db
from jobly.core.deps import CurrentUser, query_model, require_admin
from jobly.crud import company as company_crud
from jobly.schemas.base import DeletedResponse, changes_from, criteria_from
from jobly.schemas.company import (
    CompanyCreateRequest,
    CompanyDetailEnvelope,
    CompanyEnvelope,
    CompanyFilter,
    CompanyListEnvelope,
    CompanyUpdateRequest,
)

router = APIRouter(prefix="/companies", tags=["Companies"])
logger = logging.getLogger(__name__)


@router.post("/", status_code=201, response_model=CompanyEnvelope)
def create_company(
    request: CompanyCreateRequest,
    db: Session = Depends(get_db),
    admin: CurrentUser = Depends(require_admin),
):
    """
    Create a company.

    Authorization required: admin
    """
    company = company_crud.create(db, request.model_dump(by_alias=True))
    return {"company": company}


@router.get("/", response_model=CompanyListEnvelope)
def list_companies(
    filters: CompanyFilter = Depends(query_model(CompanyFilter)),
    db: Session = Depends(get_db),
):
    """
    List companies ordered by name.

    Optional filters:
    - minEmployees / maxEmployees: employee-count range (min may not exceed max)
    - name: case-insensitive partial match
    """
    return {"companies": company_crud.find_all(db, criteria_from(filters))}


@router.get("/{handle}", response_model=CompanyDetailEnvelope)
def get_company(handle: str, db: Session = Depends(get_db)):
    """Retrieve a company with its jobs."""
    return {"company": company_crud.get(db, handle)}


@router.patch("/{handle}", response_model=CompanyEnvelope)
def update_company(
    handle: str,
    request: CompanyUpdateRequest,
    db: Session = Depends(get_db),
    admin: CurrentUser = Depends(require_admin),
):
    """
    Partially update a company: { name, description, numEmployees, logoUrl }.

    Authorization required: admin
    """
    return {"company": company_crud.update(db, handle, changes_from(request))}


@router.delete("/{handle}", response_model=DeletedResponse)
def delete_company(
    handle: str,
    db: Session = Depends(get_db),
    admin: CurrentUser = Depends(require_admin),
):
    """
    Delete a company and its jobs.

    Authorization required: admin
    """
    company_crud.remove(db, handle)
    logger.info(f"{admin.username} deleted company {handle}")
    return {"deleted": handle}
