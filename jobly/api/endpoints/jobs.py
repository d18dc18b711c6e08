import logging
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from jobly.core.database import get_db
from jobly.core.deps import CurrentUser, query_model, require_admin
from jobly.crud import job as job_crud
from jobly.schemas.base import DeletedResponse, changes_from, criteria_from
from jobly.schemas.job import (
    JobCreateRequest,
    JobEnvelope,
    JobFilter,
    JobListEnvelope,
    JobUpdateRequest,
)

router = APIRouter(prefix="/jobs", tags=["Jobs"])
logger = logging.getLogger(__name__)


@router.post("/", status_code=201, response_model=JobEnvelope)
def create_job(
    request: JobCreateRequest,
    db: Session = Depends(get_db),
    admin: CurrentUser = Depends(require_admin),
):
    """
    Create a job posting: { title, salary, equity, companyHandle }.

    Authorization required: admin
    """
    job = job_crud.create(db, request.model_dump(by_alias=True))
    return {"job": job}


@router.get("/", response_model=JobListEnvelope)
def list_jobs(
    filters: JobFilter = Depends(query_model(JobFilter)),
    db: Session = Depends(get_db),
):
    """
    List jobs ordered by id.

    Optional filters:
    - title: case-insensitive partial match
    - minSalary: lowest acceptable salary
    - hasEquity: true for jobs offering equity; false lists everything
    """
    return {"jobs": job_crud.find_all(db, criteria_from(filters))}


@router.get("/{job_id}", response_model=JobEnvelope)
def get_job(job_id: int, db: Session = Depends(get_db)):
    """Retrieve a job by ID."""
    return {"job": job_crud.get(db, job_id)}


@router.patch("/{job_id}", response_model=JobEnvelope)
def update_job(
    job_id: int,
    request: JobUpdateRequest,
    db: Session = Depends(get_db),
    admin: CurrentUser = Depends(require_admin),
):
    """
    Partially update a job: { title, salary, equity }.

    Authorization required: admin
    """
    return {"job": job_crud.update(db, job_id, changes_from(request))}


@router.delete("/{job_id}", response_model=DeletedResponse)
def delete_job(
    job_id: int,
    db: Session = Depends(get_db),
    admin: CurrentUser = Depends(require_admin),
):
    """
    Delete a job by ID.

    Authorization required: admin
    """
    job_crud.remove(db, job_id)
    logger.info(f"{admin.username} deleted job {job_id}")
    return {"deleted": job_id}
