import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from jobportal.core.errors import InternalError, NotFoundError, PortalError, ValidationError
from jobportal.core.identity import Identity
from jobportal.database import get_db
from jobportal.dependencies import get_current_identity
from jobportal.models.job import Job
from jobportal.models.user import ROLE_EMPLOYER
from jobportal.repos import job_repo
from jobportal.repos.user_repo import get_by_id as get_user_by_id
from jobportal.schemas.job import JobCreate, JobListItem, JobResponse

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/jobs", tags=["jobs"])


def _job_to_list_item(job: Job) -> JobListItem:
    item = JobListItem.model_validate(job)
    item.employer_company_name = job.employer.company_name if job.employer else None
    return item


@router.post("", response_model=JobResponse, status_code=status.HTTP_201_CREATED)
def create_job(
    data: JobCreate,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
):
    """Post a job. The employer's company name is copied onto the posting."""
    try:
        employer = get_user_by_id(db, identity.id)
        if not employer or employer.role != ROLE_EMPLOYER or not employer.company_name:
            raise ValidationError("Company name not found. Please update your employer profile first.")
        job = job_repo.create(
            db,
            posted_by=employer.id,
            company=employer.company_name,
            title=data.title,
            description=data.description,
            location=data.location,
            salary=data.salary,
            experience=data.experience,
        )
        logger.info("Job posted: %s by %s", job.id, employer.id)
        return job
    except PortalError:
        raise
    except Exception as e:
        logger.exception("Creating job failed for user=%s: %s", identity.id, e)
        raise InternalError("Failed to create job") from e


@router.get("", response_model=list[JobListItem])
def list_jobs(
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
):
    jobs = job_repo.list_all(db)
    logger.debug("GET /jobs user=%s count=%d", identity.id, len(jobs))
    return [_job_to_list_item(j) for j in jobs]


@router.get("/dashboard", response_model=list[JobResponse])
def employer_dashboard(
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
):
    """Jobs posted by the caller."""
    return job_repo.list_by_employer(db, identity.id)


@router.get("/{job_id}", response_model=JobResponse)
def get_job(
    job_id: str,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
):
    job = job_repo.get_by_id(db, job_id)
    if not job:
        raise NotFoundError("Job not found")
    return job
