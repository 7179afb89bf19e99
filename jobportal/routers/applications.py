import logging

from fastapi import APIRouter, Depends, File, UploadFile, status
from sqlalchemy.orm import Session

from jobportal.core.errors import InternalError, PortalError
from jobportal.core.identity import Identity
from jobportal.database import get_db
from jobportal.dependencies import get_current_identity, require_employer, require_jobseeker
from jobportal.models.application import Application
from jobportal.schemas.application import (
    ApplicantSummary,
    ApplicationEnvelope,
    ApplicationList,
    ApplicationResponse,
    JobApplication,
    JobApplicationList,
    MyApplication,
    PersonSummary,
    ResumePathResponse,
    StatusUpdate,
)
from jobportal.schemas.job import JobResponse
from jobportal.services import application_workflow

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/applications", tags=["applications"])


def _updater(a: Application) -> PersonSummary | None:
    if not a.updated_by:
        return None
    return PersonSummary(id=a.updated_by.id, name=a.updated_by.name)


def _to_my_application(a: Application) -> MyApplication:
    return MyApplication(
        id=a.id,
        job=JobResponse.model_validate(a.job) if a.job else None,
        status=a.status,
        status_updated_at=a.status_updated_at,
        status_updated_by=_updater(a),
        applied_at=a.applied_at,
    )


def _to_job_application(a: Application) -> JobApplication:
    applicant = None
    if a.user:
        applicant = ApplicantSummary(id=a.user.id, name=a.user.name, email=a.user.email)
    return JobApplication(
        id=a.id,
        job_id=a.job_id,
        applicant=applicant,
        resume=a.resume,
        status=a.status,
        status_updated_at=a.status_updated_at,
        status_updated_by=_updater(a),
        applied_at=a.applied_at,
    )


@router.post("/apply/{job_id}", response_model=ApplicationEnvelope, status_code=status.HTTP_201_CREATED)
def apply_to_job(
    job_id: str,
    resume: UploadFile = File(..., description="Resume document"),
    db: Session = Depends(get_db),
    identity: Identity = Depends(require_jobseeker),
):
    try:
        application = application_workflow.apply(db, identity, job_id, resume)
        return ApplicationEnvelope(
            message="Application submitted successfully",
            application=ApplicationResponse.model_validate(application),
        )
    except PortalError:
        raise
    except Exception as e:
        logger.exception("Apply failed for user=%s job=%s: %s", identity.id, job_id, e)
        raise InternalError("Server error") from e


@router.get("/my-applications", response_model=ApplicationList)
def my_applications(
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
):
    applications = application_workflow.list_my_applications(db, identity)
    return ApplicationList(applications=[_to_my_application(a) for a in applications])


@router.get("/job/{job_id}/applications", response_model=JobApplicationList)
def job_applications(
    job_id: str,
    db: Session = Depends(get_db),
    identity: Identity = Depends(require_employer),
):
    applications = application_workflow.list_job_applications(db, identity, job_id)
    return JobApplicationList(applications=[_to_job_application(a) for a in applications])


@router.put("/status/{application_id}", response_model=ApplicationEnvelope)
def update_application_status(
    application_id: str,
    body: StatusUpdate,
    db: Session = Depends(get_db),
    identity: Identity = Depends(require_employer),
):
    try:
        application = application_workflow.update_status(db, identity, application_id, body.status)
        return ApplicationEnvelope(
            message="Application status updated",
            application=ApplicationResponse.model_validate(application),
        )
    except PortalError:
        raise
    except Exception as e:
        logger.exception("Status update failed for application=%s: %s", application_id, e)
        raise InternalError("Server error") from e


@router.get("/resume/{application_id}", response_model=ResumePathResponse)
def application_resume(
    application_id: str,
    db: Session = Depends(get_db),
    identity: Identity = Depends(require_employer),
):
    """Stored path of the applicant's resume, for resolving against /uploads."""
    return ResumePathResponse(resume_path=application_workflow.get_resume_path(db, identity, application_id))
