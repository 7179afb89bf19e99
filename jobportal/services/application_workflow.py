"""
Application lifecycle: apply, listings, employer status changes and resume lookup.

Status transitions are flat: an employer may move an application to any status
from any status. The table below is the single place to tighten that.
"""

import logging
from datetime import datetime, timezone

from fastapi import UploadFile
from sqlalchemy.orm import Session

from jobportal.core.errors import DuplicateError, ForbiddenError, NotFoundError, ValidationError
from jobportal.core.identity import Identity
from jobportal.models.application import Application, ApplicationStatus
from jobportal.models.job import Job
from jobportal.repos import application_repo, job_repo
from jobportal.services import file_storage

logger = logging.getLogger(__name__)

ALLOWED_TRANSITIONS: dict[ApplicationStatus, frozenset[ApplicationStatus]] = {
    status: frozenset(ApplicationStatus) for status in ApplicationStatus
}


def parse_status(value: str) -> ApplicationStatus:
    try:
        return ApplicationStatus(value)
    except ValueError as e:
        allowed = ", ".join(s.value for s in ApplicationStatus)
        raise ValidationError(f"Invalid status '{value}'. Allowed: {allowed}", field="status", code="INVALID_STATUS") from e


def can_transition(current: ApplicationStatus, target: ApplicationStatus) -> bool:
    return target in ALLOWED_TRANSITIONS.get(current, frozenset())


def _owned_job(db: Session, identity: Identity, job_id: str) -> Job:
    job = job_repo.get_by_id(db, job_id)
    if not job:
        raise NotFoundError("Job not found")
    if job.posted_by != identity.id:
        raise ForbiddenError("Not authorized to view these applications")
    return job


def _owned_application(db: Session, identity: Identity, application_id: str, action: str) -> Application:
    application = application_repo.get_by_id(db, application_id)
    if not application:
        raise NotFoundError("Application not found")
    if application.job is None or application.job.posted_by != identity.id:
        raise ForbiddenError(f"Not authorized to {action}")
    return application


def apply(db: Session, identity: Identity, job_id: str, resume: UploadFile | None) -> Application:
    job = job_repo.get_by_id(db, job_id)
    if not job:
        raise NotFoundError("Job not found")
    resume_path = file_storage.save_upload(resume, file_storage.KIND_RESUMES)
    try:
        application = application_repo.create(db, job.id, identity.id, resume_path)
    except DuplicateError:
        file_storage.delete_upload(resume_path)
        logger.info("Duplicate application rejected: user=%s job=%s", identity.id, job.id)
        raise
    except Exception:
        file_storage.delete_upload(resume_path)
        raise
    logger.info("Application submitted: user=%s job=%s application=%s", identity.id, job.id, application.id)
    return application


def list_my_applications(db: Session, identity: Identity) -> list[Application]:
    return application_repo.list_for_user(db, identity.id)


def list_job_applications(db: Session, identity: Identity, job_id: str) -> list[Application]:
    job = _owned_job(db, identity, job_id)
    return application_repo.list_for_job(db, job.id)


def update_status(db: Session, identity: Identity, application_id: str, status: str) -> Application:
    application = _owned_application(db, identity, application_id, "update this application")
    target = parse_status(status)
    current = parse_status(application.status)
    if not can_transition(current, target):
        raise ValidationError(
            f"Cannot move application from '{current.value}' to '{target.value}'",
            field="status",
            code="INVALID_TRANSITION",
        )
    updated = application_repo.update_status(db, application, target, identity.id, datetime.now(timezone.utc))
    logger.info(
        "Application %s status %s -> %s by %s", application_id, current.value, target.value, identity.id
    )
    return updated


def get_resume_path(db: Session, identity: Identity, application_id: str) -> str:
    application = _owned_application(db, identity, application_id, "view this resume")
    return application.resume
