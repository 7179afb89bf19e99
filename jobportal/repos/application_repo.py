from datetime import datetime

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from jobportal.core.errors import DuplicateError
from jobportal.core.security import generate_id
from jobportal.models.application import Application, ApplicationStatus


def create(db: Session, job_id: str, user_id: str, resume: str) -> Application:
    """Insert an Applied record; the (job, user) unique constraint decides duplicates."""
    application = Application(
        id=generate_id(),
        job_id=job_id,
        user_id=user_id,
        resume=resume,
        status=ApplicationStatus.APPLIED.value,
    )
    db.add(application)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise DuplicateError(
            "You have already applied to this job",
            code="DUPLICATE_APPLICATION",
            status_code=409,
        ) from e
    db.refresh(application)
    return application


def get_by_id(db: Session, application_id: str) -> Application | None:
    return (
        db.query(Application)
        .options(joinedload(Application.job))
        .filter(Application.id == application_id)
        .first()
    )


def list_for_user(db: Session, user_id: str) -> list[Application]:
    return (
        db.query(Application)
        .options(joinedload(Application.job), joinedload(Application.updated_by))
        .filter(Application.user_id == user_id)
        .order_by(Application.applied_at.desc())
        .all()
    )


def list_for_job(db: Session, job_id: str) -> list[Application]:
    return (
        db.query(Application)
        .options(joinedload(Application.user), joinedload(Application.updated_by))
        .filter(Application.job_id == job_id)
        .order_by(Application.applied_at.desc())
        .all()
    )


def update_status(
    db: Session,
    application: Application,
    status: ApplicationStatus,
    updated_by: str,
    updated_at: datetime,
) -> Application:
    application.status = status.value
    application.status_updated_at = updated_at
    application.status_updated_by = updated_by
    db.commit()
    db.refresh(application)
    return application
