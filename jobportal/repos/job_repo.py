from sqlalchemy.orm import Session, joinedload

from jobportal.core.security import generate_id
from jobportal.models.job import Job


def create(
    db: Session,
    *,
    posted_by: str,
    company: str,
    title: str,
    description: str,
    location: str | None = None,
    salary: str | None = None,
    experience: str | None = None,
) -> Job:
    job = Job(
        id=generate_id(),
        title=title,
        description=description,
        location=location,
        salary=salary,
        experience=experience,
        posted_by=posted_by,
        company=company,
    )
    db.add(job)
    db.commit()
    db.refresh(job)
    return job


def get_by_id(db: Session, job_id: str) -> Job | None:
    return db.query(Job).filter(Job.id == job_id).first()


def list_all(db: Session) -> list[Job]:
    """Every posting, newest first, with the poster loaded for the listing."""
    return (
        db.query(Job)
        .options(joinedload(Job.employer))
        .order_by(Job.created_at.desc())
        .all()
    )


def list_by_employer(db: Session, user_id: str) -> list[Job]:
    return (
        db.query(Job)
        .filter(Job.posted_by == user_id)
        .order_by(Job.created_at.desc())
        .all()
    )
