import enum

from sqlalchemy import Column, String, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from jobportal.database import Base


class ApplicationStatus(str, enum.Enum):
    APPLIED = "Applied"
    UNDER_REVIEW = "Under Review"
    SHORTLISTED = "Shortlisted"
    REJECTED = "Rejected"
    ACCEPTED = "Accepted"


class Application(Base):
    """A jobseeker's application to one job. At most one per (job, user)."""

    __tablename__ = "applications"
    __table_args__ = (UniqueConstraint("job_id", "user_id", name="uq_applications_job_user"),)

    id = Column(String, primary_key=True, index=True)
    job_id = Column(String, ForeignKey("jobs.id"), index=True, nullable=False)
    user_id = Column(String, ForeignKey("users.id"), index=True, nullable=False)
    resume = Column(String, nullable=False)
    status = Column(String, default=ApplicationStatus.APPLIED.value, nullable=False)
    status_updated_at = Column(DateTime(timezone=True), server_default=func.now())
    status_updated_by = Column(String, ForeignKey("users.id"), nullable=True)
    applied_at = Column(DateTime(timezone=True), server_default=func.now())

    job = relationship("Job", back_populates="applications")
    user = relationship("User", back_populates="applications", foreign_keys=[user_id])
    updated_by = relationship("User", foreign_keys=[status_updated_by])
