from sqlalchemy import Column, String, Text, ForeignKey, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from jobportal.database import Base


class Job(Base):
    __tablename__ = "jobs"

    id = Column(String, primary_key=True, index=True)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=False)
    location = Column(String)
    salary = Column(String)
    experience = Column(String)
    posted_by = Column(String, ForeignKey("users.id"), index=True, nullable=False)
    # Snapshot of the employer's company name when the job was posted.
    company = Column(String, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    employer = relationship("User", back_populates="jobs", foreign_keys=[posted_by])
    applications = relationship("Application", back_populates="job")
