from sqlalchemy import Column, String, Boolean, DateTime
from sqlalchemy.orm import relationship, validates
from sqlalchemy.sql import func

from jobportal.database import Base

ROLE_JOBSEEKER = "jobseeker"
ROLE_EMPLOYER = "employer"
ROLES = (ROLE_JOBSEEKER, ROLE_EMPLOYER)


class User(Base):
    __tablename__ = "users"

    id = Column(String, primary_key=True, index=True)
    name = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    password_hash = Column(String, nullable=False)
    role = Column(String, nullable=False)
    company_name = Column(String, nullable=True)  # employers only
    is_verified = Column(Boolean, default=False, nullable=False)
    verification_token = Column(String, index=True, nullable=True)
    verification_expires = Column(DateTime(timezone=True), nullable=True)
    reset_password_token = Column(String, index=True, nullable=True)
    reset_password_expires = Column(DateTime(timezone=True), nullable=True)
    profile_photo = Column(String, nullable=True)
    resume = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    jobs = relationship("Job", back_populates="employer", foreign_keys="Job.posted_by")
    applications = relationship("Application", back_populates="user", foreign_keys="Application.user_id")

    @validates("role")
    def _validate_role(self, key, value):
        if value not in ROLES:
            raise ValueError(f"Unknown role: {value}")
        if self.role is not None and self.role != value:
            raise ValueError("Role cannot be changed after creation")
        return value
