from datetime import datetime

from pydantic import BaseModel

from jobportal.schemas.job import JobResponse


class StatusUpdate(BaseModel):
    # Checked against ApplicationStatus in the workflow so bad values get a 400 with the allowed list.
    status: str


class PersonSummary(BaseModel):
    id: str
    name: str


class ApplicantSummary(PersonSummary):
    email: str


class ApplicationResponse(BaseModel):
    id: str
    job_id: str
    user_id: str
    resume: str
    status: str
    status_updated_at: datetime | None = None
    status_updated_by: str | None = None
    applied_at: datetime | None = None

    class Config:
        from_attributes = True


class MyApplication(BaseModel):
    """A jobseeker's view of their own application; the resume path is not exposed."""

    id: str
    job: JobResponse | None
    status: str
    status_updated_at: datetime | None = None
    status_updated_by: PersonSummary | None = None
    applied_at: datetime | None = None


class JobApplication(BaseModel):
    id: str
    job_id: str
    applicant: ApplicantSummary | None
    resume: str
    status: str
    status_updated_at: datetime | None = None
    status_updated_by: PersonSummary | None = None
    applied_at: datetime | None = None


class ApplicationEnvelope(BaseModel):
    message: str
    application: ApplicationResponse


class ApplicationList(BaseModel):
    applications: list[MyApplication]


class JobApplicationList(BaseModel):
    applications: list[JobApplication]


class ResumePathResponse(BaseModel):
    resume_path: str
