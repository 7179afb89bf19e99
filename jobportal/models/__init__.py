from jobportal.models.user import User
from jobportal.models.job import Job
from jobportal.models.application import Application, ApplicationStatus

__all__ = [
    "User",
    "Job",
    "Application",
    "ApplicationStatus",
]
