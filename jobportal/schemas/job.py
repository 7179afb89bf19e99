from datetime import datetime

from pydantic import BaseModel, Field


class JobCreate(BaseModel):
    title: str = Field(min_length=1, max_length=200)
    description: str = Field(min_length=1, max_length=20000)
    location: str | None = Field(default=None, max_length=200)
    salary: str | None = Field(default=None, max_length=100)
    experience: str | None = Field(default=None, max_length=100)


class JobResponse(BaseModel):
    id: str
    title: str
    description: str
    location: str | None = None
    salary: str | None = None
    experience: str | None = None
    company: str  # as posted
    posted_by: str
    created_at: datetime | None = None

    class Config:
        from_attributes = True


class JobListItem(JobResponse):
    employer_company_name: str | None = None  # poster's current company name
