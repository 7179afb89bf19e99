from pydantic import BaseModel


class PhotoUploadResponse(BaseModel):
    success: bool = True
    photo: str


class ResumeUploadResponse(BaseModel):
    success: bool = True
    resume: str
