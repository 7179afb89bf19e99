import logging

from fastapi import APIRouter, Depends, File, UploadFile
from sqlalchemy.orm import Session

from jobportal.core.errors import InternalError, NotFoundError, PortalError
from jobportal.core.identity import Identity
from jobportal.database import get_db
from jobportal.dependencies import get_current_identity
from jobportal.repos import user_repo
from jobportal.schemas.upload import PhotoUploadResponse, ResumeUploadResponse
from jobportal.services import file_storage

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/upload", tags=["upload"])


@router.post("/profile-photo", response_model=PhotoUploadResponse)
def upload_profile_photo(
    photo: UploadFile = File(...),
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
):
    try:
        user = user_repo.get_by_id(db, identity.id)
        if not user:
            raise NotFoundError("User not found")
        path = file_storage.save_upload(photo, file_storage.KIND_PROFILES)
        try:
            user_repo.set_profile_photo(db, user, path)
        except Exception:
            file_storage.delete_upload(path)
            raise
        return PhotoUploadResponse(photo=path)
    except PortalError:
        raise
    except Exception as e:
        logger.exception("Profile photo upload failed for user=%s: %s", identity.id, e)
        raise InternalError("Server error") from e


@router.post("/resume", response_model=ResumeUploadResponse)
def upload_resume(
    resume: UploadFile = File(...),
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
):
    try:
        user = user_repo.get_by_id(db, identity.id)
        if not user:
            raise NotFoundError("User not found")
        path = file_storage.save_upload(resume, file_storage.KIND_RESUMES)
        try:
            user_repo.set_resume(db, user, path)
        except Exception:
            file_storage.delete_upload(path)
            raise
        return ResumeUploadResponse(resume=path)
    except PortalError:
        raise
    except Exception as e:
        logger.exception("Resume upload failed for user=%s: %s", identity.id, e)
        raise InternalError("Server error") from e
