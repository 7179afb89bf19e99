import logging
import time
from pathlib import Path

from fastapi import UploadFile

from jobportal.config import settings
from jobportal.core.errors import PayloadTooLargeError, ValidationError

logger = logging.getLogger(__name__)

UPLOADS_DIR = "uploads"
KIND_RESUMES = "resumes"
KIND_PROFILES = "profiles"


def _allowed_extensions(kind: str) -> set[str]:
    raw = settings.allowed_resume_extensions if kind == KIND_RESUMES else settings.allowed_photo_extensions
    return {e.strip().lower() for e in raw.split(",") if e.strip()}


def upload_base() -> Path:
    return Path(settings.upload_root).resolve()


def ensure_upload_dirs() -> list[Path]:
    dirs = [upload_base() / UPLOADS_DIR / kind for kind in (KIND_RESUMES, KIND_PROFILES)]
    for d in dirs:
        d.mkdir(parents=True, exist_ok=True)
    return dirs


def save_upload(upload: UploadFile | None, kind: str) -> str:
    """
    Persist an uploaded file as uploads/<kind>/<epoch-ms><ext> and return that relative path.
    Only the path is stored on records; the bytes stay on disk.
    """
    if kind not in (KIND_RESUMES, KIND_PROFILES):
        raise ValueError(f"Unknown upload kind: {kind}")
    if upload is None or not upload.filename:
        raise ValidationError("No file uploaded", field="resume" if kind == KIND_RESUMES else "photo")

    ext = Path(upload.filename).suffix.lower()
    if ext not in _allowed_extensions(kind):
        raise ValidationError(f"File type '{ext or 'none'}' is not allowed", code="INVALID_FILE_TYPE")

    max_bytes = settings.max_upload_mb * 1024 * 1024
    # One byte past the cap is enough to know the file is too large.
    content = upload.file.read(max_bytes + 1)
    if len(content) > max_bytes:
        raise PayloadTooLargeError(f"File too large. Max allowed is {settings.max_upload_mb}MB.")
    if not content:
        raise ValidationError("Uploaded file is empty")

    target_dir = upload_base() / UPLOADS_DIR / kind
    target_dir.mkdir(parents=True, exist_ok=True)
    stamp = int(time.time() * 1000)
    while True:
        name = f"{stamp}{ext}"
        try:
            with open(target_dir / name, "xb") as fh:
                fh.write(content)
            break
        except FileExistsError:
            stamp += 1
    rel_path = f"{UPLOADS_DIR}/{kind}/{name}"
    logger.info("Stored upload %s (%d bytes)", rel_path, len(content))
    return rel_path


def delete_upload(rel_path: str) -> None:
    """Remove a file written for a request that did not go through."""
    target = upload_base() / rel_path
    try:
        target.unlink(missing_ok=True)
    except OSError as e:
        logger.warning("Could not remove orphaned upload %s: %s", rel_path, e)
