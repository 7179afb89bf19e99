import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from sqlalchemy import text

from jobportal.config import settings
from jobportal.core.errors import PortalError
from jobportal.core.rate_limiter import bucket_for, is_auth_path, rate_limiter
from jobportal.database import init_db, engine
from jobportal.logging_config import setup_logging
from jobportal.routers import applications, auth, jobs, upload
from jobportal.services.file_storage import UPLOADS_DIR, ensure_upload_dirs, upload_base

setup_logging()
logger = logging.getLogger(__name__)

SECRET_KEY_PLACEHOLDER = "replace-with-a-long-random-secret-key"

app = FastAPI(
    title="JobPortal API",
    description="Accounts, job postings and applications for jobseekers and employers.",
    version="1.0.0",
)

cors_origins = [o.strip() for o in settings.cors_allow_origins.split(",") if o.strip()]
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth.router)
app.include_router(jobs.router)
app.include_router(applications.router)
app.include_router(upload.router)

# Uploaded resumes and photos, addressed by the relative paths stored on records.
app.mount(
    f"/{UPLOADS_DIR}",
    StaticFiles(directory=str(upload_base() / UPLOADS_DIR), check_dir=False),
    name="uploads",
)


@app.exception_handler(PortalError)
async def portal_error_handler(request, exc: PortalError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(Exception)
async def unhandled_exception_handler(request, exc):
    logger.exception("Unhandled server error on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


@app.middleware("http")
async def apply_rate_limits(request, call_next):
    path = request.url.path
    if request.method == "OPTIONS" or not is_auth_path(path):
        return await call_next(request)

    limit = settings.rate_limit_auth_per_min
    if limit > 0:
        client_ip = request.client.host if request.client else "unknown"
        key = f"{client_ip}:{bucket_for(path)}"
        allowed, retry_after = rate_limiter.allow(key, limit=limit, window_seconds=60)
        if not allowed:
            return JSONResponse(
                status_code=429,
                content={"detail": "Too many requests. Please retry shortly."},
                headers={"Retry-After": str(retry_after)},
            )

    return await call_next(request)


@app.get("/health/live")
def health_live():
    return {"status": "ok"}


@app.get("/health/ready")
def health_ready():
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return {"status": "ready"}
    except Exception:
        logger.exception("Readiness check failed")
        return JSONResponse(status_code=503, content={"status": "not_ready"})


@app.on_event("startup")
def on_startup():
    logger.info("Starting JobPortal API")
    env = (settings.app_env or "development").lower()
    if env in {"production", "prod"}:
        if settings.secret_key == SECRET_KEY_PLACEHOLDER:
            raise RuntimeError("SECRET_KEY placeholder is not allowed in production")
        if "username:password@" in settings.database_url:
            raise RuntimeError("DATABASE_URL placeholder credentials are not allowed in production")
    else:
        if settings.secret_key == SECRET_KEY_PLACEHOLDER:
            logger.warning("SECRET_KEY is using placeholder default. Set SECRET_KEY in .env for secure deployments.")
        if "username:password@" in settings.database_url:
            logger.warning("DATABASE_URL appears to use placeholder credentials. Set DATABASE_URL in .env.")
        if not settings.smtp_host:
            logger.warning("SMTP_HOST not set; verification and reset emails cannot be delivered.")
    ensure_upload_dirs()
    init_db()


@app.get("/")
def root():
    return {"message": "JobPortal API. See /docs for the available endpoints."}
