import logging

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from jobportal.core.errors import ForbiddenError, InternalError
from jobportal.core.identity import Identity
from jobportal.core.security import decode_access_token
from jobportal.database import get_db
from jobportal.models.user import ROLE_EMPLOYER, ROLE_JOBSEEKER
from jobportal.repos.user_repo import get_by_id
from jobportal.services.email_domain import EmailDomainValidator
from jobportal.services.mailer import SmtpMailer

logger = logging.getLogger(__name__)
security = HTTPBearer(auto_error=False)


def get_current_identity(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> Identity:
    """Decode the bearer token once per request; no database access."""
    if not credentials:
        logger.info("Auth failed: missing bearer credentials")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )
    claims = decode_access_token(credentials.credentials)
    if not claims:
        logger.info("Auth failed: invalid or expired token")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
        )
    return Identity.from_claims(claims)


def _require_role(db: Session, identity: Identity, role: str) -> Identity:
    try:
        user = get_by_id(db, identity.id)
    except Exception as e:
        logger.exception("Role check lookup failed for user=%s: %s", identity.id, e)
        raise InternalError("Server error") from e
    if not user or user.role != role:
        raise ForbiddenError(f"Access denied: {role} role required")
    return identity


def require_jobseeker(
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
) -> Identity:
    return _require_role(db, identity, ROLE_JOBSEEKER)


def require_employer(
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
) -> Identity:
    return _require_role(db, identity, ROLE_EMPLOYER)


def get_email_validator() -> EmailDomainValidator:
    return EmailDomainValidator()


def get_mailer() -> SmtpMailer:
    return SmtpMailer()
