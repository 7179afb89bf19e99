"""Signup, login, email verification and password reset."""

import logging
import re
from datetime import datetime, timedelta, timezone

from sqlalchemy.orm import Session

from jobportal.config import settings
from jobportal.core.errors import (
    AuthError,
    DuplicateError,
    ForbiddenError,
    InternalError,
    MailDeliveryError,
    NotFoundError,
    ValidationError,
)
from jobportal.core.identity import Identity
from jobportal.core.security import create_access_token, generate_token, hash_password, verify_password
from jobportal.models.user import User
from jobportal.repos import user_repo
from jobportal.services.email_domain import EmailDomainValidator
from jobportal.services.mailer import SmtpMailer, reset_password_email, verification_email

logger = logging.getLogger(__name__)

EMAIL_FORMAT_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def _now() -> datetime:
    return datetime.now(timezone.utc)


def signup(
    db: Session,
    validator: EmailDomainValidator,
    mailer: SmtpMailer,
    *,
    name: str,
    email: str,
    password: str,
    role: str,
    company_name: str | None = None,
) -> dict:
    if user_repo.get_by_email(db, email):
        raise DuplicateError("An account with this email already exists", field="email", code="DUPLICATE_EMAIL")
    if not EMAIL_FORMAT_RE.match(email):
        raise ValidationError("Please enter a valid email address format", field="email", code="INVALID_FORMAT")
    if not validator.is_valid(email):
        domain = validator.domain_of(email)
        raise ValidationError(
            f'The email domain "{domain}" appears to be invalid or not accepting mail. '
            "Please use a valid email address.",
            field="email",
            code="INVALID_DOMAIN",
        )

    verification_token = generate_token()
    user = user_repo.create(
        db,
        name=name,
        email=email,
        password_hash=hash_password(password),
        role=role,
        company_name=company_name,
        verification_token=verification_token,
        verification_expires=_now() + timedelta(hours=settings.verification_token_expire_hours),
    )
    logger.info("User signed up: %s (%s)", user.email, user.role)

    verify_url = f"{settings.client_url.rstrip('/')}/verify-email.html?token={verification_token}"
    subject, html = verification_email(user.name, verify_url)
    try:
        mailer.send(user.email, subject, html)
        sent = True
    except MailDeliveryError as e:
        logger.warning("Verification email not sent to %s: %s", user.email, e)
        sent = False

    token = create_access_token(user.id, role=user.role, name=user.name, company_name=user.company_name)
    return {
        "message": "Signup successful",
        "token": token,
        "id": user.id,
        "role": user.role,
        "name": user.name,
        "company_name": user.company_name,
        "verification_email_sent": sent,
    }


def login(db: Session, *, email: str, password: str, role: str) -> dict:
    user = user_repo.get_by_email_and_role(db, email, role)
    if not user:
        raise NotFoundError("No account found with this email and role combination", field="email")
    if not verify_password(password, user.password_hash):
        raise AuthError("Incorrect password", field="password", status_code=400)
    if settings.require_verified_email and not user.is_verified:
        raise ForbiddenError("Please verify your email before logging in", code="EMAIL_NOT_VERIFIED")
    logger.info("User logged in: %s (%s)", user.email, user.role)
    token = create_access_token(user.id, role=user.role, name=user.name)
    return {"token": token, "id": user.id, "role": user.role, "name": user.name}


def verify_email(db: Session, token: str) -> None:
    user = user_repo.get_by_verification_token(db, token, _now())
    if not user:
        raise AuthError("Invalid or expired verification token", code="INVALID_OR_EXPIRED_TOKEN", status_code=400)
    user_repo.mark_verified(db, user)
    logger.info("Email verified: %s", user.email)


def forgot_password(db: Session, mailer: SmtpMailer, email: str) -> None:
    user = user_repo.get_by_email(db, email)
    if not user:
        raise NotFoundError("No user with that email", field="email")
    token = generate_token()
    expires_at = _now() + timedelta(minutes=settings.reset_token_expire_minutes)
    user_repo.set_reset_token(db, user, token, expires_at)

    reset_url = f"{settings.client_url.rstrip('/')}/reset-password.html?token={token}"
    subject, html = reset_password_email(reset_url)
    try:
        mailer.send(user.email, subject, html)
    except MailDeliveryError as e:
        logger.error("Reset email to %s failed: %s", user.email, e)
        raise InternalError("Failed to send reset email. Please try again later.") from e
    logger.info("Reset link sent to %s", user.email)


def reset_password(db: Session, token: str, password: str) -> None:
    user = user_repo.get_by_reset_token(db, token, _now())
    if not user:
        raise AuthError("Invalid or expired token", code="INVALID_OR_EXPIRED_TOKEN", status_code=400)
    user_repo.reset_password(db, user, hash_password(password))
    logger.info("Password reset for %s", user.email)


def current_user(db: Session, identity: Identity) -> User:
    user = user_repo.get_by_id(db, identity.id)
    if not user:
        raise NotFoundError("User not found")
    return user
