import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from jobportal.core.errors import InternalError, PortalError
from jobportal.core.identity import Identity
from jobportal.database import get_db
from jobportal.dependencies import get_current_identity, get_email_validator, get_mailer
from jobportal.schemas.auth import (
    SignupRequest,
    SignupResponse,
    LoginRequest,
    LoginResponse,
    ForgotPasswordRequest,
    ResetPasswordRequest,
    MessageResponse,
    UserProfile,
)
from jobportal.services import auth_service
from jobportal.services.email_domain import EmailDomainValidator
from jobportal.services.mailer import SmtpMailer

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/signup", response_model=SignupResponse, status_code=status.HTTP_201_CREATED)
def signup(
    data: SignupRequest,
    db: Session = Depends(get_db),
    validator: EmailDomainValidator = Depends(get_email_validator),
    mailer: SmtpMailer = Depends(get_mailer),
):
    try:
        return auth_service.signup(
            db,
            validator,
            mailer,
            name=data.name,
            email=data.email,
            password=data.password,
            role=data.role,
            company_name=data.company_name,
        )
    except PortalError:
        raise
    except Exception as e:
        logger.exception("Signup failed for email=%s: %s", data.email, e)
        raise InternalError("Signup failed") from e


@router.post("/login", response_model=LoginResponse)
def login(data: LoginRequest, db: Session = Depends(get_db)):
    try:
        return auth_service.login(db, email=data.email, password=data.password, role=data.role)
    except PortalError:
        raise
    except Exception as e:
        logger.exception("Login failed for email=%s: %s", data.email, e)
        raise InternalError("Login failed") from e


@router.get("/verify-email/{token}", response_model=MessageResponse)
def verify_email(token: str, db: Session = Depends(get_db)):
    try:
        auth_service.verify_email(db, token)
        return MessageResponse(message="Email verified successfully! You can now log in.")
    except PortalError:
        raise
    except Exception as e:
        logger.exception("Email verification failed: %s", e)
        raise InternalError("Email verification failed") from e


@router.post("/forgot-password", response_model=MessageResponse)
def forgot_password(
    data: ForgotPasswordRequest,
    db: Session = Depends(get_db),
    mailer: SmtpMailer = Depends(get_mailer),
):
    try:
        auth_service.forgot_password(db, mailer, data.email)
        return MessageResponse(message="Reset link sent to your email")
    except PortalError:
        raise
    except Exception as e:
        logger.exception("Forgot-password flow failed for email=%s: %s", data.email, e)
        raise InternalError("Failed to process request") from e


@router.post("/reset-password/{token}", response_model=MessageResponse)
def reset_password(token: str, data: ResetPasswordRequest, db: Session = Depends(get_db)):
    try:
        auth_service.reset_password(db, token, data.password)
        return MessageResponse(message="Password has been reset successfully")
    except PortalError:
        raise
    except Exception as e:
        logger.exception("Password reset failed: %s", e)
        raise InternalError("Failed to reset password") from e


@router.get("/me", response_model=UserProfile)
def get_me(
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
):
    user = auth_service.current_user(db, identity)
    return UserProfile.model_validate(user)
