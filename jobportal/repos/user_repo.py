from datetime import datetime

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from jobportal.core.errors import DuplicateError
from jobportal.core.security import generate_id
from jobportal.models.user import User, ROLE_EMPLOYER


def get_by_email(db: Session, email: str) -> User | None:
    return db.query(User).filter(User.email == email).first()


def get_by_id(db: Session, user_id: str) -> User | None:
    return db.query(User).filter(User.id == user_id).first()


def get_by_email_and_role(db: Session, email: str, role: str) -> User | None:
    return db.query(User).filter(User.email == email, User.role == role).first()


def create(
    db: Session,
    *,
    name: str,
    email: str,
    password_hash: str,
    role: str,
    company_name: str | None = None,
    verification_token: str | None = None,
    verification_expires: datetime | None = None,
) -> User:
    user = User(
        id=generate_id(),
        name=name,
        email=email,
        password_hash=password_hash,
        role=role,
        company_name=company_name if role == ROLE_EMPLOYER else None,
        is_verified=False,
        verification_token=verification_token,
        verification_expires=verification_expires,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError as e:
        # Lost a signup race on the unique email index.
        db.rollback()
        raise DuplicateError(
            "An account with this email already exists", field="email", code="DUPLICATE_EMAIL"
        ) from e
    db.refresh(user)
    return user


def get_by_verification_token(db: Session, token: str, now: datetime) -> User | None:
    return (
        db.query(User)
        .filter(User.verification_token == token, User.verification_expires > now)
        .first()
    )


def get_by_reset_token(db: Session, token: str, now: datetime) -> User | None:
    return (
        db.query(User)
        .filter(User.reset_password_token == token, User.reset_password_expires > now)
        .first()
    )


def mark_verified(db: Session, user: User) -> User:
    user.is_verified = True
    user.verification_token = None
    user.verification_expires = None
    db.commit()
    db.refresh(user)
    return user


def set_reset_token(db: Session, user: User, token: str, expires_at: datetime) -> User:
    user.reset_password_token = token
    user.reset_password_expires = expires_at
    db.commit()
    db.refresh(user)
    return user


def reset_password(db: Session, user: User, password_hash: str) -> User:
    user.password_hash = password_hash
    user.reset_password_token = None
    user.reset_password_expires = None
    db.commit()
    db.refresh(user)
    return user


def set_profile_photo(db: Session, user: User, path: str) -> User:
    user.profile_photo = path
    db.commit()
    db.refresh(user)
    return user


def set_resume(db: Session, user: User, path: str) -> User:
    user.resume = path
    db.commit()
    db.refresh(user)
    return user
