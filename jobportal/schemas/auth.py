from typing import Literal

from pydantic import BaseModel, EmailStr, field_validator, model_validator

Role = Literal["jobseeker", "employer"]


def _password_min_length(v: str) -> str:
    if len(v) < 8:
        raise ValueError("Password must be at least 8 characters")
    return v


def normalize_email(v: str) -> str:
    """Addresses are stored and looked up lowercased."""
    return v.strip().lower()


class SignupRequest(BaseModel):
    name: str
    # Plain str: format and domain checks happen in the service so they can report their own codes.
    email: str
    password: str
    role: Role
    company_name: str | None = None

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Name is required")
        return v.strip()

    @field_validator("email")
    @classmethod
    def email_normalized(cls, v: str) -> str:
        return normalize_email(v)

    @field_validator("password")
    @classmethod
    def password_min_length(cls, v: str) -> str:
        return _password_min_length(v)

    @model_validator(mode="after")
    def company_name_for_employers(self):
        if self.role == "employer":
            if not self.company_name or not self.company_name.strip():
                raise ValueError("Company name is required for employer accounts")
            self.company_name = self.company_name.strip()
        else:
            self.company_name = None
        return self


class SignupResponse(BaseModel):
    message: str
    token: str
    id: str
    role: Role
    name: str
    company_name: str | None = None
    verification_email_sent: bool = False


class LoginRequest(BaseModel):
    email: EmailStr
    password: str
    role: Role

    @field_validator("email")
    @classmethod
    def email_normalized(cls, v: str) -> str:
        return normalize_email(v)


class LoginResponse(BaseModel):
    token: str
    id: str
    role: Role
    name: str


class ForgotPasswordRequest(BaseModel):
    email: EmailStr

    @field_validator("email")
    @classmethod
    def email_normalized(cls, v: str) -> str:
        return normalize_email(v)


class ResetPasswordRequest(BaseModel):
    password: str

    @field_validator("password")
    @classmethod
    def password_min_length(cls, v: str) -> str:
        return _password_min_length(v)


class MessageResponse(BaseModel):
    message: str


class UserProfile(BaseModel):
    name: str
    email: str
    role: Role
    company_name: str | None = None
    profile_photo: str | None = None
    resume: str | None = None
    is_verified: bool = False

    class Config:
        from_attributes = True
