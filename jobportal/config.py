from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Required from environment (.env / deployment secrets)
    database_url: str
    secret_key: str
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60
    app_env: str = "development"  # development, staging, production

    # CORS origins as comma-separated values
    # Example: "https://app.example.com,https://admin.example.com"
    cors_allow_origins: str = "http://localhost:5000"

    log_level: str = "INFO"  # DEBUG, INFO, WARNING, ERROR

    # Credentials and one-time tokens
    bcrypt_rounds: int = 12
    verification_token_expire_hours: int = 24
    reset_token_expire_minutes: int = 60
    # Verification is advisory unless this is switched on.
    require_verified_email: bool = False

    # Links in outgoing mail point at the frontend
    client_url: str = "http://localhost:5000"

    # Outbound mail (SMTP with STARTTLS)
    smtp_host: str = ""
    smtp_port: int = 587
    smtp_user: str = ""
    smtp_password: str = ""
    mail_from: str = ""
    smtp_timeout_seconds: float = 10.0

    # Email domain checks at signup
    dns_timeout_seconds: float = 5.0
    disposable_email_domains: str = ""  # extra entries, comma-separated

    # Uploads land in <upload_root>/uploads/{resumes,profiles}
    upload_root: str = "."
    max_upload_mb: int = 10
    allowed_resume_extensions: str = ".pdf,.doc,.docx"
    allowed_photo_extensions: str = ".jpg,.jpeg,.png,.gif,.webp"

    rate_limit_auth_per_min: int = 20

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()
