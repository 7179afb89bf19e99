"""Error taxonomy shared by services and routers.

Every error carries an HTTP status so ``main`` can render it as
``{"detail": ..., "field": ..., "code": ...}`` without per-route mapping.
"""

from fastapi import status


class PortalError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(
        self,
        message: str,
        *,
        field: str | None = None,
        code: str | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.field = field
        self.code = code
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self) -> dict:
        body = {"detail": self.message}
        if self.field:
            body["field"] = self.field
        if self.code:
            body["code"] = self.code
        return body


class ValidationError(PortalError):
    status_code = status.HTTP_400_BAD_REQUEST


class PayloadTooLargeError(ValidationError):
    status_code = status.HTTP_413_REQUEST_ENTITY_TOO_LARGE


class DuplicateError(PortalError):
    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(PortalError):
    status_code = status.HTTP_404_NOT_FOUND


class ForbiddenError(PortalError):
    status_code = status.HTTP_403_FORBIDDEN


class AuthError(PortalError):
    status_code = status.HTTP_401_UNAUTHORIZED


class InternalError(PortalError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class MailDeliveryError(Exception):
    """Raised by the mailer; callers decide how a failed send surfaces."""
