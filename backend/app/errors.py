"""Error taxonomy for account and session operations.

Services raise these; the handler registered in app.main renders them as
``{"detail": ..., **extra}`` with the matching status code.
"""

from fastapi import status


class AccountError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail: str = "Internal server error"

    def __init__(self, detail: str | None = None, **extra):
        self.detail = detail or self.default_detail
        self.extra = extra
        super().__init__(self.detail)


class ValidationError(AccountError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Invalid request"


class InvalidOrExpiredToken(AccountError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Invalid or expired token"


class Unauthorized(AccountError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = "Not authenticated"


class Forbidden(AccountError):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "Forbidden"


class VerificationRequired(Forbidden):
    default_detail = "Please verify your email before logging in"

    def __init__(self, user_id: int, email: str):
        super().__init__(verification_required=True, user_id=user_id, email=email)


class NotFound(AccountError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Not found"


class Conflict(AccountError):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "Conflict"


class ServerError(AccountError):
    pass
