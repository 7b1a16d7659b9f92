from app.models.user import User
from app.models.job_application import ApplicationStatus, JobApplication
from app.models.interview import Interview
from app.models.action_token import ActionToken, TokenKind
from app.models.session import UserSession

__all__ = [
    "User",
    "ApplicationStatus",
    "JobApplication",
    "Interview",
    "ActionToken",
    "TokenKind",
    "UserSession",
]
