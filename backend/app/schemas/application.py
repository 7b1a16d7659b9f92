from datetime import date, datetime

from pydantic import BaseModel

from app.models import ApplicationStatus


class ApplicationBase(BaseModel):
    position_name: str
    employer_name: str
    application_date: date | None = None
    employment_type: str | None = None
    source: str | None = None
    job_description: str | None = None
    job_link: str | None = None
    work_mode: str | None = None
    status: ApplicationStatus = ApplicationStatus.APPLIED
    notes: str | None = None


class ApplicationCreate(ApplicationBase):
    pass


class ApplicationResponse(ApplicationBase):
    id: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class ApplicationListResponse(BaseModel):
    applications: list[ApplicationResponse]
    total: int


class InterviewBase(BaseModel):
    interview_date: datetime
    interview_type: str | None = None
    location: str | None = None
    notes: str | None = None


class InterviewCreate(InterviewBase):
    pass


class InterviewResponse(InterviewBase):
    id: int
    application_id: int
    reminder_sent: bool

    class Config:
        from_attributes = True
