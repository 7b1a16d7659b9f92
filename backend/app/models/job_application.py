import enum

from sqlalchemy import Column, Date, DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import relationship

from app.clock import utcnow
from app.database import Base


class ApplicationStatus(str, enum.Enum):
    APPLIED = "applied"
    INTERVIEWING = "interviewing"
    OFFER = "offer"
    REJECTED = "rejected"
    GHOSTED = "ghosted"


class JobApplication(Base):
    __tablename__ = "job_applications"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    position_name = Column(String(255), nullable=False)
    employer_name = Column(String(255), nullable=False)
    application_date = Column(Date, nullable=True)
    employment_type = Column(String(50), nullable=True)
    source = Column(String(255), nullable=True)
    job_description = Column(Text, nullable=True)
    job_link = Column(String(1000), nullable=True)
    work_mode = Column(String(50), nullable=True)
    status = Column(String(20), default=ApplicationStatus.APPLIED.value, nullable=False)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    interviews = relationship("Interview", back_populates="application")

    __table_args__ = (
        Index("ix_job_applications_status_updated", "status", "updated_at"),
    )
