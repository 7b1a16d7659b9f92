from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import relationship

from app.clock import utcnow
from app.database import Base


class Interview(Base):
    __tablename__ = "interviews"

    id = Column(Integer, primary_key=True, index=True)
    application_id = Column(Integer, ForeignKey("job_applications.id"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    interview_date = Column(DateTime, nullable=False)
    interview_type = Column(String(50), nullable=True)  # phone, virtual, in_person
    location = Column(String(500), nullable=True)
    notes = Column(Text, nullable=True)
    reminder_sent = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)

    application = relationship("JobApplication", back_populates="interviews")

    __table_args__ = (
        Index("ix_interviews_date_reminder", "interview_date", "reminder_sent"),
    )
