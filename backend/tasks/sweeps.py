"""Periodic sweeps over the shared store.

Each sweep takes an open session so it can run from the scheduler or a
test. Every update is conditioned on the current row state, so a sweep
that overlaps request traffic, or runs twice, does not double-apply.
"""

import logging
from datetime import date, datetime, time, timedelta, timezone
from zoneinfo import ZoneInfo

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.clock import utcnow
from app.config import get_settings
from app.models import ApplicationStatus, Interview, JobApplication, User
from app.services.email import send_interview_reminder_email
from app.services.sessions import purge_expired_sessions
from app.services.tokens import purge_expired_tokens

settings = get_settings()
logger = logging.getLogger(__name__)


def ghost_stale_applications(db: Session, now: datetime | None = None) -> int:
    """Mark untouched 'applied' applications of opted-in users as ghosted.

    Returns the number of applications updated.
    """
    now = now or utcnow()
    cutoff = now - timedelta(days=settings.ghost_after_days)
    opted_in = select(User.id).where(User.auto_ghost == True)

    count = (
        db.query(JobApplication)
        .filter(
            JobApplication.status == ApplicationStatus.APPLIED.value,
            JobApplication.updated_at < cutoff,
            JobApplication.user_id.in_(opted_in),
        )
        .update({JobApplication.status: ApplicationStatus.GHOSTED.value}, synchronize_session=False)
    )
    db.commit()
    logger.info(f"Marked {count} applications as ghosted")
    return count


def _day_bounds_utc(day: date, tz: ZoneInfo) -> tuple[datetime, datetime]:
    """Naive UTC start/end of a calendar day in ``tz``."""
    start = datetime.combine(day, time.min, tzinfo=tz)
    end = datetime.combine(day + timedelta(days=1), time.min, tzinfo=tz)
    return (
        start.astimezone(timezone.utc).replace(tzinfo=None),
        end.astimezone(timezone.utc).replace(tzinfo=None),
    )


def send_interview_reminders(db: Session, today: date | None = None) -> int:
    """Email a reminder for every interview taking place tomorrow.

    The flag is set only after a successful send, so an interview whose
    email failed stays eligible for the next run. Returns the number sent.
    """
    tz = ZoneInfo(settings.scheduler_timezone)
    today = today or datetime.now(tz).date()
    start, end = _day_bounds_utc(today + timedelta(days=1), tz)

    rows = (
        db.query(Interview, JobApplication, User)
        .join(JobApplication, Interview.application_id == JobApplication.id)
        .join(User, Interview.user_id == User.id)
        .filter(
            Interview.reminder_sent == False,
            Interview.interview_date >= start,
            Interview.interview_date < end,
        )
        .order_by(Interview.interview_date.asc())
        .all()
    )

    sent_count = 0
    for interview, application, user in rows:
        local_date = interview.interview_date.replace(tzinfo=timezone.utc).astimezone(tz)
        email_sent = send_interview_reminder_email(
            user.email,
            user.first_name,
            application.position_name,
            application.employer_name,
            local_date,
            interview_type=interview.interview_type,
            location=interview.location,
        )
        if not email_sent:
            logger.error(
                f"Failed to send reminder for interview {interview.id} to {user.email}, will retry next run"
            )
            continue

        interview.reminder_sent = True
        db.commit()
        sent_count += 1

    logger.info(f"Sent {sent_count} of {len(rows)} interview reminders")
    return sent_count


def purge_expired(db: Session) -> tuple[int, int]:
    """Remove expired action tokens and sessions."""
    return purge_expired_tokens(db), purge_expired_sessions(db)
