import logging

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.cron import CronTrigger

from app.config import get_settings

logger = logging.getLogger(__name__)

scheduler: BackgroundScheduler | None = None


def _run(name: str, sweep) -> None:
    """Run one sweep in its own database session."""
    from app.database import SessionLocal

    logger.info(f"Starting {name}...")
    db = SessionLocal()
    try:
        sweep(db)
        logger.info(f"{name} completed")
    except Exception:
        logger.exception(f"{name} failed")
        db.rollback()
    finally:
        db.close()


def run_ghosting_sweep():
    from tasks.sweeps import ghost_stale_applications
    _run("ghosting sweep", ghost_stale_applications)


def run_reminder_sweep():
    from tasks.sweeps import send_interview_reminders
    _run("interview reminder sweep", send_interview_reminders)


def run_cleanup_sweep():
    from tasks.sweeps import purge_expired
    _run("expired token cleanup", purge_expired)


def start_scheduler():
    """Start the APScheduler with the sweep jobs.

    All cron triggers use the configured SCHEDULER_TIMEZONE; APScheduler
    handles DST.
    """
    global scheduler
    settings = get_settings()
    tz = settings.scheduler_timezone
    scheduler = BackgroundScheduler()

    scheduler.add_job(
        run_ghosting_sweep,
        CronTrigger(hour=2, minute=0, timezone=tz),
        id="ghost_applications",
        replace_existing=True,
    )
    scheduler.add_job(
        run_reminder_sweep,
        CronTrigger(hour=9, minute=0, timezone=tz),
        id="interview_reminders",
        replace_existing=True,
    )
    scheduler.add_job(
        run_cleanup_sweep,
        CronTrigger(minute=15, timezone=tz),  # Hourly
        id="purge_expired",
        replace_existing=True,
    )

    scheduler.start()
    logger.info(f"Scheduler started with sweep jobs in {tz}")


def shutdown_scheduler():
    """Shutdown the scheduler gracefully."""
    global scheduler
    if scheduler is not None:
        scheduler.shutdown(wait=False)
        scheduler = None
        logger.info("Scheduler shut down")
