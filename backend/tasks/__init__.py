from tasks.sweeps import ghost_stale_applications, send_interview_reminders, purge_expired

__all__ = [
    "ghost_stale_applications",
    "send_interview_reminders",
    "purge_expired",
]
