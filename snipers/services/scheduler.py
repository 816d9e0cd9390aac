import logging

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.interval import IntervalTrigger

from snipers.core.config import Settings
from snipers.services.otp import OtpCache
from snipers.services.sessions import SessionStore

logger = logging.getLogger(__name__)


def start_scheduler(settings: Settings, sessions: SessionStore, otp_cache: OtpCache) -> BackgroundScheduler:
    """Start the sweep jobs for one application's session and code caches."""
    scheduler = BackgroundScheduler()
    scheduler.add_job(
        sessions.purge_expired,
        trigger=IntervalTrigger(minutes=settings.session_sweep_minutes),
        id="purge-expired-sessions",
        replace_existing=True,
    )
    scheduler.add_job(
        otp_cache.purge_expired,
        trigger=IntervalTrigger(minutes=settings.otp_sweep_minutes),
        id="purge-expired-otps",
        replace_existing=True,
    )
    scheduler.start()
    logger.info("Scheduler started")
    return scheduler


def stop_scheduler(scheduler: BackgroundScheduler) -> None:
    if scheduler.running:
        scheduler.shutdown(wait=False)
        logger.info("Scheduler stopped")
