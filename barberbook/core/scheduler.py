import logging

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from fastapi import FastAPI

from barberbook.services.expiration_service import sweep_expired_bookings

logger = logging.getLogger(__name__)

# ----- JOBS -----
async def job_expire_bookings(app: FastAPI) -> None:
    try:
        expired = await sweep_expired_bookings(app.state.repository, app.state.settings)
        logger.debug(f"scheduler: expiration sweep -> {len(expired)} expired")
    except Exception as e:
        logger.exception(f"scheduler: expiration sweep failed: {e}")

async def job_send_reminders(app: FastAPI) -> None:
    try:
        sent = await app.state.notifications.check_upcoming(app.state.repository)
        logger.debug(f"scheduler: reminders -> {len(sent)} sent")
    except Exception as e:
        logger.exception(f"scheduler: reminder check failed: {e}")

def start_scheduler(app: FastAPI) -> AsyncIOScheduler:
    """Start the polling jobs; must be called from inside the running event loop."""
    interval = app.state.settings.SWEEP_INTERVAL_SECONDS
    scheduler = AsyncIOScheduler()
    scheduler.add_job(
        job_expire_bookings, "interval", seconds=interval, args=[app],
        id="expire_bookings", coalesce=True, max_instances=1,
    )
    scheduler.add_job(
        job_send_reminders, "interval", seconds=interval, args=[app],
        id="send_reminders", coalesce=True, max_instances=1,
    )
    scheduler.start()
    logger.info(f"scheduler: started with a {interval}s interval")
    return scheduler

def stop_scheduler(scheduler: AsyncIOScheduler) -> None:
    if scheduler.running:
        scheduler.shutdown(wait=False)
        logger.info("scheduler: stopped")
