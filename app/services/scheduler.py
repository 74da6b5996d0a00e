"""
APScheduler Service
Optional in-process daily trigger for pre-arrival reminders
"""
import logging
from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.cron import CronTrigger
from app.config import settings
from app.services.email_service import get_email_service
from app.services.google_sheets import get_sheets_service
from app.services.pre_arrival import PreArrivalJob

logger = logging.getLogger(__name__)


class SchedulerService:
    """Service to manage background scheduler tasks"""

    def __init__(self, config=None):
        self.config = config or settings
        self.scheduler = BackgroundScheduler(timezone=self.config.timezone)
        self._setup_jobs()

    def _setup_jobs(self):
        """Setup all background jobs"""
        self.scheduler.add_job(
            self._send_pre_arrival_reminders,
            CronTrigger(hour=self.config.scheduler_hour, minute=0, timezone=self.config.timezone),
            id="pre_arrival_reminders",
            name="Send pre-arrival reminders",
            replace_existing=True,
        )

    def _send_pre_arrival_reminders(self):
        """Run the pre-arrival job once. Runs daily."""
        try:
            job = PreArrivalJob(get_sheets_service(), get_email_service(), self.config)
            report = job.run()
            logger.info(f"Pre-arrival reminders: {report.results()}")
        except Exception as e:
            logger.error(f"Error in pre-arrival reminders job: {str(e)}")

    def start(self):
        """Start the scheduler"""
        if not self.scheduler.running:
            self.scheduler.start()
            logger.info("Scheduler started")

    def stop(self):
        """Stop the scheduler"""
        if self.scheduler.running:
            self.scheduler.shutdown()
            logger.info("Scheduler stopped")


# Global scheduler instance
_scheduler_service = None


def get_scheduler() -> SchedulerService:
    """Get or create scheduler instance"""
    global _scheduler_service
    if _scheduler_service is None:
        _scheduler_service = SchedulerService()
    return _scheduler_service


def start_scheduler():
    """Start the background scheduler"""
    scheduler = get_scheduler()
    scheduler.start()


def stop_scheduler():
    """Stop the background scheduler"""
    scheduler = get_scheduler()
    scheduler.stop()
