"""Poll scheduler using APScheduler.

Runs the poll cycle on a fixed interval. At most one poll job exists at any
time: starting again replaces the previous job instead of adding another.
"""

import structlog
from apscheduler.jobstores.base import JobLookupError
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger

from rsspoll.services.poll_service import PollService

logger = structlog.get_logger()

POLL_JOB_ID = "rss_poll"


class PollScheduler:
    """Owns the repeating poll job.

    Stopping removes the job so no new cycle starts; a cycle already running
    is left to finish and publish.
    """

    def __init__(
        self,
        poll_service: PollService,
        scheduler: AsyncIOScheduler | None = None,
    ):
        """Initialize poll scheduler.

        Args:
            poll_service: Service whose run_cycle is invoked on every tick.
            scheduler: Optional APScheduler instance to attach the job to.
        """
        self._service = poll_service
        self._scheduler = scheduler or AsyncIOScheduler()
        self._job = None
        self._interval: float | None = None

    @property
    def is_running(self) -> bool:
        return self._job is not None

    @property
    def interval(self) -> float | None:
        return self._interval

    def start(self, interval: float) -> None:
        """Start polling every ``interval`` seconds.

        Any previously started poll job is stopped first. Must be called
        from within the running event loop.

        Args:
            interval: Seconds between cycles, must be positive.
        """
        if interval <= 0:
            raise ValueError(f"Poll interval must be positive, got {interval}")

        if self._job is not None:
            logger.info("Restarting poller", previous_interval=self._interval)
            self.stop()

        if not self._scheduler.running:
            self._scheduler.start()

        self._job = self._scheduler.add_job(
            self._service.run_cycle,
            trigger=IntervalTrigger(seconds=interval),
            id=POLL_JOB_ID,
            name="RSS Poll and Notify",
            replace_existing=True,
            max_instances=1,  # a slow cycle delays the next tick instead of overlapping
            coalesce=True,
        )
        self._interval = interval
        logger.info("Started long poller", job_id=POLL_JOB_ID, interval=interval)

    def stop(self) -> None:
        """Stop polling. Safe to call when not running."""
        if self._job is None:
            return
        try:
            self._job.remove()
        except JobLookupError:
            pass
        self._job = None
        logger.info("Stopped polling", job_id=POLL_JOB_ID)

    async def shutdown(self) -> None:
        """Stop polling and release the scheduler.

        Waits for an in-flight cycle to finish before tearing down, since
        APScheduler cancels pending coroutine jobs on shutdown.
        """
        self.stop()
        await self._service.wait_idle()
        if self._scheduler.running:
            self._scheduler.shutdown(wait=False)
        logger.info("Scheduler shut down")
