import logging
import threading
from typing import Callable, Iterable, Optional

from apscheduler.executors.pool import ThreadPoolExecutor
from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.interval import IntervalTrigger

from wetcher.domain.cycle_result import CycleResult
from wetcher.domain.job import Job

logger = logging.getLogger(__name__)


class JobScheduler:
    """Runs every job on its own fixed-period timer until shutdown.

    Each job is one APScheduler interval job with `max_instances=1`, so a
    slow cycle delays that job's next run instead of overlapping it. Jobs run
    on a shared worker pool sized to the job count and share nothing but the
    stop event passed to `serve`.
    """

    def __init__(
        self,
        jobs: Iterable[Job],
        run_cycle: Callable[[Job], CycleResult],
        max_workers: Optional[int] = None,
    ):
        self.jobs = list(jobs)
        self.run_cycle = run_cycle
        self.max_workers = max_workers or max(len(self.jobs), 1)
        self._sched: Optional[BackgroundScheduler] = None

    def start(self):
        if self._sched is not None:
            return
        self._sched = BackgroundScheduler(
            executors={"default": ThreadPoolExecutor(self.max_workers)},
            job_defaults={"coalesce": True, "max_instances": 1},
        )
        self._sched.start()
        logger.info("Scheduler started with %s worker(s)", self.max_workers)
        self.schedule_all()

    def shutdown(self, wait: bool = False):
        """Stop issuing new cycles. In-flight cycles finish on their own unless `wait`."""
        if not self._sched:
            return
        try:
            self._sched.shutdown(wait=wait)
            logger.info("Scheduler shut down")
        finally:
            self._sched = None

    def schedule_all(self):
        if not self._sched:
            logger.warning("Scheduler not started; cannot schedule jobs")
            return
        for job in self.jobs:
            seconds = job.period.total_seconds()
            # default arg binds the current job; a bare closure would see the last loop value
            self._sched.add_job(
                lambda job=job: self._execute_cycle(job),
                trigger=IntervalTrigger(seconds=seconds),
                id=f"job:{job.name}",
                name=job.name,
                replace_existing=True,
                misfire_grace_time=None,
            )
            logger.info("Scheduled job %s -> every %ss", job.name, seconds)

    def _execute_cycle(self, job: Job) -> Optional[CycleResult]:
        """Run one cycle for `job`; failures are logged and never escape into the scheduler."""
        try:
            result = self.run_cycle(job)
        except Exception:
            logger.exception("Crawl cycle failed for %s", job.name)
            return None
        logger.info(
            "Crawl cycle finished for %s: visited=%s failed=%s continuations=%s; awaiting next tick",
            job.name,
            result.resources_visited,
            result.resources_failed,
            result.continuations_followed,
        )
        return result

    def serve(self, stop_event: threading.Event, poll_interval: float = 1.0):
        """Start, block until `stop_event` is set, then shut down without waiting for running cycles."""
        self.start()
        try:
            while not stop_event.wait(poll_interval):
                pass
        finally:
            self.shutdown(wait=False)
