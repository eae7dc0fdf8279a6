"""
Reminder job runner.

Owns the single-flight guards for the daily reminder pass and the weekly
status sweep, and registers both with an APScheduler cron schedule. The
decision logic lives in the application services; this module only
triggers it.
"""

import structlog
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger

from ..application.dtos import (
    JobInfoDTO,
    JobStatusDTO,
    ReminderRunResultDTO,
    StatusSweepResultDTO,
)
from ..application.ports.outbound import Clock, NotificationDispatcher
from ..application.services import ReminderService, StatusSweepService
from ..config import Settings
from ..infrastructure.adapters import AdapterProvider, Adapters
from ..infrastructure.logging import Timer, job_context
from .single_flight import SingleFlight

logger = structlog.get_logger()

DAILY_REMINDERS_JOB = "daily_reminders"
WEEKLY_SWEEP_JOB = "weekly_status_sweep"


class ReminderJobRunner:
    def __init__(
        self,
        provider: AdapterProvider,
        dispatcher: NotificationDispatcher,
        clock: Clock,
        settings: Settings,
    ) -> None:
        self._provider = provider
        self._dispatcher = dispatcher
        self._clock = clock
        self._settings = settings
        self._reminders_flight = SingleFlight(DAILY_REMINDERS_JOB)
        self._sweep_flight = SingleFlight(WEEKLY_SWEEP_JOB)
        self._scheduler: AsyncIOScheduler | None = None

    def build_reminder_service(self, adapters: Adapters) -> ReminderService:
        return ReminderService(
            repository=adapters.certifications,
            catalog=adapters.catalog,
            users=adapters.users,
            ledger=adapters.ledger,
            dispatcher=self._dispatcher,
            unit_of_work=adapters.unit_of_work,
            clock=self._clock,
            cooldown_days=self._settings.reminder_cooldown_days,
            expiring_window_days=self._settings.expiring_soon_window_days,
            dispatch_timeout_seconds=self._settings.dispatch_timeout_seconds,
            dispatch_concurrency=self._settings.dispatch_concurrency,
            max_consecutive_persistence_failures=(
                self._settings.max_consecutive_persistence_failures
            ),
        )

    def build_sweep_service(self, adapters: Adapters) -> StatusSweepService:
        return StatusSweepService(
            repository=adapters.certifications,
            bounties=adapters.bounties,
            unit_of_work=adapters.unit_of_work,
            clock=self._clock,
            window_days=self._settings.expiring_soon_window_days,
        )

    @property
    def reminders_running(self) -> bool:
        return self._reminders_flight.running

    @property
    def sweep_running(self) -> bool:
        return self._sweep_flight.running

    async def run_daily_reminders(self) -> ReminderRunResultDTO | None:
        """Run one reminder pass; None if a pass is already in flight."""
        return await self._reminders_flight.run(self._daily_reminders)

    async def run_status_sweep(self) -> StatusSweepResultDTO | None:
        return await self._sweep_flight.run(self._status_sweep)

    async def _daily_reminders(self) -> ReminderRunResultDTO:
        with job_context(DAILY_REMINDERS_JOB), Timer() as t:
            async with self._provider.open() as adapters:
                result = await self.build_reminder_service(adapters).execute()
            logger.info(
                "Reminder job finished",
                sent=result.sent,
                skipped=result.skipped,
                failed=result.failed,
                duration_ms=t.duration_ms,
            )
        return result

    async def _status_sweep(self) -> StatusSweepResultDTO:
        with job_context(WEEKLY_SWEEP_JOB), Timer() as t:
            async with self._provider.open() as adapters:
                result = await self.build_sweep_service(adapters).execute()
            logger.info(
                "Status sweep job finished",
                expiring_soon=result.expiring_soon,
                expired=result.expired,
                bounties_expired=result.bounties_expired,
                duration_ms=t.duration_ms,
            )
        return result

    async def _scheduled_reminders(self) -> None:
        try:
            await self.run_daily_reminders()
        except Exception as e:
            logger.error("Reminder job failed, will retry next run", error=str(e))

    async def _scheduled_sweep(self) -> None:
        try:
            await self.run_status_sweep()
        except Exception as e:
            logger.error("Status sweep job failed, will retry next run", error=str(e))

    def start(self) -> None:
        if self._scheduler is not None and self._scheduler.running:
            logger.warning("Reminder jobs are already running")
            return

        tz = self._settings.scheduler_timezone
        scheduler = AsyncIOScheduler(timezone=tz)
        scheduler.add_job(
            self._scheduled_reminders,
            CronTrigger.from_crontab(self._settings.daily_reminder_cron, timezone=tz),
            id=DAILY_REMINDERS_JOB,
            max_instances=1,  # Prevent overlapping runs
            coalesce=True,
        )
        scheduler.add_job(
            self._scheduled_sweep,
            CronTrigger.from_crontab(self._settings.weekly_sweep_cron, timezone=tz),
            id=WEEKLY_SWEEP_JOB,
            max_instances=1,
            coalesce=True,
        )
        scheduler.start()
        self._scheduler = scheduler
        logger.info(
            "Reminder jobs started",
            daily_cron=self._settings.daily_reminder_cron,
            weekly_cron=self._settings.weekly_sweep_cron,
            timezone=tz,
        )

    def stop(self) -> None:
        if self._scheduler is None:
            return
        if self._scheduler.running:
            self._scheduler.shutdown(wait=False)
        self._scheduler = None
        logger.info("Reminder jobs stopped")

    def status(self) -> JobStatusDTO:
        scheduler = self._scheduler
        jobs = []
        if scheduler is not None:
            jobs = [
                JobInfoDTO(id=job.id, next_run_time=getattr(job, "next_run_time", None))
                for job in scheduler.get_jobs()
            ]
        return JobStatusDTO(
            scheduler_running=bool(scheduler and scheduler.running),
            pass_in_progress=self.reminders_running or self.sweep_running,
            jobs=jobs,
        )
