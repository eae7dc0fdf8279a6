"""
Daily reminder pass.

Decides which certifications are due a reminder, hands them to the
notification dispatcher with bounded concurrency and a per-message timeout,
then records each attempt in the ledger. The ledger write and any status
change for one certification share a single unit of work.
"""

import asyncio
from dataclasses import dataclass

import structlog

from ...domain.entities import (
    MasterCertificationDefinition,
    ReminderPayload,
    ReminderRecord,
    UserCertificationInstance,
)
from ...domain.errors import PersistenceFailure
from ...domain.services import (
    DEFAULT_COOLDOWN_DAYS,
    EXPIRING_SOON_WINDOW_DAYS,
    build_payload,
    days_until,
    derive_schedule,
    find_applicable_tier,
    should_fire,
)
from ...domain.value_objects import REMINDER_ELIGIBLE_STATUSES, CertificationStatus
from ..dtos import ReminderRunResultDTO
from ..ports.inbound import ProcessDailyRemindersUseCase
from ..ports.outbound import (
    CatalogRepository,
    CertificationRepository,
    Clock,
    NotificationDispatcher,
    ReminderLedger,
    UnitOfWork,
    UserDirectory,
)

logger = structlog.get_logger()


@dataclass
class _PlannedReminder:
    instance: UserCertificationInstance
    payload: ReminderPayload


class ReminderService(ProcessDailyRemindersUseCase):
    """Application service implementing the daily reminder pass."""

    def __init__(
        self,
        repository: CertificationRepository,
        catalog: CatalogRepository,
        users: UserDirectory,
        ledger: ReminderLedger,
        dispatcher: NotificationDispatcher,
        unit_of_work: UnitOfWork,
        clock: Clock,
        cooldown_days: int = DEFAULT_COOLDOWN_DAYS,
        expiring_window_days: int = EXPIRING_SOON_WINDOW_DAYS,
        dispatch_timeout_seconds: float = 30.0,
        dispatch_concurrency: int = 10,
        max_consecutive_persistence_failures: int = 5,
    ):
        self._repository = repository
        self._catalog = catalog
        self._users = users
        self._ledger = ledger
        self._dispatcher = dispatcher
        self._uow = unit_of_work
        self._clock = clock
        self._cooldown_days = cooldown_days
        self._expiring_window_days = expiring_window_days
        self._dispatch_timeout = dispatch_timeout_seconds
        self._dispatch_concurrency = max(1, dispatch_concurrency)
        self._max_persistence_failures = max(1, max_consecutive_persistence_failures)

    async def execute(self) -> ReminderRunResultDTO:
        now = self._clock.now()
        result = ReminderRunResultDTO()

        try:
            instances = await self._repository.list_by_statuses(REMINDER_ELIGIBLE_STATUSES)
        except PersistenceFailure:
            logger.error("Could not load certifications, aborting reminder pass")
            raise

        logger.info("Processing daily reminders", candidates=len(instances))

        planned: list[_PlannedReminder] = []
        definitions: dict[str, MasterCertificationDefinition | None] = {}
        consecutive_failures = 0

        for instance in instances:
            try:
                plan = await self._plan(instance, definitions)
            except PersistenceFailure as e:
                # Reads run outside a unit of work; clear the failed transaction.
                await self._uow.rollback()
                consecutive_failures = self._record_persistence_failure(
                    instance, e, consecutive_failures
                )
                result.failed += 1
                continue
            except Exception as e:
                await self._uow.rollback()
                self._record_instance_error(instance, "plan", e)
                result.failed += 1
                continue
            consecutive_failures = 0
            if plan is None:
                result.skipped += 1
            else:
                planned.append(plan)

        semaphore = asyncio.Semaphore(self._dispatch_concurrency)
        outcomes = await asyncio.gather(*(self._dispatch(p, semaphore) for p in planned))

        for plan, delivered in zip(planned, outcomes):
            try:
                await self._record(plan, delivered)
            except PersistenceFailure as e:
                consecutive_failures = self._record_persistence_failure(
                    plan.instance, e, consecutive_failures
                )
                result.failed += 1
                continue
            except Exception as e:
                self._record_instance_error(plan.instance, "record", e)
                result.failed += 1
                continue
            consecutive_failures = 0
            if delivered:
                result.sent += 1
            else:
                result.failed += 1

        logger.info(
            "Daily reminders processed",
            sent=result.sent,
            skipped=result.skipped,
            failed=result.failed,
            now=now.isoformat(),
        )
        return result

    async def _plan(
        self,
        instance: UserCertificationInstance,
        definitions: dict[str, MasterCertificationDefinition | None],
    ) -> _PlannedReminder | None:
        """Return the reminder to send for this instance, or None to skip it."""
        recipient = await self._users.get_recipient(instance.user_id)
        if recipient is None or not recipient.email_enabled:
            return None
        if instance.expiration_date is None:
            return None

        definition_id = instance.master_definition_id
        if definition_id not in definitions:
            definitions[definition_id] = await self._catalog.get(definition_id)
        definition = definitions[definition_id]
        if definition is None:
            logger.warning(
                "Certification references unknown catalog entry",
                instance_id=str(instance.id),
                master_definition_id=definition_id,
            )
            return None

        now = self._clock.now()
        days = days_until(instance.expiration_date, now.date())
        tier = find_applicable_tier(days, derive_schedule(definition.validity_months))
        if tier is None:
            return None

        last_delivered_at = await self._ledger.last_delivered_at(instance.id, tier)
        if not should_fire(tier, days, last_delivered_at, now, self._cooldown_days):
            return None

        return _PlannedReminder(
            instance=instance,
            payload=build_payload(instance, definition, recipient, tier, days),
        )

    async def _dispatch(self, plan: _PlannedReminder, semaphore: asyncio.Semaphore) -> bool:
        async with semaphore:
            try:
                return await asyncio.wait_for(
                    self._dispatcher.send(plan.payload), timeout=self._dispatch_timeout
                )
            except asyncio.TimeoutError:
                logger.warning(
                    "Reminder dispatch timed out",
                    instance_id=str(plan.instance.id),
                    timeout_s=self._dispatch_timeout,
                )
                return False
            except Exception as e:
                logger.error(
                    "Reminder dispatch failed",
                    instance_id=str(plan.instance.id),
                    error=str(e),
                )
                return False

    async def _record(self, plan: _PlannedReminder, delivered: bool) -> None:
        payload = plan.payload
        instance = plan.instance
        now = self._clock.now()
        record = ReminderRecord.create(
            instance_id=instance.id,
            user_id=instance.user_id,
            tier=payload.urgency_tier,
            channel=self._dispatcher.channel,
            delivered=delivered,
            message_summary=self._summary(payload, delivered),
            sent_at=now,
        )

        async with self._uow:
            await self._ledger.append(record)
            if (
                delivered
                and payload.days_until_expiration <= self._expiring_window_days
                and instance.status == CertificationStatus.ACTIVE
            ):
                instance.mark_expiring_soon(now)
                await self._repository.save(instance)
            await self._uow.commit()

    def _record_persistence_failure(
        self,
        instance: UserCertificationInstance,
        error: PersistenceFailure,
        consecutive_failures: int,
    ) -> int:
        consecutive_failures += 1
        logger.error(
            "Persistence failure during reminder pass",
            instance_id=str(instance.id),
            error=error.message,
            consecutive_failures=consecutive_failures,
        )
        if consecutive_failures >= self._max_persistence_failures:
            raise PersistenceFailure(
                f"Aborting reminder pass after {consecutive_failures} consecutive "
                "persistence failures"
            )
        return consecutive_failures

    @staticmethod
    def _record_instance_error(
        instance: UserCertificationInstance, stage: str, error: Exception
    ) -> None:
        logger.error(
            "Reminder processing failed for certification",
            instance_id=str(instance.id),
            stage=stage,
            error=str(error),
            error_type=type(error).__name__,
        )

    @staticmethod
    def _summary(payload: ReminderPayload, delivered: bool) -> str:
        summary = (
            f"{payload.urgency_tier.value} reminder for {payload.certification_name} "
            f"({payload.days_until_expiration} days)"
        )
        return summary if delivered else f"Failed to send: {summary}"
