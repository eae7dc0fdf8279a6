"""SQLAlchemy adapters for the outbound persistence ports."""

from collections.abc import Awaitable, Callable, Iterable
from datetime import datetime
from functools import wraps
from typing import ParamSpec, TypeVar
from uuid import UUID

from sqlalchemy import delete, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ...application.ports.outbound import (
    ApprovalHistoryLog,
    BountyRepository,
    CatalogRepository,
    CertificationRepository,
    PendingSubmissionQueue,
    ReminderLedger,
    UserDirectory,
)
from ...domain.entities import (
    ApprovalHistoryEntry,
    Bounty,
    BountyClaim,
    BountyStatus,
    MasterCertificationDefinition,
    PendingSubmission,
    Recipient,
    ReminderRecord,
    UserCertificationInstance,
)
from ...domain.errors import PersistenceFailure
from ...domain.value_objects import CertificationStatus, UrgencyTier
from .models import (
    ApprovalHistoryModel,
    BountyClaimModel,
    BountyModel,
    MasterCertificationModel,
    NotificationLogModel,
    PendingSubmissionModel,
    UserCertificationModel,
    UserModel,
    _aware_utc,
    _naive_utc,
)

P = ParamSpec("P")
T = TypeVar("T")


def translate_errors(func: Callable[P, Awaitable[T]]) -> Callable[P, Awaitable[T]]:
    """Re-raise SQLAlchemy errors as PersistenceFailure."""

    @wraps(func)
    async def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
        try:
            return await func(*args, **kwargs)
        except SQLAlchemyError as e:
            raise PersistenceFailure(f"{func.__qualname__} failed: {e}") from e

    return wrapper


class SqlAlchemyCertificationRepository(CertificationRepository):
    def __init__(self, session: AsyncSession):
        self._session = session

    @translate_errors
    async def get(self, instance_id: UUID) -> UserCertificationInstance | None:
        model = await self._session.get(UserCertificationModel, instance_id)
        return model.to_entity() if model else None

    @translate_errors
    async def save(self, instance: UserCertificationInstance) -> None:
        await self._session.merge(UserCertificationModel.from_entity(instance))
        await self._session.flush()

    @translate_errors
    async def delete(self, instance_id: UUID) -> bool:
        result = await self._session.execute(
            delete(UserCertificationModel).where(UserCertificationModel.id == instance_id)
        )
        return result.rowcount > 0

    @translate_errors
    async def list_for_user(self, user_id: str) -> list[UserCertificationInstance]:
        stmt = (
            select(UserCertificationModel)
            .where(UserCertificationModel.user_id == user_id)
            .order_by(UserCertificationModel.created_at)
        )
        result = await self._session.execute(stmt)
        return [m.to_entity() for m in result.scalars()]

    @translate_errors
    async def list_by_statuses(
        self, statuses: Iterable[CertificationStatus]
    ) -> list[UserCertificationInstance]:
        stmt = select(UserCertificationModel).where(
            UserCertificationModel.status.in_([s.value for s in statuses])
        )
        result = await self._session.execute(stmt)
        return [m.to_entity() for m in result.scalars()]


class SqlAlchemyCatalogRepository(CatalogRepository):
    def __init__(self, session: AsyncSession):
        self._session = session

    @translate_errors
    async def get(self, definition_id: str) -> MasterCertificationDefinition | None:
        model = await self._session.get(MasterCertificationModel, definition_id)
        return model.to_entity() if model else None

    @translate_errors
    async def list_all(self, active_only: bool = False) -> list[MasterCertificationDefinition]:
        stmt = select(MasterCertificationModel).order_by(
            MasterCertificationModel.vendor, MasterCertificationModel.full_name
        )
        if active_only:
            stmt = stmt.where(MasterCertificationModel.is_active.is_(True))
        result = await self._session.execute(stmt)
        return [m.to_entity() for m in result.scalars()]

    @translate_errors
    async def save(self, definition: MasterCertificationDefinition) -> None:
        await self._session.merge(MasterCertificationModel.from_entity(definition))
        await self._session.flush()


class SqlAlchemyPendingSubmissionQueue(PendingSubmissionQueue):
    def __init__(self, session: AsyncSession):
        self._session = session

    @translate_errors
    async def add(self, submission: PendingSubmission) -> None:
        self._session.add(PendingSubmissionModel.from_entity(submission))
        await self._session.flush()

    @translate_errors
    async def get(self, submission_id: UUID) -> PendingSubmission | None:
        model = await self._session.get(PendingSubmissionModel, submission_id)
        return model.to_entity() if model else None

    @translate_errors
    async def remove(self, submission_id: UUID) -> bool:
        result = await self._session.execute(
            delete(PendingSubmissionModel).where(PendingSubmissionModel.id == submission_id)
        )
        return result.rowcount > 0

    @translate_errors
    async def list_all(self) -> list[PendingSubmission]:
        stmt = select(PendingSubmissionModel).order_by(PendingSubmissionModel.submitted_at)
        result = await self._session.execute(stmt)
        return [m.to_entity() for m in result.scalars()]


class SqlAlchemyApprovalHistoryLog(ApprovalHistoryLog):
    def __init__(self, session: AsyncSession):
        self._session = session

    @translate_errors
    async def append(self, entry: ApprovalHistoryEntry) -> None:
        self._session.add(ApprovalHistoryModel.from_entity(entry))
        await self._session.flush()

    @translate_errors
    async def list_recent(self, limit: int = 100) -> list[ApprovalHistoryEntry]:
        stmt = (
            select(ApprovalHistoryModel)
            .order_by(ApprovalHistoryModel.processed_at.desc())
            .limit(limit)
        )
        result = await self._session.execute(stmt)
        return [m.to_entity() for m in result.scalars()]


class SqlAlchemyReminderLedger(ReminderLedger):
    def __init__(self, session: AsyncSession):
        self._session = session

    @translate_errors
    async def append(self, record: ReminderRecord) -> None:
        self._session.add(NotificationLogModel.from_entity(record))
        await self._session.flush()

    @translate_errors
    async def last_delivered_at(self, instance_id: UUID, tier: UrgencyTier) -> datetime | None:
        stmt = select(func.max(NotificationLogModel.sent_at)).where(
            NotificationLogModel.instance_id == instance_id,
            NotificationLogModel.tier == tier.value,
            NotificationLogModel.delivered.is_(True),
        )
        result = await self._session.execute(stmt)
        return _aware_utc(result.scalar_one_or_none())

    @translate_errors
    async def list_for_instance(self, instance_id: UUID) -> list[ReminderRecord]:
        stmt = (
            select(NotificationLogModel)
            .where(NotificationLogModel.instance_id == instance_id)
            .order_by(NotificationLogModel.sent_at.desc())
        )
        result = await self._session.execute(stmt)
        return [m.to_entity() for m in result.scalars()]

    @translate_errors
    async def list_for_user(self, user_id: str, limit: int = 50) -> list[ReminderRecord]:
        stmt = (
            select(NotificationLogModel)
            .where(NotificationLogModel.user_id == user_id)
            .order_by(NotificationLogModel.sent_at.desc())
            .limit(limit)
        )
        result = await self._session.execute(stmt)
        return [m.to_entity() for m in result.scalars()]

    @translate_errors
    async def list_since(self, since: datetime) -> list[ReminderRecord]:
        stmt = select(NotificationLogModel).where(
            NotificationLogModel.sent_at >= _naive_utc(since)
        )
        result = await self._session.execute(stmt)
        return [m.to_entity() for m in result.scalars()]


class SqlAlchemyUserDirectory(UserDirectory):
    def __init__(self, session: AsyncSession):
        self._session = session

    @translate_errors
    async def get_recipient(self, user_id: str) -> Recipient | None:
        model = await self._session.get(UserModel, user_id)
        return model.to_entity() if model else None


class SqlAlchemyBountyRepository(BountyRepository):
    def __init__(self, session: AsyncSession):
        self._session = session

    @translate_errors
    async def get(self, bounty_id: str) -> Bounty | None:
        model = await self._session.get(BountyModel, bounty_id)
        return model.to_entity() if model else None

    @translate_errors
    async def save(self, bounty: Bounty) -> None:
        await self._session.merge(BountyModel.from_entity(bounty))
        await self._session.flush()

    @translate_errors
    async def list_all(self, status: BountyStatus | None = None) -> list[Bounty]:
        stmt = select(BountyModel).order_by(BountyModel.deadline)
        if status is not None:
            stmt = stmt.where(BountyModel.status == status.value)
        result = await self._session.execute(stmt)
        return [m.to_entity() for m in result.scalars()]

    @translate_errors
    async def add_claim(self, claim: BountyClaim) -> None:
        self._session.add(BountyClaimModel.from_entity(claim))
        await self._session.flush()

    @translate_errors
    async def list_claims_for_user(self, user_id: str) -> list[BountyClaim]:
        stmt = (
            select(BountyClaimModel)
            .where(BountyClaimModel.user_id == user_id)
            .order_by(BountyClaimModel.claimed_at.desc())
        )
        result = await self._session.execute(stmt)
        return [m.to_entity() for m in result.scalars()]
