from datetime import UTC, date, datetime
from decimal import Decimal
from typing import overload
from uuid import UUID

from sqlalchemy import JSON, Boolean, Date, DateTime, Integer, Numeric, String, Text, Uuid
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from ...domain.entities import (
    ApprovalAction,
    ApprovalHistoryEntry,
    AssignmentMetadata,
    Bounty,
    BountyClaim,
    BountyClaimStatus,
    BountyPriority,
    BountyStatus,
    MasterCertificationDefinition,
    NotificationChannel,
    PendingSubmission,
    Recipient,
    ReminderRecord,
    UserCertificationInstance,
)
from ...domain.value_objects import CertificationLevel, CertificationStatus, UrgencyTier


def _naive_utc(dt: datetime | None) -> datetime | None:
    """Strip timezone info for storage in TIMESTAMP WITHOUT TIME ZONE columns."""
    if dt is None:
        return None
    if dt.tzinfo is not None:
        dt = dt.astimezone(UTC)
    return dt.replace(tzinfo=None)


@overload
def _aware_utc(dt: datetime) -> datetime: ...


@overload
def _aware_utc(dt: None) -> None: ...


@overload
def _aware_utc(dt: datetime | None) -> datetime | None: ...


def _aware_utc(dt: datetime | None) -> datetime | None:
    """Attach UTC timezone to naive datetimes read from the database."""
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt


class Base(DeclarativeBase):
    pass


class MasterCertificationModel(Base):
    """SQLAlchemy model for the master certification catalog."""

    __tablename__ = "master_certifications"

    id: Mapped[str] = mapped_column(String(100), primary_key=True)
    full_name: Mapped[str] = mapped_column(String(255), nullable=False)
    short_name: Mapped[str] = mapped_column(String(100), nullable=False)
    version: Mapped[str] = mapped_column(String(50), nullable=False)
    vendor: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    level: Mapped[str] = mapped_column(String(50), nullable=False)
    points_value: Mapped[int] = mapped_column(Integer, nullable=False)
    validity_months: Mapped[int] = mapped_column(Integer, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    date_introduced: Mapped[date | None] = mapped_column(Date)
    date_expired: Mapped[date | None] = mapped_column(Date)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)

    @classmethod
    def from_entity(cls, definition: MasterCertificationDefinition) -> "MasterCertificationModel":
        return cls(
            id=definition.id,
            full_name=definition.full_name,
            short_name=definition.short_name,
            version=definition.version,
            vendor=definition.vendor,
            level=definition.level.value,
            points_value=definition.points_value,
            validity_months=definition.validity_months,
            description=definition.description,
            is_active=definition.is_active,
            date_introduced=definition.date_introduced,
            date_expired=definition.date_expired,
            created_at=_naive_utc(definition.created_at),
            updated_at=_naive_utc(definition.updated_at),
        )

    def to_entity(self) -> MasterCertificationDefinition:
        return MasterCertificationDefinition(
            id=self.id,
            full_name=self.full_name,
            short_name=self.short_name,
            version=self.version,
            vendor=self.vendor,
            level=CertificationLevel(self.level),
            points_value=self.points_value,
            validity_months=self.validity_months,
            description=self.description,
            is_active=self.is_active,
            date_introduced=self.date_introduced,
            date_expired=self.date_expired,
            created_at=_aware_utc(self.created_at),
            updated_at=_aware_utc(self.updated_at),
        )


class UserCertificationModel(Base):
    """SQLAlchemy model for a user's certification instance."""

    __tablename__ = "user_certifications"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True)
    user_id: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    master_definition_id: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    status: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    obtained_date: Mapped[date | None] = mapped_column(Date)
    expiration_date: Mapped[date | None] = mapped_column(Date)
    certificate_number: Mapped[str | None] = mapped_column(String(100))
    verification_url: Mapped[str | None] = mapped_column(String(2048))
    certificate_file_url: Mapped[str | None] = mapped_column(String(2048))
    notes: Mapped[str | None] = mapped_column(Text)
    bonus_eligible: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    bonus_claimed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    bonus_amount: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False, default=0)
    bonus_paid_date: Mapped[date | None] = mapped_column(Date)
    assignment_id: Mapped[str | None] = mapped_column(String(50), index=True)
    assigned_by: Mapped[str | None] = mapped_column(String(255))
    assigned_date: Mapped[date | None] = mapped_column(Date)
    assignment_deadline: Mapped[date | None] = mapped_column(Date)
    admin_notes: Mapped[str | None] = mapped_column(Text)
    submitted_at: Mapped[datetime | None] = mapped_column(DateTime)
    approved_at: Mapped[datetime | None] = mapped_column(DateTime)
    approved_by: Mapped[str | None] = mapped_column(String(255))
    admin_comments: Mapped[str | None] = mapped_column(Text)
    rejected_at: Mapped[datetime | None] = mapped_column(DateTime)
    rejection_reason: Mapped[str | None] = mapped_column(Text)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)

    @classmethod
    def from_entity(cls, instance: UserCertificationInstance) -> "UserCertificationModel":
        assignment = instance.assignment
        return cls(
            id=instance.id,
            user_id=instance.user_id,
            master_definition_id=instance.master_definition_id,
            status=instance.status.value,
            obtained_date=instance.obtained_date,
            expiration_date=instance.expiration_date,
            certificate_number=instance.certificate_number,
            verification_url=instance.verification_url,
            certificate_file_url=instance.certificate_file_url,
            notes=instance.notes,
            bonus_eligible=instance.bonus_eligible,
            bonus_claimed=instance.bonus_claimed,
            bonus_amount=instance.bonus_amount,
            bonus_paid_date=instance.bonus_paid_date,
            assignment_id=assignment.assignment_id if assignment else None,
            assigned_by=assignment.assigned_by if assignment else None,
            assigned_date=assignment.assigned_date if assignment else None,
            assignment_deadline=assignment.deadline if assignment else None,
            admin_notes=assignment.admin_notes if assignment else None,
            submitted_at=_naive_utc(instance.submitted_at),
            approved_at=_naive_utc(instance.approved_at),
            approved_by=instance.approved_by,
            admin_comments=instance.admin_comments,
            rejected_at=_naive_utc(instance.rejected_at),
            rejection_reason=instance.rejection_reason,
            created_at=_naive_utc(instance.created_at),
            updated_at=_naive_utc(instance.updated_at),
        )

    def to_entity(self) -> UserCertificationInstance:
        assignment = None
        if self.assignment_id is not None:
            assignment = AssignmentMetadata(
                assignment_id=self.assignment_id,
                assigned_by=self.assigned_by or "",
                assigned_date=self.assigned_date or self.created_at.date(),
                deadline=self.assignment_deadline,
                admin_notes=self.admin_notes,
            )
        return UserCertificationInstance(
            id=self.id,
            user_id=self.user_id,
            master_definition_id=self.master_definition_id,
            status=CertificationStatus(self.status),
            obtained_date=self.obtained_date,
            expiration_date=self.expiration_date,
            certificate_number=self.certificate_number,
            verification_url=self.verification_url,
            certificate_file_url=self.certificate_file_url,
            notes=self.notes,
            bonus_eligible=self.bonus_eligible,
            bonus_claimed=self.bonus_claimed,
            bonus_amount=Decimal(self.bonus_amount or 0),
            bonus_paid_date=self.bonus_paid_date,
            assignment=assignment,
            submitted_at=_aware_utc(self.submitted_at),
            approved_at=_aware_utc(self.approved_at),
            approved_by=self.approved_by,
            admin_comments=self.admin_comments,
            rejected_at=_aware_utc(self.rejected_at),
            rejection_reason=self.rejection_reason,
            created_at=_aware_utc(self.created_at),
            updated_at=_aware_utc(self.updated_at),
        )


class PendingSubmissionModel(Base):
    __tablename__ = "pending_submissions"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True)
    user_id: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    master_definition_id: Mapped[str] = mapped_column(String(100), nullable=False)
    instance_id: Mapped[UUID] = mapped_column(Uuid, nullable=False)
    obtained_date: Mapped[date] = mapped_column(Date, nullable=False)
    expiration_date: Mapped[date] = mapped_column(Date, nullable=False)
    certificate_number: Mapped[str | None] = mapped_column(String(100))
    verification_url: Mapped[str | None] = mapped_column(String(2048))
    certificate_file_url: Mapped[str | None] = mapped_column(String(2048))
    notes: Mapped[str | None] = mapped_column(Text)
    assignment_id: Mapped[str | None] = mapped_column(String(50))
    original_instance_id: Mapped[UUID | None] = mapped_column(Uuid)
    submitted_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)

    @classmethod
    def from_entity(cls, submission: PendingSubmission) -> "PendingSubmissionModel":
        return cls(
            id=submission.id,
            user_id=submission.user_id,
            master_definition_id=submission.master_definition_id,
            instance_id=submission.instance_id,
            obtained_date=submission.obtained_date,
            expiration_date=submission.expiration_date,
            certificate_number=submission.certificate_number,
            verification_url=submission.verification_url,
            certificate_file_url=submission.certificate_file_url,
            notes=submission.notes,
            assignment_id=submission.assignment_id,
            original_instance_id=submission.original_instance_id,
            submitted_at=_naive_utc(submission.submitted_at),
        )

    def to_entity(self) -> PendingSubmission:
        return PendingSubmission(
            id=self.id,
            user_id=self.user_id,
            master_definition_id=self.master_definition_id,
            instance_id=self.instance_id,
            obtained_date=self.obtained_date,
            expiration_date=self.expiration_date,
            certificate_number=self.certificate_number,
            verification_url=self.verification_url,
            certificate_file_url=self.certificate_file_url,
            notes=self.notes,
            assignment_id=self.assignment_id,
            original_instance_id=self.original_instance_id,
            submitted_at=_aware_utc(self.submitted_at),
        )


class ApprovalHistoryModel(Base):
    __tablename__ = "approval_history"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True)
    submission_id: Mapped[UUID] = mapped_column(Uuid, nullable=False)
    instance_id: Mapped[UUID] = mapped_column(Uuid, nullable=False, index=True)
    user_id: Mapped[str] = mapped_column(String(255), nullable=False)
    master_definition_id: Mapped[str] = mapped_column(String(100), nullable=False)
    action: Mapped[str] = mapped_column(String(20), nullable=False)
    processed_by: Mapped[str] = mapped_column(String(255), nullable=False)
    processed_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, index=True)
    admin_comments: Mapped[str | None] = mapped_column(Text)
    rejection_reason: Mapped[str | None] = mapped_column(Text)
    assignment_id: Mapped[str | None] = mapped_column(String(50))

    @classmethod
    def from_entity(cls, entry: ApprovalHistoryEntry) -> "ApprovalHistoryModel":
        return cls(
            id=entry.id,
            submission_id=entry.submission_id,
            instance_id=entry.instance_id,
            user_id=entry.user_id,
            master_definition_id=entry.master_definition_id,
            action=entry.action.value,
            processed_by=entry.processed_by,
            processed_at=_naive_utc(entry.processed_at),
            admin_comments=entry.admin_comments,
            rejection_reason=entry.rejection_reason,
            assignment_id=entry.assignment_id,
        )

    def to_entity(self) -> ApprovalHistoryEntry:
        return ApprovalHistoryEntry(
            id=self.id,
            submission_id=self.submission_id,
            instance_id=self.instance_id,
            user_id=self.user_id,
            master_definition_id=self.master_definition_id,
            action=ApprovalAction(self.action),
            processed_by=self.processed_by,
            processed_at=_aware_utc(self.processed_at),
            admin_comments=self.admin_comments,
            rejection_reason=self.rejection_reason,
            assignment_id=self.assignment_id,
        )


class NotificationLogModel(Base):
    """Reminder ledger; rows are only ever inserted."""

    __tablename__ = "notification_log"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True)
    instance_id: Mapped[UUID] = mapped_column(Uuid, nullable=False, index=True)
    user_id: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    tier: Mapped[str] = mapped_column(String(20), nullable=False)
    channel: Mapped[str] = mapped_column(String(20), nullable=False)
    sent_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, index=True)
    delivered: Mapped[bool] = mapped_column(Boolean, nullable=False)
    message_summary: Mapped[str] = mapped_column(Text, nullable=False, default="")

    @classmethod
    def from_entity(cls, record: ReminderRecord) -> "NotificationLogModel":
        return cls(
            id=record.id,
            instance_id=record.instance_id,
            user_id=record.user_id,
            tier=record.tier.value,
            channel=record.channel.value,
            sent_at=_naive_utc(record.sent_at),
            delivered=record.delivered,
            message_summary=record.message_summary,
        )

    def to_entity(self) -> ReminderRecord:
        return ReminderRecord(
            id=self.id,
            instance_id=self.instance_id,
            user_id=self.user_id,
            tier=UrgencyTier(self.tier),
            channel=NotificationChannel(self.channel),
            sent_at=_aware_utc(self.sent_at),
            delivered=self.delivered,
            message_summary=self.message_summary,
        )


class UserModel(Base):
    """Contact details and alert preferences of certification holders."""

    __tablename__ = "users"

    user_id: Mapped[str] = mapped_column(String(255), primary_key=True)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    first_name: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    last_name: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    email_enabled: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    def to_entity(self) -> Recipient:
        return Recipient(
            user_id=self.user_id,
            email=self.email,
            first_name=self.first_name,
            last_name=self.last_name,
            email_enabled=self.email_enabled,
        )


class BountyModel(Base):
    __tablename__ = "bounties"

    id: Mapped[str] = mapped_column(String(50), primary_key=True)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    certification_ids: Mapped[list[str]] = mapped_column(JSON, nullable=False)
    bounty_amount: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    base_bonus_amount: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    deadline: Mapped[date] = mapped_column(Date, nullable=False)
    max_claims: Mapped[int] = mapped_column(Integer, nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False, index=True)
    priority: Mapped[str] = mapped_column(String(20), nullable=False)
    created_by: Mapped[str] = mapped_column(String(255), nullable=False)
    created_date: Mapped[date] = mapped_column(Date, nullable=False)
    requirements: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    tags: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    claimed_by: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)

    @classmethod
    def from_entity(cls, bounty: Bounty) -> "BountyModel":
        return cls(
            id=bounty.id,
            title=bounty.title,
            description=bounty.description,
            certification_ids=list(bounty.certification_ids),
            bounty_amount=bounty.bounty_amount,
            base_bonus_amount=bounty.base_bonus_amount,
            deadline=bounty.deadline,
            max_claims=bounty.max_claims,
            status=bounty.status.value,
            priority=bounty.priority.value,
            created_by=bounty.created_by,
            created_date=bounty.created_date,
            requirements=list(bounty.requirements),
            tags=list(bounty.tags),
            claimed_by=list(bounty.claimed_by),
        )

    def to_entity(self) -> Bounty:
        return Bounty(
            id=self.id,
            title=self.title,
            description=self.description,
            certification_ids=list(self.certification_ids),
            bounty_amount=Decimal(self.bounty_amount),
            base_bonus_amount=Decimal(self.base_bonus_amount),
            deadline=self.deadline,
            max_claims=self.max_claims,
            created_by=self.created_by,
            created_date=self.created_date,
            status=BountyStatus(self.status),
            priority=BountyPriority(self.priority),
            requirements=list(self.requirements or []),
            tags=list(self.tags or []),
            claimed_by=list(self.claimed_by or []),
        )


class BountyClaimModel(Base):
    __tablename__ = "bounty_claims"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True)
    bounty_id: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    user_id: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    claimed_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False)

    @classmethod
    def from_entity(cls, claim: BountyClaim) -> "BountyClaimModel":
        return cls(
            id=claim.id,
            bounty_id=claim.bounty_id,
            user_id=claim.user_id,
            claimed_at=_naive_utc(claim.claimed_at),
            status=claim.status.value,
        )

    def to_entity(self) -> BountyClaim:
        return BountyClaim(
            id=self.id,
            bounty_id=self.bounty_id,
            user_id=self.user_id,
            claimed_at=_aware_utc(self.claimed_at),
            status=BountyClaimStatus(self.status),
        )
