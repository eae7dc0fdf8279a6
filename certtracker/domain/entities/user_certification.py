from dataclasses import dataclass, field
from datetime import UTC, date, datetime
from decimal import Decimal
from uuid import UUID, uuid4

from ..errors import BonusNotClaimable, InvalidTransition
from ..value_objects import CertificationStatus


def generate_assignment_id() -> str:
    return f"assignment-{uuid4().hex[:12]}"


@dataclass
class AssignmentMetadata:
    """Traceability data for an instance created by an admin assignment."""

    assignment_id: str
    assigned_by: str
    assigned_date: date
    deadline: date | None = None
    admin_notes: str | None = None


@dataclass
class UserCertificationInstance:
    """A user's claim against a master certification definition."""

    id: UUID
    user_id: str
    master_definition_id: str
    status: CertificationStatus
    obtained_date: date | None = None
    expiration_date: date | None = None
    certificate_number: str | None = None
    verification_url: str | None = None
    certificate_file_url: str | None = None
    notes: str | None = None
    bonus_eligible: bool = False
    bonus_claimed: bool = False
    bonus_amount: Decimal = Decimal("0")
    bonus_paid_date: date | None = None
    assignment: AssignmentMetadata | None = None
    submitted_at: datetime | None = None
    approved_at: datetime | None = None
    approved_by: str | None = None
    admin_comments: str | None = None
    rejected_at: datetime | None = None
    rejection_reason: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    @classmethod
    def create(
        cls,
        user_id: str,
        master_definition_id: str,
        status: CertificationStatus,
        bonus_eligible: bool = False,
        bonus_amount: Decimal = Decimal("0"),
        assignment: AssignmentMetadata | None = None,
        now: datetime | None = None,
    ) -> "UserCertificationInstance":
        """Factory method to create a new instance."""
        now = now or datetime.now(UTC)
        return cls(
            id=uuid4(),
            user_id=user_id,
            master_definition_id=master_definition_id,
            status=status,
            bonus_eligible=bonus_eligible,
            bonus_amount=bonus_amount,
            assignment=assignment,
            created_at=now,
            updated_at=now,
        )

    @property
    def is_assigned(self) -> bool:
        return self.assignment is not None

    @property
    def assignment_id(self) -> str | None:
        return self.assignment.assignment_id if self.assignment else None

    def days_until_expiration(self, today: date) -> int | None:
        if self.expiration_date is None:
            return None
        return (self.expiration_date - today).days

    def transition_to(
        self,
        target: CertificationStatus,
        now: datetime | None = None,
        reason: str | None = None,
    ) -> None:
        """Move to a new status, rejecting anything outside the transition table."""
        if not self.status.can_transition_to(target):
            raise InvalidTransition(self.status.value, target.value, reason)
        self.status = target
        self.updated_at = now or datetime.now(UTC)

    def record_submission(
        self,
        obtained_date: date,
        expiration_date: date,
        certificate_number: str | None = None,
        verification_url: str | None = None,
        certificate_file_url: str | None = None,
        notes: str | None = None,
        now: datetime | None = None,
    ) -> None:
        """Attach submission data and move to PENDING_APPROVAL."""
        now = now or datetime.now(UTC)
        self.transition_to(CertificationStatus.PENDING_APPROVAL, now)
        self.obtained_date = obtained_date
        self.expiration_date = expiration_date
        self.certificate_number = certificate_number
        self.verification_url = verification_url
        self.certificate_file_url = certificate_file_url
        self.notes = notes
        self.submitted_at = now
        self.rejected_at = None
        self.rejection_reason = None

    def approve(
        self,
        admin_id: str,
        comments: str | None = None,
        now: datetime | None = None,
    ) -> None:
        now = now or datetime.now(UTC)
        if self.status != CertificationStatus.PENDING_APPROVAL:
            raise InvalidTransition(
                self.status.value,
                CertificationStatus.ACTIVE.value,
                "only pending submissions can be approved",
            )
        self.transition_to(CertificationStatus.ACTIVE, now)
        self.approved_at = now
        self.approved_by = admin_id
        self.admin_comments = comments

    def revert_to_assignment(
        self,
        reason: str | None = None,
        comments: str | None = None,
        now: datetime | None = None,
    ) -> None:
        """Undo a rejected submission so the assignee can resubmit.

        Submission fields are cleared; assignment metadata is kept.
        """
        if self.assignment is None:
            raise InvalidTransition(
                self.status.value,
                CertificationStatus.ADMIN_ASSIGNED.value,
                "instance did not originate from an assignment",
            )
        now = now or datetime.now(UTC)
        self.transition_to(CertificationStatus.ADMIN_ASSIGNED, now)
        self.obtained_date = None
        self.expiration_date = None
        self.certificate_number = None
        self.verification_url = None
        self.certificate_file_url = None
        self.submitted_at = None
        self.rejected_at = now
        self.rejection_reason = reason
        self.admin_comments = comments

    def reject(
        self,
        reason: str | None = None,
        comments: str | None = None,
        now: datetime | None = None,
    ) -> None:
        now = now or datetime.now(UTC)
        self.transition_to(CertificationStatus.REJECTED, now)
        self.rejected_at = now
        self.rejection_reason = reason
        self.admin_comments = comments
        if reason:
            self.notes = reason

    def mark_expiring_soon(self, now: datetime | None = None) -> None:
        self.transition_to(CertificationStatus.EXPIRING_SOON, now)

    def mark_expired(self, now: datetime | None = None) -> None:
        self.transition_to(CertificationStatus.EXPIRED, now)

    def renew(
        self,
        new_expiration_date: date,
        certificate_number: str | None = None,
        verification_url: str | None = None,
        now: datetime | None = None,
    ) -> None:
        if self.status not in (
            CertificationStatus.ACTIVE,
            CertificationStatus.EXPIRING_SOON,
            CertificationStatus.EXPIRED,
        ):
            raise InvalidTransition(
                self.status.value,
                CertificationStatus.ACTIVE.value,
                "only active, expiring or expired certifications can be renewed",
            )
        self.transition_to(CertificationStatus.ACTIVE, now)
        self.expiration_date = new_expiration_date
        self.certificate_number = certificate_number or self.certificate_number
        self.verification_url = verification_url or self.verification_url

    def deactivate(self, now: datetime | None = None) -> None:
        self.transition_to(CertificationStatus.INACTIVE, now)

    def claim_bonus(self, now: datetime | None = None) -> None:
        """Claim the bonus while the certification is still valid."""
        now = now or datetime.now(UTC)
        if not self.bonus_eligible:
            raise BonusNotClaimable(f"Certification {self.id} is not bonus eligible")
        if self.bonus_claimed:
            raise BonusNotClaimable(f"Bonus for certification {self.id} was already claimed")
        if self.status not in (CertificationStatus.ACTIVE, CertificationStatus.EXPIRING_SOON):
            raise BonusNotClaimable(
                f"Bonus for certification {self.id} requires an approved certification"
            )
        if self.expiration_date is not None and now.date() > self.expiration_date:
            raise BonusNotClaimable(f"Bonus window for certification {self.id} has closed")
        self.bonus_claimed = True
        self.bonus_paid_date = now.date()
        self.updated_at = now
