"""Certification lifecycle engine.

Pure functions over domain entities: no persistence, no clock. Callers pass
``now``/``today`` explicitly and persist whatever comes back.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import UTC, date, datetime, timedelta
from decimal import Decimal
from uuid import uuid4

from ..entities import (
    ApprovalAction,
    ApprovalDecision,
    ApprovalHistoryEntry,
    AssignmentMetadata,
    MasterCertificationDefinition,
    PendingSubmission,
    UserCertificationInstance,
    generate_assignment_id,
)
from ..errors import DuplicateClaim, InvalidTransition, NotFound
from ..value_objects import LIVE_STATUSES, CertificationLevel, CertificationStatus
from .dates import compute_expiration

EXPIRING_SOON_WINDOW_DAYS = 30


@dataclass(frozen=True)
class SubmissionData:
    obtained_date: date
    certificate_number: str | None = None
    verification_url: str | None = None
    certificate_file_url: str | None = None
    notes: str | None = None


@dataclass(frozen=True)
class ApprovalOutcome:
    instance: UserCertificationInstance
    history_entry: ApprovalHistoryEntry
    created: bool = False


@dataclass(frozen=True)
class StatusTransition:
    instance: UserCertificationInstance
    previous: CertificationStatus
    target: CertificationStatus


def determine_bonus_eligibility(definition: MasterCertificationDefinition) -> bool:
    """Independent OR conditions over level, points and vendor programs."""
    if definition.level in (CertificationLevel.PROFESSIONAL, CertificationLevel.EXPERT):
        return True
    if definition.points_value >= 20:
        return True
    if definition.vendor == "AWS" and definition.points_value >= 15:
        return True
    if definition.vendor == "Microsoft" and definition.level == CertificationLevel.ASSOCIATE:
        return True
    return False


def validate_assignment(
    definition: MasterCertificationDefinition | None,
    master_definition_id: str,
    user_id: str,
    existing_instances: Iterable[UserCertificationInstance],
) -> MasterCertificationDefinition:
    """Check that a user may take on a new claim for a catalog entry.

    ADMIN_ASSIGNED instances never block: they are the predecessor of the
    submission being validated.
    """
    if definition is None or not definition.is_active or definition.id != master_definition_id:
        raise NotFound("Master certification", master_definition_id)

    for instance in existing_instances:
        if (
            instance.user_id == user_id
            and instance.master_definition_id == master_definition_id
            and instance.status in LIVE_STATUSES
        ):
            raise DuplicateClaim(user_id, master_definition_id)

    return definition


def find_held_assignment(
    existing_instances: Iterable[UserCertificationInstance], master_definition_id: str
) -> UserCertificationInstance | None:
    """The ADMIN_ASSIGNED instance a user holds for a catalog entry, if any."""
    return next(
        (
            i
            for i in existing_instances
            if i.master_definition_id == master_definition_id
            and i.status == CertificationStatus.ADMIN_ASSIGNED
        ),
        None,
    )


def create_from_assignment(
    definition: MasterCertificationDefinition,
    user_id: str,
    assigned_by: str,
    deadline: date | None = None,
    bonus_eligible: bool | None = None,
    bonus_amount: Decimal | None = None,
    admin_notes: str | None = None,
    now: datetime | None = None,
) -> UserCertificationInstance:
    now = now or datetime.now(UTC)
    assignment = AssignmentMetadata(
        assignment_id=generate_assignment_id(),
        assigned_by=assigned_by,
        assigned_date=now.date(),
        deadline=deadline,
        admin_notes=admin_notes,
    )
    if bonus_eligible is None:
        bonus_eligible = determine_bonus_eligibility(definition)
    return UserCertificationInstance.create(
        user_id=user_id,
        master_definition_id=definition.id,
        status=CertificationStatus.ADMIN_ASSIGNED,
        bonus_eligible=bonus_eligible,
        bonus_amount=bonus_amount or Decimal("0"),
        assignment=assignment,
        now=now,
    )


def submit_for_approval(
    instance: UserCertificationInstance | None,
    definition: MasterCertificationDefinition,
    user_id: str,
    data: SubmissionData,
    now: datetime | None = None,
) -> UserCertificationInstance:
    """Move a claim to PENDING_APPROVAL.

    An ADMIN_ASSIGNED instance for the same (user, definition) is updated in
    place and keeps its id and assignment. Without one a new instance is created.
    """
    now = now or datetime.now(UTC)
    expiration_date = compute_expiration(data.obtained_date, definition.validity_months)

    if instance is None:
        instance = UserCertificationInstance.create(
            user_id=user_id,
            master_definition_id=definition.id,
            status=CertificationStatus.PENDING_APPROVAL,
            bonus_eligible=determine_bonus_eligibility(definition),
            now=now,
        )
        _apply_submission(instance, data, expiration_date, now)
        return instance

    if instance.user_id != user_id or instance.master_definition_id != definition.id:
        raise ValueError("Assigned instance does not belong to this user and certification")
    if instance.status != CertificationStatus.ADMIN_ASSIGNED:
        raise InvalidTransition(
            instance.status.value,
            CertificationStatus.PENDING_APPROVAL.value,
            "only assigned certifications can be submitted in place",
        )

    instance.record_submission(
        obtained_date=data.obtained_date,
        expiration_date=expiration_date,
        certificate_number=data.certificate_number,
        verification_url=data.verification_url,
        certificate_file_url=data.certificate_file_url,
        notes=data.notes,
        now=now,
    )
    return instance


def _apply_submission(
    instance: UserCertificationInstance,
    data: SubmissionData,
    expiration_date: date,
    now: datetime,
) -> None:
    instance.obtained_date = data.obtained_date
    instance.expiration_date = expiration_date
    instance.certificate_number = data.certificate_number
    instance.verification_url = data.verification_url
    instance.certificate_file_url = data.certificate_file_url
    instance.notes = data.notes
    instance.submitted_at = now


def build_pending_submission(instance: UserCertificationInstance) -> PendingSubmission:
    """Queue entry for an instance that has just entered PENDING_APPROVAL."""
    if instance.obtained_date is None or instance.expiration_date is None:
        raise ValueError("A pending submission needs obtained and expiration dates")
    return PendingSubmission(
        id=uuid4(),
        user_id=instance.user_id,
        master_definition_id=instance.master_definition_id,
        instance_id=instance.id,
        obtained_date=instance.obtained_date,
        expiration_date=instance.expiration_date,
        certificate_number=instance.certificate_number,
        verification_url=instance.verification_url,
        certificate_file_url=instance.certificate_file_url,
        notes=instance.notes,
        assignment_id=instance.assignment_id,
        original_instance_id=instance.id if instance.is_assigned else None,
        submitted_at=instance.submitted_at or datetime.now(UTC),
    )


def decide_approval(
    submission: PendingSubmission,
    instance: UserCertificationInstance | None,
    definition: MasterCertificationDefinition | None,
    decision: ApprovalDecision,
    admin_id: str,
    comments: str | None = None,
    now: datetime | None = None,
) -> ApprovalOutcome:
    """Apply an admin decision to the instance behind a pending submission.

    ``instance`` is the original assigned instance for traced submissions and
    the instance under review otherwise. Removing the queue entry and storing
    the history entry is left to the caller.
    """
    now = now or datetime.now(UTC)

    if submission.is_traced and instance is None:
        raise NotFound("Assigned certification", submission.original_instance_id)

    if decision == ApprovalDecision.APPROVE:
        created = False
        if instance is None:
            instance = _instance_from_submission(submission, definition, now)
            created = True
        else:
            _sync_from_submission(instance, submission)
        instance.approve(admin_id, comments, now)
        entry = ApprovalHistoryEntry.record(
            submission, instance.id, ApprovalAction.APPROVED, admin_id, now, comments
        )
        return ApprovalOutcome(instance=instance, history_entry=entry, created=created)

    if instance is None:
        raise NotFound("Certification", submission.instance_id)

    reason = comments or "Rejected by administrator"
    if submission.is_traced:
        instance.revert_to_assignment(reason=reason, comments=comments, now=now)
    else:
        instance.reject(reason=reason, comments=comments, now=now)
    entry = ApprovalHistoryEntry.record(
        submission,
        instance.id,
        ApprovalAction.REJECTED,
        admin_id,
        now,
        admin_comments=comments,
        rejection_reason=reason,
    )
    return ApprovalOutcome(instance=instance, history_entry=entry)


def _sync_from_submission(
    instance: UserCertificationInstance, submission: PendingSubmission
) -> None:
    instance.obtained_date = submission.obtained_date
    instance.expiration_date = submission.expiration_date
    instance.certificate_number = submission.certificate_number
    instance.verification_url = submission.verification_url
    instance.certificate_file_url = submission.certificate_file_url


def _instance_from_submission(
    submission: PendingSubmission,
    definition: MasterCertificationDefinition | None,
    now: datetime,
) -> UserCertificationInstance:
    if definition is None:
        raise NotFound("Master certification", submission.master_definition_id)
    instance = UserCertificationInstance.create(
        user_id=submission.user_id,
        master_definition_id=submission.master_definition_id,
        status=CertificationStatus.PENDING_APPROVAL,
        bonus_eligible=determine_bonus_eligibility(definition),
        now=now,
    )
    instance.obtained_date = submission.obtained_date
    instance.expiration_date = submission.expiration_date
    instance.certificate_number = submission.certificate_number
    instance.verification_url = submission.verification_url
    instance.certificate_file_url = submission.certificate_file_url
    instance.notes = submission.notes
    instance.submitted_at = submission.submitted_at
    return instance


def sweep_statuses(
    instances: Iterable[UserCertificationInstance],
    today: date,
    window_days: int = EXPIRING_SOON_WINDOW_DAYS,
    now: datetime | None = None,
) -> list[StatusTransition]:
    """Apply date-driven transitions and return the ones that happened.

    Past expiry wins over the expiring-soon window. A second run over the
    same input and date yields no transitions.
    """
    now = now or datetime.now(UTC)
    horizon = today + timedelta(days=window_days)
    transitions: list[StatusTransition] = []

    for instance in instances:
        expiration = instance.expiration_date
        if expiration is None:
            continue
        previous = instance.status

        if previous in (CertificationStatus.ACTIVE, CertificationStatus.EXPIRING_SOON):
            if expiration < today:
                instance.mark_expired(now)
                transitions.append(
                    StatusTransition(instance, previous, CertificationStatus.EXPIRED)
                )
                continue

        if previous == CertificationStatus.ACTIVE and expiration <= horizon:
            instance.mark_expiring_soon(now)
            transitions.append(
                StatusTransition(instance, previous, CertificationStatus.EXPIRING_SOON)
            )

    return transitions


def list_expiring(
    instances: Iterable[UserCertificationInstance],
    today: date,
    within_days: int,
) -> list[UserCertificationInstance]:
    """Live, dated instances expiring between today and today + within_days."""
    horizon = today + timedelta(days=within_days)
    expiring = [
        i
        for i in instances
        if i.status in (CertificationStatus.ACTIVE, CertificationStatus.EXPIRING_SOON)
        and i.expiration_date is not None
        and today <= i.expiration_date <= horizon
    ]
    return sorted(expiring, key=lambda i: i.expiration_date)
