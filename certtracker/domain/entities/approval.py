from dataclasses import dataclass, field
from datetime import UTC, date, datetime
from enum import Enum
from uuid import UUID, uuid4


class ApprovalDecision(str, Enum):
    APPROVE = "APPROVE"
    REJECT = "REJECT"


class ApprovalAction(str, Enum):
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


@dataclass
class PendingSubmission:
    """An entry in the admin review queue.

    A submission is traced when it originated from an admin assignment: it then
    carries both the assignment id and the id of the original assigned instance.
    """

    id: UUID
    user_id: str
    master_definition_id: str
    instance_id: UUID
    obtained_date: date
    expiration_date: date
    certificate_number: str | None = None
    verification_url: str | None = None
    certificate_file_url: str | None = None
    notes: str | None = None
    assignment_id: str | None = None
    original_instance_id: UUID | None = None
    submitted_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    @property
    def is_traced(self) -> bool:
        return self.assignment_id is not None and self.original_instance_id is not None


@dataclass
class ApprovalHistoryEntry:
    """Append-only record of a processed submission."""

    id: UUID
    submission_id: UUID
    instance_id: UUID
    user_id: str
    master_definition_id: str
    action: ApprovalAction
    processed_by: str
    processed_at: datetime
    admin_comments: str | None = None
    rejection_reason: str | None = None
    assignment_id: str | None = None

    @classmethod
    def record(
        cls,
        submission: PendingSubmission,
        instance_id: UUID,
        action: ApprovalAction,
        processed_by: str,
        processed_at: datetime,
        admin_comments: str | None = None,
        rejection_reason: str | None = None,
    ) -> "ApprovalHistoryEntry":
        return cls(
            id=uuid4(),
            submission_id=submission.id,
            instance_id=instance_id,
            user_id=submission.user_id,
            master_definition_id=submission.master_definition_id,
            action=action,
            processed_by=processed_by,
            processed_at=processed_at,
            admin_comments=admin_comments,
            rejection_reason=rejection_reason,
            assignment_id=submission.assignment_id,
        )
