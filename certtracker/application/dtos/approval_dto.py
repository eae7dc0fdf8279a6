import html
from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from ...domain.entities import (
    ApprovalAction,
    ApprovalDecision,
    ApprovalHistoryEntry,
    PendingSubmission,
)
from .certification_dto import CertificationResponseDTO


class ApprovalDecisionDTO(BaseModel):
    decision: ApprovalDecision
    comments: str | None = Field(None, max_length=1000)
    admin_id: str | None = None  # Set by auth middleware, not user input

    @field_validator("comments", mode="after")
    @classmethod
    def sanitize_comments(cls, v: str | None) -> str | None:
        if v is None:
            return None
        return html.escape(v.strip())


class PendingSubmissionDTO(BaseModel):
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
    is_traced: bool
    submitted_at: datetime

    @classmethod
    def from_entity(cls, submission: PendingSubmission) -> "PendingSubmissionDTO":
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
            is_traced=submission.is_traced,
            submitted_at=submission.submitted_at,
        )


class ApprovalHistoryDTO(BaseModel):
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
    def from_entity(cls, entry: ApprovalHistoryEntry) -> "ApprovalHistoryDTO":
        return cls(
            id=entry.id,
            submission_id=entry.submission_id,
            instance_id=entry.instance_id,
            user_id=entry.user_id,
            master_definition_id=entry.master_definition_id,
            action=entry.action,
            processed_by=entry.processed_by,
            processed_at=entry.processed_at,
            admin_comments=entry.admin_comments,
            rejection_reason=entry.rejection_reason,
            assignment_id=entry.assignment_id,
        )


class ApprovalResultDTO(BaseModel):
    certification: CertificationResponseDTO
    history: ApprovalHistoryDTO
