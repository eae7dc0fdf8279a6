import html
from datetime import date, datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, Field, HttpUrl, field_validator

from ...domain.entities import MasterCertificationDefinition, UserCertificationInstance
from ...domain.value_objects import CertificationLevel, CertificationStatus, CompetencyTier


def _escape(v: str | None) -> str | None:
    if v is None:
        return None
    return html.escape(v.strip())


class MasterCertificationDTO(BaseModel):
    id: str
    full_name: str
    short_name: str
    display_name: str
    version: str
    vendor: str
    level: CertificationLevel
    points_value: int
    validity_months: int
    description: str = ""
    is_active: bool
    bonus_eligible: bool

    @classmethod
    def from_entity(
        cls, definition: MasterCertificationDefinition, bonus_eligible: bool
    ) -> "MasterCertificationDTO":
        return cls(
            id=definition.id,
            full_name=definition.full_name,
            short_name=definition.short_name,
            display_name=definition.display_name,
            version=definition.version,
            vendor=definition.vendor,
            level=definition.level,
            points_value=definition.points_value,
            validity_months=definition.validity_months,
            description=definition.description,
            is_active=definition.is_active,
            bonus_eligible=bonus_eligible,
        )


class AssignCertificationDTO(BaseModel):
    """Admin assignment of a catalog certification to a user."""

    user_id: str = Field(..., min_length=1, max_length=255)
    master_definition_id: str = Field(..., min_length=1, max_length=100)
    deadline: date | None = None
    bonus_eligible: bool | None = None
    bonus_amount: Decimal | None = Field(None, ge=0)
    admin_notes: str | None = Field(None, max_length=1000)
    assigned_by: str | None = None  # Set by auth middleware, not user input

    @field_validator("admin_notes", mode="after")
    @classmethod
    def sanitize_admin_notes(cls, v: str | None) -> str | None:
        return _escape(v)


class SubmitCertificationDTO(BaseModel):
    """User submission of an earned certification.

    Security: free-text fields are HTML-escaped.
    """

    master_definition_id: str = Field(..., min_length=1, max_length=100)
    obtained_date: date
    certificate_number: str | None = Field(None, max_length=100)
    verification_url: HttpUrl | None = None
    certificate_file_url: HttpUrl | None = None
    notes: str | None = Field(None, max_length=1000)
    user_id: str | None = None  # Set by auth middleware, not user input

    @field_validator("certificate_number", "notes", mode="after")
    @classmethod
    def sanitize_text(cls, v: str | None) -> str | None:
        return _escape(v)


class RenewCertificationDTO(BaseModel):
    new_expiration_date: date
    certificate_number: str | None = Field(None, max_length=100)
    verification_url: HttpUrl | None = None


class AssignmentDTO(BaseModel):
    assignment_id: str
    assigned_by: str
    assigned_date: date
    deadline: date | None = None
    admin_notes: str | None = None


class CertificationResponseDTO(BaseModel):
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
    bonus_eligible: bool
    bonus_claimed: bool
    bonus_amount: Decimal
    bonus_paid_date: date | None = None
    assignment: AssignmentDTO | None = None
    submitted_at: datetime | None = None
    approved_at: datetime | None = None
    approved_by: str | None = None
    rejection_reason: str | None = None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, instance: UserCertificationInstance) -> "CertificationResponseDTO":
        assignment = None
        if instance.assignment is not None:
            assignment = AssignmentDTO(
                assignment_id=instance.assignment.assignment_id,
                assigned_by=instance.assignment.assigned_by,
                assigned_date=instance.assignment.assigned_date,
                deadline=instance.assignment.deadline,
                admin_notes=instance.assignment.admin_notes,
            )
        return cls(
            id=instance.id,
            user_id=instance.user_id,
            master_definition_id=instance.master_definition_id,
            status=instance.status,
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
            assignment=assignment,
            submitted_at=instance.submitted_at,
            approved_at=instance.approved_at,
            approved_by=instance.approved_by,
            rejection_reason=instance.rejection_reason,
            created_at=instance.created_at,
            updated_at=instance.updated_at,
        )


class CompetencyDTO(BaseModel):
    user_id: str
    tier: CompetencyTier
    total_points: int
    vendor_scores: dict[str, int] = {}
