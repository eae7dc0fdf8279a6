import html
from datetime import date, datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from ...domain.entities import (
    Bounty,
    BountyClaim,
    BountyClaimStatus,
    BountyPriority,
    BountyStatus,
)


class CreateBountyDTO(BaseModel):
    title: str = Field(..., min_length=3, max_length=200)
    description: str = Field(..., max_length=2000)
    certification_ids: list[str] = Field(..., min_length=1)
    bounty_amount: Decimal = Field(..., ge=0)
    base_bonus_amount: Decimal = Field(Decimal("0"), ge=0)
    deadline: date
    max_claims: int = Field(1, ge=1)
    priority: BountyPriority = BountyPriority.MEDIUM
    requirements: list[str] = []
    tags: list[str] = []
    created_by: str | None = None  # Set by auth middleware, not user input

    @field_validator("title", "description", mode="after")
    @classmethod
    def sanitize_text(cls, v: str) -> str:
        return html.escape(v.strip())


class BountyDTO(BaseModel):
    id: str
    title: str
    description: str
    certification_ids: list[str]
    bounty_amount: Decimal
    base_bonus_amount: Decimal
    total_reward: Decimal
    deadline: date
    max_claims: int
    current_claims: int
    status: BountyStatus
    priority: BountyPriority
    created_by: str
    created_date: date
    requirements: list[str] = []
    tags: list[str] = []

    @classmethod
    def from_entity(cls, bounty: Bounty) -> "BountyDTO":
        return cls(
            id=bounty.id,
            title=bounty.title,
            description=bounty.description,
            certification_ids=bounty.certification_ids,
            bounty_amount=bounty.bounty_amount,
            base_bonus_amount=bounty.base_bonus_amount,
            total_reward=bounty.total_reward,
            deadline=bounty.deadline,
            max_claims=bounty.max_claims,
            current_claims=bounty.current_claims,
            status=bounty.status,
            priority=bounty.priority,
            created_by=bounty.created_by,
            created_date=bounty.created_date,
            requirements=bounty.requirements,
            tags=bounty.tags,
        )


class BountyClaimDTO(BaseModel):
    id: UUID
    bounty_id: str
    user_id: str
    claimed_at: datetime
    status: BountyClaimStatus

    @classmethod
    def from_entity(cls, claim: BountyClaim) -> "BountyClaimDTO":
        return cls(
            id=claim.id,
            bounty_id=claim.bounty_id,
            user_id=claim.user_id,
            claimed_at=claim.claimed_at,
            status=claim.status,
        )
