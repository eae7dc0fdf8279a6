from dataclasses import dataclass, field
from datetime import UTC, date, datetime
from decimal import Decimal
from enum import Enum
from uuid import UUID, uuid4

from ..errors import BountyClaimRejected


class BountyStatus(str, Enum):
    ACTIVE = "ACTIVE"
    CLOSED = "CLOSED"
    EXPIRED = "EXPIRED"


class BountyPriority(str, Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


class BountyClaimStatus(str, Enum):
    CLAIMED = "CLAIMED"
    SUBMITTED = "SUBMITTED"
    APPROVED = "APPROVED"
    PAID = "PAID"


@dataclass
class BountyClaim:
    id: UUID
    bounty_id: str
    user_id: str
    claimed_at: datetime
    status: BountyClaimStatus = BountyClaimStatus.CLAIMED


@dataclass
class Bounty:
    """Time-limited incentive campaign on one or more catalog certifications."""

    id: str
    title: str
    description: str
    certification_ids: list[str]
    bounty_amount: Decimal
    base_bonus_amount: Decimal
    deadline: date
    max_claims: int
    created_by: str
    created_date: date
    status: BountyStatus = BountyStatus.ACTIVE
    priority: BountyPriority = BountyPriority.MEDIUM
    requirements: list[str] = field(default_factory=list)
    tags: list[str] = field(default_factory=list)
    claimed_by: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.certification_ids:
            raise ValueError("A bounty must target at least one certification")
        if self.max_claims < 1:
            raise ValueError("A bounty must allow at least one claim")

    @classmethod
    def create(
        cls,
        title: str,
        description: str,
        certification_ids: list[str],
        bounty_amount: Decimal,
        base_bonus_amount: Decimal,
        deadline: date,
        max_claims: int,
        created_by: str,
        priority: BountyPriority = BountyPriority.MEDIUM,
        requirements: list[str] | None = None,
        tags: list[str] | None = None,
        today: date | None = None,
    ) -> "Bounty":
        return cls(
            id=f"bounty-{uuid4().hex[:12]}",
            title=title,
            description=description,
            certification_ids=list(certification_ids),
            bounty_amount=bounty_amount,
            base_bonus_amount=base_bonus_amount,
            deadline=deadline,
            max_claims=max_claims,
            created_by=created_by,
            created_date=today or datetime.now(UTC).date(),
            priority=priority,
            requirements=list(requirements or []),
            tags=list(tags or []),
        )

    @property
    def total_reward(self) -> Decimal:
        return self.bounty_amount + self.base_bonus_amount

    @property
    def current_claims(self) -> int:
        return len(self.claimed_by)

    def is_past_deadline(self, today: date) -> bool:
        return today > self.deadline

    def claim(self, user_id: str, now: datetime | None = None) -> BountyClaim:
        now = now or datetime.now(UTC)
        if self.status != BountyStatus.ACTIVE:
            raise BountyClaimRejected(self.id, "bounty is no longer active")
        if self.is_past_deadline(now.date()):
            raise BountyClaimRejected(self.id, "bounty deadline has passed")
        if user_id in self.claimed_by:
            raise BountyClaimRejected(self.id, "bounty already claimed by this user")
        if self.current_claims >= self.max_claims:
            raise BountyClaimRejected(self.id, "bounty is fully claimed")

        self.claimed_by.append(user_id)
        return BountyClaim(id=uuid4(), bounty_id=self.id, user_id=user_id, claimed_at=now)

    def expire_if_past_deadline(self, today: date) -> bool:
        if self.status == BountyStatus.ACTIVE and self.is_past_deadline(today):
            self.status = BountyStatus.EXPIRED
            return True
        return False

    def close(self) -> None:
        self.status = BountyStatus.CLOSED
