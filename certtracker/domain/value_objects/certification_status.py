from enum import Enum


class CertificationStatus(str, Enum):
    """Lifecycle status of a user certification instance."""

    ADMIN_ASSIGNED = "ADMIN_ASSIGNED"
    PENDING_APPROVAL = "PENDING_APPROVAL"
    ACTIVE = "ACTIVE"
    EXPIRING_SOON = "EXPIRING_SOON"
    EXPIRED = "EXPIRED"
    REJECTED = "REJECTED"
    INACTIVE = "INACTIVE"

    @property
    def is_terminal(self) -> bool:
        """Terminal statuses receive no further automatic transitions."""
        return self in TERMINAL_STATUSES

    def can_transition_to(self, target: "CertificationStatus") -> bool:
        return target in ALLOWED_TRANSITIONS.get(self, frozenset())


TERMINAL_STATUSES = frozenset(
    {
        CertificationStatus.EXPIRED,
        CertificationStatus.REJECTED,
        CertificationStatus.INACTIVE,
    }
)

# Statuses that count as a live claim on a (user, definition) pair
LIVE_STATUSES = frozenset(
    {
        CertificationStatus.ACTIVE,
        CertificationStatus.EXPIRING_SOON,
        CertificationStatus.PENDING_APPROVAL,
    }
)

# Statuses the reminder scheduler looks at
REMINDER_ELIGIBLE_STATUSES = frozenset(
    {
        CertificationStatus.ACTIVE,
        CertificationStatus.EXPIRING_SOON,
    }
)

ALLOWED_TRANSITIONS: dict[CertificationStatus, frozenset[CertificationStatus]] = {
    CertificationStatus.ADMIN_ASSIGNED: frozenset(
        {
            CertificationStatus.PENDING_APPROVAL,
            CertificationStatus.INACTIVE,
        }
    ),
    CertificationStatus.PENDING_APPROVAL: frozenset(
        {
            CertificationStatus.ACTIVE,
            CertificationStatus.REJECTED,
            CertificationStatus.ADMIN_ASSIGNED,
        }
    ),
    CertificationStatus.ACTIVE: frozenset(
        {
            CertificationStatus.ACTIVE,  # manual renewal
            CertificationStatus.EXPIRING_SOON,
            CertificationStatus.EXPIRED,
            CertificationStatus.INACTIVE,
        }
    ),
    CertificationStatus.EXPIRING_SOON: frozenset(
        {
            CertificationStatus.ACTIVE,  # manual renewal
            CertificationStatus.EXPIRED,
            CertificationStatus.INACTIVE,
        }
    ),
    # Terminal for the sweep; a manual renewal may still reactivate it
    CertificationStatus.EXPIRED: frozenset({CertificationStatus.ACTIVE}),
    CertificationStatus.REJECTED: frozenset(),
    CertificationStatus.INACTIVE: frozenset(),
}
