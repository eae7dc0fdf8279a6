from .certification_level import CertificationLevel
from .certification_status import (
    ALLOWED_TRANSITIONS,
    LIVE_STATUSES,
    REMINDER_ELIGIBLE_STATUSES,
    TERMINAL_STATUSES,
    CertificationStatus,
)
from .competency_tier import TIER_THRESHOLDS, CompetencyTier, tier_for_points
from .urgency_tier import FIRING_WINDOWS, FiringWindow, ReminderThreshold, UrgencyTier

__all__ = [
    "ALLOWED_TRANSITIONS",
    "FIRING_WINDOWS",
    "LIVE_STATUSES",
    "REMINDER_ELIGIBLE_STATUSES",
    "TERMINAL_STATUSES",
    "TIER_THRESHOLDS",
    "CertificationLevel",
    "CertificationStatus",
    "CompetencyTier",
    "FiringWindow",
    "ReminderThreshold",
    "UrgencyTier",
    "tier_for_points",
]
