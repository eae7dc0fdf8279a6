from dataclasses import dataclass
from enum import Enum


class UrgencyTier(str, Enum):
    """How close to expiration a reminder is."""

    PLANNING = "planning"
    PREPARATION = "preparation"
    ACTION = "action"
    URGENT = "urgent"
    CRITICAL = "critical"
    EXPIRED = "expired"


@dataclass(frozen=True)
class ReminderThreshold:
    """One step of a reminder schedule."""

    tier: UrgencyTier
    days_before_expiration: int
    description: str


@dataclass(frozen=True)
class FiringWindow:
    """Range of days-until-expiration in which a tier may fire.

    The upper bound is inclusive and the lower bound exclusive.
    """

    upper: int
    lower: int

    def contains(self, days_until_expiration: int) -> bool:
        return self.lower < days_until_expiration <= self.upper


FIRING_WINDOWS: dict[UrgencyTier, FiringWindow] = {
    UrgencyTier.PLANNING: FiringWindow(upper=365, lower=350),
    UrgencyTier.PREPARATION: FiringWindow(upper=180, lower=170),
    UrgencyTier.ACTION: FiringWindow(upper=90, lower=80),
    # Intended as weekly, limited in practice by the global cool-down
    UrgencyTier.URGENT: FiringWindow(upper=30, lower=7),
    # Intended as daily; the 7-day cool-down allows a single send
    UrgencyTier.CRITICAL: FiringWindow(upper=7, lower=0),
    UrgencyTier.EXPIRED: FiringWindow(upper=0, lower=-7),
}
