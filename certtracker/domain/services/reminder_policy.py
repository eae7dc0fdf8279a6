"""Reminder tier selection and cool-down rules.

Decides whether a reminder is due and at which urgency. Triggering and
delivery live elsewhere.
"""

from collections.abc import Sequence
from datetime import date, datetime, timedelta

from ..entities import (
    MasterCertificationDefinition,
    Recipient,
    ReminderPayload,
    UserCertificationInstance,
)
from ..value_objects import FIRING_WINDOWS, ReminderThreshold, UrgencyTier

DEFAULT_COOLDOWN_DAYS = 7
LONG_CYCLE_VALIDITY_MONTHS = 36

_LONG_CYCLE_SCHEDULE: tuple[ReminderThreshold, ...] = (
    ReminderThreshold(UrgencyTier.PLANNING, 365, "1 year before expiration"),
    ReminderThreshold(UrgencyTier.PREPARATION, 180, "6 months before expiration"),
    ReminderThreshold(UrgencyTier.ACTION, 90, "3 months before expiration"),
    ReminderThreshold(UrgencyTier.URGENT, 30, "1 month before expiration"),
    ReminderThreshold(UrgencyTier.CRITICAL, 7, "1 week before expiration"),
    ReminderThreshold(UrgencyTier.EXPIRED, 0, "On expiration"),
)

# Planning is reserved for three-year certifications
_STANDARD_SCHEDULE: tuple[ReminderThreshold, ...] = _LONG_CYCLE_SCHEDULE[1:]

RENEWAL_URLS: dict[str, str] = {
    "AWS": "https://aws.amazon.com/certification/recertification/",
    "Microsoft": "https://docs.microsoft.com/en-us/learn/certifications/renew-your-microsoft-certification",
    "Google": "https://cloud.google.com/certification/recertification",
    "CompTIA": "https://www.comptia.org/continuing-education",
    "Cisco": "https://www.cisco.com/c/en/us/training-events/training-certifications/recertification-policy.html",
    "ISC2": "https://www.isc2.org/Certifications/Continuing-Professional-Education",
    "EC-Council": "https://www.eccouncil.org/programs/continuing-education-program/",
}


def derive_schedule(validity_months: int) -> list[ReminderThreshold]:
    if validity_months >= LONG_CYCLE_VALIDITY_MONTHS:
        return list(_LONG_CYCLE_SCHEDULE)
    return list(_STANDARD_SCHEDULE)


def find_applicable_tier(
    days_until_expiration: int, schedule: Sequence[ReminderThreshold]
) -> UrgencyTier | None:
    """Closest threshold at or above the remaining days, or None if it is too early."""
    for threshold in sorted(schedule, key=lambda t: t.days_before_expiration):
        if threshold.days_before_expiration >= days_until_expiration:
            return threshold.tier
    return None


def should_fire(
    tier: UrgencyTier,
    days_until_expiration: int,
    last_delivered_at: datetime | None,
    now: datetime,
    cooldown_days: int = DEFAULT_COOLDOWN_DAYS,
) -> bool:
    """Apply the per-tier cool-down, then the tier's firing window.

    ``last_delivered_at`` is the most recent delivered reminder of this exact
    tier for the instance, if any.
    """
    if last_delivered_at is not None and now - last_delivered_at < timedelta(days=cooldown_days):
        return False
    return FIRING_WINDOWS[tier].contains(days_until_expiration)


def renewal_url_for(vendor: str) -> str | None:
    return RENEWAL_URLS.get(vendor)


def days_until(expiration_date: date, today: date) -> int:
    return (expiration_date - today).days


def build_payload(
    instance: UserCertificationInstance,
    definition: MasterCertificationDefinition,
    recipient: Recipient,
    tier: UrgencyTier,
    days_until_expiration: int,
) -> ReminderPayload:
    if instance.expiration_date is None:
        raise ValueError(f"Certification {instance.id} has no expiration date")
    return ReminderPayload(
        instance_id=instance.id,
        recipient_email=recipient.email,
        recipient_name=recipient.full_name,
        certification_name=definition.display_name,
        vendor=definition.vendor,
        expiration_date=instance.expiration_date,
        days_until_expiration=days_until_expiration,
        urgency_tier=tier,
        renewal_url=renewal_url_for(definition.vendor),
        certificate_number=instance.certificate_number,
    )
