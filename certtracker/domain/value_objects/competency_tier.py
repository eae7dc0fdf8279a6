from enum import Enum


class CompetencyTier(str, Enum):
    """Competency ladder derived from the points of active certifications."""

    ENTRY = "Entry"
    BRONZE = "Bronze"
    BRONZE_PLUS = "Bronze+"
    SILVER = "Silver"
    SILVER_PLUS = "Silver+"
    GOLD = "Gold"
    GOLD_PLUS = "Gold+"
    PLATINUM = "Platinum"


# Inclusive lower bounds, highest first
TIER_THRESHOLDS: tuple[tuple[int, CompetencyTier], ...] = (
    (100, CompetencyTier.PLATINUM),
    (75, CompetencyTier.GOLD_PLUS),
    (50, CompetencyTier.GOLD),
    (35, CompetencyTier.SILVER_PLUS),
    (25, CompetencyTier.SILVER),
    (15, CompetencyTier.BRONZE_PLUS),
    (10, CompetencyTier.BRONZE),
    (0, CompetencyTier.ENTRY),
)


def tier_for_points(total_points: int) -> CompetencyTier:
    for threshold, tier in TIER_THRESHOLDS:
        if total_points >= threshold:
            return tier
    return CompetencyTier.ENTRY
