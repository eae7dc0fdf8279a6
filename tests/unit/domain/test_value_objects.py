import pytest

from certtracker.domain.errors import InvalidTransition
from certtracker.domain.value_objects import (
    FIRING_WINDOWS,
    CertificationStatus,
    CompetencyTier,
    UrgencyTier,
    tier_for_points,
)

from ...factories import make_instance


class TestCertificationStatus:
    def test_assigned_can_move_to_pending(self):
        assert CertificationStatus.ADMIN_ASSIGNED.can_transition_to(
            CertificationStatus.PENDING_APPROVAL
        )

    def test_pending_can_revert_to_assigned(self):
        assert CertificationStatus.PENDING_APPROVAL.can_transition_to(
            CertificationStatus.ADMIN_ASSIGNED
        )

    @pytest.mark.parametrize(
        "status", [CertificationStatus.REJECTED, CertificationStatus.INACTIVE]
    )
    def test_rejected_and_inactive_are_final(self, status):
        assert not any(status.can_transition_to(target) for target in CertificationStatus)

    def test_expired_only_reactivates_by_renewal(self):
        assert CertificationStatus.EXPIRED.is_terminal
        assert CertificationStatus.EXPIRED.can_transition_to(CertificationStatus.ACTIVE)
        assert not CertificationStatus.EXPIRED.can_transition_to(
            CertificationStatus.EXPIRING_SOON
        )

    def test_disallowed_transition_raises(self):
        instance = make_instance(CertificationStatus.REJECTED)

        with pytest.raises(InvalidTransition) as exc:
            instance.transition_to(CertificationStatus.ACTIVE)

        assert "REJECTED" in exc.value.message
        assert instance.status == CertificationStatus.REJECTED


class TestCompetencyTier:
    @pytest.mark.parametrize(
        "points,tier",
        [
            (0, CompetencyTier.ENTRY),
            (9, CompetencyTier.ENTRY),
            (10, CompetencyTier.BRONZE),
            (15, CompetencyTier.BRONZE_PLUS),
            (25, CompetencyTier.SILVER),
            (49, CompetencyTier.SILVER_PLUS),
            (50, CompetencyTier.GOLD),
            (75, CompetencyTier.GOLD_PLUS),
            (250, CompetencyTier.PLATINUM),
        ],
    )
    def test_points_map_to_tier(self, points, tier):
        assert tier_for_points(points) == tier


class TestFiringWindows:
    def test_upper_bound_inclusive_lower_exclusive(self):
        window = FIRING_WINDOWS[UrgencyTier.ACTION]

        assert window.contains(90)
        assert window.contains(81)
        assert not window.contains(80)
        assert not window.contains(91)

    def test_expired_window_covers_first_week_after_expiry(self):
        window = FIRING_WINDOWS[UrgencyTier.EXPIRED]

        assert window.contains(0)
        assert window.contains(-6)
        assert not window.contains(-7)
