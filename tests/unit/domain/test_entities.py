from datetime import date, timedelta
from decimal import Decimal

import pytest

from certtracker.domain.entities import Bounty, BountyClaimStatus, BountyStatus
from certtracker.domain.errors import BonusNotClaimable, BountyClaimRejected, InvalidTransition
from certtracker.domain.value_objects import CertificationStatus

from ...factories import ALICE, BOB, NOW, TODAY, make_instance


class TestMasterCertification:
    def test_display_name_includes_differing_version(self, aws_sap, az_104):
        assert aws_sap.display_name == "AWS Solutions Architect Professional (SAP-C02)"
        assert az_104.display_name == "Azure Administrator Associate"

    def test_deactivate_records_date(self, aws_sap):
        aws_sap.deactivate(NOW)

        assert not aws_sap.is_active
        assert aws_sap.date_expired == TODAY

    def test_matches_name_fragment_and_vendor(self, aws_sap):
        assert aws_sap.matches("solutions architect", "aws")
        assert not aws_sap.matches("solutions architect", "Google")

    def test_rejects_non_positive_points(self, aws_sap):
        from dataclasses import replace

        with pytest.raises(ValueError):
            replace(aws_sap, points_value=0)


class TestUserCertification:
    def test_renew_reactivates_expired(self):
        instance = make_instance(CertificationStatus.EXPIRED, expiration_date=TODAY)

        instance.renew(date(2027, 6, 1), certificate_number="NEW-1", now=NOW)

        assert instance.status == CertificationStatus.ACTIVE
        assert instance.expiration_date == date(2027, 6, 1)
        assert instance.certificate_number == "NEW-1"

    def test_renew_pending_is_invalid(self):
        instance = make_instance(CertificationStatus.PENDING_APPROVAL)

        with pytest.raises(InvalidTransition):
            instance.renew(date(2027, 6, 1))

    def test_deactivate_active(self):
        instance = make_instance(CertificationStatus.ACTIVE)

        instance.deactivate(NOW)

        assert instance.status == CertificationStatus.INACTIVE

    def test_approve_requires_pending(self):
        with pytest.raises(InvalidTransition):
            make_instance(CertificationStatus.ACTIVE).approve("admin-1")

    def test_claim_bonus(self):
        instance = make_instance(
            expiration_date=TODAY + timedelta(days=100),
            bonus_eligible=True,
            bonus_amount=Decimal("250"),
        )

        instance.claim_bonus(NOW)

        assert instance.bonus_claimed
        assert instance.bonus_paid_date == TODAY

    def test_claim_bonus_twice(self):
        instance = make_instance(expiration_date=TODAY + timedelta(days=100), bonus_eligible=True)
        instance.claim_bonus(NOW)

        with pytest.raises(BonusNotClaimable):
            instance.claim_bonus(NOW)

    def test_claim_bonus_not_eligible(self):
        instance = make_instance(expiration_date=TODAY + timedelta(days=100))

        with pytest.raises(BonusNotClaimable):
            instance.claim_bonus(NOW)

    def test_claim_bonus_after_expiration(self):
        instance = make_instance(expiration_date=TODAY - timedelta(days=1), bonus_eligible=True)

        with pytest.raises(BonusNotClaimable):
            instance.claim_bonus(NOW)


class TestBounty:
    @pytest.fixture
    def bounty(self):
        return Bounty.create(
            title="Security push",
            description="Get a security certification this quarter",
            certification_ids=["az-500", "isc2-cissp"],
            bounty_amount=Decimal("1000"),
            base_bonus_amount=Decimal("250"),
            deadline=TODAY + timedelta(days=30),
            max_claims=1,
            created_by="admin-1",
            today=TODAY,
        )

    def test_total_reward(self, bounty):
        assert bounty.id.startswith("bounty-")
        assert bounty.total_reward == Decimal("1250")

    def test_claim(self, bounty):
        claim = bounty.claim(ALICE, NOW)

        assert claim.status == BountyClaimStatus.CLAIMED
        assert claim.bounty_id == bounty.id
        assert bounty.current_claims == 1

    def test_claim_twice_by_same_user(self, bounty):
        bounty.max_claims = 5
        bounty.claim(ALICE, NOW)

        with pytest.raises(BountyClaimRejected, match="already claimed"):
            bounty.claim(ALICE, NOW)

    def test_fully_claimed(self, bounty):
        bounty.claim(ALICE, NOW)

        with pytest.raises(BountyClaimRejected, match="fully claimed"):
            bounty.claim(BOB, NOW)

    def test_past_deadline(self, bounty):
        with pytest.raises(BountyClaimRejected, match="deadline"):
            bounty.claim(ALICE, NOW + timedelta(days=31))

    def test_closed(self, bounty):
        bounty.close()

        with pytest.raises(BountyClaimRejected, match="no longer active"):
            bounty.claim(ALICE, NOW)

    def test_expire_if_past_deadline(self, bounty):
        assert not bounty.expire_if_past_deadline(TODAY)
        assert bounty.expire_if_past_deadline(TODAY + timedelta(days=31))
        assert bounty.status == BountyStatus.EXPIRED

    def test_requires_certifications(self):
        with pytest.raises(ValueError):
            Bounty.create(
                title="Empty", description="", certification_ids=[],
                bounty_amount=Decimal("1"), base_bonus_amount=Decimal("0"),
                deadline=TODAY, max_claims=1, created_by="admin-1",
            )
