from certtracker.domain.services import summarize_competency
from certtracker.domain.value_objects import CertificationStatus, CompetencyTier

from ...factories import make_instance


class TestCompetency:
    def test_only_active_instances_count(self, aws_sap, az_104):
        definitions = {d.id: d for d in (aws_sap, az_104)}
        instances = [
            make_instance(CertificationStatus.ACTIVE, master_definition_id="aws-sap"),
            make_instance(CertificationStatus.ACTIVE, master_definition_id="az-104"),
            make_instance(CertificationStatus.EXPIRING_SOON, master_definition_id="aws-sap"),
            make_instance(CertificationStatus.EXPIRED, master_definition_id="az-104"),
        ]

        summary = summarize_competency(instances, definitions)

        assert summary.total_points == 45
        assert summary.tier == CompetencyTier.SILVER_PLUS
        assert summary.vendor_scores == {"AWS": 30, "Microsoft": 15}

    def test_unknown_definition_is_ignored(self, aws_sap):
        instances = [make_instance(master_definition_id="retired-cert")]

        summary = summarize_competency(instances, {aws_sap.id: aws_sap})

        assert summary.total_points == 0
        assert summary.tier == CompetencyTier.ENTRY
        assert summary.vendor_scores == {}
