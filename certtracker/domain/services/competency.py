from collections import defaultdict
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

from ..entities import MasterCertificationDefinition, UserCertificationInstance
from ..value_objects import CertificationStatus, CompetencyTier, tier_for_points


@dataclass(frozen=True)
class CompetencySummary:
    tier: CompetencyTier
    total_points: int
    vendor_scores: dict[str, int] = field(default_factory=dict)


def _active_with_definition(
    instances: Iterable[UserCertificationInstance],
    definitions: Mapping[str, MasterCertificationDefinition],
) -> Iterable[tuple[UserCertificationInstance, MasterCertificationDefinition]]:
    for instance in instances:
        if instance.status != CertificationStatus.ACTIVE:
            continue
        definition = definitions.get(instance.master_definition_id)
        if definition is not None:
            yield instance, definition


def compute_total_points(
    instances: Iterable[UserCertificationInstance],
    definitions: Mapping[str, MasterCertificationDefinition],
) -> int:
    return sum(d.points_value for _, d in _active_with_definition(instances, definitions))


def compute_competency_tier(
    instances: Iterable[UserCertificationInstance],
    definitions: Mapping[str, MasterCertificationDefinition],
) -> CompetencyTier:
    """Map the points of ACTIVE instances onto the competency ladder."""
    return tier_for_points(compute_total_points(instances, definitions))


def compute_competency_scores(
    instances: Iterable[UserCertificationInstance],
    definitions: Mapping[str, MasterCertificationDefinition],
) -> dict[str, int]:
    scores: dict[str, int] = defaultdict(int)
    for _, definition in _active_with_definition(instances, definitions):
        scores[definition.vendor] += definition.points_value
    return dict(scores)


def summarize_competency(
    instances: Iterable[UserCertificationInstance],
    definitions: Mapping[str, MasterCertificationDefinition],
) -> CompetencySummary:
    instances = list(instances)
    total = compute_total_points(instances, definitions)
    return CompetencySummary(
        tier=tier_for_points(total),
        total_points=total,
        vendor_scores=compute_competency_scores(instances, definitions),
    )
