from ...domain.entities import MasterCertificationDefinition
from ...domain.services import determine_bonus_eligibility
from ..dtos import MasterCertificationDTO
from ..ports.inbound import CatalogQueryUseCase
from ..ports.outbound import CatalogRepository


class CatalogService(CatalogQueryUseCase):
    """Application service for reading the master catalog."""

    def __init__(self, catalog: CatalogRepository):
        self._catalog = catalog

    async def list_catalog(self, active_only: bool = True) -> list[MasterCertificationDTO]:
        definitions = await self._catalog.list_all(active_only=active_only)
        return [self._to_dto(d) for d in definitions]

    async def get(self, definition_id: str) -> MasterCertificationDTO | None:
        definition = await self._catalog.get(definition_id)
        if not definition:
            return None
        return self._to_dto(definition)

    async def find(self, name: str, vendor: str) -> MasterCertificationDTO | None:
        for definition in await self._catalog.list_all():
            if definition.matches(name, vendor):
                return self._to_dto(definition)
        return None

    def _to_dto(self, definition: MasterCertificationDefinition) -> MasterCertificationDTO:
        return MasterCertificationDTO.from_entity(
            definition, bonus_eligible=determine_bonus_eligibility(definition)
        )
