"""Certification catalog endpoints (public)."""

from fastapi import APIRouter, Depends, HTTPException, Query, status

from ....application.dtos import MasterCertificationDTO
from ....application.ports.inbound import CatalogQueryUseCase
from ..dependencies import get_catalog_service

router = APIRouter(prefix="/catalog", tags=["catalog"])


@router.get("", response_model=list[MasterCertificationDTO])
async def list_catalog(
    include_inactive: bool = Query(False),
    use_case: CatalogQueryUseCase = Depends(get_catalog_service),
) -> list[MasterCertificationDTO]:
    return await use_case.list_catalog(active_only=not include_inactive)


@router.get("/search", response_model=MasterCertificationDTO)
async def find_definition(
    name: str = Query(..., min_length=1),
    vendor: str = Query(..., min_length=1),
    use_case: CatalogQueryUseCase = Depends(get_catalog_service),
) -> MasterCertificationDTO:
    result = await use_case.find(name, vendor)
    if result is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No match")
    return result


@router.get("/{definition_id}", response_model=MasterCertificationDTO)
async def get_definition(
    definition_id: str,
    use_case: CatalogQueryUseCase = Depends(get_catalog_service),
) -> MasterCertificationDTO:
    result = await use_case.get(definition_id)
    if result is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Master certification not found: {definition_id}",
        )
    return result
