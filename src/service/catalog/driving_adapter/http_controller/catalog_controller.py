from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, status

from src.platform.logging.loguru_io import Logger
from src.service.catalog.app.query.browse_catalog_use_case import BrowseCatalogUseCase
from src.service.catalog.driving_adapter.http_controller.schema.catalog_schema import (
    ExhibitionResponse,
    PricingResponse,
    ShowResponse,
)


router = APIRouter()


@router.get('/exhibitions', status_code=status.HTTP_200_OK)
@Logger.io
async def list_exhibitions(
    use_case: BrowseCatalogUseCase = Depends(BrowseCatalogUseCase.depends),
) -> List[ExhibitionResponse]:
    exhibitions = await use_case.list_exhibitions()
    return [ExhibitionResponse.from_entity(e) for e in exhibitions]


@router.get('/exhibitions/{exhibition_id}', status_code=status.HTTP_200_OK)
@Logger.io
async def get_exhibition(
    exhibition_id: UUID,
    use_case: BrowseCatalogUseCase = Depends(BrowseCatalogUseCase.depends),
) -> ExhibitionResponse:
    exhibition = await use_case.get_bookable_exhibition(exhibition_id=exhibition_id)
    return ExhibitionResponse.from_entity(exhibition)


@router.get('/exhibitions/{exhibition_id}/pricing', status_code=status.HTTP_200_OK)
@Logger.io
async def get_exhibition_pricing(
    exhibition_id: UUID,
    use_case: BrowseCatalogUseCase = Depends(BrowseCatalogUseCase.depends),
) -> List[PricingResponse]:
    pricing = await use_case.list_exhibition_pricing(exhibition_id=exhibition_id)
    return [PricingResponse.from_entity(p) for p in pricing]


@router.get('/shows', status_code=status.HTTP_200_OK)
@Logger.io
async def list_shows(
    use_case: BrowseCatalogUseCase = Depends(BrowseCatalogUseCase.depends),
) -> List[ShowResponse]:
    shows = await use_case.list_shows()
    return [ShowResponse.from_entity(s) for s in shows]


@router.get('/shows/{show_id}', status_code=status.HTTP_200_OK)
@Logger.io
async def get_show(
    show_id: UUID,
    use_case: BrowseCatalogUseCase = Depends(BrowseCatalogUseCase.depends),
) -> ShowResponse:
    show = await use_case.get_show(show_id=show_id)
    return ShowResponse.from_entity(show)
