from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from src.platform.logging.loguru_io import Logger
from src.service.catalog.app.command.manage_exhibition_use_case import ManageExhibitionUseCase
from src.service.catalog.app.command.manage_pricing_use_case import ManagePricingUseCase
from src.service.catalog.app.command.manage_show_use_case import ManageShowUseCase
from src.service.catalog.app.query.browse_catalog_use_case import BrowseCatalogUseCase
from src.service.catalog.driving_adapter.http_controller.schema.catalog_schema import (
    ExhibitionCreateRequest,
    ExhibitionResponse,
    ExhibitionUpdateRequest,
    PricingCreateRequest,
    PricingResponse,
    PricingUpdateRequest,
    ShowCreateRequest,
    ShowResponse,
    ShowUpdateRequest,
)
from src.service.ticketing.driving_adapter.http_controller.auth.role_auth import require_admin


router = APIRouter(dependencies=[Depends(require_admin)])


# ============================ Exhibitions ============================


@router.get('/exhibitions', status_code=status.HTTP_200_OK)
@Logger.io
async def list_all_exhibitions(
    use_case: BrowseCatalogUseCase = Depends(BrowseCatalogUseCase.depends),
) -> List[ExhibitionResponse]:
    exhibitions = await use_case.list_exhibitions(status=None)
    return [ExhibitionResponse.from_entity(e) for e in exhibitions]


@router.post('/exhibitions', status_code=status.HTTP_201_CREATED)
@Logger.io
async def create_exhibition(
    request: ExhibitionCreateRequest,
    use_case: ManageExhibitionUseCase = Depends(ManageExhibitionUseCase.depends),
) -> ExhibitionResponse:
    exhibition = await use_case.create(**request.model_dump())
    return ExhibitionResponse.from_entity(exhibition)


@router.get('/exhibitions/{exhibition_id}', status_code=status.HTTP_200_OK)
@Logger.io
async def get_exhibition(
    exhibition_id: UUID,
    use_case: BrowseCatalogUseCase = Depends(BrowseCatalogUseCase.depends),
) -> ExhibitionResponse:
    exhibition = await use_case.get_exhibition(exhibition_id=exhibition_id)
    return ExhibitionResponse.from_entity(exhibition)


@router.patch('/exhibitions/{exhibition_id}', status_code=status.HTTP_200_OK)
@Logger.io
async def update_exhibition(
    exhibition_id: UUID,
    request: ExhibitionUpdateRequest,
    use_case: ManageExhibitionUseCase = Depends(ManageExhibitionUseCase.depends),
) -> ExhibitionResponse:
    exhibition = await use_case.update(
        exhibition_id=exhibition_id, changes=request.model_dump(exclude_unset=True)
    )
    return ExhibitionResponse.from_entity(exhibition)


@router.delete('/exhibitions/{exhibition_id}', status_code=status.HTTP_200_OK)
@Logger.io
async def archive_exhibition(
    exhibition_id: UUID,
    use_case: ManageExhibitionUseCase = Depends(ManageExhibitionUseCase.depends),
) -> ExhibitionResponse:
    exhibition = await use_case.archive(exhibition_id=exhibition_id)
    return ExhibitionResponse.from_entity(exhibition)


# ============================ Shows ============================


@router.get('/shows', status_code=status.HTTP_200_OK)
@Logger.io
async def list_all_shows(
    use_case: BrowseCatalogUseCase = Depends(BrowseCatalogUseCase.depends),
) -> List[ShowResponse]:
    shows = await use_case.list_shows(active_only=False)
    return [ShowResponse.from_entity(s) for s in shows]


@router.post('/shows', status_code=status.HTTP_201_CREATED)
@Logger.io
async def create_show(
    request: ShowCreateRequest,
    use_case: ManageShowUseCase = Depends(ManageShowUseCase.depends),
) -> ShowResponse:
    show = await use_case.create(**request.model_dump())
    return ShowResponse.from_entity(show)


@router.patch('/shows/{show_id}', status_code=status.HTTP_200_OK)
@Logger.io
async def update_show(
    show_id: UUID,
    request: ShowUpdateRequest,
    use_case: ManageShowUseCase = Depends(ManageShowUseCase.depends),
) -> ShowResponse:
    show = await use_case.update(show_id=show_id, changes=request.model_dump(exclude_unset=True))
    return ShowResponse.from_entity(show)


@router.delete('/shows/{show_id}', status_code=status.HTTP_200_OK)
@Logger.io
async def deactivate_show(
    show_id: UUID,
    use_case: ManageShowUseCase = Depends(ManageShowUseCase.depends),
) -> ShowResponse:
    show = await use_case.deactivate(show_id=show_id)
    return ShowResponse.from_entity(show)


# ============================ Pricing ============================


@router.get('/pricing', status_code=status.HTTP_200_OK)
@Logger.io
async def list_pricing(
    exhibition_id: Optional[UUID] = Query(default=None, alias='exhibitionId'),
    show_id: Optional[UUID] = Query(default=None, alias='showId'),
    use_case: ManagePricingUseCase = Depends(ManagePricingUseCase.depends),
) -> List[PricingResponse]:
    pricing = await use_case.list_all(exhibition_id=exhibition_id, show_id=show_id)
    return [PricingResponse.from_entity(p) for p in pricing]


@router.post('/pricing', status_code=status.HTTP_201_CREATED)
@Logger.io
async def create_pricing(
    request: PricingCreateRequest,
    use_case: ManagePricingUseCase = Depends(ManagePricingUseCase.depends),
) -> PricingResponse:
    pricing = await use_case.create(**request.model_dump())
    return PricingResponse.from_entity(pricing)


@router.get('/pricing/{pricing_id}', status_code=status.HTTP_200_OK)
@Logger.io
async def get_pricing(
    pricing_id: UUID,
    use_case: ManagePricingUseCase = Depends(ManagePricingUseCase.depends),
) -> PricingResponse:
    pricing = await use_case.get(pricing_id=pricing_id)
    return PricingResponse.from_entity(pricing)


@router.patch('/pricing/{pricing_id}', status_code=status.HTTP_200_OK)
@Logger.io
async def update_pricing(
    pricing_id: UUID,
    request: PricingUpdateRequest,
    use_case: ManagePricingUseCase = Depends(ManagePricingUseCase.depends),
) -> PricingResponse:
    pricing = await use_case.update(
        pricing_id=pricing_id, price=request.price, is_active=request.is_active
    )
    return PricingResponse.from_entity(pricing)


@router.delete('/pricing/{pricing_id}', status_code=status.HTTP_204_NO_CONTENT)
@Logger.io
async def delete_pricing(
    pricing_id: UUID,
    use_case: ManagePricingUseCase = Depends(ManagePricingUseCase.depends),
) -> None:
    await use_case.delete(pricing_id=pricing_id)
