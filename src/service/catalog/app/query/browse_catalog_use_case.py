from datetime import date
from typing import List, Optional, Self
from uuid import UUID

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.catalog.app.interface.i_catalog_query_repo import ICatalogQueryRepo
from src.service.catalog.domain.entity.exhibition_entity import Exhibition
from src.service.catalog.domain.entity.pricing_entity import Pricing
from src.service.catalog.domain.entity.show_entity import Show
from src.service.catalog.domain.enum.catalog_status import ExhibitionStatus


class BrowseCatalogUseCase:
    """Public catalog reads: only active exhibitions and shows are visible"""

    def __init__(self, *, catalog_query_repo: ICatalogQueryRepo) -> None:
        self.catalog_query_repo = catalog_query_repo

    @classmethod
    @inject
    def depends(
        cls,
        catalog_query_repo: ICatalogQueryRepo = Depends(Provide[Container.catalog_query_repo]),
    ) -> Self:
        return cls(catalog_query_repo=catalog_query_repo)

    @Logger.io
    async def list_exhibitions(
        self, *, status: Optional[ExhibitionStatus] = ExhibitionStatus.ACTIVE
    ) -> List[Exhibition]:
        return await self.catalog_query_repo.list_exhibitions(status=status)

    @Logger.io
    async def get_exhibition(self, *, exhibition_id: UUID) -> Exhibition:
        exhibition = await self.catalog_query_repo.get_exhibition(exhibition_id=exhibition_id)
        if exhibition is None:
            raise NotFoundError('Exhibition not found')
        return exhibition

    @Logger.io
    async def get_bookable_exhibition(
        self, *, exhibition_id: UUID, on_date: Optional[date] = None
    ) -> Exhibition:
        exhibition = await self.get_exhibition(exhibition_id=exhibition_id)
        if not exhibition.is_bookable:
            raise NotFoundError('Exhibition not found')
        if on_date is not None:
            if exhibition.start_date and on_date < exhibition.start_date:
                raise NotFoundError('Exhibition has not opened on this date')
            if exhibition.end_date and on_date > exhibition.end_date:
                raise NotFoundError('Exhibition has closed on this date')
        return exhibition

    @Logger.io
    async def list_shows(self, *, active_only: bool = True) -> List[Show]:
        return await self.catalog_query_repo.list_shows(active_only=active_only)

    @Logger.io
    async def get_show(self, *, show_id: UUID) -> Show:
        show = await self.catalog_query_repo.get_show(show_id=show_id)
        if show is None:
            raise NotFoundError('Show not found')
        return show

    @Logger.io
    async def list_exhibition_pricing(self, *, exhibition_id: UUID) -> List[Pricing]:
        await self.get_exhibition(exhibition_id=exhibition_id)
        return await self.catalog_query_repo.list_pricing(
            exhibition_id=exhibition_id, active_only=True
        )
