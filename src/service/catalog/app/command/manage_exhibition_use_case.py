from datetime import date
from typing import Any, Optional, Self
from uuid import UUID

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.catalog.app.interface.i_catalog_command_repo import ICatalogCommandRepo
from src.service.catalog.app.interface.i_catalog_query_repo import ICatalogQueryRepo
from src.service.catalog.domain.entity.exhibition_entity import Exhibition
from src.service.catalog.domain.enum.catalog_status import ExhibitionStatus


class ManageExhibitionUseCase:
    """
    Admin exhibition CRUD

    Exhibitions are never hard-deleted: time slots, cart items and bookings keep
    referencing them. Delete archives the exhibition instead.
    """

    def __init__(
        self,
        *,
        catalog_query_repo: ICatalogQueryRepo,
        catalog_command_repo: ICatalogCommandRepo,
    ) -> None:
        self.catalog_query_repo = catalog_query_repo
        self.catalog_command_repo = catalog_command_repo

    @classmethod
    @inject
    def depends(
        cls,
        catalog_query_repo: ICatalogQueryRepo = Depends(Provide[Container.catalog_query_repo]),
        catalog_command_repo: ICatalogCommandRepo = Depends(
            Provide[Container.catalog_command_repo]
        ),
    ) -> Self:
        return cls(catalog_query_repo=catalog_query_repo, catalog_command_repo=catalog_command_repo)

    @Logger.io
    async def create(
        self,
        *,
        name: str,
        description: str = '',
        category: str = 'general',
        location: str = '',
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        image_url: Optional[str] = None,
        status: ExhibitionStatus = ExhibitionStatus.DRAFT,
    ) -> Exhibition:
        exhibition = Exhibition.create(
            name=name,
            description=description,
            category=category,
            location=location,
            start_date=start_date,
            end_date=end_date,
            image_url=image_url,
            status=status,
        )
        created = await self.catalog_command_repo.create_exhibition(exhibition=exhibition)
        Logger.base.info(f'🖼️ [CATALOG] Created exhibition {created.id} ({created.name})')
        return created

    @Logger.io
    async def update(self, *, exhibition_id: UUID, changes: dict[str, Any]) -> Exhibition:
        exhibition = await self._get_or_raise(exhibition_id)
        updated = exhibition.update(**changes)
        return await self.catalog_command_repo.update_exhibition(exhibition=updated)

    @Logger.io
    async def archive(self, *, exhibition_id: UUID) -> Exhibition:
        exhibition = await self._get_or_raise(exhibition_id)
        archived = await self.catalog_command_repo.update_exhibition(
            exhibition=exhibition.archive()
        )
        Logger.base.info(f'🗄️ [CATALOG] Archived exhibition {exhibition_id}')
        return archived

    async def _get_or_raise(self, exhibition_id: UUID) -> Exhibition:
        exhibition = await self.catalog_query_repo.get_exhibition(exhibition_id=exhibition_id)
        if exhibition is None:
            raise NotFoundError('Exhibition not found')
        return exhibition
