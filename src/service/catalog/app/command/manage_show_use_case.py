from typing import Any, Optional, Self
from uuid import UUID

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.catalog.app.interface.i_catalog_command_repo import ICatalogCommandRepo
from src.service.catalog.app.interface.i_catalog_query_repo import ICatalogQueryRepo
from src.service.catalog.domain.entity.show_entity import Show


class ManageShowUseCase:
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
        show_type: str = 'planetarium',
        duration_minutes: int = 60,
        image_url: Optional[str] = None,
        is_active: bool = True,
    ) -> Show:
        show = Show.create(
            name=name,
            description=description,
            show_type=show_type,
            duration_minutes=duration_minutes,
            image_url=image_url,
            is_active=is_active,
        )
        created = await self.catalog_command_repo.create_show(show=show)
        Logger.base.info(f'🎬 [CATALOG] Created show {created.id} ({created.name})')
        return created

    @Logger.io
    async def update(self, *, show_id: UUID, changes: dict[str, Any]) -> Show:
        show = await self._get_or_raise(show_id)
        return await self.catalog_command_repo.update_show(show=show.update(**changes))

    @Logger.io
    async def deactivate(self, *, show_id: UUID) -> Show:
        show = await self._get_or_raise(show_id)
        return await self.catalog_command_repo.update_show(show=show.deactivate())

    async def _get_or_raise(self, show_id: UUID) -> Show:
        show = await self.catalog_query_repo.get_show(show_id=show_id)
        if show is None:
            raise NotFoundError('Show not found')
        return show
