from typing import Optional, Self
from uuid import UUID

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.catalog.app.interface.i_catalog_command_repo import ICatalogCommandRepo
from src.service.catalog.app.interface.i_catalog_query_repo import ICatalogQueryRepo
from src.service.catalog.domain.entity.pricing_entity import Pricing
from src.service.shared_kernel.domain.enum.ticket_type import TicketType


class ManagePricingUseCase:
    """
    Admin pricing CRUD

    At most one active price exists per (owner, ticket type): creating or
    re-activating a price deactivates the one it supersedes. Cart subtotals
    read whichever price is active at add time.
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
    async def list_all(
        self, *, exhibition_id: Optional[UUID] = None, show_id: Optional[UUID] = None
    ) -> list[Pricing]:
        return await self.catalog_query_repo.list_pricing(
            exhibition_id=exhibition_id, show_id=show_id
        )

    @Logger.io
    async def get(self, *, pricing_id: UUID) -> Pricing:
        pricing = await self.catalog_query_repo.get_pricing(pricing_id=pricing_id)
        if pricing is None:
            raise NotFoundError('Pricing not found')
        return pricing

    @Logger.io
    async def create(
        self,
        *,
        ticket_type: TicketType,
        price: int,
        exhibition_id: Optional[UUID] = None,
        show_id: Optional[UUID] = None,
        is_active: bool = True,
    ) -> Pricing:
        if exhibition_id is not None:
            if await self.catalog_query_repo.get_exhibition(exhibition_id=exhibition_id) is None:
                raise NotFoundError('Exhibition not found')
        if show_id is not None:
            if await self.catalog_query_repo.get_show(show_id=show_id) is None:
                raise NotFoundError('Show not found')

        pricing = Pricing.create(
            ticket_type=ticket_type,
            price=price,
            exhibition_id=exhibition_id,
            show_id=show_id,
            is_active=is_active,
        )
        created = await self.catalog_command_repo.replace_active_pricing(pricing=pricing)
        Logger.base.info(
            f'💰 [PRICING] {ticket_type.value} = {price} '
            f'(exhibition={exhibition_id}, show={show_id})'
        )
        return created

    @Logger.io
    async def update(
        self, *, pricing_id: UUID, price: Optional[int] = None, is_active: Optional[bool] = None
    ) -> Pricing:
        pricing = await self.get(pricing_id=pricing_id)
        return await self.catalog_command_repo.update_pricing(
            pricing=pricing.change_price(price=price, is_active=is_active)
        )

    @Logger.io
    async def delete(self, *, pricing_id: UUID) -> None:
        if not await self.catalog_command_repo.delete_pricing(pricing_id=pricing_id):
            raise NotFoundError('Pricing not found')
