from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.logging.loguru_io import Logger
from src.service.ticketing.app.command.release_expired_cart_items_use_case import (
    ReleaseExpiredCartItemsUseCase,
)
from src.service.ticketing.domain.entity.cart_item_entity import CartItem
from src.service.ticketing.domain.value_object.cart_owner import CartOwner


class GetCartUseCase:
    """Cart read; releases the owner's expired items before listing what is left"""

    def __init__(
        self, *, uow: AbstractUnitOfWork, release_expired: ReleaseExpiredCartItemsUseCase
    ) -> None:
        self.uow = uow
        self.release_expired = release_expired

    @classmethod
    @inject
    def depends(
        cls,
        uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work]),
        release_expired: ReleaseExpiredCartItemsUseCase = Depends(
            Provide[Container.release_expired_cart_items_use_case]
        ),
    ) -> Self:
        return cls(uow=uow, release_expired=release_expired)

    @Logger.io
    async def execute(self, *, owner: CartOwner) -> list[CartItem]:
        async with self.uow:
            await self.release_expired.release_in(uow=self.uow, owner=owner)
            items = await self.uow.cart_item_command_repo.list_by_owner(owner=owner)
            await self.uow.commit()
        return items
