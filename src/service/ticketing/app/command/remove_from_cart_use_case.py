from typing import Optional, Self
from uuid import UUID

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.inventory.app.command.release_capacity_use_case import ReleaseCapacityUseCase
from src.service.ticketing.domain.entity.cart_item_entity import CartItem
from src.service.ticketing.domain.value_object.cart_owner import CartOwner


def _owned_by(item: CartItem, owner: CartOwner) -> bool:
    if owner.user_id is not None:
        return item.user_id == owner.user_id
    return item.guest_cart_id == owner.guest_cart_id


class RemoveFromCartUseCase:
    """Remove one item, or clear the cart, giving each item's tickets back exactly once"""

    def __init__(
        self, *, uow: AbstractUnitOfWork, release_capacity: ReleaseCapacityUseCase
    ) -> None:
        self.uow = uow
        self.release_capacity = release_capacity

    @classmethod
    @inject
    def depends(
        cls,
        uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work]),
        release_capacity: ReleaseCapacityUseCase = Depends(
            Provide[Container.release_capacity_use_case]
        ),
    ) -> Self:
        return cls(uow=uow, release_capacity=release_capacity)

    @Logger.io
    async def execute(self, *, owner: CartOwner, cart_item_id: Optional[UUID] = None) -> int:
        """Returns how many items were removed"""
        async with self.uow:
            if cart_item_id is not None:
                item = await self.uow.cart_item_command_repo.get_by_id(cart_item_id=cart_item_id)
                if item is None or not _owned_by(item, owner) or item.released_at is not None:
                    raise NotFoundError('Cart item not found')
                items = [item]
            else:
                items = await self.uow.cart_item_command_repo.list_by_owner(owner=owner)

            removed = 0
            for item in items:
                if await self.uow.cart_item_command_repo.claim_release(cart_item_id=item.id):
                    await self.release_capacity.execute(
                        uow=self.uow,
                        time_slot_id=item.time_slot_id,
                        quantity=item.total_tickets,
                        reason='cart_removed',
                    )
                await self.uow.cart_item_command_repo.delete(cart_item_id=item.id)
                removed += 1
            await self.uow.commit()

        Logger.base.info(f'🗑️ [CART] {owner.label} removed {removed} item(s)')
        return removed
