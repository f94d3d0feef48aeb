from datetime import date
from typing import Optional, Self
from uuid import UUID

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.logging.loguru_io import Logger
from src.service.inventory.app.command.reserve_capacity_use_case import ReserveCapacityUseCase
from src.service.shared_kernel.domain.value_object.ticket_counts import TicketCounts
from src.service.ticketing.app.command.release_expired_cart_items_use_case import (
    ReleaseExpiredCartItemsUseCase,
)
from src.service.ticketing.app.query.quote_line_use_case import QuoteLineUseCase
from src.service.ticketing.domain.entity.cart_item_entity import CartItem
from src.service.ticketing.domain.value_object.cart_owner import CartOwner


class AddToCartUseCase:
    """
    Flow:
    1. Quote the line: slot serves the date, owner open, server-side subtotal
    2. Release the owner's expired items
    3. Reserve capacity and insert the cart item inside one hold; if the
       insert fails the increment is rolled back with it
    """

    def __init__(
        self,
        *,
        uow: AbstractUnitOfWork,
        quote_line: QuoteLineUseCase,
        reserve_capacity: ReserveCapacityUseCase,
        release_expired: ReleaseExpiredCartItemsUseCase,
    ) -> None:
        self.uow = uow
        self.quote_line = quote_line
        self.reserve_capacity = reserve_capacity
        self.release_expired = release_expired
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(
        cls,
        uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work]),
        quote_line: QuoteLineUseCase = Depends(Provide[Container.quote_line_use_case]),
        reserve_capacity: ReserveCapacityUseCase = Depends(
            Provide[Container.reserve_capacity_use_case]
        ),
        release_expired: ReleaseExpiredCartItemsUseCase = Depends(
            Provide[Container.release_expired_cart_items_use_case]
        ),
    ) -> Self:
        return cls(
            uow=uow,
            quote_line=quote_line,
            reserve_capacity=reserve_capacity,
            release_expired=release_expired,
        )

    @Logger.io
    async def execute(
        self,
        *,
        owner: CartOwner,
        time_slot_id: UUID,
        booking_date: date,
        counts: TicketCounts,
        exhibition_id: Optional[UUID] = None,
        show_id: Optional[UUID] = None,
    ) -> CartItem:
        with self.tracer.start_as_current_span(
            'use_case.add_to_cart',
            attributes={'time_slot.id': str(time_slot_id), 'cart.owner': owner.label},
        ):
            quote = await self.quote_line.execute(
                time_slot_id=time_slot_id,
                booking_date=booking_date,
                counts=counts,
                exhibition_id=exhibition_id,
                show_id=show_id,
            )
            cart_item = CartItem.create(
                time_slot_id=time_slot_id,
                booking_date=booking_date,
                counts=counts,
                subtotal=quote.subtotal,
                user_id=owner.user_id,
                guest_cart_id=owner.guest_cart_id,
                exhibition_id=quote.exhibition_id,
                show_id=quote.show_id,
                item_name=quote.item_name,
            )

            async with self.uow:
                await self.release_expired.release_in(uow=self.uow, owner=owner)
                async with self.reserve_capacity.hold(
                    uow=self.uow, time_slot_id=time_slot_id, quantity=counts.total
                ):
                    await self.uow.cart_item_command_repo.create(cart_item=cart_item)
                await self.uow.commit()

            Logger.base.info(
                f'🛒 [CART] {owner.label} added {counts.total} ticket(s) '
                f'for {quote.item_name} on {booking_date}'
            )
            return cart_item
