from datetime import date
from typing import Optional, Self
from uuid import UUID

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.logging.loguru_io import Logger
from src.service.inventory.app.command.reserve_capacity_use_case import ReserveCapacityUseCase
from src.service.shared_kernel.domain.value_object.ticket_counts import TicketCounts
from src.service.ticketing.app.query.quote_line_use_case import QuoteLineUseCase
from src.service.ticketing.domain.entity.booking_entity import Booking


class CreateBookingUseCase:
    """
    Direct booking without the cart

    The booking row and its capacity increment commit together through one
    hold. payment_status is free for a zero total, pending otherwise.
    """

    def __init__(
        self,
        *,
        uow: AbstractUnitOfWork,
        quote_line: QuoteLineUseCase,
        reserve_capacity: ReserveCapacityUseCase,
    ) -> None:
        self.uow = uow
        self.quote_line = quote_line
        self.reserve_capacity = reserve_capacity

    @classmethod
    @inject
    def depends(
        cls,
        uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work]),
        quote_line: QuoteLineUseCase = Depends(Provide[Container.quote_line_use_case]),
        reserve_capacity: ReserveCapacityUseCase = Depends(
            Provide[Container.reserve_capacity_use_case]
        ),
    ) -> Self:
        return cls(uow=uow, quote_line=quote_line, reserve_capacity=reserve_capacity)

    @Logger.io
    async def execute(
        self,
        *,
        time_slot_id: UUID,
        booking_date: date,
        counts: TicketCounts,
        visitor_name: str,
        visitor_email: str,
        visitor_phone: Optional[str] = None,
        user_id: Optional[str] = None,
        exhibition_id: Optional[UUID] = None,
        show_id: Optional[UUID] = None,
    ) -> Booking:
        quote = await self.quote_line.execute(
            time_slot_id=time_slot_id,
            booking_date=booking_date,
            counts=counts,
            exhibition_id=exhibition_id,
            show_id=show_id,
        )
        booking = Booking.create(
            time_slot_id=time_slot_id,
            booking_date=booking_date,
            counts=counts,
            total_amount=quote.subtotal,
            visitor_name=visitor_name,
            visitor_email=visitor_email,
            visitor_phone=visitor_phone,
            user_id=user_id,
            exhibition_id=quote.exhibition_id,
            show_id=quote.show_id,
            item_name=quote.item_name,
        )

        async with self.uow:
            async with self.reserve_capacity.hold(
                uow=self.uow, time_slot_id=time_slot_id, quantity=counts.total, source='direct'
            ):
                await self.uow.booking_command_repo.create(booking=booking)
            await self.uow.commit()

        Logger.base.info(
            f'🎫 [BOOKING] {booking.booking_reference} for {counts.total} ticket(s) '
            f'on {booking_date} ({booking.payment_status.value})'
        )
        return booking
