from typing import Self
from uuid import UUID

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.inventory.app.command.release_capacity_use_case import ReleaseCapacityUseCase
from src.service.ticketing.domain.entity.booking_entity import Booking


class CancelBookingUseCase:
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
    async def execute(self, *, booking_id: UUID) -> Booking:
        async with self.uow:
            booking = await self.uow.booking_command_repo.get_by_id(booking_id=booking_id)
            if booking is None:
                raise NotFoundError('Booking not found')

            cancelled = await self.uow.booking_command_repo.update(booking=booking.cancel())
            await self.uow.ticket_command_repo.cancel_for_booking(booking_id=booking.id)
            if await self.uow.booking_command_repo.claim_capacity_release(booking_id=booking.id):
                await self.release_capacity.execute(
                    uow=self.uow,
                    time_slot_id=booking.time_slot_id,
                    quantity=booking.total_tickets,
                    reason='cancelled',
                )
            await self.uow.commit()

        Logger.base.info(f'❌ [BOOKING] {booking.booking_reference} cancelled')
        return cancelled
