from datetime import time
from typing import Optional, Self
from uuid import UUID

import attrs
from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import DomainError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.platform.types.utc_datetime import utc_now
from src.service.inventory.app.interface.i_time_slot_query_repo import ITimeSlotQueryRepo
from src.service.inventory.domain.entity.time_slot_entity import TimeSlot
from src.service.inventory.domain.value_object.capacity_change import CapacityChange


class UpdateTimeSlotUseCase:
    """
    Admin slot edits

    - capacity may not drop below current_bookings; the check is part of the
      UPDATE itself, and every applied change is written to capacity_log
    - slots are never hard-deleted: delete deactivates, and is refused while
      confirmed bookings reference the slot
    """

    def __init__(
        self, *, uow: AbstractUnitOfWork, time_slot_query_repo: ITimeSlotQueryRepo
    ) -> None:
        self.uow = uow
        self.time_slot_query_repo = time_slot_query_repo

    @classmethod
    @inject
    def depends(
        cls,
        uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work]),
        time_slot_query_repo: ITimeSlotQueryRepo = Depends(
            Provide[Container.time_slot_query_repo]
        ),
    ) -> Self:
        return cls(uow=uow, time_slot_query_repo=time_slot_query_repo)

    @Logger.io
    async def update(
        self,
        *,
        time_slot_id: UUID,
        changed_by: Optional[str],
        capacity: Optional[int] = None,
        buffer_capacity: Optional[int] = None,
        start_time: Optional[time] = None,
        end_time: Optional[time] = None,
        notes: Optional[str] = None,
        is_active: Optional[bool] = None,
        reason: Optional[str] = None,
    ) -> TimeSlot:
        async with self.uow:
            slot = await self.uow.time_slot_command_repo.get_by_id(time_slot_id=time_slot_id)
            if slot is None:
                raise NotFoundError('Time slot not found')

            if capacity is not None and capacity != slot.capacity:
                slot.validate_new_capacity(capacity)
                applied = await self.uow.time_slot_command_repo.update_capacity(
                    change=CapacityChange(
                        time_slot_id=time_slot_id,
                        previous_capacity=slot.capacity,
                        new_capacity=capacity,
                        changed_by=changed_by,
                        reason=reason,
                    )
                )
                if not applied:
                    raise DomainError('capacity cannot be lower than current bookings')
                Logger.base.info(
                    f'📐 [TIME-SLOT] Capacity of {time_slot_id}: {slot.capacity} -> {capacity}'
                )
                slot = attrs.evolve(slot, capacity=capacity)

            changes = {
                name: value
                for name, value in (
                    ('buffer_capacity', buffer_capacity),
                    ('start_time', start_time),
                    ('end_time', end_time),
                    ('notes', notes),
                    ('is_active', is_active),
                )
                if value is not None
            }
            if changes:
                edited = attrs.evolve(slot, **changes, updated_at=utc_now())
                if edited.end_time <= edited.start_time:
                    raise DomainError('end_time must be after start_time')
                if not 0 <= edited.buffer_capacity < edited.capacity:
                    raise DomainError('buffer_capacity must be between 0 and capacity - 1')
                slot = await self.uow.time_slot_command_repo.update_details(time_slot=edited)

            await self.uow.commit()
        return slot

    @Logger.io
    async def deactivate(self, *, time_slot_id: UUID) -> TimeSlot:
        confirmed = await self.time_slot_query_repo.count_confirmed_bookings(
            time_slot_id=time_slot_id
        )
        if confirmed:
            raise DomainError(f'Cannot delete time slot with active bookings ({confirmed})')

        async with self.uow:
            slot = await self.uow.time_slot_command_repo.get_by_id(time_slot_id=time_slot_id)
            if slot is None:
                raise NotFoundError('Time slot not found')
            slot = await self.uow.time_slot_command_repo.update_details(
                time_slot=attrs.evolve(slot, is_active=False)
            )
            await self.uow.commit()

        Logger.base.info(f'🗑️ [TIME-SLOT] Deactivated slot {time_slot_id}')
        return slot
