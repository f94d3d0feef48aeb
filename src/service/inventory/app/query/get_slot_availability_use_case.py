from datetime import date, timedelta
from typing import List, Optional, Self
from uuid import UUID

import attrs
from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import DomainError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.inventory.app.interface.i_time_slot_query_repo import ITimeSlotQueryRepo
from src.service.inventory.domain.entity.time_slot_entity import TimeSlot


MAX_CALENDAR_DAYS = 93
LIMITED_RATIO = 0.2


@attrs.define
class DayAvailability:
    date: date
    total_slots: int
    available_slots: int
    available_capacity: int
    is_closed: bool
    capacity_status: str  # closed / sold_out / limited / available


@attrs.define
class CalendarAvailability:
    days: List[DayAvailability]
    time_slots: List[TimeSlot]


def summarize_day(on_date: date, slots: List[TimeSlot]) -> DayAvailability:
    serving = [slot for slot in slots if slot.serves_date(on_date)]
    available = sum(slot.available_capacity for slot in serving)
    offered = sum(max(0, slot.capacity - slot.buffer_capacity) for slot in serving)

    if not serving:
        status = 'closed'
    elif available == 0:
        status = 'sold_out'
    elif available <= offered * LIMITED_RATIO:
        status = 'limited'
    else:
        status = 'available'

    return DayAvailability(
        date=on_date,
        total_slots=len(serving),
        available_slots=sum(1 for slot in serving if slot.available_capacity > 0),
        available_capacity=available,
        is_closed=not serving,
        capacity_status=status,
    )


class GetSlotAvailabilityUseCase:
    """
    Capacity reader

    Advisory only: the numbers can be stale by the time a visitor adds to the
    cart, where the conditional reservation is authoritative. No side effects.
    """

    def __init__(self, *, time_slot_query_repo: ITimeSlotQueryRepo) -> None:
        self.time_slot_query_repo = time_slot_query_repo

    @classmethod
    @inject
    def depends(
        cls,
        time_slot_query_repo: ITimeSlotQueryRepo = Depends(
            Provide[Container.time_slot_query_repo]
        ),
    ) -> Self:
        return cls(time_slot_query_repo=time_slot_query_repo)

    @Logger.io
    async def execute(self, *, time_slot_id: UUID) -> TimeSlot:
        slot = await self.time_slot_query_repo.get_by_id(time_slot_id=time_slot_id)
        if slot is None or not slot.is_active:
            raise NotFoundError('Time slot not found')
        return slot

    @Logger.io
    async def list_for_date(
        self,
        *,
        on_date: date,
        exhibition_id: Optional[UUID] = None,
        show_id: Optional[UUID] = None,
    ) -> List[TimeSlot]:
        slots = await self.time_slot_query_repo.list_serving_range(
            start_date=on_date,
            end_date=on_date,
            exhibition_id=exhibition_id,
            show_id=show_id,
        )
        serving = [slot for slot in slots if slot.serves_date(on_date)]
        return sorted(serving, key=lambda slot: slot.start_time)

    @Logger.io
    async def calendar(
        self,
        *,
        start_date: date,
        end_date: date,
        exhibition_id: Optional[UUID] = None,
        show_id: Optional[UUID] = None,
    ) -> CalendarAvailability:
        if end_date < start_date:
            raise DomainError('endDate cannot be before startDate')
        if (end_date - start_date).days >= MAX_CALENDAR_DAYS:
            raise DomainError(f'Date range cannot exceed {MAX_CALENDAR_DAYS} days')

        slots = await self.time_slot_query_repo.list_serving_range(
            start_date=start_date,
            end_date=end_date,
            exhibition_id=exhibition_id,
            show_id=show_id,
        )
        days = [
            summarize_day(start_date + timedelta(days=offset), slots)
            for offset in range((end_date - start_date).days + 1)
        ]
        return CalendarAvailability(days=days, time_slots=slots)
