from datetime import date
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from src.platform.logging.loguru_io import Logger
from src.service.catalog.app.query.browse_catalog_use_case import BrowseCatalogUseCase
from src.service.inventory.app.query.get_slot_availability_use_case import (
    GetSlotAvailabilityUseCase,
)
from src.service.inventory.driving_adapter.http_controller.schema.time_slot_schema import (
    CalendarAvailabilityResponse,
    DayAvailabilityResponse,
    TimeSlotResponse,
)


router = APIRouter()


@router.get('/exhibitions/{exhibition_id}/time-slots', status_code=status.HTTP_200_OK)
@Logger.io
async def list_exhibition_time_slots(
    exhibition_id: UUID,
    on_date: date = Query(alias='date'),
    catalog: BrowseCatalogUseCase = Depends(BrowseCatalogUseCase.depends),
    use_case: GetSlotAvailabilityUseCase = Depends(GetSlotAvailabilityUseCase.depends),
) -> List[TimeSlotResponse]:
    await catalog.get_bookable_exhibition(exhibition_id=exhibition_id, on_date=on_date)
    slots = await use_case.list_for_date(on_date=on_date, exhibition_id=exhibition_id)
    return [TimeSlotResponse.from_entity(slot) for slot in slots]


@router.get('/bookings-new/time-slots', status_code=status.HTTP_200_OK)
@Logger.io
async def list_time_slots_for_date(
    on_date: date = Query(alias='date'),
    exhibition_id: Optional[UUID] = Query(default=None, alias='exhibitionId'),
    show_id: Optional[UUID] = Query(default=None, alias='showId'),
    use_case: GetSlotAvailabilityUseCase = Depends(GetSlotAvailabilityUseCase.depends),
) -> List[TimeSlotResponse]:
    slots = await use_case.list_for_date(
        on_date=on_date, exhibition_id=exhibition_id, show_id=show_id
    )
    return [TimeSlotResponse.from_entity(slot) for slot in slots]


@router.get('/bookings-new/availability', status_code=status.HTTP_200_OK)
@Logger.io
async def get_calendar_availability(
    start_date: date = Query(alias='startDate'),
    end_date: date = Query(alias='endDate'),
    exhibition_id: Optional[UUID] = Query(default=None, alias='exhibitionId'),
    show_id: Optional[UUID] = Query(default=None, alias='showId'),
    use_case: GetSlotAvailabilityUseCase = Depends(GetSlotAvailabilityUseCase.depends),
) -> CalendarAvailabilityResponse:
    calendar = await use_case.calendar(
        start_date=start_date,
        end_date=end_date,
        exhibition_id=exhibition_id,
        show_id=show_id,
    )
    return CalendarAvailabilityResponse(
        daily_availability=[DayAvailabilityResponse.from_value(day) for day in calendar.days],
        time_slots=[TimeSlotResponse.from_entity(slot) for slot in calendar.time_slots],
    )


@router.get('/time-slots/{time_slot_id}/availability', status_code=status.HTTP_200_OK)
@Logger.io
async def get_time_slot_availability(
    time_slot_id: UUID,
    use_case: GetSlotAvailabilityUseCase = Depends(GetSlotAvailabilityUseCase.depends),
) -> TimeSlotResponse:
    slot = await use_case.execute(time_slot_id=time_slot_id)
    return TimeSlotResponse.from_entity(slot)
