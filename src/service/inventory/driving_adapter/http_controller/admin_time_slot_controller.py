from datetime import date
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from src.platform.logging.loguru_io import Logger
from src.service.inventory.app.command.create_time_slot_use_case import CreateTimeSlotUseCase
from src.service.inventory.app.command.update_time_slot_use_case import UpdateTimeSlotUseCase
from src.service.inventory.app.query.list_time_slots_use_case import ListTimeSlotsUseCase
from src.service.inventory.domain.enum.slot_type import SlotType
from src.service.inventory.domain.slot_schedule import DailyWindow
from src.service.inventory.driving_adapter.http_controller.schema.time_slot_schema import (
    DefaultScheduleRequest,
    GenerationResponse,
    TimeSlotBulkCreateRequest,
    TimeSlotCreateRequest,
    TimeSlotListResponse,
    TimeSlotResponse,
    TimeSlotUpdateRequest,
)
from src.service.ticketing.domain.entity.user_profile_entity import UserProfile
from src.service.ticketing.driving_adapter.http_controller.auth.role_auth import require_admin


router = APIRouter()


@router.get('/time-slots', status_code=status.HTTP_200_OK)
@Logger.io
async def list_time_slots(
    date_from: Optional[date] = None,
    date_to: Optional[date] = None,
    slot_type: Optional[SlotType] = None,
    is_active: Optional[bool] = None,
    exhibition_id: Optional[UUID] = Query(default=None, alias='exhibitionId'),
    show_id: Optional[UUID] = Query(default=None, alias='showId'),
    limit: int = Query(default=100, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
    _admin: UserProfile = Depends(require_admin),
    use_case: ListTimeSlotsUseCase = Depends(ListTimeSlotsUseCase.depends),
) -> TimeSlotListResponse:
    slots, total = await use_case.execute(
        date_from=date_from,
        date_to=date_to,
        slot_type=slot_type,
        is_active=is_active,
        exhibition_id=exhibition_id,
        show_id=show_id,
        limit=limit,
        offset=offset,
    )
    return TimeSlotListResponse(
        slots=[TimeSlotResponse.from_entity(slot) for slot in slots], count=total
    )


@router.post('/time-slots', status_code=status.HTTP_201_CREATED)
@Logger.io
async def create_time_slot(
    request: TimeSlotCreateRequest,
    _admin: UserProfile = Depends(require_admin),
    use_case: CreateTimeSlotUseCase = Depends(CreateTimeSlotUseCase.depends),
) -> TimeSlotResponse:
    slot = await use_case.create_single(**request.model_dump())
    return TimeSlotResponse.from_entity(slot)


@router.post('/time-slots/bulk', status_code=status.HTTP_201_CREATED)
@Logger.io
async def create_time_slots_bulk(
    request: TimeSlotBulkCreateRequest,
    _admin: UserProfile = Depends(require_admin),
    use_case: CreateTimeSlotUseCase = Depends(CreateTimeSlotUseCase.depends),
) -> GenerationResponse:
    result = await use_case.create_bulk(
        start_date=request.start_date,
        end_date=request.end_date,
        windows=[
            DailyWindow(window.start_time, window.end_time, window.capacity)
            for window in request.time_slots
        ],
        exhibition_id=request.exhibition_id,
        show_id=request.show_id,
        skip_mondays=request.skip_mondays,
        skip_holidays=request.skip_holidays,
        buffer_capacity=request.buffer_capacity,
    )
    return GenerationResponse.from_value(result)


@router.post('/create-time-slots', status_code=status.HTTP_201_CREATED)
@Logger.io
async def create_default_time_slots(
    request: Optional[DefaultScheduleRequest] = None,
    _admin: UserProfile = Depends(require_admin),
    use_case: CreateTimeSlotUseCase = Depends(CreateTimeSlotUseCase.depends),
) -> GenerationResponse:
    result = await use_case.create_defaults(days=(request or DefaultScheduleRequest()).days)
    return GenerationResponse.from_value(result)


@router.patch('/time-slots/{time_slot_id}', status_code=status.HTTP_200_OK)
@Logger.io
async def update_time_slot(
    time_slot_id: UUID,
    request: TimeSlotUpdateRequest,
    admin: UserProfile = Depends(require_admin),
    use_case: UpdateTimeSlotUseCase = Depends(UpdateTimeSlotUseCase.depends),
) -> TimeSlotResponse:
    slot = await use_case.update(
        time_slot_id=time_slot_id, changed_by=admin.id, **request.model_dump()
    )
    return TimeSlotResponse.from_entity(slot)


@router.delete('/time-slots/{time_slot_id}', status_code=status.HTTP_200_OK)
@Logger.io
async def delete_time_slot(
    time_slot_id: UUID,
    _admin: UserProfile = Depends(require_admin),
    use_case: UpdateTimeSlotUseCase = Depends(UpdateTimeSlotUseCase.depends),
) -> TimeSlotResponse:
    slot = await use_case.deactivate(time_slot_id=time_slot_id)
    return TimeSlotResponse.from_entity(slot)
