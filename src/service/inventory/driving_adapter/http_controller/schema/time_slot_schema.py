from datetime import date, time
from typing import List, Optional
from uuid import UUID

from pydantic import Field

from src.service.inventory.app.command.create_time_slot_use_case import GenerationResult
from src.service.inventory.app.query.get_slot_availability_use_case import DayAvailability
from src.service.inventory.domain.entity.time_slot_entity import (
    MAX_CAPACITY,
    MIN_CAPACITY,
    TimeSlot,
)
from src.service.shared_kernel.driving_adapter.schema.camel_schema import CamelSchema


class TimeSlotResponse(CamelSchema):
    id: UUID
    exhibition_id: Optional[UUID]
    show_id: Optional[UUID]
    slot_date: Optional[date]
    day_of_week: Optional[int]
    start_time: time
    end_time: time
    capacity: int
    current_bookings: int
    buffer_capacity: int
    available_capacity: int
    slot_type: str
    notes: Optional[str]
    is_active: bool

    @classmethod
    def from_entity(cls, slot: TimeSlot) -> 'TimeSlotResponse':
        return cls(
            id=slot.id,
            exhibition_id=slot.exhibition_id,
            show_id=slot.show_id,
            slot_date=slot.slot_date,
            day_of_week=slot.day_of_week,
            start_time=slot.start_time,
            end_time=slot.end_time,
            capacity=slot.capacity,
            current_bookings=slot.current_bookings,
            buffer_capacity=slot.buffer_capacity,
            available_capacity=slot.available_capacity,
            slot_type=slot.slot_type.value,
            notes=slot.notes,
            is_active=slot.is_active,
        )


class DayAvailabilityResponse(CamelSchema):
    date: date
    total_slots: int
    available_slots: int
    available_capacity: int
    is_closed: bool
    capacity_status: str

    @classmethod
    def from_value(cls, day: DayAvailability) -> 'DayAvailabilityResponse':
        return cls(
            date=day.date,
            total_slots=day.total_slots,
            available_slots=day.available_slots,
            available_capacity=day.available_capacity,
            is_closed=day.is_closed,
            capacity_status=day.capacity_status,
        )


class CalendarAvailabilityResponse(CamelSchema):
    daily_availability: List[DayAvailabilityResponse]
    time_slots: List[TimeSlotResponse]


class TimeSlotListResponse(CamelSchema):
    slots: List[TimeSlotResponse]
    count: int


# ============================ Admin requests ============================


class TimeSlotCreateRequest(CamelSchema):
    slot_date: Optional[date] = Field(default=None, alias='date')
    day_of_week: Optional[int] = Field(default=None, ge=0, le=6)
    start_time: time
    end_time: time
    capacity: int = Field(ge=MIN_CAPACITY, le=MAX_CAPACITY)
    buffer_capacity: Optional[int] = Field(default=None, ge=0)
    exhibition_id: Optional[UUID] = None
    show_id: Optional[UUID] = None
    notes: Optional[str] = Field(default=None, max_length=500)


class TimeWindowRequest(CamelSchema):
    start_time: time
    end_time: time
    capacity: int = Field(ge=MIN_CAPACITY, le=MAX_CAPACITY)


class TimeSlotBulkCreateRequest(CamelSchema):
    start_date: date
    end_date: date
    time_slots: List[TimeWindowRequest] = Field(min_length=1)
    exhibition_id: Optional[UUID] = None
    show_id: Optional[UUID] = None
    buffer_capacity: Optional[int] = Field(default=None, ge=0)
    skip_mondays: bool = False
    skip_holidays: List[date] = Field(default_factory=list)


class DefaultScheduleRequest(CamelSchema):
    days: int = Field(default=60, ge=1, le=366)


class TimeSlotUpdateRequest(CamelSchema):
    capacity: Optional[int] = Field(default=None, ge=MIN_CAPACITY, le=MAX_CAPACITY)
    buffer_capacity: Optional[int] = Field(default=None, ge=0)
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    notes: Optional[str] = Field(default=None, max_length=500)
    is_active: Optional[bool] = None
    reason: Optional[str] = Field(default=None, max_length=500)


class GenerationResponse(CamelSchema):
    inserted: int
    skipped: int
    total: int
    exhibitions: int

    @classmethod
    def from_value(cls, result: GenerationResult) -> 'GenerationResponse':
        return cls(
            inserted=result.inserted,
            skipped=result.skipped,
            total=result.total,
            exhibitions=result.exhibitions,
        )
