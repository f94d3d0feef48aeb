from datetime import date, datetime, time
from typing import Optional
from uuid import UUID

import attrs
from uuid_utils.compat import uuid7

from src.platform.config.core_setting import settings
from src.platform.exception.exceptions import DomainError
from src.platform.types.utc_datetime import utc_now
from src.service.inventory.domain.enum.slot_type import SlotType


MIN_CAPACITY = 1
MAX_CAPACITY = 500


def validate_capacity(capacity: int) -> None:
    if not MIN_CAPACITY <= capacity <= MAX_CAPACITY:
        raise DomainError(f'capacity must be between {MIN_CAPACITY} and {MAX_CAPACITY}')


@attrs.define
class TimeSlot:
    """
    A bookable window with a fixed ticket capacity

    A slot belongs to an exhibition, a show, or neither (general admission).
    It is either date-specific (slot_date) or a weekly template (day_of_week,
    0=Monday); a template carries one counter shared by every date it serves.
    """

    start_time: time
    end_time: time
    capacity: int
    exhibition_id: Optional[UUID] = None
    show_id: Optional[UUID] = None
    slot_date: Optional[date] = None
    day_of_week: Optional[int] = None
    current_bookings: int = 0
    buffer_capacity: int = 5
    slot_type: SlotType = SlotType.GENERAL
    notes: Optional[str] = None
    is_active: bool = True
    id: UUID = attrs.field(factory=uuid7)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def create(
        cls,
        *,
        start_time: time,
        end_time: time,
        capacity: int,
        exhibition_id: Optional[UUID] = None,
        show_id: Optional[UUID] = None,
        slot_date: Optional[date] = None,
        day_of_week: Optional[int] = None,
        buffer_capacity: Optional[int] = None,
        notes: Optional[str] = None,
    ) -> 'TimeSlot':
        if exhibition_id is not None and show_id is not None:
            raise DomainError('A time slot belongs to an exhibition or a show, not both')
        if (slot_date is None) == (day_of_week is None):
            raise DomainError('Provide either slot_date or day_of_week')
        if day_of_week is not None and not 0 <= day_of_week <= 6:
            raise DomainError('day_of_week must be between 0 (Monday) and 6 (Sunday)')
        if end_time <= start_time:
            raise DomainError('end_time must be after start_time')
        validate_capacity(capacity)

        buffer = settings.DEFAULT_BUFFER_CAPACITY if buffer_capacity is None else buffer_capacity
        if not 0 <= buffer < capacity:
            raise DomainError('buffer_capacity must be between 0 and capacity - 1')

        if show_id is not None:
            slot_type = SlotType.EVENT
        elif exhibition_id is not None:
            slot_type = SlotType.EXHIBITION
        else:
            slot_type = SlotType.GENERAL

        now = utc_now()
        return cls(
            start_time=start_time,
            end_time=end_time,
            capacity=capacity,
            exhibition_id=exhibition_id,
            show_id=show_id,
            slot_date=slot_date,
            day_of_week=day_of_week,
            buffer_capacity=buffer,
            slot_type=slot_type,
            notes=notes,
            created_at=now,
            updated_at=now,
        )

    @property
    def available_capacity(self) -> int:
        return max(0, self.capacity - self.current_bookings - self.buffer_capacity)

    @property
    def is_template(self) -> bool:
        return self.slot_date is None

    def serves_date(self, on_date: date) -> bool:
        if self.slot_date is not None:
            return self.slot_date == on_date
        return self.day_of_week == on_date.weekday()

    def validate_serves_date(self, on_date: date) -> None:
        if not self.serves_date(on_date):
            raise DomainError('Time slot is not scheduled on the requested date')

    def validate_new_capacity(self, capacity: int) -> None:
        validate_capacity(capacity)
        if capacity < self.current_bookings:
            raise DomainError(
                f'capacity cannot be lower than current bookings ({self.current_bookings})'
            )
