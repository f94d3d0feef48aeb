"""
Time Slot Command Repository Interface

The only writer of time_slot.current_bookings. Implementations run on the
unit-of-work session so every counter change commits together with the row
that owns it.
"""

from abc import ABC, abstractmethod
from datetime import date
from typing import Optional
from uuid import UUID

from src.service.inventory.domain.entity.time_slot_entity import TimeSlot
from src.service.inventory.domain.slot_schedule import SlotKey
from src.service.inventory.domain.value_object.capacity_change import CapacityChange


class ITimeSlotCommandRepo(ABC):
    @abstractmethod
    async def increment_if_available(self, *, time_slot_id: UUID, quantity: int) -> bool:
        """
        Single conditional statement:
        current_bookings += quantity, only while the slot is active and
        current_bookings + quantity <= capacity - buffer_capacity

        Returns:
            True when the row was updated
        """
        pass

    @abstractmethod
    async def decrement_floored(self, *, time_slot_id: UUID, quantity: int) -> bool:
        """current_bookings -= quantity, never below zero. Returns False for unknown slots."""
        pass

    @abstractmethod
    async def get_by_id(self, *, time_slot_id: UUID) -> Optional[TimeSlot]:
        pass

    @abstractmethod
    async def create_many(self, *, time_slots: list[TimeSlot]) -> list[TimeSlot]:
        pass

    @abstractmethod
    async def existing_keys(
        self,
        *,
        exhibition_id: Optional[UUID],
        show_id: Optional[UUID],
        start_date: date,
        end_date: date,
    ) -> set[SlotKey]:
        pass

    @abstractmethod
    async def update_capacity(self, *, change: CapacityChange) -> bool:
        """
        Conditional update: refused (False) when current_bookings exceeds the
        new capacity. Appends the change to capacity_log when applied.
        """
        pass

    @abstractmethod
    async def update_details(self, *, time_slot: TimeSlot) -> TimeSlot:
        """Persist non-counter fields (times, buffer, notes, is_active)"""
        pass
