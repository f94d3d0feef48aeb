from abc import ABC, abstractmethod
from datetime import date
from typing import List, Optional
from uuid import UUID

from src.service.inventory.domain.entity.time_slot_entity import TimeSlot
from src.service.inventory.domain.enum.slot_type import SlotType


class ITimeSlotQueryRepo(ABC):
    @abstractmethod
    async def get_by_id(self, *, time_slot_id: UUID) -> Optional[TimeSlot]:
        pass

    @abstractmethod
    async def list_serving_range(
        self,
        *,
        start_date: date,
        end_date: date,
        exhibition_id: Optional[UUID] = None,
        show_id: Optional[UUID] = None,
    ) -> List[TimeSlot]:
        """
        Active slots of one owner (both None = general admission) serving any
        date of the range: date-specific slots inside it plus weekly templates.
        """
        pass

    @abstractmethod
    async def list_admin(
        self,
        *,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
        slot_type: Optional[SlotType] = None,
        is_active: Optional[bool] = None,
        exhibition_id: Optional[UUID] = None,
        show_id: Optional[UUID] = None,
        limit: int = 100,
        offset: int = 0,
    ) -> tuple[List[TimeSlot], int]:
        pass

    @abstractmethod
    async def count_confirmed_bookings(self, *, time_slot_id: UUID) -> int:
        pass
