from datetime import date
from typing import List, Optional, Self
from uuid import UUID

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.inventory.app.interface.i_time_slot_query_repo import ITimeSlotQueryRepo
from src.service.inventory.domain.entity.time_slot_entity import TimeSlot
from src.service.inventory.domain.enum.slot_type import SlotType


class ListTimeSlotsUseCase:
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
    async def execute(
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
        return await self.time_slot_query_repo.list_admin(
            date_from=date_from,
            date_to=date_to,
            slot_type=slot_type,
            is_active=is_active,
            exhibition_id=exhibition_id,
            show_id=show_id,
            limit=limit,
            offset=offset,
        )
