from datetime import date
from typing import List, Optional
from uuid import UUID

from sqlalchemy import and_, func, or_, select

from src.platform.database.session_repo import SessionRepo
from src.platform.logging.loguru_io import Logger
from src.service.inventory.app.interface.i_time_slot_query_repo import ITimeSlotQueryRepo
from src.service.inventory.domain.entity.time_slot_entity import TimeSlot
from src.service.inventory.domain.enum.slot_type import SlotType
from src.service.inventory.driven_adapter.model.time_slot_model import TimeSlotModel
from src.service.inventory.driven_adapter.repo.time_slot_mapper import time_slot_to_entity
from src.service.ticketing.domain.enum.booking_status import BookingStatus
from src.service.ticketing.driven_adapter.model.booking_model import BookingModel


def _owner_filter(exhibition_id: Optional[UUID], show_id: Optional[UUID]):
    if exhibition_id is not None:
        return TimeSlotModel.exhibition_id == exhibition_id
    if show_id is not None:
        return TimeSlotModel.show_id == show_id
    return and_(TimeSlotModel.exhibition_id.is_(None), TimeSlotModel.show_id.is_(None))


class TimeSlotQueryRepoImpl(SessionRepo, ITimeSlotQueryRepo):
    @Logger.io
    async def get_by_id(self, *, time_slot_id: UUID) -> Optional[TimeSlot]:
        async with self._get_session() as session:
            model = await session.get(TimeSlotModel, time_slot_id)
            return time_slot_to_entity(model) if model else None

    @Logger.io
    async def list_serving_range(
        self,
        *,
        start_date: date,
        end_date: date,
        exhibition_id: Optional[UUID] = None,
        show_id: Optional[UUID] = None,
    ) -> List[TimeSlot]:
        stmt = (
            select(TimeSlotModel)
            .where(
                TimeSlotModel.is_active.is_(True),
                _owner_filter(exhibition_id, show_id),
                or_(
                    TimeSlotModel.slot_date.between(start_date, end_date),
                    and_(
                        TimeSlotModel.slot_date.is_(None),
                        TimeSlotModel.day_of_week.is_not(None),
                    ),
                ),
            )
            .order_by(TimeSlotModel.slot_date, TimeSlotModel.start_time)
        )
        async with self._get_session() as session:
            result = await session.execute(stmt)
            return [time_slot_to_entity(model) for model in result.scalars().all()]

    @Logger.io
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
        conditions = []
        if date_from is not None:
            conditions.append(TimeSlotModel.slot_date >= date_from)
        if date_to is not None:
            conditions.append(TimeSlotModel.slot_date <= date_to)
        if slot_type is not None:
            conditions.append(TimeSlotModel.slot_type == slot_type.value)
        if is_active is not None:
            conditions.append(TimeSlotModel.is_active.is_(is_active))
        if exhibition_id is not None:
            conditions.append(TimeSlotModel.exhibition_id == exhibition_id)
        if show_id is not None:
            conditions.append(TimeSlotModel.show_id == show_id)

        async with self._get_session() as session:
            total = await session.scalar(
                select(func.count()).select_from(TimeSlotModel).where(*conditions)
            )
            result = await session.execute(
                select(TimeSlotModel)
                .where(*conditions)
                .order_by(TimeSlotModel.slot_date, TimeSlotModel.start_time)
                .limit(limit)
                .offset(offset)
            )
            return [time_slot_to_entity(m) for m in result.scalars().all()], int(total or 0)

    @Logger.io
    async def count_confirmed_bookings(self, *, time_slot_id: UUID) -> int:
        async with self._get_session() as session:
            count = await session.scalar(
                select(func.count())
                .select_from(BookingModel)
                .where(
                    BookingModel.time_slot_id == time_slot_id,
                    BookingModel.status == BookingStatus.CONFIRMED.value,
                )
            )
            return int(count or 0)
