from datetime import date
from typing import Optional
from uuid import UUID

from sqlalchemy import case, func, select, update
from uuid_utils.compat import uuid7

from src.platform.database.session_repo import SessionRepo
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.inventory.app.interface.i_time_slot_command_repo import ITimeSlotCommandRepo
from src.service.inventory.domain.entity.time_slot_entity import TimeSlot
from src.service.inventory.domain.slot_schedule import SlotKey
from src.service.inventory.domain.value_object.capacity_change import CapacityChange
from src.service.inventory.driven_adapter.model.capacity_log_model import CapacityLogModel
from src.service.inventory.driven_adapter.model.time_slot_model import TimeSlotModel
from src.service.inventory.driven_adapter.repo.time_slot_mapper import (
    time_slot_to_entity,
    time_slot_to_model,
)


class TimeSlotCommandRepoImpl(SessionRepo, ITimeSlotCommandRepo):
    """
    Counter writes are single UPDATE statements evaluated by the database;
    the ORM identity map is bypassed (synchronize_session=False) and rows are
    re-read with populate_existing when needed.
    """

    @Logger.io
    async def increment_if_available(self, *, time_slot_id: UUID, quantity: int) -> bool:
        stmt = (
            update(TimeSlotModel)
            .where(
                TimeSlotModel.id == time_slot_id,
                TimeSlotModel.is_active.is_(True),
                TimeSlotModel.current_bookings + quantity
                <= TimeSlotModel.capacity - TimeSlotModel.buffer_capacity,
            )
            .values(
                current_bookings=TimeSlotModel.current_bookings + quantity,
                updated_at=func.now(),
            )
            .execution_options(synchronize_session=False)
        )
        async with self._get_session() as session:
            result = await session.execute(stmt)
            return result.rowcount == 1  # type: ignore[attr-defined]

    @Logger.io
    async def decrement_floored(self, *, time_slot_id: UUID, quantity: int) -> bool:
        remaining = TimeSlotModel.current_bookings - quantity
        stmt = (
            update(TimeSlotModel)
            .where(TimeSlotModel.id == time_slot_id)
            .values(
                current_bookings=case((remaining < 0, 0), else_=remaining),
                updated_at=func.now(),
            )
            .execution_options(synchronize_session=False)
        )
        async with self._get_session() as session:
            result = await session.execute(stmt)
            return result.rowcount == 1  # type: ignore[attr-defined]

    @Logger.io
    async def get_by_id(self, *, time_slot_id: UUID) -> Optional[TimeSlot]:
        async with self._get_session() as session:
            result = await session.execute(
                select(TimeSlotModel)
                .where(TimeSlotModel.id == time_slot_id)
                .execution_options(populate_existing=True)
            )
            model = result.scalar_one_or_none()
            return time_slot_to_entity(model) if model else None

    @Logger.io
    async def create_many(self, *, time_slots: list[TimeSlot]) -> list[TimeSlot]:
        async with self._get_session() as session:
            session.add_all([time_slot_to_model(slot) for slot in time_slots])
            await session.flush()
            return time_slots

    @Logger.io
    async def existing_keys(
        self,
        *,
        exhibition_id: Optional[UUID],
        show_id: Optional[UUID],
        start_date: date,
        end_date: date,
    ) -> set[SlotKey]:
        stmt = select(
            TimeSlotModel.slot_date, TimeSlotModel.start_time, TimeSlotModel.end_time
        ).where(
            TimeSlotModel.slot_date >= start_date,
            TimeSlotModel.slot_date <= end_date,
            TimeSlotModel.exhibition_id.is_(None)
            if exhibition_id is None
            else TimeSlotModel.exhibition_id == exhibition_id,
            TimeSlotModel.show_id.is_(None)
            if show_id is None
            else TimeSlotModel.show_id == show_id,
        )
        async with self._get_session() as session:
            result = await session.execute(stmt)
            return {
                SlotKey(exhibition_id, show_id, row.slot_date, row.start_time, row.end_time)
                for row in result.all()
            }

    @Logger.io
    async def update_capacity(self, *, change: CapacityChange) -> bool:
        stmt = (
            update(TimeSlotModel)
            .where(
                TimeSlotModel.id == change.time_slot_id,
                TimeSlotModel.current_bookings <= change.new_capacity,
            )
            .values(capacity=change.new_capacity, updated_at=func.now())
            .execution_options(synchronize_session=False)
        )
        async with self._get_session() as session:
            result = await session.execute(stmt)
            if result.rowcount != 1:  # type: ignore[attr-defined]
                return False

            session.add(
                CapacityLogModel(
                    id=uuid7(),
                    time_slot_id=change.time_slot_id,
                    previous_capacity=change.previous_capacity,
                    new_capacity=change.new_capacity,
                    changed_by=change.changed_by,
                    reason=change.reason or f'Capacity updated to {change.new_capacity}',
                )
            )
            await session.flush()
            return True

    @Logger.io
    async def update_details(self, *, time_slot: TimeSlot) -> TimeSlot:
        stmt = (
            update(TimeSlotModel)
            .where(TimeSlotModel.id == time_slot.id)
            .values(
                start_time=time_slot.start_time,
                end_time=time_slot.end_time,
                buffer_capacity=time_slot.buffer_capacity,
                notes=time_slot.notes,
                is_active=time_slot.is_active,
                updated_at=func.now(),
            )
            .execution_options(synchronize_session=False)
        )
        async with self._get_session() as session:
            result = await session.execute(stmt)
            if result.rowcount != 1:  # type: ignore[attr-defined]
                raise NotFoundError('Time slot not found')

        updated = await self.get_by_id(time_slot_id=time_slot.id)
        assert updated is not None
        return updated
