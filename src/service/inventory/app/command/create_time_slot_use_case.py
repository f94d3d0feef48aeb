from datetime import date, time, timedelta
from typing import Optional, Self, Sequence
from uuid import UUID

import attrs
from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import DomainError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.platform.types.utc_datetime import museum_today
from src.service.catalog.app.interface.i_catalog_query_repo import ICatalogQueryRepo
from src.service.catalog.domain.enum.catalog_status import ExhibitionStatus
from src.service.inventory.domain.entity.time_slot_entity import TimeSlot
from src.service.inventory.domain.slot_schedule import (
    DEFAULT_GENERATION_DAYS,
    DailyWindow,
    default_windows,
    expand_schedule,
)


@attrs.define
class GenerationResult:
    inserted: int
    skipped: int
    total: int
    exhibitions: int = 0


class CreateTimeSlotUseCase:
    """
    Admin slot creation: single, bulk date range, and default schedule

    Flow (bulk):
    1. Validate the owner exists
    2. Expand the date range into (date, window) pairs, skipping Mondays and
       holidays when asked
    3. Drop keys that already exist for the owner
    4. Insert the rest in one unit of work
    """

    def __init__(self, *, uow: AbstractUnitOfWork, catalog_query_repo: ICatalogQueryRepo) -> None:
        self.uow = uow
        self.catalog_query_repo = catalog_query_repo

    @classmethod
    @inject
    def depends(
        cls,
        uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work]),
        catalog_query_repo: ICatalogQueryRepo = Depends(Provide[Container.catalog_query_repo]),
    ) -> Self:
        return cls(uow=uow, catalog_query_repo=catalog_query_repo)

    async def _validate_owner(self, exhibition_id: Optional[UUID], show_id: Optional[UUID]) -> None:
        if exhibition_id is not None:
            if await self.catalog_query_repo.get_exhibition(exhibition_id=exhibition_id) is None:
                raise NotFoundError('Exhibition not found')
        if show_id is not None:
            if await self.catalog_query_repo.get_show(show_id=show_id) is None:
                raise NotFoundError('Show not found')

    @Logger.io
    async def create_single(
        self,
        *,
        start_time: time,
        end_time: time,
        capacity: int,
        slot_date: Optional[date] = None,
        day_of_week: Optional[int] = None,
        exhibition_id: Optional[UUID] = None,
        show_id: Optional[UUID] = None,
        buffer_capacity: Optional[int] = None,
        notes: Optional[str] = None,
    ) -> TimeSlot:
        await self._validate_owner(exhibition_id, show_id)
        time_slot = TimeSlot.create(
            start_time=start_time,
            end_time=end_time,
            capacity=capacity,
            slot_date=slot_date,
            day_of_week=day_of_week,
            exhibition_id=exhibition_id,
            show_id=show_id,
            buffer_capacity=buffer_capacity,
            notes=notes,
        )

        async with self.uow:
            if slot_date is not None:
                existing = await self.uow.time_slot_command_repo.existing_keys(
                    exhibition_id=exhibition_id,
                    show_id=show_id,
                    start_date=slot_date,
                    end_date=slot_date,
                )
                if any(k.start_time == start_time and k.end_time == end_time for k in existing):
                    raise DomainError('A time slot already exists for this date and time')

            [created] = await self.uow.time_slot_command_repo.create_many(time_slots=[time_slot])
            await self.uow.commit()

        Logger.base.info(f'🕐 [TIME-SLOT] Created slot {created.id} capacity={capacity}')
        return created

    @Logger.io
    async def create_bulk(
        self,
        *,
        start_date: date,
        end_date: date,
        windows: Sequence[DailyWindow],
        exhibition_id: Optional[UUID] = None,
        show_id: Optional[UUID] = None,
        skip_mondays: bool = False,
        skip_holidays: Sequence[date] = (),
        buffer_capacity: Optional[int] = None,
    ) -> GenerationResult:
        await self._validate_owner(exhibition_id, show_id)

        async with self.uow:
            inserted, total = await self._generate(
                start_date=start_date,
                end_date=end_date,
                windows=windows,
                exhibition_id=exhibition_id,
                show_id=show_id,
                skip_mondays=skip_mondays,
                skip_holidays=skip_holidays,
                buffer_capacity=buffer_capacity,
            )
            await self.uow.commit()

        Logger.base.info(
            f'🗓️ [TIME-SLOT] Bulk {start_date}..{end_date}: {inserted} inserted, '
            f'{total - inserted} skipped'
        )
        return GenerationResult(inserted=inserted, skipped=total - inserted, total=total)

    @Logger.io
    async def create_defaults(self, *, days: int = DEFAULT_GENERATION_DAYS) -> GenerationResult:
        """Default schedule for every active exhibition: four 1-hour windows a day"""
        exhibitions = await self.catalog_query_repo.list_exhibitions(
            status=ExhibitionStatus.ACTIVE
        )
        start_date = museum_today()
        end_date = start_date + timedelta(days=days - 1)

        inserted = total = 0
        async with self.uow:
            for exhibition in exhibitions:
                created, planned = await self._generate(
                    start_date=start_date,
                    end_date=end_date,
                    windows=default_windows(),
                    exhibition_id=exhibition.id,
                )
                inserted += created
                total += planned
            await self.uow.commit()

        Logger.base.info(
            f'🗓️ [TIME-SLOT] Default schedule for {len(exhibitions)} exhibitions: '
            f'{inserted} inserted, {total - inserted} skipped'
        )
        return GenerationResult(
            inserted=inserted,
            skipped=total - inserted,
            total=total,
            exhibitions=len(exhibitions),
        )

    async def _generate(
        self,
        *,
        start_date: date,
        end_date: date,
        windows: Sequence[DailyWindow],
        exhibition_id: Optional[UUID] = None,
        show_id: Optional[UUID] = None,
        skip_mondays: bool = False,
        skip_holidays: Sequence[date] = (),
        buffer_capacity: Optional[int] = None,
    ) -> tuple[int, int]:
        """Returns (inserted, planned before de-duplication)"""
        everything = expand_schedule(
            start_date=start_date,
            end_date=end_date,
            windows=windows,
            exhibition_id=exhibition_id,
            show_id=show_id,
            skip_mondays=skip_mondays,
            skip_holidays=skip_holidays,
        )
        existing = await self.uow.time_slot_command_repo.existing_keys(
            exhibition_id=exhibition_id,
            show_id=show_id,
            start_date=start_date,
            end_date=end_date,
        )
        new_slots = [
            TimeSlot.create(
                start_time=key.start_time,
                end_time=key.end_time,
                capacity=window.capacity,
                slot_date=key.slot_date,
                exhibition_id=exhibition_id,
                show_id=show_id,
                buffer_capacity=buffer_capacity,
            )
            for key, window in everything
            if key not in existing
        ]
        if new_slots:
            await self.uow.time_slot_command_repo.create_many(time_slots=new_slots)
        return len(new_slots), len(everything)
