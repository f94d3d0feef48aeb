import time
from contextlib import asynccontextmanager
from typing import AsyncIterator
from uuid import UUID

from opentelemetry import trace

from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import CapacityExceededError, DomainError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.ticketing_metrics import metrics
from src.service.inventory.domain.entity.time_slot_entity import TimeSlot


class ReserveCapacityUseCase:
    """
    Reservation writer of the capacity ledger

    Flow:
    1. One conditional UPDATE increments current_bookings only when
       current_bookings + quantity <= capacity - buffer_capacity
    2. Rows affected decides the outcome; nothing is read before the write
    3. On 0 rows, re-read the slot to tell "unknown/inactive" (404) from
       "full" (409) without mutating anything

    Runs on the caller's unit of work: the increment commits or rolls back
    with the row that owns it.
    """

    def __init__(self) -> None:
        self.tracer = trace.get_tracer(__name__)

    @Logger.io
    async def execute(
        self,
        *,
        uow: AbstractUnitOfWork,
        time_slot_id: UUID,
        quantity: int,
        source: str = 'cart',
    ) -> TimeSlot:
        if quantity < 1:
            raise DomainError('quantity must be at least 1')

        with self.tracer.start_as_current_span(
            'use_case.reserve_capacity',
            attributes={
                'time_slot.id': str(time_slot_id),
                'reservation.quantity': quantity,
                'reservation.source': source,
            },
        ) as span:
            started = time.perf_counter()
            reserved = await uow.time_slot_command_repo.increment_if_available(
                time_slot_id=time_slot_id, quantity=quantity
            )
            slot = await uow.time_slot_command_repo.get_by_id(time_slot_id=time_slot_id)
            duration = time.perf_counter() - started

            if reserved and slot is not None:
                metrics.record_reservation(source=source, result='reserved', duration=duration)
                span.set_attribute('reservation.result', 'reserved')
                Logger.base.info(
                    f'🎟️ [RESERVE] +{quantity} on slot {time_slot_id} '
                    f'({slot.current_bookings}/{slot.capacity})'
                )
                return slot

            if slot is None or not slot.is_active:
                metrics.record_reservation(source=source, result='not_found', duration=duration)
                span.set_attribute('reservation.result', 'not_found')
                raise NotFoundError('Time slot not found')

            metrics.record_reservation(source=source, result='full', duration=duration)
            span.set_attribute('reservation.result', 'full')
            Logger.base.warning(
                f'🚫 [RESERVE] Slot {time_slot_id} cannot hold {quantity} more '
                f'(available {slot.available_capacity})'
            )
            raise CapacityExceededError(
                f'Only {slot.available_capacity} tickets available for this time slot',
                available=slot.available_capacity,
            )

    @asynccontextmanager
    async def hold(
        self,
        *,
        uow: AbstractUnitOfWork,
        time_slot_id: UUID,
        quantity: int,
        source: str = 'cart',
    ) -> AsyncIterator[TimeSlot]:
        """
        Reserve, then run the body that creates the owning row

        Usage:
            async with reserve_capacity.hold(uow=uow, time_slot_id=slot_id, quantity=3):
                await uow.cart_item_command_repo.create(cart_item=item)
            await uow.commit()

        If the body raises, the savepoint is rolled back, which undoes exactly
        this increment, and the exception propagates.
        """
        async with uow.savepoint():
            slot = await self.execute(
                uow=uow, time_slot_id=time_slot_id, quantity=quantity, source=source
            )
            try:
                yield slot
            except Exception:
                metrics.record_release(reason='compensated', quantity=quantity)
                Logger.base.warning(
                    f'↩️ [RESERVE] Rolled back +{quantity} on slot {time_slot_id}'
                )
                raise
