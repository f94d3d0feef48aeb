from typing import Optional
from uuid import UUID

from sqlalchemy import select, update

from src.platform.database.session_repo import SessionRepo
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.platform.types.utc_datetime import utc_now
from src.service.ticketing.app.interface.i_booking_command_repo import IBookingCommandRepo
from src.service.ticketing.domain.entity.booking_entity import Booking
from src.service.ticketing.driven_adapter.model.booking_model import BookingModel
from src.service.ticketing.driven_adapter.repo.ticketing_mapper import (
    booking_to_model,
    bookings_with_tickets,
    ticket_to_model,
)


class BookingCommandRepoImpl(SessionRepo, IBookingCommandRepo):
    @Logger.io
    async def create(self, *, booking: Booking) -> Booking:
        async with self._get_session() as session:
            session.add(booking_to_model(booking))
            # Booking row must exist before its ticket rows reference it
            await session.flush()
            session.add_all([ticket_to_model(ticket) for ticket in booking.tickets])
            await session.flush()
            return booking

    @Logger.io
    async def get_by_id(self, *, booking_id: UUID) -> Optional[Booking]:
        async with self._get_session() as session:
            result = await session.execute(
                select(BookingModel)
                .where(BookingModel.id == booking_id)
                .execution_options(populate_existing=True)
            )
            bookings = await bookings_with_tickets(session, result.scalars().all())
            return bookings[0] if bookings else None

    @Logger.io
    async def list_by_payment_order(self, *, payment_order_id: UUID) -> list[Booking]:
        async with self._get_session() as session:
            result = await session.execute(
                select(BookingModel)
                .where(BookingModel.payment_order_id == payment_order_id)
                .order_by(BookingModel.snapshot_line)
                .execution_options(populate_existing=True)
            )
            return await bookings_with_tickets(session, result.scalars().all())

    @Logger.io
    async def list_by_gateway_payment_id(self, *, gateway_payment_id: str) -> list[Booking]:
        async with self._get_session() as session:
            result = await session.execute(
                select(BookingModel)
                .where(BookingModel.gateway_payment_id == gateway_payment_id)
                .order_by(BookingModel.snapshot_line)
                .execution_options(populate_existing=True)
            )
            return await bookings_with_tickets(session, result.scalars().all())

    @Logger.io
    async def claim_capacity_release(self, *, booking_id: UUID) -> bool:
        stmt = (
            update(BookingModel)
            .where(BookingModel.id == booking_id, BookingModel.capacity_released.is_(False))
            .values(capacity_released=True, updated_at=utc_now())
            .execution_options(synchronize_session=False)
        )
        async with self._get_session() as session:
            result = await session.execute(stmt)
            return result.rowcount == 1  # type: ignore[attr-defined]

    @Logger.io
    async def update(self, *, booking: Booking) -> Booking:
        stmt = (
            update(BookingModel)
            .where(BookingModel.id == booking.id)
            .values(
                status=booking.status.value,
                payment_status=booking.payment_status.value,
                gateway_payment_id=booking.gateway_payment_id,
                refund_id=booking.refund_id,
                refund_amount=booking.refund_amount,
                refunded_at=booking.refunded_at,
                cancelled_at=booking.cancelled_at,
                updated_at=utc_now(),
            )
            .execution_options(synchronize_session=False)
        )
        async with self._get_session() as session:
            result = await session.execute(stmt)
            if result.rowcount != 1:  # type: ignore[attr-defined]
                raise NotFoundError('Booking not found')

        updated = await self.get_by_id(booking_id=booking.id)
        assert updated is not None
        return updated
