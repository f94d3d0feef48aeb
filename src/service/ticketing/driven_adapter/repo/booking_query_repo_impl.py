from typing import Optional
from uuid import UUID

from sqlalchemy import func, or_, select

from src.platform.database.session_repo import SessionRepo
from src.platform.logging.loguru_io import Logger
from src.service.ticketing.app.interface.i_booking_query_repo import (
    BookingFilters,
    IBookingQueryRepo,
)
from src.service.ticketing.domain.entity.booking_entity import Booking
from src.service.ticketing.driven_adapter.model.booking_model import BookingModel
from src.service.ticketing.driven_adapter.repo.ticketing_mapper import bookings_with_tickets


def _filter_conditions(filters: BookingFilters) -> list:
    conditions = []
    if filters.status is not None:
        conditions.append(BookingModel.status == filters.status.value)
    if filters.payment_status is not None:
        conditions.append(BookingModel.payment_status == filters.payment_status.value)
    if filters.date_from is not None:
        conditions.append(BookingModel.booking_date >= filters.date_from)
    if filters.date_to is not None:
        conditions.append(BookingModel.booking_date <= filters.date_to)
    if filters.exhibition_id is not None:
        conditions.append(BookingModel.exhibition_id == filters.exhibition_id)
    if filters.show_id is not None:
        conditions.append(BookingModel.show_id == filters.show_id)
    if filters.search:
        pattern = f'%{filters.search.strip().lower()}%'
        conditions.append(
            or_(
                func.lower(BookingModel.booking_reference).like(pattern),
                func.lower(BookingModel.visitor_email).like(pattern),
                func.lower(BookingModel.visitor_name).like(pattern),
            )
        )
    return conditions


class BookingQueryRepoImpl(SessionRepo, IBookingQueryRepo):
    @Logger.io
    async def get_by_reference(self, *, booking_reference: str) -> Optional[Booking]:
        async with self._get_session() as session:
            result = await session.execute(
                select(BookingModel).where(
                    BookingModel.booking_reference == booking_reference.strip().upper()
                )
            )
            bookings = await bookings_with_tickets(session, result.scalars().all())
            return bookings[0] if bookings else None

    @Logger.io
    async def get_by_id(self, *, booking_id: UUID) -> Optional[Booking]:
        async with self._get_session() as session:
            result = await session.execute(
                select(BookingModel).where(BookingModel.id == booking_id)
            )
            bookings = await bookings_with_tickets(session, result.scalars().all())
            return bookings[0] if bookings else None

    @Logger.io
    async def list_by_user(self, *, user_id: str) -> list[Booking]:
        async with self._get_session() as session:
            result = await session.execute(
                select(BookingModel)
                .where(BookingModel.user_id == user_id)
                .order_by(BookingModel.booking_date.desc(), BookingModel.created_at.desc())
            )
            return await bookings_with_tickets(session, result.scalars().all())

    @Logger.io
    async def list_admin(
        self, *, filters: BookingFilters, limit: int, offset: int
    ) -> tuple[list[Booking], int]:
        conditions = _filter_conditions(filters)
        async with self._get_session() as session:
            total = await session.scalar(
                select(func.count()).select_from(BookingModel).where(*conditions)
            )
            result = await session.execute(
                select(BookingModel)
                .where(*conditions)
                .order_by(BookingModel.created_at.desc())
                .limit(limit)
                .offset(offset)
            )
            bookings = await bookings_with_tickets(session, result.scalars().all())
            return bookings, int(total or 0)
