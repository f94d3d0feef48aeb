from datetime import date, datetime

from sqlalchemy import case, func, select

from src.platform.database.session_repo import SessionRepo
from src.platform.logging.loguru_io import Logger
from src.service.ticketing.app.interface.i_booking_report_repo import (
    DailyTotals,
    IBookingReportRepo,
    PaymentOrderTotals,
    PeriodTotals,
)
from src.service.ticketing.domain.entity.booking_entity import Booking
from src.service.ticketing.domain.enum.booking_status import BookingStatus, PaymentStatus
from src.service.ticketing.domain.enum.payment_order_status import PaymentOrderStatus
from src.service.ticketing.domain.enum.ticket_status import TicketStatus
from src.service.ticketing.driven_adapter.model.booking_model import BookingModel
from src.service.ticketing.driven_adapter.model.payment_order_model import PaymentOrderModel
from src.service.ticketing.driven_adapter.model.ticket_model import TicketModel
from src.service.ticketing.driven_adapter.repo.ticketing_mapper import bookings_with_tickets


_IS_PAID = BookingModel.payment_status == PaymentStatus.PAID.value


class BookingReportRepoImpl(SessionRepo, IBookingReportRepo):
    @Logger.io
    async def paid_totals_created_between(self, *, start: datetime, end: datetime) -> PeriodTotals:
        async with self._get_session() as session:
            result = await session.execute(
                select(
                    func.count(BookingModel.id).label('bookings'),
                    func.sum(BookingModel.total_amount).label('revenue'),
                    func.sum(BookingModel.total_tickets).label('visitors'),
                ).where(
                    _IS_PAID,
                    BookingModel.created_at >= start,
                    BookingModel.created_at < end,
                )
            )
            row = result.first()

        return PeriodTotals(
            bookings=int(row.bookings or 0),  # pyright: ignore[reportOptionalMemberAccess]
            revenue=int(row.revenue or 0),  # pyright: ignore[reportOptionalMemberAccess]
            visitors=int(row.visitors or 0),  # pyright: ignore[reportOptionalMemberAccess]
        )

    @Logger.io
    async def totals_by_booking_date(self, *, date_from: date, date_to: date) -> list[DailyTotals]:
        async with self._get_session() as session:
            result = await session.execute(
                select(
                    BookingModel.booking_date,
                    func.count(BookingModel.id).label('bookings'),
                    func.sum(
                        case((BookingModel.status == BookingStatus.CONFIRMED.value, 1), else_=0)
                    ).label('confirmed'),
                    func.sum(
                        case((BookingModel.status == BookingStatus.CANCELLED.value, 1), else_=0)
                    ).label('cancelled'),
                    func.sum(case((_IS_PAID, 1), else_=0)).label('paid'),
                    func.sum(case((_IS_PAID, BookingModel.total_amount), else_=0)).label(
                        'revenue'
                    ),
                    func.sum(
                        case(
                            (
                                BookingModel.status == BookingStatus.CONFIRMED.value,
                                BookingModel.total_tickets,
                            ),
                            else_=0,
                        )
                    ).label('visitors'),
                )
                .where(
                    BookingModel.booking_date >= date_from,
                    BookingModel.booking_date <= date_to,
                )
                .group_by(BookingModel.booking_date)
                .order_by(BookingModel.booking_date)
            )
            rows = result.all()

        return [
            DailyTotals(
                date=row.booking_date,
                bookings=int(row.bookings or 0),
                confirmed=int(row.confirmed or 0),
                cancelled=int(row.cancelled or 0),
                paid=int(row.paid or 0),
                revenue=int(row.revenue or 0),
                visitors=int(row.visitors or 0),
            )
            for row in rows
        ]

    @Logger.io
    async def recent_paid(self, *, limit: int) -> list[Booking]:
        async with self._get_session() as session:
            result = await session.execute(
                select(BookingModel)
                .where(_IS_PAID)
                .order_by(BookingModel.created_at.desc())
                .limit(limit)
            )
            return await bookings_with_tickets(session, result.scalars().all())

    @Logger.io
    async def tickets_used_between(self, *, start: datetime, end: datetime) -> int:
        async with self._get_session() as session:
            used = await session.scalar(
                select(func.count(TicketModel.id)).where(
                    TicketModel.status == TicketStatus.USED.value,
                    TicketModel.used_at >= start,
                    TicketModel.used_at < end,
                )
            )
            return int(used or 0)

    @Logger.io
    async def payment_order_totals_between(
        self, *, start: datetime, end: datetime
    ) -> PaymentOrderTotals:
        pending = [status.value for status in PaymentOrderStatus.holding()]
        async with self._get_session() as session:
            result = await session.execute(
                select(
                    func.sum(case((PaymentOrderModel.status.in_(pending), 1), else_=0)).label(
                        'pending'
                    ),
                    func.sum(
                        case(
                            (PaymentOrderModel.status == PaymentOrderStatus.FAILED.value, 1),
                            else_=0,
                        )
                    ).label('failed'),
                    func.sum(
                        case(
                            (PaymentOrderModel.status == PaymentOrderStatus.REFUNDED.value, 1),
                            else_=0,
                        )
                    ).label('refunded'),
                ).where(
                    PaymentOrderModel.created_at >= start,
                    PaymentOrderModel.created_at < end,
                )
            )
            row = result.first()

        return PaymentOrderTotals(
            pending=int(row.pending or 0),  # pyright: ignore[reportOptionalMemberAccess]
            failed=int(row.failed or 0),  # pyright: ignore[reportOptionalMemberAccess]
            refunded=int(row.refunded or 0),  # pyright: ignore[reportOptionalMemberAccess]
        )
