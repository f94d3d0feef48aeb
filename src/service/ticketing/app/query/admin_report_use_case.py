import csv
from datetime import date, datetime, time, timedelta, timezone
import io
import re
from typing import Self
from uuid import UUID
import zoneinfo

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.core_setting import settings
from src.platform.config.di import Container
from src.platform.exception.exceptions import DomainError
from src.platform.logging.loguru_io import Logger
from src.platform.types.utc_datetime import museum_today
from src.service.catalog.app.interface.i_catalog_query_repo import ICatalogQueryRepo
from src.service.catalog.domain.enum.catalog_status import ExhibitionStatus
from src.service.inventory.app.interface.i_time_slot_query_repo import ITimeSlotQueryRepo
from src.service.inventory.domain.entity.time_slot_entity import TimeSlot
from src.service.ticketing.app.dto.admin_report import (
    DailySalesReport,
    Dashboard,
    MonthlyReport,
    TrendStat,
)
from src.service.ticketing.app.interface.i_booking_query_repo import (
    BookingFilters,
    IBookingQueryRepo,
)
from src.service.ticketing.app.interface.i_booking_report_repo import IBookingReportRepo
from src.service.ticketing.domain.entity.booking_entity import Booking


_MONTH_PATTERN = re.compile(r'^(\d{4})-(0[1-9]|1[0-2])$')
_EXPORT_PAGE_SIZE = 500

EXPORT_COLUMNS = [
    'Booking Reference',
    'Booking Date',
    'Visitor Name',
    'Visitor Email',
    'Visitor Phone',
    'Item',
    'Time Slot',
    'Adult',
    'Child',
    'Student',
    'Senior',
    'Total Tickets',
    'Total Amount',
    'Payment Status',
    'Booking Status',
    'Payment ID',
]


def parse_month(month: str) -> tuple[date, date]:
    """First and last day of a YYYY-MM month"""
    match = _MONTH_PATTERN.match(month or '')
    if not match:
        raise DomainError('month must be formatted as YYYY-MM')
    first = date(int(match.group(1)), int(match.group(2)), 1)
    next_month = (first.replace(day=28) + timedelta(days=4)).replace(day=1)
    return first, next_month - timedelta(days=1)


def museum_day_bounds(on_date: date) -> tuple[datetime, datetime]:
    """UTC instants of local midnight starting and ending a museum day"""
    tz = zoneinfo.ZoneInfo(settings.MUSEUM_TIMEZONE)
    start = datetime.combine(on_date, time.min, tzinfo=tz)
    end = datetime.combine(on_date + timedelta(days=1), time.min, tzinfo=tz)
    return start.astimezone(timezone.utc), end.astimezone(timezone.utc)


class AdminReportUseCase:
    """Read-only figures for the admin dashboard, sales reports and booking export"""

    def __init__(
        self,
        *,
        booking_report_repo: IBookingReportRepo,
        booking_query_repo: IBookingQueryRepo,
        catalog_query_repo: ICatalogQueryRepo,
        time_slot_query_repo: ITimeSlotQueryRepo,
    ) -> None:
        self.booking_report_repo = booking_report_repo
        self.booking_query_repo = booking_query_repo
        self.catalog_query_repo = catalog_query_repo
        self.time_slot_query_repo = time_slot_query_repo

    @classmethod
    @inject
    def depends(
        cls,
        booking_report_repo: IBookingReportRepo = Depends(Provide[Container.booking_report_repo]),
        booking_query_repo: IBookingQueryRepo = Depends(Provide[Container.booking_query_repo]),
        catalog_query_repo: ICatalogQueryRepo = Depends(Provide[Container.catalog_query_repo]),
        time_slot_query_repo: ITimeSlotQueryRepo = Depends(
            Provide[Container.time_slot_query_repo]
        ),
    ) -> Self:
        return cls(
            booking_report_repo=booking_report_repo,
            booking_query_repo=booking_query_repo,
            catalog_query_repo=catalog_query_repo,
            time_slot_query_repo=time_slot_query_repo,
        )

    @Logger.io
    async def dashboard(self, *, today: date | None = None) -> Dashboard:
        today = today or museum_today()
        today_start, today_end = museum_day_bounds(today)
        yesterday_start, _ = museum_day_bounds(today - timedelta(days=1))

        current = await self.booking_report_repo.paid_totals_created_between(
            start=today_start, end=today_end
        )
        previous = await self.booking_report_repo.paid_totals_created_between(
            start=yesterday_start, end=today_start
        )
        exhibitions = await self.catalog_query_repo.list_exhibitions(
            status=ExhibitionStatus.ACTIVE
        )
        today_slots, _ = await self.time_slot_query_repo.list_admin(
            date_from=today, date_to=today, is_active=True
        )

        return Dashboard(
            bookings=TrendStat.compare(current.bookings, previous.bookings),
            revenue=TrendStat.compare(current.revenue, previous.revenue),
            visitors=TrendStat.compare(current.visitors, previous.visitors),
            active_exhibitions=len(exhibitions),
            tickets_used_today=await self.booking_report_repo.tickets_used_between(
                start=today_start, end=today_end
            ),
            payment_orders_today=await self.booking_report_repo.payment_order_totals_between(
                start=today_start, end=today_end
            ),
            recent_bookings=await self.booking_report_repo.recent_paid(limit=5),
            today_slots=sorted(today_slots, key=lambda slot: slot.start_time),
        )

    @Logger.io
    async def daily_sales(self, *, on_date: date) -> DailySalesReport:
        bookings = await self._all_bookings(BookingFilters(date_from=on_date, date_to=on_date))
        totals = await self.booking_report_repo.totals_by_booking_date(
            date_from=on_date, date_to=on_date
        )
        day = totals[0] if totals else None
        return DailySalesReport(
            date=on_date,
            bookings=bookings,
            total_bookings=day.bookings if day else 0,
            cancelled_bookings=day.cancelled if day else 0,
            total_revenue=day.revenue if day else 0,
            total_visitors=day.visitors if day else 0,
        )

    @Logger.io
    async def monthly(self, *, month: str) -> MonthlyReport:
        first, last = parse_month(month)
        trends = await self.booking_report_repo.totals_by_booking_date(
            date_from=first, date_to=last
        )
        revenue = sum(day.revenue for day in trends)
        paid = sum(day.paid for day in trends)
        return MonthlyReport(
            month=month,
            total_bookings=sum(day.bookings for day in trends),
            confirmed_bookings=sum(day.confirmed for day in trends),
            total_revenue=revenue,
            average_booking_value=round(revenue / paid) if paid else 0,
            trends=trends,
        )

    @Logger.io
    async def export_bookings_csv(self, *, filters: BookingFilters) -> str:
        bookings = await self._all_bookings(filters)
        slots: dict[UUID, TimeSlot | None] = {}
        for booking in bookings:
            if booking.time_slot_id not in slots:
                slots[booking.time_slot_id] = await self.time_slot_query_repo.get_by_id(
                    time_slot_id=booking.time_slot_id
                )

        buffer = io.StringIO()
        writer = csv.writer(buffer)
        writer.writerow(EXPORT_COLUMNS)
        for booking in bookings:
            writer.writerow(_export_row(booking, slots.get(booking.time_slot_id)))
        Logger.base.info(f'📄 [EXPORT] {len(bookings)} bookings exported')
        return buffer.getvalue()

    async def _all_bookings(self, filters: BookingFilters) -> list[Booking]:
        bookings: list[Booking] = []
        while True:
            page, total = await self.booking_query_repo.list_admin(
                filters=filters, limit=_EXPORT_PAGE_SIZE, offset=len(bookings)
            )
            bookings.extend(page)
            if not page or len(bookings) >= total:
                return bookings


def _export_row(booking: Booking, slot: TimeSlot | None) -> list:
    slot_label = f'{slot.start_time:%H:%M}-{slot.end_time:%H:%M}' if slot else ''
    counts = booking.counts
    return [
        booking.booking_reference,
        booking.booking_date.isoformat(),
        booking.visitor_name,
        booking.visitor_email,
        booking.visitor_phone or '',
        booking.item_name,
        slot_label,
        counts.adult,
        counts.child,
        counts.student,
        counts.senior,
        booking.total_tickets,
        f'{booking.total_amount / 100:.2f}',
        booking.payment_status.value,
        booking.status.value,
        booking.gateway_payment_id or '',
    ]
