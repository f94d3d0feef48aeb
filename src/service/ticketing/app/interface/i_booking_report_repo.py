from abc import ABC, abstractmethod
from datetime import date, datetime

import attrs

from src.service.ticketing.domain.entity.booking_entity import Booking


@attrs.define(frozen=True)
class PeriodTotals:
    bookings: int = 0
    revenue: int = 0  # paise
    visitors: int = 0


@attrs.define(frozen=True)
class DailyTotals:
    date: date
    bookings: int = 0
    confirmed: int = 0
    cancelled: int = 0
    paid: int = 0
    revenue: int = 0  # paise, paid bookings only
    visitors: int = 0


@attrs.define(frozen=True)
class PaymentOrderTotals:
    pending: int = 0
    failed: int = 0
    refunded: int = 0


class IBookingReportRepo(ABC):
    @abstractmethod
    async def paid_totals_created_between(self, *, start: datetime, end: datetime) -> PeriodTotals:
        """Paid bookings whose created_at falls in [start, end)"""
        pass

    @abstractmethod
    async def totals_by_booking_date(self, *, date_from: date, date_to: date) -> list[DailyTotals]:
        """One row per visit date that has bookings, ascending"""
        pass

    @abstractmethod
    async def recent_paid(self, *, limit: int) -> list[Booking]:
        pass

    @abstractmethod
    async def tickets_used_between(self, *, start: datetime, end: datetime) -> int:
        pass

    @abstractmethod
    async def payment_order_totals_between(
        self, *, start: datetime, end: datetime
    ) -> PaymentOrderTotals:
        pass
