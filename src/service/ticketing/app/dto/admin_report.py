"""Admin dashboard and report DTOs."""

from datetime import date
from typing import Literal

import attrs

from src.service.inventory.domain.entity.time_slot_entity import TimeSlot
from src.service.ticketing.app.interface.i_booking_report_repo import (
    DailyTotals,
    PaymentOrderTotals,
)
from src.service.ticketing.domain.entity.booking_entity import Booking


def growth_percent(current: int, previous: int) -> int:
    """Whole-percent change against the previous period; 0 when there is nothing to compare"""
    if previous <= 0:
        return 0
    return round((current - previous) / previous * 100)


@attrs.define(frozen=True)
class TrendStat:
    value: int
    change: int
    trending: Literal['up', 'down']

    @classmethod
    def compare(cls, current: int, previous: int) -> 'TrendStat':
        change = growth_percent(current, previous)
        return cls(value=current, change=change, trending='up' if change >= 0 else 'down')


@attrs.define(frozen=True)
class Dashboard:
    bookings: TrendStat
    revenue: TrendStat
    visitors: TrendStat
    active_exhibitions: int
    tickets_used_today: int
    payment_orders_today: PaymentOrderTotals
    recent_bookings: list[Booking]
    today_slots: list[TimeSlot]


@attrs.define(frozen=True)
class DailySalesReport:
    date: date
    bookings: list[Booking]
    total_bookings: int
    cancelled_bookings: int
    total_revenue: int
    total_visitors: int


@attrs.define(frozen=True)
class MonthlyReport:
    month: str
    total_bookings: int
    confirmed_bookings: int
    total_revenue: int
    average_booking_value: int
    trends: list[DailyTotals]
