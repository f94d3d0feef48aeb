from datetime import date
from typing import List

from src.service.inventory.driving_adapter.http_controller.schema.time_slot_schema import (
    TimeSlotResponse,
)
from src.service.shared_kernel.driving_adapter.schema.camel_schema import CamelSchema
from src.service.ticketing.app.dto.admin_report import (
    DailySalesReport,
    Dashboard,
    MonthlyReport,
    TrendStat,
)
from src.service.ticketing.app.interface.i_booking_report_repo import (
    DailyTotals,
    PaymentOrderTotals,
)
from src.service.ticketing.driving_adapter.http_controller.schema.booking_schema import (
    BookingResponse,
)


class TrendStatResponse(CamelSchema):
    value: int
    change: int
    trending: str

    @classmethod
    def from_dto(cls, stat: TrendStat) -> 'TrendStatResponse':
        return cls(value=stat.value, change=stat.change, trending=stat.trending)


class PaymentOrderTotalsResponse(CamelSchema):
    pending: int
    failed: int
    refunded: int

    @classmethod
    def from_dto(cls, totals: PaymentOrderTotals) -> 'PaymentOrderTotalsResponse':
        return cls(pending=totals.pending, failed=totals.failed, refunded=totals.refunded)


class DashboardResponse(CamelSchema):
    bookings_today: TrendStatResponse
    revenue_today: TrendStatResponse
    visitors_today: TrendStatResponse
    active_exhibitions: int
    tickets_used_today: int
    payment_orders_today: PaymentOrderTotalsResponse
    recent_bookings: List[BookingResponse]
    today_time_slots: List[TimeSlotResponse]

    @classmethod
    def from_dto(cls, dashboard: Dashboard) -> 'DashboardResponse':
        return cls(
            bookings_today=TrendStatResponse.from_dto(dashboard.bookings),
            revenue_today=TrendStatResponse.from_dto(dashboard.revenue),
            visitors_today=TrendStatResponse.from_dto(dashboard.visitors),
            active_exhibitions=dashboard.active_exhibitions,
            tickets_used_today=dashboard.tickets_used_today,
            payment_orders_today=PaymentOrderTotalsResponse.from_dto(
                dashboard.payment_orders_today
            ),
            recent_bookings=[BookingResponse.from_entity(b) for b in dashboard.recent_bookings],
            today_time_slots=[TimeSlotResponse.from_entity(s) for s in dashboard.today_slots],
        )


class DailySalesResponse(CamelSchema):
    date: date
    total_bookings: int
    cancelled_bookings: int
    total_revenue: int
    total_visitors: int
    bookings: List[BookingResponse]

    @classmethod
    def from_dto(cls, report: DailySalesReport) -> 'DailySalesResponse':
        return cls(
            date=report.date,
            total_bookings=report.total_bookings,
            cancelled_bookings=report.cancelled_bookings,
            total_revenue=report.total_revenue,
            total_visitors=report.total_visitors,
            bookings=[BookingResponse.from_entity(b) for b in report.bookings],
        )


class DailyTrendResponse(CamelSchema):
    date: date
    bookings: int
    confirmed: int
    cancelled: int
    revenue: int
    visitors: int

    @classmethod
    def from_dto(cls, day: DailyTotals) -> 'DailyTrendResponse':
        return cls(
            date=day.date,
            bookings=day.bookings,
            confirmed=day.confirmed,
            cancelled=day.cancelled,
            revenue=day.revenue,
            visitors=day.visitors,
        )


class MonthlyReportResponse(CamelSchema):
    month: str
    total_bookings: int
    confirmed_bookings: int
    total_revenue: int
    average_booking_value: int
    booking_trends: List[DailyTrendResponse]

    @classmethod
    def from_dto(cls, report: MonthlyReport) -> 'MonthlyReportResponse':
        return cls(
            month=report.month,
            total_bookings=report.total_bookings,
            confirmed_bookings=report.confirmed_bookings,
            total_revenue=report.total_revenue,
            average_booking_value=report.average_booking_value,
            booking_trends=[DailyTrendResponse.from_dto(day) for day in report.trends],
        )
