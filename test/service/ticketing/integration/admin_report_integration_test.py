"""
Integration tests for the admin dashboard and sales reports

Test Focus:
1. Today's paid figures are compared with yesterday's
2. Refunded bookings count as bookings but not as revenue
3. The export writes one CSV row per matching booking
"""

import csv
from datetime import datetime, timedelta
import io
from uuid import UUID

import pytest
from sqlalchemy import update

from src.platform.types.utc_datetime import museum_today, utc_now
from src.service.inventory.app.command.release_capacity_use_case import ReleaseCapacityUseCase
from src.service.inventory.app.command.reserve_capacity_use_case import ReserveCapacityUseCase
from src.service.ticketing.app.command.confirm_payment_use_case import ConfirmPaymentUseCase
from src.service.ticketing.app.command.refund_booking_use_case import RefundBookingUseCase
from src.service.ticketing.app.dto.admin_report import TrendStat
from src.service.ticketing.app.interface.i_booking_query_repo import BookingFilters
from src.service.ticketing.app.query.admin_report_use_case import (
    EXPORT_COLUMNS,
    AdminReportUseCase,
    museum_day_bounds,
)
from src.service.ticketing.domain.enum.booking_status import PaymentStatus
from src.service.ticketing.domain.enum.ticket_status import TicketStatus
from src.service.ticketing.driven_adapter.model.booking_model import BookingModel
from src.service.ticketing.driven_adapter.model.ticket_model import TicketModel
from src.service.ticketing.driven_adapter.repo.booking_query_repo_impl import BookingQueryRepoImpl
from src.service.ticketing.driven_adapter.repo.booking_report_repo_impl import (
    BookingReportRepoImpl,
)
from src.service.ticketing.driven_adapter.repo.payment_log_repo_impl import PaymentLogRepoImpl
from test.fake_payment_gateway import FakePaymentGateway
from test.shared.seed import (
    catalog_query_repo,
    new_uow,
    seed_cart_reservation,
    seed_exhibition,
    seed_payment_order,
    seed_time_slot,
    session_factory,
    time_slot_query_repo,
)


GATEWAY_ORDER_ID = 'order_test000001'
GATEWAY_PAYMENT_ID = 'pay_test000001'


def _report() -> AdminReportUseCase:
    return AdminReportUseCase(
        booking_report_repo=BookingReportRepoImpl(session_factory=session_factory()),
        booking_query_repo=BookingQueryRepoImpl(session_factory=session_factory()),
        catalog_query_repo=catalog_query_repo(),
        time_slot_query_repo=time_slot_query_repo(),
    )


async def _paid_two_line_order():
    """Lines of 2 and 3 adults (40000 and 60000 paise) paid in one order"""
    slot = await seed_time_slot(capacity=10)
    first = await seed_cart_reservation(time_slot_id=slot.id, adult=2)
    second = await seed_cart_reservation(time_slot_id=slot.id, adult=3)
    await seed_payment_order([first, second], gateway_order_id=GATEWAY_ORDER_ID)
    return await ConfirmPaymentUseCase(
        uow=new_uow(),
        reserve_capacity=ReserveCapacityUseCase(),
        payment_log_repo=PaymentLogRepoImpl(session_factory=session_factory()),
    ).execute(gateway_order_id=GATEWAY_ORDER_ID, gateway_payment_id=GATEWAY_PAYMENT_ID)


async def _refund_by_gateway(booking_reference: str, amount: int) -> None:
    await RefundBookingUseCase(
        uow=new_uow(),
        payment_gateway=FakePaymentGateway(),
        payment_log_repo=PaymentLogRepoImpl(session_factory=session_factory()),
        release_capacity=ReleaseCapacityUseCase(),
    ).apply_gateway_refund(
        gateway_payment_id=GATEWAY_PAYMENT_ID,
        refund_id='rfnd_test000001',
        amount=amount,
        booking_reference=booking_reference,
    )


async def _execute(statement) -> None:
    async with session_factory()() as session:
        await session.execute(statement)
        await session.commit()


async def _move_booking_created_at(booking_id: UUID, created_at: datetime) -> None:
    await _execute(
        update(BookingModel).where(BookingModel.id == booking_id).values(created_at=created_at)
    )


@pytest.mark.integration
class TestAdminDashboard:
    @pytest.mark.asyncio
    async def test_dashboard_compares_today_with_yesterday(self) -> None:
        """
        Given: A paid booking from today, one from yesterday, a pending order,
               an active exhibition, a slot for today and a used ticket
        When: The dashboard is read
        Then: Each figure reflects its own table and period
        """
        # Arrange
        await seed_exhibition()
        today_slot = await seed_time_slot(slot_date=museum_today())
        first, second = await _paid_two_line_order()
        yesterday_start, _ = museum_day_bounds(museum_today() - timedelta(days=1))
        await _move_booking_created_at(second.id, yesterday_start + timedelta(hours=12))
        await _execute(
            update(TicketModel)
            .where(TicketModel.booking_id == first.id)
            .values(status=TicketStatus.USED.value, used_at=utc_now())
        )
        unpaid = await seed_cart_reservation(time_slot_id=first.time_slot_id, adult=1)
        await seed_payment_order([unpaid], gateway_order_id='order_test000002')

        # Act
        dashboard = await _report().dashboard()

        # Assert
        assert dashboard.bookings == TrendStat(value=1, change=0, trending='up')
        assert dashboard.revenue == TrendStat(value=40000, change=-33, trending='down')
        assert dashboard.visitors == TrendStat(value=2, change=-33, trending='down')
        assert dashboard.active_exhibitions == 1
        assert dashboard.tickets_used_today == 1
        assert dashboard.payment_orders_today.pending == 1
        assert [b.id for b in dashboard.recent_bookings] == [first.id, second.id]
        assert [s.id for s in dashboard.today_slots] == [today_slot.id]


@pytest.mark.integration
class TestSalesReports:
    @pytest.mark.asyncio
    async def test_daily_sales_leave_refunds_out_of_revenue(self) -> None:
        # Arrange
        first, second = await _paid_two_line_order()
        await _refund_by_gateway(first.booking_reference, first.total_amount)

        # Act
        report = await _report().daily_sales(on_date=first.booking_date)

        # Assert
        assert report.total_bookings == 2
        assert report.cancelled_bookings == 1
        assert report.total_revenue == 60000
        assert report.total_visitors == 3
        assert {b.id for b in report.bookings} == {first.id, second.id}

    @pytest.mark.asyncio
    async def test_monthly_report_groups_by_visit_date(self) -> None:
        # Arrange
        first, _ = await _paid_two_line_order()
        await _refund_by_gateway(first.booking_reference, first.total_amount)

        # Act
        report = await _report().monthly(month=f'{first.booking_date:%Y-%m}')

        # Assert
        assert report.total_bookings == 2
        assert report.confirmed_bookings == 1
        assert report.total_revenue == 60000
        assert report.average_booking_value == 60000
        assert [day.date for day in report.trends] == [first.booking_date]

    @pytest.mark.asyncio
    async def test_export_writes_matching_bookings_as_csv(self) -> None:
        # Arrange
        first, second = await _paid_two_line_order()
        await _refund_by_gateway(first.booking_reference, first.total_amount)

        # Act
        content = await _report().export_bookings_csv(
            filters=BookingFilters(payment_status=PaymentStatus.PAID)
        )

        # Assert
        header, *rows = list(csv.reader(io.StringIO(content)))
        assert header == EXPORT_COLUMNS
        assert len(rows) == 1
        row = dict(zip(header, rows[0]))
        assert row['Booking Reference'] == second.booking_reference
        assert row['Time Slot'] == '10:00-11:00'
        assert row['Adult'] == '3'
        assert row['Total Amount'] == '600.00'
        assert row['Payment ID'] == GATEWAY_PAYMENT_ID
