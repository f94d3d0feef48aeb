"""
Unit tests for the admin report figures

Test Focus:
1. Day-over-day growth and its direction
2. Month parsing and the museum day in UTC
3. Monthly totals and the average paid booking value
4. The export pages through every matching booking
"""

from datetime import date, timedelta
from unittest.mock import AsyncMock
import zoneinfo

import pytest

from src.platform.config.core_setting import settings
from src.platform.exception.exceptions import DomainError
from src.service.ticketing.app.dto.admin_report import TrendStat, growth_percent
from src.service.ticketing.app.interface.i_booking_query_repo import BookingFilters
from src.service.ticketing.app.interface.i_booking_report_repo import DailyTotals, PeriodTotals
from src.service.ticketing.app.query import admin_report_use_case
from src.service.ticketing.app.query.admin_report_use_case import (
    AdminReportUseCase,
    museum_day_bounds,
    parse_month,
)
from test.shared.builders import build_booking, build_time_slot


def _use_case(**repos: AsyncMock) -> AdminReportUseCase:
    return AdminReportUseCase(
        booking_report_repo=repos.get('booking_report_repo', AsyncMock()),
        booking_query_repo=repos.get('booking_query_repo', AsyncMock()),
        catalog_query_repo=repos.get('catalog_query_repo', AsyncMock()),
        time_slot_query_repo=repos.get('time_slot_query_repo', AsyncMock()),
    )


@pytest.mark.unit
class TestGrowth:
    @pytest.mark.parametrize(
        'current,previous,expected',
        [
            (15, 10, 50),
            (2, 3, -33),
            (7, 0, 0),
            (0, 4, -100),
        ],
    )
    def test_growth_percent(self, current: int, previous: int, expected: int) -> None:
        assert growth_percent(current, previous) == expected

    def test_no_change_trends_up(self) -> None:
        assert TrendStat.compare(5, 5) == TrendStat(value=5, change=0, trending='up')

    def test_drop_trends_down(self) -> None:
        assert TrendStat.compare(40000, 60000).trending == 'down'


@pytest.mark.unit
class TestReportPeriods:
    @pytest.mark.parametrize(
        'month,first,last',
        [
            ('2028-02', date(2028, 2, 1), date(2028, 2, 29)),
            ('2026-12', date(2026, 12, 1), date(2026, 12, 31)),
        ],
    )
    def test_parse_month(self, month: str, first: date, last: date) -> None:
        assert parse_month(month) == (first, last)

    @pytest.mark.parametrize('month', ['', '2026-13', '2026-1', 'October'])
    def test_malformed_month_is_a_bad_request(self, month: str) -> None:
        with pytest.raises(DomainError) as exc_info:
            parse_month(month)
        assert exc_info.value.status_code == 400

    def test_museum_day_starts_at_local_midnight(self) -> None:
        start, end = museum_day_bounds(date(2026, 10, 19))

        local_start = start.astimezone(zoneinfo.ZoneInfo(settings.MUSEUM_TIMEZONE))
        assert (local_start.date(), local_start.hour, local_start.minute) == (
            date(2026, 10, 19),
            0,
            0,
        )
        assert start.utcoffset() == timedelta(0)
        assert end > start


@pytest.mark.unit
class TestAdminReportUseCase:
    @pytest.mark.asyncio
    async def test_monthly_averages_over_paid_bookings(self) -> None:
        # Arrange
        report_repo = AsyncMock()
        report_repo.totals_by_booking_date.return_value = [
            DailyTotals(
                date=date(2026, 11, 2),
                bookings=3,
                confirmed=2,
                cancelled=1,
                paid=2,
                revenue=70000,
                visitors=4,
            ),
            DailyTotals(
                date=date(2026, 11, 9), bookings=1, confirmed=1, paid=0, revenue=0, visitors=2
            ),
        ]

        # Act
        report = await _use_case(booking_report_repo=report_repo).monthly(month='2026-11')

        # Assert
        report_repo.totals_by_booking_date.assert_awaited_once_with(
            date_from=date(2026, 11, 1), date_to=date(2026, 11, 30)
        )
        assert report.total_bookings == 4
        assert report.confirmed_bookings == 3
        assert report.total_revenue == 70000
        assert report.average_booking_value == 35000

    @pytest.mark.asyncio
    async def test_empty_month_has_zero_average(self) -> None:
        report_repo = AsyncMock()
        report_repo.totals_by_booking_date.return_value = []

        report = await _use_case(booking_report_repo=report_repo).monthly(month='2026-11')

        assert report.average_booking_value == 0
        assert report.trends == []

    @pytest.mark.asyncio
    async def test_export_reads_every_page(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """
        Given: Three matching bookings and a page size of two
        When: The export is built
        Then: Both pages are read and each booking becomes one CSV row
        """
        # Arrange
        monkeypatch.setattr(admin_report_use_case, '_EXPORT_PAGE_SIZE', 2)
        slot = build_time_slot()
        bookings = [build_booking(time_slot_id=slot.id) for _ in range(3)]
        query_repo = AsyncMock()
        query_repo.list_admin.side_effect = [(bookings[:2], 3), (bookings[2:], 3)]
        slot_repo = AsyncMock()
        slot_repo.get_by_id.return_value = slot

        # Act
        content = await _use_case(
            booking_query_repo=query_repo, time_slot_query_repo=slot_repo
        ).export_bookings_csv(filters=BookingFilters())

        # Assert
        lines = content.strip().splitlines()
        assert lines[0].startswith('Booking Reference,Booking Date')
        assert len(lines) == 4
        assert query_repo.list_admin.await_count == 2
        slot_repo.get_by_id.assert_awaited_once_with(time_slot_id=slot.id)
        assert ',10:00-11:00,2,0,0,0,2,400.00,pending,confirmed,' in lines[1]

    @pytest.mark.asyncio
    async def test_dashboard_compares_today_with_yesterday(self) -> None:
        # Arrange
        today = date(2026, 10, 19)
        report_repo = AsyncMock()
        report_repo.paid_totals_created_between.side_effect = [
            PeriodTotals(bookings=3, revenue=60000, visitors=6),
            PeriodTotals(bookings=2, revenue=80000, visitors=6),
        ]
        report_repo.tickets_used_between.return_value = 4
        report_repo.recent_paid.return_value = []
        catalog_repo = AsyncMock()
        catalog_repo.list_exhibitions.return_value = ['exhibition']
        slot_repo = AsyncMock()
        slot_repo.list_admin.return_value = ([], 0)

        # Act
        dashboard = await _use_case(
            booking_report_repo=report_repo,
            catalog_query_repo=catalog_repo,
            time_slot_query_repo=slot_repo,
        ).dashboard(today=today)

        # Assert
        assert dashboard.bookings == TrendStat(value=3, change=50, trending='up')
        assert dashboard.revenue == TrendStat(value=60000, change=-25, trending='down')
        assert dashboard.visitors.change == 0
        assert dashboard.active_exhibitions == 1
        assert dashboard.tickets_used_today == 4
        today_start, _ = museum_day_bounds(today)
        yesterday_start, _ = museum_day_bounds(today - timedelta(days=1))
        yesterday_call = report_repo.paid_totals_created_between.await_args_list[1]
        assert yesterday_call.kwargs == {
            'start': yesterday_start,
            'end': today_start,
        }
        report_repo.recent_paid.assert_awaited_once_with(limit=5)
        slot_repo.list_admin.assert_awaited_once_with(
            date_from=today, date_to=today, is_active=True
        )

