from datetime import date
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import Response

from src.platform.logging.loguru_io import Logger
from src.platform.types.utc_datetime import museum_today
from src.service.ticketing.app.interface.i_booking_query_repo import BookingFilters
from src.service.ticketing.app.query.admin_report_use_case import AdminReportUseCase
from src.service.ticketing.domain.entity.user_profile_entity import UserProfile
from src.service.ticketing.domain.enum.booking_status import BookingStatus, PaymentStatus
from src.service.ticketing.driving_adapter.http_controller.auth.role_auth import require_admin
from src.service.ticketing.driving_adapter.http_controller.schema.report_schema import (
    DailySalesResponse,
    DashboardResponse,
    MonthlyReportResponse,
)


router = APIRouter()


@router.get('/dashboard', status_code=status.HTTP_200_OK)
@Logger.io
async def get_dashboard(
    _admin: UserProfile = Depends(require_admin),
    use_case: AdminReportUseCase = Depends(AdminReportUseCase.depends),
) -> DashboardResponse:
    return DashboardResponse.from_dto(await use_case.dashboard())


@router.get('/reports/daily-sales', status_code=status.HTTP_200_OK)
@Logger.io
async def get_daily_sales(
    on_date: Optional[date] = Query(default=None, alias='date'),
    _admin: UserProfile = Depends(require_admin),
    use_case: AdminReportUseCase = Depends(AdminReportUseCase.depends),
) -> DailySalesResponse:
    report = await use_case.daily_sales(on_date=on_date or museum_today())
    return DailySalesResponse.from_dto(report)


@router.get('/reports/monthly', status_code=status.HTTP_200_OK)
@Logger.io
async def get_monthly_report(
    month: Optional[str] = Query(default=None, description='YYYY-MM'),
    _admin: UserProfile = Depends(require_admin),
    use_case: AdminReportUseCase = Depends(AdminReportUseCase.depends),
) -> MonthlyReportResponse:
    # A missing month is a 400 like a malformed one
    report = await use_case.monthly(month=month or '')
    return MonthlyReportResponse.from_dto(report)


@router.get('/bookings/export', status_code=status.HTTP_200_OK, response_class=Response)
@Logger.io
async def export_bookings(
    date_from: Optional[date] = Query(default=None, alias='startDate'),
    date_to: Optional[date] = Query(default=None, alias='endDate'),
    booking_status: Optional[BookingStatus] = Query(default=None, alias='status'),
    payment_status: Optional[PaymentStatus] = Query(default=None, alias='paymentStatus'),
    exhibition_id: Optional[UUID] = Query(default=None, alias='exhibitionId'),
    search: Optional[str] = Query(default=None, max_length=100),
    _admin: UserProfile = Depends(require_admin),
    use_case: AdminReportUseCase = Depends(AdminReportUseCase.depends),
) -> Response:
    content = await use_case.export_bookings_csv(
        filters=BookingFilters(
            status=booking_status,
            payment_status=payment_status,
            date_from=date_from,
            date_to=date_to,
            exhibition_id=exhibition_id,
            search=search,
        )
    )
    filename = f'bookings-export-{museum_today():%Y-%m-%d}.csv'
    return Response(
        content=content,
        media_type='text/csv',
        headers={'Content-Disposition': f'attachment; filename="{filename}"'},
    )
