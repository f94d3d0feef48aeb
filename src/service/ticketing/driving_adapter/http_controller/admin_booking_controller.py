from datetime import date
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from src.platform.logging.loguru_io import Logger
from src.service.ticketing.app.command.cancel_booking_use_case import CancelBookingUseCase
from src.service.ticketing.app.command.refund_booking_use_case import RefundBookingUseCase
from src.service.ticketing.app.interface.i_booking_query_repo import BookingFilters
from src.service.ticketing.app.query.get_booking_use_case import GetBookingUseCase
from src.service.ticketing.app.query.list_bookings_use_case import ListBookingsUseCase
from src.service.ticketing.domain.entity.user_profile_entity import UserProfile
from src.service.ticketing.domain.enum.booking_status import BookingStatus, PaymentStatus
from src.service.ticketing.driving_adapter.http_controller.auth.role_auth import require_admin
from src.service.ticketing.driving_adapter.http_controller.schema.booking_schema import (
    BookingListResponse,
    BookingResponse,
    RefundRequest,
)


router = APIRouter()


@router.get('', status_code=status.HTTP_200_OK)
@Logger.io
async def list_bookings(
    booking_status: Optional[BookingStatus] = Query(default=None, alias='status'),
    payment_status: Optional[PaymentStatus] = Query(default=None, alias='paymentStatus'),
    date_from: Optional[date] = Query(default=None, alias='dateFrom'),
    date_to: Optional[date] = Query(default=None, alias='dateTo'),
    exhibition_id: Optional[UUID] = Query(default=None, alias='exhibitionId'),
    show_id: Optional[UUID] = Query(default=None, alias='showId'),
    search: Optional[str] = Query(default=None, max_length=100),
    page: int = Query(default=1, ge=1),
    page_size: int = Query(default=20, ge=1, le=100, alias='pageSize'),
    _admin: UserProfile = Depends(require_admin),
    use_case: ListBookingsUseCase = Depends(ListBookingsUseCase.depends),
) -> BookingListResponse:
    bookings, total = await use_case.list_admin(
        filters=BookingFilters(
            status=booking_status,
            payment_status=payment_status,
            date_from=date_from,
            date_to=date_to,
            exhibition_id=exhibition_id,
            show_id=show_id,
            search=search,
        ),
        page=page,
        page_size=page_size,
    )
    return BookingListResponse(
        bookings=[BookingResponse.from_entity(booking) for booking in bookings],
        total=total,
        page=page,
        page_size=page_size,
    )


@router.get('/{booking_id}', status_code=status.HTTP_200_OK)
@Logger.io
async def get_booking(
    booking_id: UUID,
    _admin: UserProfile = Depends(require_admin),
    use_case: GetBookingUseCase = Depends(GetBookingUseCase.depends),
) -> BookingResponse:
    booking = await use_case.by_id(booking_id=booking_id)
    return BookingResponse.from_entity(booking)


@router.post('/{booking_id}/cancel', status_code=status.HTTP_200_OK)
@Logger.io
async def cancel_booking(
    booking_id: UUID,
    _admin: UserProfile = Depends(require_admin),
    use_case: CancelBookingUseCase = Depends(CancelBookingUseCase.depends),
) -> BookingResponse:
    booking = await use_case.execute(booking_id=booking_id)
    return BookingResponse.from_entity(booking)


@router.post('/{booking_id}/refund', status_code=status.HTTP_200_OK)
@Logger.io
async def refund_booking(
    booking_id: UUID,
    request: Optional[RefundRequest] = None,
    admin: UserProfile = Depends(require_admin),
    use_case: RefundBookingUseCase = Depends(RefundBookingUseCase.depends),
) -> BookingResponse:
    request = request or RefundRequest()
    booking = await use_case.execute(
        booking_id=booking_id,
        refunded_by=admin.id,
        amount=request.amount,
        reason=request.reason,
    )
    return BookingResponse.from_entity(booking)
