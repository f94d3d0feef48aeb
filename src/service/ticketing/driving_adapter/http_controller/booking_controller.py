from typing import List, Optional

from fastapi import APIRouter, Depends, status
from opentelemetry import trace

from src.platform.logging.loguru_io import Logger
from src.service.ticketing.app.command.create_booking_use_case import CreateBookingUseCase
from src.service.ticketing.app.query.get_booking_use_case import GetBookingUseCase
from src.service.ticketing.app.query.list_bookings_use_case import ListBookingsUseCase
from src.service.ticketing.domain.entity.user_profile_entity import UserProfile
from src.service.ticketing.driving_adapter.http_controller.auth.role_auth import (
    get_current_user,
    get_optional_user,
)
from src.service.ticketing.driving_adapter.http_controller.schema.booking_schema import (
    BookingCreateRequest,
    BookingResponse,
)


router = APIRouter()
tracer = trace.get_tracer(__name__)


@router.post('/bookings-new/create', status_code=status.HTTP_201_CREATED)
@Logger.io
async def create_booking(
    request: BookingCreateRequest,
    current_user: Optional[UserProfile] = Depends(get_optional_user),
    use_case: CreateBookingUseCase = Depends(CreateBookingUseCase.depends),
) -> BookingResponse:
    with tracer.start_as_current_span('controller.create_booking') as span:
        span.set_attribute('time_slot.id', str(request.time_slot_id))
        span.set_attribute('booking.date', request.booking_date.isoformat())

        booking = await use_case.execute(
            time_slot_id=request.time_slot_id,
            booking_date=request.booking_date,
            counts=request.tickets.to_value(),
            visitor_name=request.visitor_name,
            visitor_email=request.visitor_email,
            visitor_phone=request.visitor_phone,
            user_id=current_user.id if current_user else None,
            exhibition_id=request.exhibition_id,
            show_id=request.show_id,
        )

        span.set_attribute('booking.id', str(booking.id))
        return BookingResponse.from_entity(booking)


# /me is declared before /{booking_reference} so it is not captured as a reference
@router.get('/bookings/me', status_code=status.HTTP_200_OK)
@Logger.io
async def list_my_bookings(
    current_user: UserProfile = Depends(get_current_user),
    use_case: ListBookingsUseCase = Depends(ListBookingsUseCase.depends),
) -> List[BookingResponse]:
    bookings = await use_case.list_for_user(user_id=current_user.id)
    return [BookingResponse.from_entity(booking) for booking in bookings]


@router.get('/bookings/{booking_reference}', status_code=status.HTTP_200_OK)
@Logger.io
async def get_booking_by_reference(
    booking_reference: str,
    use_case: GetBookingUseCase = Depends(GetBookingUseCase.depends),
) -> BookingResponse:
    booking = await use_case.by_reference(booking_reference=booking_reference.upper())
    return BookingResponse.from_entity(booking)
