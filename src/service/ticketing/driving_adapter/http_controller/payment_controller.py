from fastapi import APIRouter, Depends, status

from src.platform.logging.loguru_io import Logger
from src.service.ticketing.app.command.create_payment_order_use_case import (
    CreatePaymentOrderUseCase,
)
from src.service.ticketing.app.command.verify_payment_use_case import VerifyPaymentUseCase
from src.service.ticketing.domain.entity.user_profile_entity import UserProfile
from src.service.ticketing.driving_adapter.http_controller.auth.role_auth import get_current_user
from src.service.ticketing.driving_adapter.http_controller.schema.booking_schema import (
    BookingResponse,
)
from src.service.ticketing.driving_adapter.http_controller.schema.payment_schema import (
    CreateOrderRequest,
    CreateOrderResponse,
    VerifyPaymentRequest,
    VerifyPaymentResponse,
)


router = APIRouter()


@router.post('/create-order', status_code=status.HTTP_201_CREATED)
@Logger.io
async def create_payment_order(
    request: CreateOrderRequest,
    current_user: UserProfile = Depends(get_current_user),
    use_case: CreatePaymentOrderUseCase = Depends(CreatePaymentOrderUseCase.depends),
) -> CreateOrderResponse:
    """Snapshot the live cart into a gateway order; the cart keeps its reservations"""
    order = await use_case.execute(
        user_id=current_user.id,
        visitor_name=request.visitor_name,
        visitor_email=request.visitor_email,
        visitor_phone=request.visitor_phone,
    )
    return CreateOrderResponse.from_value(order)


@router.post('/verify', status_code=status.HTTP_200_OK)
@Logger.io
async def verify_payment(
    request: VerifyPaymentRequest,
    current_user: UserProfile = Depends(get_current_user),
    use_case: VerifyPaymentUseCase = Depends(VerifyPaymentUseCase.depends),
) -> VerifyPaymentResponse:
    bookings = await use_case.execute(
        user_id=current_user.id,
        gateway_order_id=request.razorpay_order_id,
        gateway_payment_id=request.razorpay_payment_id,
        signature=request.razorpay_signature,
    )
    return VerifyPaymentResponse(
        success=True, bookings=[BookingResponse.from_entity(b) for b in bookings]
    )
