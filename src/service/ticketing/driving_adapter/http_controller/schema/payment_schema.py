from typing import List, Optional
from uuid import UUID

from pydantic import EmailStr, Field

from src.service.shared_kernel.driving_adapter.schema.camel_schema import CamelSchema
from src.service.ticketing.app.dto.gateway_result import CheckoutOrder
from src.service.ticketing.driving_adapter.http_controller.schema.booking_schema import (
    BookingResponse,
)


class CreateOrderRequest(CamelSchema):
    visitor_name: str = Field(min_length=1, max_length=200)
    visitor_email: EmailStr
    visitor_phone: Optional[str] = Field(default=None, max_length=32)


class CreateOrderResponse(CamelSchema):
    model_config = {
        'json_schema_extra': {
            'example': {
                'paymentOrderId': '01936d8f-5e73-7c4e-a9c5-123456789abc',
                'orderId': 'order_PXg3yWkq1bV2aL',
                'amount': 120000,
                'currency': 'INR',
                'keyId': 'rzp_test_key',
                'itemCount': 2,
            }
        },
    }

    payment_order_id: UUID
    order_id: str
    amount: int
    currency: str
    key_id: str
    item_count: int

    @classmethod
    def from_value(cls, order: CheckoutOrder) -> 'CreateOrderResponse':
        return cls(
            payment_order_id=order.payment_order_id,
            order_id=order.gateway_order_id,
            amount=order.amount,
            currency=order.currency,
            key_id=order.key_id,
            item_count=order.item_count,
        )


class VerifyPaymentRequest(CamelSchema):
    """Field names follow the gateway checkout callback"""

    razorpay_order_id: str = Field(alias='razorpay_order_id')
    razorpay_payment_id: str = Field(alias='razorpay_payment_id')
    razorpay_signature: str = Field(alias='razorpay_signature')


class VerifyPaymentResponse(CamelSchema):
    success: bool
    bookings: List[BookingResponse]


class WebhookResponse(CamelSchema):
    status: str
    event: str
    result: str
