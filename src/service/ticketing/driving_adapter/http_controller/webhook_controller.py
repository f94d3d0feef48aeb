from fastapi import APIRouter, Depends, Header, Request, status

from src.platform.logging.loguru_io import Logger
from src.service.ticketing.app.command.handle_payment_webhook_use_case import (
    HandlePaymentWebhookUseCase,
)
from src.service.ticketing.driving_adapter.http_controller.schema.payment_schema import (
    WebhookResponse,
)


router = APIRouter()


@router.post('/razorpay', status_code=status.HTTP_200_OK)
@Logger.io
async def razorpay_webhook(
    request: Request,
    x_razorpay_signature: str = Header(default='', alias='x-razorpay-signature'),
    use_case: HandlePaymentWebhookUseCase = Depends(HandlePaymentWebhookUseCase.depends),
) -> WebhookResponse:
    """The signature covers the raw body, so it is read before any JSON parsing"""
    body = await request.body()
    outcome = await use_case.execute(body=body, signature=x_razorpay_signature)
    return WebhookResponse(status='ok', event=outcome.event, result=outcome.result)
