from typing import Any, Self

import attrs
from dependency_injector.wiring import Provide, inject
from fastapi import Depends
import orjson

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import DomainError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.ticketing_metrics import metrics
from src.service.ticketing.app.command.confirm_payment_use_case import ConfirmPaymentUseCase
from src.service.ticketing.app.command.refund_booking_use_case import RefundBookingUseCase
from src.service.ticketing.app.interface.i_payment_gateway import IPaymentGateway
from src.service.ticketing.app.interface.i_payment_log_repo import IPaymentLogRepo
from src.service.ticketing.domain.enum.payment_order_status import PaymentOrderStatus
from src.service.ticketing.domain.value_object.payment_log_entry import PaymentLogEntry


@attrs.define(frozen=True)
class WebhookOutcome:
    event: str
    result: str


def _entity(payload: dict[str, Any], name: str) -> dict[str, Any]:
    return ((payload.get('payload') or {}).get(name) or {}).get('entity') or {}


class HandlePaymentWebhookUseCase:
    """
    Gateway webhook dispatcher

    Events:
    - payment.captured, order.paid: confirmation bridge
    - payment.authorized: order -> attempted
    - payment.failed: order -> failed; its reservations expire normally
    - refund.created, refund.processed: refund bridge
    - refund.failed and anything else: logged and acknowledged

    Every verified event is appended to payment_log. Replays are safe
    because each handler is a conditional update or an idempotent bridge.
    """

    def __init__(
        self,
        *,
        uow: AbstractUnitOfWork,
        payment_gateway: IPaymentGateway,
        payment_log_repo: IPaymentLogRepo,
        confirm_payment: ConfirmPaymentUseCase,
        refund_booking: RefundBookingUseCase,
    ) -> None:
        self.uow = uow
        self.payment_gateway = payment_gateway
        self.payment_log_repo = payment_log_repo
        self.confirm_payment = confirm_payment
        self.refund_booking = refund_booking

    @classmethod
    @inject
    def depends(
        cls,
        uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work]),
        payment_gateway: IPaymentGateway = Depends(Provide[Container.payment_gateway]),
        payment_log_repo: IPaymentLogRepo = Depends(Provide[Container.payment_log_repo]),
        confirm_payment: ConfirmPaymentUseCase = Depends(ConfirmPaymentUseCase.depends),
        refund_booking: RefundBookingUseCase = Depends(RefundBookingUseCase.depends),
    ) -> Self:
        return cls(
            uow=uow,
            payment_gateway=payment_gateway,
            payment_log_repo=payment_log_repo,
            confirm_payment=confirm_payment,
            refund_booking=refund_booking,
        )

    @Logger.io
    async def execute(self, *, body: bytes, signature: str) -> WebhookOutcome:
        if not self.payment_gateway.verify_webhook_signature(body=body, signature=signature):
            metrics.record_webhook(event='unknown', result='invalid_signature')
            Logger.base.warning('🚫 [WEBHOOK] Invalid signature')
            raise DomainError('Invalid webhook signature')

        try:
            payload = orjson.loads(body)
        except orjson.JSONDecodeError as e:
            metrics.record_webhook(event='unknown', result='invalid_payload')
            raise DomainError('Invalid webhook payload') from e

        event = str(payload.get('event') or '')
        payment = _entity(payload, 'payment')
        order = _entity(payload, 'order')
        refund = _entity(payload, 'refund')
        gateway_order_id = payment.get('order_id') or order.get('id')
        gateway_payment_id = payment.get('id') or refund.get('payment_id')

        result = await self._dispatch(
            event=event,
            gateway_order_id=gateway_order_id,
            gateway_payment_id=gateway_payment_id,
            refund=refund,
        )

        await self.payment_log_repo.append(
            entry=PaymentLogEntry(
                event=event or 'unknown',
                status=result,
                gateway_order_id=gateway_order_id,
                gateway_payment_id=gateway_payment_id,
                amount=payment.get('amount') or refund.get('amount'),
                payload=payload,
            )
        )
        metrics.record_webhook(event=event or 'unknown', result=result)
        Logger.base.info(f'📨 [WEBHOOK] {event} -> {result}')
        return WebhookOutcome(event=event, result=result)

    async def _dispatch(
        self,
        *,
        event: str,
        gateway_order_id: str | None,
        gateway_payment_id: str | None,
        refund: dict[str, Any],
    ) -> str:
        match event:
            case 'payment.captured' | 'order.paid':
                if not gateway_order_id or not gateway_payment_id:
                    return 'missing_ids'
                try:
                    await self.confirm_payment.execute(
                        gateway_order_id=gateway_order_id,
                        gateway_payment_id=gateway_payment_id,
                        source='webhook',
                    )
                except NotFoundError:
                    Logger.base.warning(f'⚠️ [WEBHOOK] Unknown order {gateway_order_id}')
                    return 'unknown_order'
                return 'processed'

            case 'payment.authorized' | 'payment.failed':
                if not gateway_order_id:
                    return 'missing_ids'
                if event == 'payment.authorized':
                    status = PaymentOrderStatus.ATTEMPTED
                    from_statuses: tuple[PaymentOrderStatus, ...] = (PaymentOrderStatus.CREATED,)
                else:
                    status = PaymentOrderStatus.FAILED
                    from_statuses = PaymentOrderStatus.holding()
                async with self.uow:
                    changed = await self.uow.payment_order_command_repo.mark_status(
                        gateway_order_id=gateway_order_id,
                        status=status,
                        from_statuses=from_statuses,
                        gateway_payment_id=gateway_payment_id,
                    )
                    await self.uow.commit()
                return 'processed' if changed else 'ignored'

            case 'refund.created' | 'refund.processed':
                if not refund.get('id') or not refund.get('payment_id'):
                    return 'missing_ids'
                # Razorpay sends notes as an empty list when none were set
                notes = refund.get('notes') if isinstance(refund.get('notes'), dict) else {}
                refunded = await self.refund_booking.apply_gateway_refund(
                    gateway_payment_id=refund['payment_id'],
                    refund_id=refund['id'],
                    amount=refund.get('amount'),
                    booking_reference=notes.get('booking_reference'),
                )
                return 'processed' if refunded else 'unmatched'

            case 'refund.failed':
                Logger.base.error(
                    f'🚨 [WEBHOOK] Refund {refund.get("id")} failed for payment '
                    f'{refund.get("payment_id")}'
                )
                return 'logged'

            case _:
                return 'ignored'
