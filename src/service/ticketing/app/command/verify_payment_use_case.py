from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import DomainError
from src.platform.logging.loguru_io import Logger
from src.service.ticketing.app.command.confirm_payment_use_case import ConfirmPaymentUseCase
from src.service.ticketing.app.interface.i_payment_gateway import IPaymentGateway
from src.service.ticketing.app.interface.i_payment_log_repo import IPaymentLogRepo
from src.service.ticketing.domain.entity.booking_entity import Booking
from src.service.ticketing.domain.value_object.payment_log_entry import PaymentLogEntry


class VerifyPaymentUseCase:
    """Client callback after checkout; the webhook may have confirmed the order already."""

    def __init__(
        self,
        *,
        payment_gateway: IPaymentGateway,
        payment_log_repo: IPaymentLogRepo,
        confirm_payment: ConfirmPaymentUseCase,
    ) -> None:
        self.payment_gateway = payment_gateway
        self.payment_log_repo = payment_log_repo
        self.confirm_payment = confirm_payment

    @classmethod
    @inject
    def depends(
        cls,
        payment_gateway: IPaymentGateway = Depends(Provide[Container.payment_gateway]),
        payment_log_repo: IPaymentLogRepo = Depends(Provide[Container.payment_log_repo]),
        confirm_payment: ConfirmPaymentUseCase = Depends(ConfirmPaymentUseCase.depends),
    ) -> Self:
        return cls(
            payment_gateway=payment_gateway,
            payment_log_repo=payment_log_repo,
            confirm_payment=confirm_payment,
        )

    @Logger.io
    async def execute(
        self,
        *,
        user_id: str,
        gateway_order_id: str,
        gateway_payment_id: str,
        signature: str,
    ) -> list[Booking]:
        if not self.payment_gateway.verify_payment_signature(
            gateway_order_id=gateway_order_id,
            gateway_payment_id=gateway_payment_id,
            signature=signature,
        ):
            await self.payment_log_repo.append(
                entry=PaymentLogEntry(
                    event='payment.verify',
                    status='invalid_signature',
                    gateway_order_id=gateway_order_id,
                    gateway_payment_id=gateway_payment_id,
                )
            )
            Logger.base.warning(f'🚫 [PAYMENT] Invalid signature for order {gateway_order_id}')
            raise DomainError('Invalid payment signature')

        return await self.confirm_payment.execute(
            gateway_order_id=gateway_order_id,
            gateway_payment_id=gateway_payment_id,
            source='verify',
            expected_user_id=user_id,
        )
