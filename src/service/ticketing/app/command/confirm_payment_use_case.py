from typing import Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import (
    CapacityExceededError,
    ForbiddenError,
    NotFoundError,
)
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.ticketing_metrics import metrics
from src.service.inventory.app.command.reserve_capacity_use_case import ReserveCapacityUseCase
from src.service.ticketing.app.interface.i_payment_log_repo import IPaymentLogRepo
from src.service.ticketing.domain.entity.booking_entity import Booking
from src.service.ticketing.domain.entity.payment_order_entity import PaymentOrder, SnapshotLine
from src.service.ticketing.domain.value_object.payment_log_entry import PaymentLogEntry


class ConfirmPaymentUseCase:
    """
    Payment confirmation bridge: paid order snapshot -> bookings

    Flow:
    1. Claim the order: conditional status update created|attempted|failed -> paid
    2. Lost the claim, or bookings exist already: return the existing bookings
    3. Per snapshot line, one booking with its ticket:
       - the line's cart item still holds its reservation: consume it, the
         counter is left as is
       - the reservation lapsed: re-reserve through a hold; if the slot is
         full the booking is stored cancelled/paid for a manual refund

    Replays (webhook retries, client callback racing the webhook) always end
    in step 2, so an order is materialized once.
    """

    def __init__(
        self,
        *,
        uow: AbstractUnitOfWork,
        reserve_capacity: ReserveCapacityUseCase,
        payment_log_repo: IPaymentLogRepo,
    ) -> None:
        self.uow = uow
        self.reserve_capacity = reserve_capacity
        self.payment_log_repo = payment_log_repo
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(
        cls,
        uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work]),
        reserve_capacity: ReserveCapacityUseCase = Depends(
            Provide[Container.reserve_capacity_use_case]
        ),
        payment_log_repo: IPaymentLogRepo = Depends(Provide[Container.payment_log_repo]),
    ) -> Self:
        return cls(uow=uow, reserve_capacity=reserve_capacity, payment_log_repo=payment_log_repo)

    @Logger.io
    async def execute(
        self,
        *,
        gateway_order_id: str,
        gateway_payment_id: str,
        source: str = 'webhook',
        expected_user_id: Optional[str] = None,
    ) -> list[Booking]:
        with self.tracer.start_as_current_span(
            'use_case.confirm_payment',
            attributes={'payment.order_id': gateway_order_id, 'payment.source': source},
        ) as span:
            async with self.uow:
                order = await self.uow.payment_order_command_repo.get_by_gateway_order_id(
                    gateway_order_id=gateway_order_id
                )
                if order is None:
                    raise NotFoundError('Payment order not found')
                if expected_user_id is not None and order.user_id != expected_user_id:
                    raise ForbiddenError('Payment order belongs to another user')

                claimed = await self.uow.payment_order_command_repo.claim_paid(
                    gateway_order_id=gateway_order_id, gateway_payment_id=gateway_payment_id
                )
                existing = await self.uow.booking_command_repo.list_by_payment_order(
                    payment_order_id=order.id
                )
                if not claimed or existing:
                    await self.uow.commit()
                    span.set_attribute('payment.result', 'replayed')
                    metrics.record_materialized(result='replayed', count=len(existing))
                    Logger.base.info(
                        f'🔁 [PAYMENT] Order {gateway_order_id} already confirmed '
                        f'({len(existing)} booking(s))'
                    )
                    return existing

                bookings = [
                    await self._materialize(order, line, gateway_payment_id)
                    for line in order.cart_snapshot
                ]
                await self.uow.commit()

            span.set_attribute('payment.result', 'created')
            await self.payment_log_repo.append(
                entry=PaymentLogEntry(
                    event='payment.confirmed',
                    status='paid',
                    gateway_order_id=gateway_order_id,
                    gateway_payment_id=gateway_payment_id,
                    payment_order_id=order.id,
                    amount=order.amount,
                    payload={
                        'source': source,
                        'bookings': [b.booking_reference for b in bookings],
                    },
                )
            )
            Logger.base.info(
                f'✅ [PAYMENT] Order {gateway_order_id} paid via {source}: '
                f'{", ".join(b.booking_reference for b in bookings)}'
            )
            return bookings

    async def _materialize(
        self, order: PaymentOrder, line: SnapshotLine, gateway_payment_id: str
    ) -> Booking:
        booking = Booking.from_snapshot_line(
            order=order, line=line, gateway_payment_id=gateway_payment_id
        )

        if await self.uow.cart_item_command_repo.consume(cart_item_id=line.cart_item_id):
            await self.uow.booking_command_repo.create(booking=booking)
            metrics.record_materialized(result='created')
            return booking

        # Reservation lapsed (expired and swept, or removed) before payment landed
        try:
            async with self.reserve_capacity.hold(
                uow=self.uow,
                time_slot_id=line.time_slot_id,
                quantity=line.counts.total,
                source='payment',
            ):
                await self.uow.booking_command_repo.create(booking=booking)
            metrics.record_materialized(result='created')
            Logger.base.warning(
                f'⚠️ [PAYMENT] Line {line.line_no} of order {order.gateway_order_id} '
                f're-reserved after its cart reservation lapsed'
            )
            return booking
        except (CapacityExceededError, NotFoundError) as e:
            unfulfilled = booking.mark_unfulfilled()
            await self.uow.booking_command_repo.create(booking=unfulfilled)
            metrics.record_materialized(result='lapsed')
            Logger.base.error(
                f'🚨 [PAYMENT] Booking {unfulfilled.booking_reference} paid but slot '
                f'{line.time_slot_id} could not take {line.counts.total} ticket(s) '
                f'({e.message}); manual refund required for payment {gateway_payment_id}'
            )
            return unfulfilled
