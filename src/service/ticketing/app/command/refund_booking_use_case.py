from typing import Optional, Self
from uuid import UUID

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import DomainError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.inventory.app.command.release_capacity_use_case import ReleaseCapacityUseCase
from src.service.ticketing.app.interface.i_payment_gateway import IPaymentGateway
from src.service.ticketing.app.interface.i_payment_log_repo import IPaymentLogRepo
from src.service.ticketing.domain.entity.booking_entity import Booking
from src.service.ticketing.domain.enum.booking_status import PaymentStatus
from src.service.ticketing.domain.value_object.payment_log_entry import PaymentLogEntry


class RefundBookingUseCase:
    """
    Refunds, admin-initiated (execute) or reported by the gateway
    (apply_gateway_refund)

    Each refunded booking is cancelled, its ticket cancelled, and its tickets
    given back to the slot once, guarded by the capacity_released claim.
    """

    def __init__(
        self,
        *,
        uow: AbstractUnitOfWork,
        payment_gateway: IPaymentGateway,
        payment_log_repo: IPaymentLogRepo,
        release_capacity: ReleaseCapacityUseCase,
    ) -> None:
        self.uow = uow
        self.payment_gateway = payment_gateway
        self.payment_log_repo = payment_log_repo
        self.release_capacity = release_capacity

    @classmethod
    @inject
    def depends(
        cls,
        uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work]),
        payment_gateway: IPaymentGateway = Depends(Provide[Container.payment_gateway]),
        payment_log_repo: IPaymentLogRepo = Depends(Provide[Container.payment_log_repo]),
        release_capacity: ReleaseCapacityUseCase = Depends(
            Provide[Container.release_capacity_use_case]
        ),
    ) -> Self:
        return cls(
            uow=uow,
            payment_gateway=payment_gateway,
            payment_log_repo=payment_log_repo,
            release_capacity=release_capacity,
        )

    @Logger.io
    async def execute(
        self,
        *,
        booking_id: UUID,
        refunded_by: str,
        amount: Optional[int] = None,
        reason: Optional[str] = None,
    ) -> Booking:
        async with self.uow:
            booking = await self.uow.booking_command_repo.get_by_id(booking_id=booking_id)
        if booking is None:
            raise NotFoundError('Booking not found')
        if booking.payment_status != PaymentStatus.PAID or not booking.gateway_payment_id:
            raise DomainError('Only paid bookings can be refunded')
        if amount is not None and not 0 < amount <= booking.total_amount:
            raise DomainError('Refund amount must be between 1 and the booking total')

        refund = await self.payment_gateway.refund(
            gateway_payment_id=booking.gateway_payment_id,
            amount=booking.total_amount if amount is None else amount,
            notes={
                'booking_reference': booking.booking_reference,
                'reason': reason or '',
                'refunded_by': refunded_by,
            },
        )

        async with self.uow:
            # The gateway webhook may have applied this refund already
            current = await self.uow.booking_command_repo.get_by_id(booking_id=booking_id)
            if current is not None and current.refund_id == refund.id:
                refunded = current
            else:
                refunded = await self._refund_one(
                    current or booking, refund_id=refund.id, amount=refund.amount
                )
            await self._close_order_if_fully_refunded(booking.gateway_payment_id)
            await self.uow.commit()

        await self.payment_log_repo.append(
            entry=PaymentLogEntry(
                event='refund.requested',
                status=refund.status,
                gateway_payment_id=booking.gateway_payment_id,
                payment_order_id=booking.payment_order_id,
                amount=refund.amount,
                payload={'refund_id': refund.id, 'booking': booking.booking_reference},
            )
        )
        Logger.base.info(
            f'💸 [REFUND] {booking.booking_reference} refunded {refund.amount} by {refunded_by}'
        )
        return refunded

    @Logger.io
    async def apply_gateway_refund(
        self,
        *,
        gateway_payment_id: str,
        refund_id: str,
        amount: Optional[int] = None,
        booking_reference: Optional[str] = None,
    ) -> list[Booking]:
        """
        Gateway-reported refund -> cancelled/refunded bookings

        A refund naming a booking_reference (set in the notes by execute) touches
        that booking only. Without one, the refund must cover every booking still
        paid by gateway_payment_id; anything smaller is logged for manual
        handling and changes nothing. Replays are no-ops.
        """
        async with self.uow:
            bookings = await self.uow.booking_command_repo.list_by_gateway_payment_id(
                gateway_payment_id=gateway_payment_id
            )
            applied = [b for b in bookings if b.refund_id == refund_id]
            if applied:
                Logger.base.info(f'🔁 [REFUND] Refund {refund_id} already applied')
                return applied

            targets = self._refund_targets(
                bookings, amount=amount, booking_reference=booking_reference
            )
            if not targets:
                Logger.base.error(
                    f'🚨 [REFUND] Refund {refund_id} of {amount} on payment '
                    f'{gateway_payment_id} matches no booking, needs manual handling'
                )
                return []

            refunded = []
            for booking in targets:
                if booking.payment_status == PaymentStatus.REFUNDED:
                    refunded.append(booking)
                    continue
                refund_amount = amount if len(targets) == 1 else None
                refunded.append(
                    await self._refund_one(booking, refund_id=refund_id, amount=refund_amount)
                )
            await self._close_order_if_fully_refunded(gateway_payment_id)
            await self.uow.commit()

        Logger.base.info(
            f'💸 [REFUND] Gateway refund {refund_id} applied to {len(refunded)} booking(s)'
        )
        return refunded

    @staticmethod
    def _refund_targets(
        bookings: list[Booking], *, amount: Optional[int], booking_reference: Optional[str]
    ) -> list[Booking]:
        if booking_reference:
            reference = booking_reference.upper()
            named = [b for b in bookings if b.booking_reference == reference]
            if named:
                return named

        outstanding = [b for b in bookings if b.payment_status == PaymentStatus.PAID]
        if not outstanding or amount is None:
            return []
        if amount < sum(b.total_amount for b in outstanding):
            return []
        return outstanding

    async def _refund_one(
        self, booking: Booking, *, refund_id: str, amount: Optional[int]
    ) -> Booking:
        updated = await self.uow.booking_command_repo.update(
            booking=booking.mark_refunded(refund_id=refund_id, refund_amount=amount)
        )
        await self.uow.ticket_command_repo.cancel_for_booking(booking_id=booking.id)
        if await self.uow.booking_command_repo.claim_capacity_release(booking_id=booking.id):
            await self.release_capacity.execute(
                uow=self.uow,
                time_slot_id=booking.time_slot_id,
                quantity=booking.total_tickets,
                reason='refunded',
            )
        return updated

    async def _close_order_if_fully_refunded(self, gateway_payment_id: str) -> None:
        siblings = await self.uow.booking_command_repo.list_by_gateway_payment_id(
            gateway_payment_id=gateway_payment_id
        )
        if all(b.payment_status == PaymentStatus.REFUNDED for b in siblings):
            await self.uow.payment_order_command_repo.mark_refunded_by_payment_id(
                gateway_payment_id=gateway_payment_id
            )
