"""
Integration tests for refunds reported by the gateway

Test Focus:
1. A refund naming a booking touches that booking only
2. An unnamed refund smaller than the outstanding payment changes nothing
3. An unnamed refund covering the whole payment refunds every line
"""

import pytest

from src.service.inventory.app.command.release_capacity_use_case import ReleaseCapacityUseCase
from src.service.inventory.app.command.reserve_capacity_use_case import ReserveCapacityUseCase
from src.service.ticketing.app.command.confirm_payment_use_case import ConfirmPaymentUseCase
from src.service.ticketing.app.command.refund_booking_use_case import RefundBookingUseCase
from src.service.ticketing.domain.enum.booking_status import BookingStatus, PaymentStatus
from src.service.ticketing.domain.enum.payment_order_status import PaymentOrderStatus
from src.service.ticketing.domain.enum.ticket_status import TicketStatus
from src.service.ticketing.driven_adapter.repo.payment_log_repo_impl import PaymentLogRepoImpl
from test.fake_payment_gateway import FakePaymentGateway
from test.shared.seed import (
    current_bookings_of,
    new_uow,
    seed_cart_reservation,
    seed_payment_order,
    seed_time_slot,
    session_factory,
)


GATEWAY_ORDER_ID = 'order_test000001'
GATEWAY_PAYMENT_ID = 'pay_test000001'


def _refund_booking() -> RefundBookingUseCase:
    return RefundBookingUseCase(
        uow=new_uow(),
        payment_gateway=FakePaymentGateway(),
        payment_log_repo=PaymentLogRepoImpl(session_factory=session_factory()),
        release_capacity=ReleaseCapacityUseCase(),
    )


async def _paid_two_line_order():
    """Lines of 2 and 3 adults (40000 and 60000 paise) on a slot of 10"""
    slot = await seed_time_slot(capacity=10)
    first = await seed_cart_reservation(time_slot_id=slot.id, adult=2)
    second = await seed_cart_reservation(time_slot_id=slot.id, adult=3)
    order = await seed_payment_order([first, second], gateway_order_id=GATEWAY_ORDER_ID)
    bookings = await ConfirmPaymentUseCase(
        uow=new_uow(),
        reserve_capacity=ReserveCapacityUseCase(),
        payment_log_repo=PaymentLogRepoImpl(session_factory=session_factory()),
    ).execute(gateway_order_id=GATEWAY_ORDER_ID, gateway_payment_id=GATEWAY_PAYMENT_ID)
    return slot, order, bookings


async def _stored_bookings(payment_order_id) -> list:
    uow = new_uow()
    async with uow:
        return await uow.booking_command_repo.list_by_payment_order(
            payment_order_id=payment_order_id
        )


async def _order_status(gateway_order_id: str) -> PaymentOrderStatus:
    uow = new_uow()
    async with uow:
        order = await uow.payment_order_command_repo.get_by_gateway_order_id(
            gateway_order_id=gateway_order_id
        )
    return order.status


@pytest.mark.integration
class TestGatewayRefund:
    @pytest.mark.asyncio
    async def test_refund_naming_one_line_leaves_the_other_paid(self) -> None:
        """
        Given: A paid two-line order holding 5 tickets
        When: The gateway reports a 40000 refund whose notes name the first booking
        Then: Only that booking is refunded; the second keeps its valid ticket
              and the counter drops to 3
        """
        # Arrange
        slot, order, (first, second) = await _paid_two_line_order()

        # Act
        refunded = await _refund_booking().apply_gateway_refund(
            gateway_payment_id=GATEWAY_PAYMENT_ID,
            refund_id='rfnd_test000001',
            amount=first.total_amount,
            booking_reference=first.booking_reference,
        )

        # Assert
        assert [b.id for b in refunded] == [first.id]
        stored_first, stored_second = await _stored_bookings(order.id)
        assert stored_first.payment_status == PaymentStatus.REFUNDED
        assert stored_first.refund_amount == 40000
        assert stored_first.ticket.status == TicketStatus.CANCELLED
        assert stored_second.status == BookingStatus.CONFIRMED
        assert stored_second.payment_status == PaymentStatus.PAID
        assert stored_second.refund_id is None
        assert stored_second.ticket.status == TicketStatus.VALID
        assert await current_bookings_of(slot.id) == 3
        assert await _order_status(GATEWAY_ORDER_ID) == PaymentOrderStatus.PAID

    @pytest.mark.asyncio
    async def test_unnamed_partial_refund_changes_nothing(self) -> None:
        """
        Given: A paid two-line order worth 100000
        When: The gateway reports a 40000 refund without a booking reference
        Then: No booking is touched and the counter stays at 5
        """
        # Arrange
        slot, order, _ = await _paid_two_line_order()

        # Act
        refunded = await _refund_booking().apply_gateway_refund(
            gateway_payment_id=GATEWAY_PAYMENT_ID, refund_id='rfnd_test000001', amount=40000
        )

        # Assert
        assert refunded == []
        stored = await _stored_bookings(order.id)
        assert all(b.payment_status == PaymentStatus.PAID for b in stored)
        assert all(b.ticket.status == TicketStatus.VALID for b in stored)
        assert await current_bookings_of(slot.id) == 5

    @pytest.mark.asyncio
    async def test_unnamed_full_refund_refunds_every_line_once(self) -> None:
        """
        Given: A paid two-line order worth 100000
        When: The gateway reports a full refund twice
        Then: Both bookings are refunded at their own totals, the order is
              refunded and the counter returns to 0 exactly once
        """
        # Arrange
        slot, order, _ = await _paid_two_line_order()
        use_case = _refund_booking()

        # Act
        await use_case.apply_gateway_refund(
            gateway_payment_id=GATEWAY_PAYMENT_ID, refund_id='rfnd_test000001', amount=100000
        )
        replayed = await _refund_booking().apply_gateway_refund(
            gateway_payment_id=GATEWAY_PAYMENT_ID, refund_id='rfnd_test000001', amount=100000
        )

        # Assert
        assert len(replayed) == 2
        stored = await _stored_bookings(order.id)
        assert [b.refund_amount for b in stored] == [40000, 60000]
        assert all(b.status == BookingStatus.CANCELLED for b in stored)
        assert await current_bookings_of(slot.id) == 0
        assert await _order_status(GATEWAY_ORDER_ID) == PaymentOrderStatus.REFUNDED
