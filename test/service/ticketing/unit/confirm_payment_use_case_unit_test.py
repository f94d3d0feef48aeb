"""
Unit tests for ConfirmPaymentUseCase

Test Focus:
1. First confirmation turns every snapshot line into one paid booking
2. Replays return the existing bookings and write nothing
3. Lapsed reservations are re-reserved, or stored as unfulfilled when the slot is full
"""

from unittest.mock import AsyncMock

import pytest

from src.platform.exception.exceptions import ForbiddenError, NotFoundError
from src.service.inventory.app.command.reserve_capacity_use_case import ReserveCapacityUseCase
from src.service.ticketing.app.command.confirm_payment_use_case import ConfirmPaymentUseCase
from src.service.ticketing.domain.entity.payment_order_entity import PaymentOrder
from src.service.ticketing.domain.enum.booking_status import BookingStatus, PaymentStatus
from test.constants import ANOTHER_VISITOR_USER_ID, VISITOR_USER_ID
from test.shared.builders import (
    build_booking,
    build_cart_item,
    build_payment_order,
    build_time_slot,
)
from test.shared.mock_uow import build_mock_uow


GATEWAY_ORDER_ID = 'order_test000001'
GATEWAY_PAYMENT_ID = 'pay_test000001'


@pytest.mark.unit
class TestConfirmPayment:
    @pytest.fixture
    def uow(self) -> AsyncMock:
        return build_mock_uow()

    @pytest.fixture
    def order(self) -> PaymentOrder:
        return build_payment_order(
            [build_cart_item(adult=2), build_cart_item(adult=1, child=1)],
            gateway_order_id=GATEWAY_ORDER_ID,
        )

    @pytest.fixture
    def use_case(self, uow: AsyncMock) -> ConfirmPaymentUseCase:
        return ConfirmPaymentUseCase(
            uow=uow,
            reserve_capacity=ReserveCapacityUseCase(),
            payment_log_repo=AsyncMock(),
        )

    @pytest.fixture
    def claimed_order(self, uow: AsyncMock, order: PaymentOrder) -> PaymentOrder:
        uow.payment_order_command_repo.get_by_gateway_order_id.return_value = order
        uow.payment_order_command_repo.claim_paid.return_value = True
        uow.booking_command_repo.list_by_payment_order.return_value = []
        return order

    @pytest.mark.asyncio
    async def test_first_confirmation_consumes_each_reservation(
        self, use_case: ConfirmPaymentUseCase, uow: AsyncMock, claimed_order: PaymentOrder
    ) -> None:
        """
        Given: A claimed order whose two cart items still hold their reservations
        When: Confirming the payment
        Then: Two paid bookings are created and no capacity is reserved again
        """
        # Arrange
        uow.cart_item_command_repo.consume.return_value = True

        # Act
        bookings = await use_case.execute(
            gateway_order_id=GATEWAY_ORDER_ID, gateway_payment_id=GATEWAY_PAYMENT_ID
        )

        # Assert
        assert [b.snapshot_line for b in bookings] == [1, 2]
        assert all(b.payment_status == PaymentStatus.PAID for b in bookings)
        assert all(b.gateway_payment_id == GATEWAY_PAYMENT_ID for b in bookings)
        assert uow.booking_command_repo.create.await_count == 2
        uow.time_slot_command_repo.increment_if_available.assert_not_awaited()
        use_case.payment_log_repo.append.assert_awaited_once()
        uow.commit.assert_awaited()

    @pytest.mark.asyncio
    async def test_replay_returns_existing_bookings_without_writing(
        self, use_case: ConfirmPaymentUseCase, uow: AsyncMock, order: PaymentOrder
    ) -> None:
        """
        Given: The order was already claimed and materialized
        When: The same webhook is delivered again
        Then: The stored bookings come back and nothing is created or reserved
        """
        # Arrange
        existing = [build_booking()]
        uow.payment_order_command_repo.get_by_gateway_order_id.return_value = order
        uow.payment_order_command_repo.claim_paid.return_value = False
        uow.booking_command_repo.list_by_payment_order.return_value = existing

        # Act
        bookings = await use_case.execute(
            gateway_order_id=GATEWAY_ORDER_ID, gateway_payment_id=GATEWAY_PAYMENT_ID
        )

        # Assert
        assert bookings == existing
        uow.booking_command_repo.create.assert_not_awaited()
        uow.cart_item_command_repo.consume.assert_not_awaited()
        use_case.payment_log_repo.append.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_lapsed_reservation_is_reserved_again(
        self, use_case: ConfirmPaymentUseCase, uow: AsyncMock, claimed_order: PaymentOrder
    ) -> None:
        """
        Given: The cart items were swept before the payment landed
        When: Confirming the payment and the slots still have room
        Then: Each line reserves its tickets again and becomes a confirmed booking
        """
        # Arrange
        uow.cart_item_command_repo.consume.return_value = False
        uow.time_slot_command_repo.increment_if_available.return_value = True
        uow.time_slot_command_repo.get_by_id.return_value = build_time_slot(capacity=10)

        # Act
        bookings = await use_case.execute(
            gateway_order_id=GATEWAY_ORDER_ID, gateway_payment_id=GATEWAY_PAYMENT_ID
        )

        # Assert
        assert all(b.status == BookingStatus.CONFIRMED for b in bookings)
        quantities = [
            c.kwargs['quantity']
            for c in uow.time_slot_command_repo.increment_if_available.await_args_list
        ]
        assert quantities == [2, 2]

    @pytest.mark.asyncio
    async def test_full_slot_leaves_a_paid_unfulfilled_booking(
        self, use_case: ConfirmPaymentUseCase, uow: AsyncMock, claimed_order: PaymentOrder
    ) -> None:
        """
        Given: The reservations lapsed and the slots filled up meanwhile
        When: Confirming the payment
        Then: Bookings are stored cancelled but paid, with capacity marked released
        """
        # Arrange
        uow.cart_item_command_repo.consume.return_value = False
        uow.time_slot_command_repo.increment_if_available.return_value = False
        uow.time_slot_command_repo.get_by_id.return_value = build_time_slot(
            capacity=10, current_bookings=10
        )

        # Act
        bookings = await use_case.execute(
            gateway_order_id=GATEWAY_ORDER_ID, gateway_payment_id=GATEWAY_PAYMENT_ID
        )

        # Assert
        assert len(bookings) == 2
        for booking in bookings:
            assert booking.status == BookingStatus.CANCELLED
            assert booking.payment_status == PaymentStatus.PAID
            assert booking.capacity_released

    @pytest.mark.asyncio
    async def test_unknown_order_raises_not_found(
        self, use_case: ConfirmPaymentUseCase, uow: AsyncMock
    ) -> None:
        uow.payment_order_command_repo.get_by_gateway_order_id.return_value = None

        with pytest.raises(NotFoundError):
            await use_case.execute(gateway_order_id='order_missing', gateway_payment_id='pay_x')

    @pytest.mark.asyncio
    async def test_order_of_another_user_cannot_be_confirmed_by_client(
        self, use_case: ConfirmPaymentUseCase, uow: AsyncMock, order: PaymentOrder
    ) -> None:
        # Arrange
        assert order.user_id == VISITOR_USER_ID
        uow.payment_order_command_repo.get_by_gateway_order_id.return_value = order

        # Act & Assert
        with pytest.raises(ForbiddenError):
            await use_case.execute(
                gateway_order_id=GATEWAY_ORDER_ID,
                gateway_payment_id=GATEWAY_PAYMENT_ID,
                source='client',
                expected_user_id=ANOTHER_VISITOR_USER_ID,
            )
        uow.payment_order_command_repo.claim_paid.assert_not_awaited()
