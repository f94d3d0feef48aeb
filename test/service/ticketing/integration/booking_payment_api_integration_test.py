"""
Checkout over HTTP: cart -> gateway order -> verify / webhook -> bookings

The gateway is the in-memory fake from conftest; signatures are real HMACs
made with the configured secrets.
"""

from datetime import timedelta

from fastapi.testclient import TestClient
import pytest

from src.platform.types.utc_datetime import museum_today
from test.constants import ADULT_PRICE, VISITOR_EMAIL, VISITOR_NAME
from test.fake_payment_gateway import (
    FakePaymentGateway,
    payment_captured_body,
    refund_processed_body,
    sign_payment,
    sign_webhook,
)
from test.route_constant import (
    ADMIN_BOOKING_CANCEL,
    ADMIN_BOOKING_REFUND,
    ADMIN_BOOKINGS,
    BOOKING_BY_REFERENCE,
    CART,
    MY_BOOKINGS,
    PAYMENT_CREATE_ORDER,
    PAYMENT_VERIFY,
    RAZORPAY_WEBHOOK,
)
from test.shared.utils import (
    add_to_cart,
    assert_response_status,
    create_direct_booking,
    create_prices,
    create_time_slot,
    get_time_slot,
)


@pytest.fixture
def slot_date():
    return museum_today() + timedelta(days=9)


@pytest.fixture
def priced_slot(client: TestClient, admin_headers: dict, slot_date) -> dict:
    create_prices(client, admin_headers)
    return create_time_slot(client, admin_headers, slot_date=slot_date, capacity=10)


def _create_order(client: TestClient, headers: dict) -> dict:
    response = client.post(
        PAYMENT_CREATE_ORDER,
        json={'visitorName': VISITOR_NAME, 'visitorEmail': VISITOR_EMAIL},
        headers=headers,
    )
    assert_response_status(response, 201)
    return response.json()


def _verify(client: TestClient, headers: dict, order_id: str, payment_id: str):
    return client.post(
        PAYMENT_VERIFY,
        json={
            'razorpay_order_id': order_id,
            'razorpay_payment_id': payment_id,
            'razorpay_signature': sign_payment(order_id, payment_id),
        },
        headers=headers,
    )


def _post_webhook(client: TestClient, body: bytes, signature: str | None = None):
    return client.post(
        RAZORPAY_WEBHOOK,
        content=body,
        headers={
            'Content-Type': 'application/json',
            'x-razorpay-signature': signature or sign_webhook(body),
        },
    )


def _paid_booking(client: TestClient, headers: dict, slot: dict, slot_date) -> tuple[dict, dict]:
    """Returns (booking, gateway order) after a verified 2-adult checkout"""
    add_to_cart(
        client,
        headers,
        time_slot_id=slot['id'],
        booking_date=slot_date,
        tickets={'adult': 2},
    )
    order = _create_order(client, headers)
    response = _verify(client, headers, order['orderId'], 'pay_test000001')
    assert_response_status(response, 200)
    return response.json()['bookings'][0], order


@pytest.mark.integration
class TestDirectBookingApi:
    def test_free_booking_is_confirmed_immediately(
        self, client: TestClient, admin_headers: dict, visitor_headers: dict, slot_date
    ) -> None:
        # Arrange
        create_prices(client, admin_headers, prices={'adult': ADULT_PRICE, 'child': 0})
        slot = create_time_slot(client, admin_headers, slot_date=slot_date)

        # Act
        response = create_direct_booking(
            client,
            visitor_headers,
            time_slot_id=slot['id'],
            booking_date=slot_date,
            tickets={'child': 2},
        )

        # Assert
        assert_response_status(response, 201)
        booking = response.json()
        assert booking['status'] == 'confirmed'
        assert booking['paymentStatus'] == 'free'
        assert booking['totalAmount'] == 0
        assert booking['bookingReference'].startswith('BK')
        assert len(booking['issuedTickets']) == 1
        assert get_time_slot(client, slot['id'])['currentBookings'] == 2

    def test_booking_is_found_by_reference_without_sign_in(
        self, client: TestClient, visitor_headers: dict, priced_slot: dict, slot_date
    ) -> None:
        # Arrange
        booking = create_direct_booking(
            client,
            visitor_headers,
            time_slot_id=priced_slot['id'],
            booking_date=slot_date,
            tickets={'adult': 1},
        ).json()

        # Act
        response = client.get(
            BOOKING_BY_REFERENCE.format(booking_reference=booking['bookingReference'].lower())
        )

        # Assert
        assert_response_status(response, 200)
        assert response.json()['id'] == booking['id']

    def test_unknown_reference_is_not_found(self, client: TestClient) -> None:
        response = client.get(BOOKING_BY_REFERENCE.format(booking_reference='BK20260101XXXXXX'))

        assert_response_status(response, 404)

    def test_over_capacity_direct_booking_is_refused(
        self, client: TestClient, visitor_headers: dict, priced_slot: dict, slot_date
    ) -> None:
        response = create_direct_booking(
            client,
            visitor_headers,
            time_slot_id=priced_slot['id'],
            booking_date=slot_date,
            tickets={'adult': 11},
        )

        assert_response_status(response, 409)
        assert response.json()['available'] == 10
        assert get_time_slot(client, priced_slot['id'])['currentBookings'] == 0


@pytest.mark.integration
class TestCheckoutApi:
    def test_create_order_snapshots_the_cart(
        self,
        client: TestClient,
        visitor_headers: dict,
        fake_payment_gateway: FakePaymentGateway,
        priced_slot: dict,
        slot_date,
    ) -> None:
        # Arrange
        add_to_cart(
            client,
            visitor_headers,
            time_slot_id=priced_slot['id'],
            booking_date=slot_date,
            tickets={'adult': 3},
        )

        # Act
        order = _create_order(client, visitor_headers)

        # Assert
        assert order['amount'] == 3 * ADULT_PRICE
        assert order['currency'] == 'INR'
        assert order['itemCount'] == 1
        assert order['orderId'] in fake_payment_gateway.orders
        cart = client.get(CART, headers=visitor_headers).json()
        assert cart['items'][0]['paymentOrderId'] == order['paymentOrderId']

    def test_empty_cart_cannot_be_checked_out(
        self, client: TestClient, visitor_headers: dict
    ) -> None:
        response = client.post(
            PAYMENT_CREATE_ORDER,
            json={'visitorName': VISITOR_NAME, 'visitorEmail': VISITOR_EMAIL},
            headers=visitor_headers,
        )

        assert_response_status(response, 400)

    def test_verified_payment_turns_cart_into_bookings(
        self, client: TestClient, visitor_headers: dict, priced_slot: dict, slot_date
    ) -> None:
        """
        Given: A cart item holding 2 tickets and its gateway order
        When: The checkout callback arrives with a valid signature
        Then: One paid booking exists, the cart is empty and the counter
              still holds exactly 2
        """
        # Arrange
        add_to_cart(
            client,
            visitor_headers,
            time_slot_id=priced_slot['id'],
            booking_date=slot_date,
            tickets={'adult': 2},
        )
        order = _create_order(client, visitor_headers)

        # Act
        response = _verify(client, visitor_headers, order['orderId'], 'pay_test000001')

        # Assert
        assert_response_status(response, 200)
        body = response.json()
        assert body['success'] is True
        [booking] = body['bookings']
        assert booking['status'] == 'confirmed'
        assert booking['paymentStatus'] == 'paid'
        assert booking['totalAmount'] == 2 * ADULT_PRICE
        assert client.get(CART, headers=visitor_headers).json()['items'] == []
        assert get_time_slot(client, priced_slot['id'])['currentBookings'] == 2

    def test_forged_signature_is_rejected(
        self, client: TestClient, visitor_headers: dict, priced_slot: dict, slot_date
    ) -> None:
        # Arrange
        add_to_cart(
            client,
            visitor_headers,
            time_slot_id=priced_slot['id'],
            booking_date=slot_date,
            tickets={'adult': 1},
        )
        order = _create_order(client, visitor_headers)

        # Act
        response = client.post(
            PAYMENT_VERIFY,
            json={
                'razorpay_order_id': order['orderId'],
                'razorpay_payment_id': 'pay_test000001',
                'razorpay_signature': 'f' * 64,
            },
            headers=visitor_headers,
        )

        # Assert
        assert_response_status(response, 400)
        assert response.json()['detail'] == 'Invalid payment signature'
        assert client.get(MY_BOOKINGS, headers=visitor_headers).json() == []

    def test_webhook_after_verify_does_not_duplicate_bookings(
        self, client: TestClient, visitor_headers: dict, priced_slot: dict, slot_date
    ) -> None:
        # Arrange
        booking, order = _paid_booking(client, visitor_headers, priced_slot, slot_date)

        # Act
        body = payment_captured_body(
            gateway_order_id=order['orderId'],
            gateway_payment_id='pay_test000001',
            amount=2 * ADULT_PRICE,
        )
        first = _post_webhook(client, body)
        replay = _post_webhook(client, body)

        # Assert
        assert first.json() == {'status': 'ok', 'event': 'payment.captured', 'result': 'processed'}
        assert replay.json()['result'] == 'processed'
        [listed] = client.get(MY_BOOKINGS, headers=visitor_headers).json()
        assert listed['id'] == booking['id']
        assert get_time_slot(client, priced_slot['id'])['currentBookings'] == 2

    def test_webhook_for_unknown_order_is_acknowledged(self, client: TestClient) -> None:
        body = payment_captured_body(
            gateway_order_id='order_missing', gateway_payment_id='pay_x', amount=100
        )

        response = _post_webhook(client, body)

        assert_response_status(response, 200)
        assert response.json()['result'] == 'unknown_order'

    def test_webhook_with_bad_signature_is_rejected(self, client: TestClient) -> None:
        body = payment_captured_body(
            gateway_order_id='order_missing', gateway_payment_id='pay_x', amount=100
        )

        response = _post_webhook(client, body, signature='0' * 64)

        assert_response_status(response, 400)


@pytest.mark.integration
class TestAdminBookingApi:
    def test_cancel_releases_capacity_once(
        self,
        client: TestClient,
        admin_headers: dict,
        visitor_headers: dict,
        priced_slot: dict,
        slot_date,
    ) -> None:
        # Arrange
        booking = create_direct_booking(
            client,
            visitor_headers,
            time_slot_id=priced_slot['id'],
            booking_date=slot_date,
            tickets={'adult': 3},
        ).json()

        # Act
        cancelled = client.post(
            ADMIN_BOOKING_CANCEL.format(booking_id=booking['id']), headers=admin_headers
        )
        again = client.post(
            ADMIN_BOOKING_CANCEL.format(booking_id=booking['id']), headers=admin_headers
        )

        # Assert
        assert_response_status(cancelled, 200)
        assert cancelled.json()['status'] == 'cancelled'
        assert_response_status(again, 400)
        assert get_time_slot(client, priced_slot['id'])['currentBookings'] == 0

    def test_refund_then_gateway_webhook_releases_capacity_once(
        self,
        client: TestClient,
        admin_headers: dict,
        visitor_headers: dict,
        fake_payment_gateway: FakePaymentGateway,
        priced_slot: dict,
        slot_date,
    ) -> None:
        """
        Given: A paid booking for 2 tickets
        When: An admin refunds it and the gateway later reports the same refund
        Then: The booking is refunded once and the slot counter returns to 0
        """
        # Arrange
        booking, _ = _paid_booking(client, visitor_headers, priced_slot, slot_date)

        # Act
        response = client.post(
            ADMIN_BOOKING_REFUND.format(booking_id=booking['id']),
            json={'reason': 'Visitor request'},
            headers=admin_headers,
        )
        [refund] = fake_payment_gateway.refunds
        webhook = _post_webhook(
            client,
            refund_processed_body(
                refund_id=refund.id,
                gateway_payment_id='pay_test000001',
                amount=refund.amount,
            ),
        )

        # Assert
        assert_response_status(response, 200)
        assert response.json()['status'] == 'cancelled'
        assert response.json()['paymentStatus'] == 'refunded'
        assert response.json()['refundAmount'] == 2 * ADULT_PRICE
        assert refund.amount == 2 * ADULT_PRICE
        assert webhook.json()['result'] == 'processed'
        assert get_time_slot(client, priced_slot['id'])['currentBookings'] == 0

    def test_unpaid_booking_cannot_be_refunded(
        self,
        client: TestClient,
        admin_headers: dict,
        visitor_headers: dict,
        priced_slot: dict,
        slot_date,
    ) -> None:
        booking = create_direct_booking(
            client,
            visitor_headers,
            time_slot_id=priced_slot['id'],
            booking_date=slot_date,
            tickets={'adult': 1},
        ).json()

        response = client.post(
            ADMIN_BOOKING_REFUND.format(booking_id=booking['id']), headers=admin_headers
        )

        assert_response_status(response, 400)
        assert response.json()['detail'] == 'Only paid bookings can be refunded'

    def test_admin_list_filters_by_status(
        self,
        client: TestClient,
        admin_headers: dict,
        visitor_headers: dict,
        priced_slot: dict,
        slot_date,
    ) -> None:
        # Arrange
        kept = create_direct_booking(
            client,
            visitor_headers,
            time_slot_id=priced_slot['id'],
            booking_date=slot_date,
            tickets={'adult': 1},
        ).json()
        dropped = create_direct_booking(
            client,
            visitor_headers,
            time_slot_id=priced_slot['id'],
            booking_date=slot_date,
            tickets={'adult': 1},
        ).json()
        client.post(ADMIN_BOOKING_CANCEL.format(booking_id=dropped['id']), headers=admin_headers)

        # Act
        response = client.get(ADMIN_BOOKINGS, params={'status': 'confirmed'}, headers=admin_headers)

        # Assert
        assert_response_status(response, 200)
        assert [b['id'] for b in response.json()['bookings']] == [kept['id']]
        assert response.json()['total'] == 1
