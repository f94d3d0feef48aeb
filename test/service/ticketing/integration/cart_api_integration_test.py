from datetime import timedelta

from fastapi.testclient import TestClient
import pytest

from src.platform.types.utc_datetime import museum_today
from test.constants import ADULT_PRICE, CHILD_PRICE
from test.route_constant import CART, CART_ADD, CART_CLEANUP_EXPIRED, CART_SYNC
from test.shared.utils import (
    add_to_cart,
    assert_response_status,
    create_prices,
    create_time_slot,
    get_time_slot,
)


@pytest.fixture
def slot_date():
    return museum_today() + timedelta(days=6)


@pytest.fixture
def priced_slot(client: TestClient, admin_headers: dict, slot_date) -> dict:
    create_prices(client, admin_headers)
    return create_time_slot(client, admin_headers, slot_date=slot_date, capacity=10)


@pytest.mark.integration
class TestAddToCartApi:
    def test_guest_is_issued_a_cart_id(
        self, client: TestClient, priced_slot: dict, slot_date
    ) -> None:
        # Act
        response = add_to_cart(
            client,
            {},
            time_slot_id=priced_slot['id'],
            booking_date=slot_date,
            tickets={'adult': 2, 'child': 1},
        )

        # Assert
        assert_response_status(response, 201)
        body = response.json()
        assert body['cartId'].startswith('CART-')
        assert body['cartItem']['totalTickets'] == 3
        assert body['cartItem']['subtotal'] == 2 * ADULT_PRICE + CHILD_PRICE
        assert body['cartItem']['itemName'] == 'General Admission'
        assert get_time_slot(client, priced_slot['id'])['currentBookings'] == 3

        cart = client.get(CART, headers={'X-Cart-Id': body['cartId']})
        assert cart.json()['cartId'] == body['cartId']
        assert cart.json()['totalAmount'] == 2 * ADULT_PRICE + CHILD_PRICE

    def test_signed_in_visitor_adds_to_own_cart(
        self,
        client: TestClient,
        visitor_headers: dict,
        another_visitor_headers: dict,
        priced_slot: dict,
        slot_date,
    ) -> None:
        # Act
        response = client.post(
            CART_ADD,
            json={
                'timeSlotId': priced_slot['id'],
                'bookingDate': slot_date.isoformat(),
                'tickets': {'adult': 1},
            },
            headers=visitor_headers,
        )

        # Assert
        assert_response_status(response, 201)
        assert response.json()['cartId'] is None
        assert len(client.get(CART, headers=visitor_headers).json()['items']) == 1
        assert client.get(CART, headers=another_visitor_headers).json()['items'] == []

    def test_add_requires_an_owner_on_the_signed_in_route(
        self, client: TestClient, priced_slot: dict, slot_date
    ) -> None:
        response = client.post(
            CART_ADD,
            json={
                'timeSlotId': priced_slot['id'],
                'bookingDate': slot_date.isoformat(),
                'tickets': {'adult': 1},
            },
        )

        assert_response_status(response, 401)

    def test_full_slot_answers_409_with_available_count(
        self, client: TestClient, visitor_headers: dict, priced_slot: dict, slot_date
    ) -> None:
        """
        Given: 8 of 10 tickets already held
        When: Adding 3 more
        Then: 409 reports 2 available and the counter is unchanged
        """
        # Arrange
        held = add_to_cart(
            client,
            visitor_headers,
            time_slot_id=priced_slot['id'],
            booking_date=slot_date,
            tickets={'adult': 8},
        )
        assert_response_status(held, 201)

        # Act
        response = add_to_cart(
            client,
            visitor_headers,
            time_slot_id=priced_slot['id'],
            booking_date=slot_date,
            tickets={'adult': 3},
        )

        # Assert
        assert_response_status(response, 409)
        assert response.json()['available'] == 2
        assert 'Only 2 tickets available' in response.json()['detail']
        assert get_time_slot(client, priced_slot['id'])['currentBookings'] == 8

    def test_date_the_slot_does_not_serve_is_rejected(
        self, client: TestClient, visitor_headers: dict, priced_slot: dict, slot_date
    ) -> None:
        response = add_to_cart(
            client,
            visitor_headers,
            time_slot_id=priced_slot['id'],
            booking_date=slot_date + timedelta(days=1),
            tickets={'adult': 1},
        )

        assert_response_status(response, 400)
        assert get_time_slot(client, priced_slot['id'])['currentBookings'] == 0

    def test_missing_price_is_rejected_without_reserving(
        self, client: TestClient, admin_headers: dict, visitor_headers: dict, slot_date
    ) -> None:
        # Arrange
        create_prices(client, admin_headers, prices={'adult': ADULT_PRICE})
        slot = create_time_slot(client, admin_headers, slot_date=slot_date)

        # Act
        response = add_to_cart(
            client,
            visitor_headers,
            time_slot_id=slot['id'],
            booking_date=slot_date,
            tickets={'adult': 1, 'senior': 1},
        )

        # Assert
        assert_response_status(response, 400)
        assert response.json()['detail'] == 'No active price for senior'
        assert get_time_slot(client, slot['id'])['currentBookings'] == 0

    def test_empty_ticket_counts_are_rejected(
        self, client: TestClient, visitor_headers: dict, priced_slot: dict, slot_date
    ) -> None:
        response = add_to_cart(
            client,
            visitor_headers,
            time_slot_id=priced_slot['id'],
            booking_date=slot_date,
            tickets={'adult': 0},
        )

        assert_response_status(response, 400)


@pytest.mark.integration
class TestRemoveFromCartApi:
    def test_removing_an_item_releases_its_tickets(
        self, client: TestClient, visitor_headers: dict, priced_slot: dict, slot_date
    ) -> None:
        # Arrange
        added = add_to_cart(
            client,
            visitor_headers,
            time_slot_id=priced_slot['id'],
            booking_date=slot_date,
            tickets={'adult': 4},
        ).json()

        # Act
        response = client.delete(
            CART, params={'itemId': added['cartItem']['id']}, headers=visitor_headers
        )

        # Assert
        assert_response_status(response, 200)
        assert response.json() == {'removedCount': 1}
        assert get_time_slot(client, priced_slot['id'])['currentBookings'] == 0

    def test_clearing_the_cart_releases_every_item(
        self, client: TestClient, visitor_headers: dict, priced_slot: dict, slot_date
    ) -> None:
        # Arrange
        for adults in (1, 2):
            add_to_cart(
                client,
                visitor_headers,
                time_slot_id=priced_slot['id'],
                booking_date=slot_date,
                tickets={'adult': adults},
            )

        # Act
        response = client.delete(CART, headers=visitor_headers)

        # Assert
        assert response.json() == {'removedCount': 2}
        assert get_time_slot(client, priced_slot['id'])['currentBookings'] == 0

    def test_another_visitors_item_is_not_found(
        self,
        client: TestClient,
        visitor_headers: dict,
        another_visitor_headers: dict,
        priced_slot: dict,
        slot_date,
    ) -> None:
        # Arrange
        added = add_to_cart(
            client,
            visitor_headers,
            time_slot_id=priced_slot['id'],
            booking_date=slot_date,
            tickets={'adult': 2},
        ).json()

        # Act
        response = client.delete(
            CART, params={'itemId': added['cartItem']['id']}, headers=another_visitor_headers
        )

        # Assert
        assert_response_status(response, 404)
        assert get_time_slot(client, priced_slot['id'])['currentBookings'] == 2


@pytest.mark.integration
class TestCartSyncApi:
    def test_sign_in_adopts_guest_items_and_reserves_new_lines(
        self,
        client: TestClient,
        admin_headers: dict,
        visitor_headers: dict,
        priced_slot: dict,
        slot_date,
    ) -> None:
        """
        Given: A guest cart holding 2 tickets, and a second slot filled by another guest
        When: The guest signs in and syncs one new line per slot
        Then: The guest item is adopted, the open slot is reserved and the
              full slot is skipped
        """
        # Arrange
        guest = add_to_cart(
            client,
            {},
            time_slot_id=priced_slot['id'],
            booking_date=slot_date,
            tickets={'adult': 2},
        ).json()
        full_slot = create_time_slot(
            client,
            admin_headers,
            slot_date=slot_date,
            capacity=1,
            start_time='15:00:00',
            end_time='16:00:00',
        )
        add_to_cart(
            client,
            {},
            time_slot_id=full_slot['id'],
            booking_date=slot_date,
            tickets={'adult': 1},
        )

        # Act
        response = client.post(
            CART_SYNC,
            json={
                'guestCartId': guest['cartId'],
                'items': [
                    {
                        'timeSlotId': priced_slot['id'],
                        'bookingDate': slot_date.isoformat(),
                        'tickets': {'child': 1},
                    },
                    {
                        'timeSlotId': full_slot['id'],
                        'bookingDate': slot_date.isoformat(),
                        'tickets': {'adult': 1},
                    },
                ],
            },
            headers=visitor_headers,
        )

        # Assert
        assert_response_status(response, 200)
        body = response.json()
        assert body['adoptedCount'] == 1
        assert len(body['syncedItems']) == 2
        assert [s['reason'] for s in body['skippedItems']] == ['Insufficient capacity']
        assert get_time_slot(client, priced_slot['id'])['currentBookings'] == 3
        assert get_time_slot(client, full_slot['id'])['currentBookings'] == 1

    def test_sync_requires_sign_in(self, client: TestClient) -> None:
        response = client.post(CART_SYNC, json={'items': []})

        assert_response_status(response, 401)


@pytest.mark.integration
class TestCleanupExpiredApi:
    def test_cleanup_is_admin_only(self, client: TestClient, visitor_headers: dict) -> None:
        response = client.post(CART_CLEANUP_EXPIRED, headers=visitor_headers)

        assert_response_status(response, 403)

    def test_cleanup_leaves_live_items(
        self,
        client: TestClient,
        admin_headers: dict,
        visitor_headers: dict,
        priced_slot: dict,
        slot_date,
    ) -> None:
        # Arrange
        add_to_cart(
            client,
            visitor_headers,
            time_slot_id=priced_slot['id'],
            booking_date=slot_date,
            tickets={'adult': 2},
        )

        # Act
        response = client.post(CART_CLEANUP_EXPIRED, headers=admin_headers)

        # Assert
        assert_response_status(response, 200)
        assert response.json() == {'cleanedCount': 0}
        assert get_time_slot(client, priced_slot['id'])['currentBookings'] == 2
