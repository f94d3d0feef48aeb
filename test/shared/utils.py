from datetime import date
from typing import Any, Dict, Optional

from fastapi.testclient import TestClient

from test.constants import DEFAULT_EXHIBITION_NAME, DEFAULT_PRICES, VISITOR_EMAIL, VISITOR_NAME
from test.route_constant import (
    ADMIN_EXHIBITIONS,
    ADMIN_PRICING,
    ADMIN_TIME_SLOTS,
    BOOKING_CREATE,
    CART,
    TIME_SLOT_AVAILABILITY,
)


def assert_response_status(response, expected_status: int, message: str | None = None):
    response_text = getattr(response, 'text', getattr(response, 'content', 'N/A'))
    assert response.status_code == expected_status, (
        message or f'Expected {expected_status}, got {response.status_code}: {response_text}'
    )


def create_exhibition(
    client: TestClient, admin_headers: Dict[str, str], **overrides: Any
) -> Dict[str, Any]:
    payload = {
        'name': DEFAULT_EXHIBITION_NAME,
        'description': 'Writing systems of the subcontinent',
        'category': 'history',
        'location': 'Gallery 2',
        'status': 'active',
        **overrides,
    }
    response = client.post(ADMIN_EXHIBITIONS, json=payload, headers=admin_headers)
    assert_response_status(response, 201, f'Failed to create exhibition: {response.text}')
    return response.json()


def create_prices(
    client: TestClient,
    admin_headers: Dict[str, str],
    *,
    exhibition_id: Optional[str] = None,
    show_id: Optional[str] = None,
    prices: Optional[Dict[str, int]] = None,
) -> None:
    for ticket_type, price in (prices or DEFAULT_PRICES).items():
        response = client.post(
            ADMIN_PRICING,
            json={
                'ticketType': ticket_type,
                'price': price,
                'exhibitionId': exhibition_id,
                'showId': show_id,
            },
            headers=admin_headers,
        )
        assert_response_status(response, 201)


def create_time_slot(
    client: TestClient,
    admin_headers: Dict[str, str],
    *,
    slot_date: date,
    capacity: int = 10,
    buffer_capacity: int = 0,
    exhibition_id: Optional[str] = None,
    start_time: str = '10:00:00',
    end_time: str = '11:00:00',
) -> Dict[str, Any]:
    response = client.post(
        ADMIN_TIME_SLOTS,
        json={
            'date': slot_date.isoformat(),
            'startTime': start_time,
            'endTime': end_time,
            'capacity': capacity,
            'bufferCapacity': buffer_capacity,
            'exhibitionId': exhibition_id,
        },
        headers=admin_headers,
    )
    assert_response_status(response, 201, f'Failed to create time slot: {response.text}')
    return response.json()


def get_time_slot(client: TestClient, time_slot_id: str) -> Dict[str, Any]:
    response = client.get(TIME_SLOT_AVAILABILITY.format(time_slot_id=time_slot_id))
    assert_response_status(response, 200)
    return response.json()


def add_to_cart(
    client: TestClient,
    headers: Dict[str, str],
    *,
    time_slot_id: str,
    booking_date: date,
    tickets: Dict[str, int],
    cart_id: Optional[str] = None,
) -> Any:
    payload: Dict[str, Any] = {
        'timeSlotId': time_slot_id,
        'bookingDate': booking_date.isoformat(),
        'tickets': tickets,
    }
    if cart_id:
        payload['cartId'] = cart_id
    return client.post(CART, json=payload, headers=headers)


def create_direct_booking(
    client: TestClient,
    headers: Dict[str, str],
    *,
    time_slot_id: str,
    booking_date: date,
    tickets: Dict[str, int],
) -> Any:
    return client.post(
        BOOKING_CREATE,
        json={
            'timeSlotId': time_slot_id,
            'bookingDate': booking_date.isoformat(),
            'tickets': tickets,
            'visitorName': VISITOR_NAME,
            'visitorEmail': VISITOR_EMAIL,
        },
        headers=headers,
    )
