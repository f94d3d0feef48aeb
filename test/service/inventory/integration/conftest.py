"""
BDD Step Definitions for the Capacity Ledger Feature

Steps drive the public cart API as guests and read the counter back through
the availability endpoint, so every assertion sees what a visitor would see.
"""

from datetime import timedelta
from typing import Any

from fastapi.testclient import TestClient
import pytest
from pytest_bdd import given, parsers, then, when
from pytest_bdd.model import Step

from src.platform.types.utc_datetime import museum_today
from test.route_constant import CART
from test.shared.utils import (
    add_to_cart,
    assert_response_status,
    create_prices,
    create_time_slot,
    get_time_slot,
)


def _table_row(step: Step) -> dict[str, str]:
    rows = step.data_table.rows
    headers = [cell.value for cell in rows[0].cells]
    values = [cell.value for cell in rows[1].cells]
    return dict(zip(headers, values))


def _store_response(context: dict[str, Any], response: Any) -> None:
    context['response'] = response
    context['response_data'] = response.json() if response.content else None


@pytest.fixture
def context() -> dict[str, Any]:
    """Shared test context for storing state between steps"""
    return {'booking_date': museum_today() + timedelta(days=5)}


# =============================================================================
# Given Steps
# =============================================================================
@given('general admission prices exist')
def general_prices_exist(client: TestClient, admin_headers: dict[str, str]) -> None:
    create_prices(client, admin_headers)


@given('a time slot exists with:')
def time_slot_exists(
    step: Step,
    client: TestClient,
    admin_headers: dict[str, str],
    context: dict[str, Any],
) -> None:
    data = _table_row(step)
    context['slot'] = create_time_slot(
        client,
        admin_headers,
        slot_date=context['booking_date'],
        capacity=int(data['capacity']),
        buffer_capacity=int(data['buffer_capacity']),
    )


@given(parsers.parse('a guest holds {count:d} adult tickets on the slot'))
def guest_holds_tickets(client: TestClient, context: dict[str, Any], count: int) -> None:
    response = add_to_cart(
        client,
        {},
        time_slot_id=context['slot']['id'],
        booking_date=context['booking_date'],
        tickets={'adult': count},
    )
    assert_response_status(response, 201)
    context['guest_cart_id'] = response.json()['cartId']
    context['guest_item_id'] = response.json()['cartItem']['id']


# =============================================================================
# When Steps
# =============================================================================
@when(parsers.parse('another guest adds {count:d} adult tickets to the cart'))
def another_guest_adds(client: TestClient, context: dict[str, Any], count: int) -> None:
    response = add_to_cart(
        client,
        {},
        time_slot_id=context['slot']['id'],
        booking_date=context['booking_date'],
        tickets={'adult': count},
    )
    _store_response(context, response)


@when('the guest removes the cart line')
def guest_removes_line(client: TestClient, context: dict[str, Any]) -> None:
    response = client.delete(
        CART,
        params={'itemId': context['guest_item_id']},
        headers={'X-Cart-Id': context['guest_cart_id']},
    )
    assert_response_status(response, 200)
    _store_response(context, response)


# =============================================================================
# Then Steps
# =============================================================================
@then('the request should be accepted')
def request_accepted(context: dict[str, Any]) -> None:
    assert_response_status(context['response'], 201)


@then(parsers.parse('the request should be refused with {available:d} tickets available'))
def request_refused(context: dict[str, Any], available: int) -> None:
    assert_response_status(context['response'], 409)
    assert context['response_data']['available'] == available


@then(parsers.parse('the slot should show {count:d} current bookings'))
def slot_shows_bookings(client: TestClient, context: dict[str, Any], count: int) -> None:
    assert get_time_slot(client, context['slot']['id'])['currentBookings'] == count


@then('the guest cart should be empty')
def guest_cart_empty(client: TestClient, context: dict[str, Any]) -> None:
    response = client.get(CART, headers={'X-Cart-Id': context['guest_cart_id']})
    assert_response_status(response, 200)
    assert response.json()['items'] == []
