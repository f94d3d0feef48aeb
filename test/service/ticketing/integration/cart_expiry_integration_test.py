"""
Integration tests for cart reservation expiry

Test Focus:
1. Lazy release: a cart read releases only the caller's expired items
2. Sweep: every owner's expired items are released
3. Items of an open payment order stay reserved for the payment hold window
"""

from datetime import timedelta

import pytest

from src.platform.types.utc_datetime import utc_now
from src.service.inventory.app.command.release_capacity_use_case import ReleaseCapacityUseCase
from src.service.ticketing.app.command.release_expired_cart_items_use_case import (
    ReleaseExpiredCartItemsUseCase,
)
from src.service.ticketing.domain.value_object.cart_owner import CartOwner
from test.constants import ANOTHER_VISITOR_USER_ID, VISITOR_USER_ID
from test.shared.seed import (
    cart_item_exists,
    current_bookings_of,
    new_uow,
    seed_cart_reservation,
    seed_payment_order,
    seed_time_slot,
)


def _release_expired() -> ReleaseExpiredCartItemsUseCase:
    return ReleaseExpiredCartItemsUseCase(release_capacity=ReleaseCapacityUseCase())


def _minutes_ago(minutes: int):
    return utc_now() - timedelta(minutes=minutes)


@pytest.mark.integration
class TestCartExpiry:
    @pytest.mark.asyncio
    async def test_cart_read_releases_only_the_callers_expired_items(self) -> None:
        """
        Given: Expired items of two visitors and a live item of the first
        When: The first visitor's cart is read
        Then: Only the first visitor's expired item is released
        """
        # Arrange
        slot = await seed_time_slot(capacity=20)
        mine = await seed_cart_reservation(
            time_slot_id=slot.id, adult=2, expires_at=_minutes_ago(1)
        )
        live = await seed_cart_reservation(time_slot_id=slot.id, adult=3)
        theirs = await seed_cart_reservation(
            time_slot_id=slot.id,
            adult=4,
            expires_at=_minutes_ago(1),
            user_id=ANOTHER_VISITOR_USER_ID,
        )

        # Act
        uow = new_uow()
        async with uow:
            released = await _release_expired().release_in(
                uow=uow, owner=CartOwner(user_id=VISITOR_USER_ID)
            )
            await uow.commit()

        # Assert
        assert released == 1
        assert await current_bookings_of(slot.id) == 7
        assert not await cart_item_exists(mine.id)
        assert await cart_item_exists(live.id)
        assert await cart_item_exists(theirs.id)

    @pytest.mark.asyncio
    async def test_sweep_releases_every_owner(self) -> None:
        # Arrange
        slot = await seed_time_slot(capacity=20)
        await seed_cart_reservation(time_slot_id=slot.id, adult=2, expires_at=_minutes_ago(5))
        await seed_cart_reservation(
            time_slot_id=slot.id,
            adult=1,
            expires_at=_minutes_ago(5),
            user_id=None,
            guest_cart_id='CART-ABCDE12345',
        )
        await seed_cart_reservation(time_slot_id=slot.id, adult=3)

        # Act
        released = await _release_expired().execute(uow=new_uow())

        # Assert
        assert released == 2
        assert await current_bookings_of(slot.id) == 3

    @pytest.mark.asyncio
    async def test_second_sweep_releases_nothing(self) -> None:
        slot = await seed_time_slot(capacity=20)
        await seed_cart_reservation(time_slot_id=slot.id, adult=2, expires_at=_minutes_ago(5))

        assert await _release_expired().execute(uow=new_uow()) == 1
        assert await _release_expired().execute(uow=new_uow()) == 0
        assert await current_bookings_of(slot.id) == 0

    @pytest.mark.asyncio
    async def test_open_payment_order_holds_expired_items(self) -> None:
        """
        Given: An expired cart item checked out into an order created 5 minutes ago
        When: The sweeper runs
        Then: The item keeps its tickets until the payment hold runs out
        """
        # Arrange
        slot = await seed_time_slot(capacity=20)
        item = await seed_cart_reservation(
            time_slot_id=slot.id, adult=2, expires_at=_minutes_ago(1)
        )
        await seed_payment_order([item], created_at=_minutes_ago(5))

        # Act
        released = await _release_expired().execute(uow=new_uow())

        # Assert
        assert released == 0
        assert await current_bookings_of(slot.id) == 2
        assert await cart_item_exists(item.id)

    @pytest.mark.asyncio
    async def test_abandoned_payment_order_stops_holding(self) -> None:
        # Arrange
        slot = await seed_time_slot(capacity=20)
        item = await seed_cart_reservation(
            time_slot_id=slot.id, adult=2, expires_at=_minutes_ago(40)
        )
        await seed_payment_order([item], created_at=_minutes_ago(45))

        # Act
        released = await _release_expired().execute(uow=new_uow())

        # Assert
        assert released == 1
        assert await current_bookings_of(slot.id) == 0
