"""
Unit tests for cart reservation releases

Test Focus:
1. Expired items are released once: claim first, then decrement, then delete
2. A lost claim (concurrent sweep or read) releases nothing
3. Removing items releases their tickets and rejects items of other owners
"""

from unittest.mock import AsyncMock, patch

import pytest
from uuid_utils.compat import uuid7

from src.platform.config.core_setting import settings
from src.platform.exception.exceptions import NotFoundError
from src.platform.types.utc_datetime import utc_now
from src.service.inventory.app.command.release_capacity_use_case import ReleaseCapacityUseCase
from src.service.ticketing.app.command.release_expired_cart_items_use_case import (
    ReleaseExpiredCartItemsUseCase,
)
from src.service.ticketing.app.command.remove_from_cart_use_case import RemoveFromCartUseCase
from src.service.ticketing.domain.value_object.cart_owner import CartOwner
from test.constants import ANOTHER_VISITOR_USER_ID, VISITOR_USER_ID
from test.shared.builders import build_cart_item
from test.shared.mock_uow import build_mock_uow


@pytest.mark.unit
class TestReleaseExpiredCartItems:
    @pytest.fixture
    def uow(self) -> AsyncMock:
        uow = build_mock_uow()
        uow.time_slot_command_repo.decrement_floored.return_value = True
        return uow

    @pytest.fixture
    def use_case(self) -> ReleaseExpiredCartItemsUseCase:
        return ReleaseExpiredCartItemsUseCase(release_capacity=ReleaseCapacityUseCase())

    @pytest.mark.asyncio
    async def test_expired_items_return_their_tickets(
        self, use_case: ReleaseExpiredCartItemsUseCase, uow: AsyncMock
    ) -> None:
        """
        Given: Two expired cart items of 2 and 3 tickets
        When: Releasing expired items
        Then: Each is claimed, its tickets are decremented, and the row is deleted
        """
        # Arrange
        expired_at = utc_now()
        first = build_cart_item(adult=2, expires_at=expired_at)
        second = build_cart_item(adult=3, expires_at=expired_at)
        uow.cart_item_command_repo.list_expired.return_value = [first, second]
        uow.cart_item_command_repo.claim_release.return_value = True

        # Act
        released = await use_case.release_in(uow=uow)

        # Assert
        assert released == 2
        decrements = uow.time_slot_command_repo.decrement_floored.await_args_list
        assert [c.kwargs['quantity'] for c in decrements] == [2, 3]
        assert uow.cart_item_command_repo.delete.await_count == 2

    @pytest.mark.asyncio
    async def test_item_claimed_elsewhere_is_not_released_twice(
        self, use_case: ReleaseExpiredCartItemsUseCase, uow: AsyncMock
    ) -> None:
        """
        Given: A concurrent sweep already claimed the expired item
        When: A cart read tries to release it
        Then: Its tickets are not decremented again
        """
        uow.cart_item_command_repo.list_expired.return_value = [build_cart_item()]
        uow.cart_item_command_repo.claim_release.return_value = False

        released = await use_case.release_in(uow=uow, owner=CartOwner(user_id=VISITOR_USER_ID))

        assert released == 0
        uow.time_slot_command_repo.decrement_floored.assert_not_awaited()
        uow.cart_item_command_repo.delete.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_payment_hold_cutoff_is_passed_to_the_query(
        self, use_case: ReleaseExpiredCartItemsUseCase, uow: AsyncMock
    ) -> None:
        uow.cart_item_command_repo.list_expired.return_value = []

        with patch.object(settings, 'PAYMENT_HOLD_MINUTES', 30):
            await use_case.release_in(uow=uow)

        kwargs = uow.cart_item_command_repo.list_expired.await_args.kwargs
        assert (kwargs['now'] - kwargs['hold_cutoff']).total_seconds() == 30 * 60

    @pytest.mark.asyncio
    async def test_sweep_runs_batches_until_a_short_one(
        self, use_case: ReleaseExpiredCartItemsUseCase, uow: AsyncMock
    ) -> None:
        # Arrange
        uow.cart_item_command_repo.claim_release.return_value = True
        uow.cart_item_command_repo.list_expired.side_effect = [
            [build_cart_item(), build_cart_item()],
            [build_cart_item()],
        ]

        # Act
        with patch.object(settings, 'CART_SWEEP_BATCH_SIZE', 2):
            total = await use_case.execute(uow=uow)

        # Assert
        assert total == 3
        assert uow.cart_item_command_repo.list_expired.await_count == 2
        assert uow.commit.await_count == 2


@pytest.mark.unit
class TestRemoveFromCart:
    @pytest.fixture
    def uow(self) -> AsyncMock:
        uow = build_mock_uow()
        uow.time_slot_command_repo.decrement_floored.return_value = True
        uow.cart_item_command_repo.claim_release.return_value = True
        return uow

    @pytest.fixture
    def use_case(self, uow: AsyncMock) -> RemoveFromCartUseCase:
        return RemoveFromCartUseCase(uow=uow, release_capacity=ReleaseCapacityUseCase())

    @pytest.mark.asyncio
    async def test_remove_one_item_releases_its_tickets(
        self, use_case: RemoveFromCartUseCase, uow: AsyncMock
    ) -> None:
        # Arrange
        item = build_cart_item(adult=2, child=1)
        uow.cart_item_command_repo.get_by_id.return_value = item

        # Act
        removed = await use_case.execute(
            owner=CartOwner(user_id=VISITOR_USER_ID), cart_item_id=item.id
        )

        # Assert
        assert removed == 1
        uow.time_slot_command_repo.decrement_floored.assert_awaited_once_with(
            time_slot_id=item.time_slot_id, quantity=3
        )
        uow.cart_item_command_repo.delete.assert_awaited_once_with(cart_item_id=item.id)

    @pytest.mark.asyncio
    async def test_clear_cart_releases_every_item(
        self, use_case: RemoveFromCartUseCase, uow: AsyncMock
    ) -> None:
        owner = CartOwner(guest_cart_id='CART-ABCDE12345')
        uow.cart_item_command_repo.list_by_owner.return_value = [
            build_cart_item(user_id=None, guest_cart_id='CART-ABCDE12345'),
            build_cart_item(user_id=None, guest_cart_id='CART-ABCDE12345'),
        ]

        removed = await use_case.execute(owner=owner)

        assert removed == 2
        assert uow.time_slot_command_repo.decrement_floored.await_count == 2

    @pytest.mark.asyncio
    async def test_item_of_another_owner_is_not_found(
        self, use_case: RemoveFromCartUseCase, uow: AsyncMock
    ) -> None:
        uow.cart_item_command_repo.get_by_id.return_value = build_cart_item(
            user_id=ANOTHER_VISITOR_USER_ID
        )

        with pytest.raises(NotFoundError, match='Cart item not found'):
            await use_case.execute(owner=CartOwner(user_id=VISITOR_USER_ID), cart_item_id=uuid7())

        uow.time_slot_command_repo.decrement_floored.assert_not_awaited()
