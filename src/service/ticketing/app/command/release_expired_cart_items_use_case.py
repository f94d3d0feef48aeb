from datetime import timedelta
from typing import Optional

from src.platform.config.core_setting import settings
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.ticketing_metrics import metrics
from src.platform.types.utc_datetime import utc_now
from src.service.inventory.app.command.release_capacity_use_case import ReleaseCapacityUseCase
from src.service.ticketing.domain.value_object.cart_owner import CartOwner


class ReleaseExpiredCartItemsUseCase:
    """
    Expiry policy for cart reservations

    An item is expired once expires_at <= now. Items snapshotted into a
    created/attempted payment order stay reserved until PAYMENT_HOLD_MINUTES
    after the order was created.

    Two triggers share release_in:
    - lazy: every cart read releases the caller's expired items first
    - sweep: the background sweeper releases every owner's, batch by batch
    """

    def __init__(self, *, release_capacity: ReleaseCapacityUseCase) -> None:
        self.release_capacity = release_capacity

    async def release_in(
        self,
        *,
        uow: AbstractUnitOfWork,
        owner: Optional[CartOwner] = None,
        trigger: str = 'read',
        limit: int = 200,
    ) -> int:
        """Release expired items on the caller's unit of work; the caller commits."""
        now = utc_now()
        expired = await uow.cart_item_command_repo.list_expired(
            now=now,
            hold_cutoff=now - timedelta(minutes=settings.PAYMENT_HOLD_MINUTES),
            owner=owner,
            limit=limit,
        )

        released = 0
        for item in expired:
            if not await uow.cart_item_command_repo.claim_release(cart_item_id=item.id):
                continue  # released by a concurrent sweep or read
            await self.release_capacity.execute(
                uow=uow,
                time_slot_id=item.time_slot_id,
                quantity=item.total_tickets,
                reason='cart_expired',
            )
            await uow.cart_item_command_repo.delete(cart_item_id=item.id)
            released += 1

        if released:
            metrics.record_expired(trigger=trigger, count=released)
            Logger.base.info(
                f'⏰ [CART] Released {released} expired item(s)'
                + (f' for {owner.label}' if owner else '')
            )
        return released

    @Logger.io
    async def execute(self, *, uow: AbstractUnitOfWork, trigger: str = 'sweeper') -> int:
        """One full sweep, one transaction per batch. Returns items released."""
        batch_size = settings.CART_SWEEP_BATCH_SIZE
        total = 0
        while True:
            async with uow:
                released = await self.release_in(uow=uow, trigger=trigger, limit=batch_size)
                await uow.commit()
            total += released
            if released < batch_size:
                return total
