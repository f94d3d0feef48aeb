from uuid import UUID

from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import DomainError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.ticketing_metrics import metrics


class ReleaseCapacityUseCase:
    """
    Reservation releaser of the capacity ledger

    Decrements current_bookings, floored at zero. Callers claim the owning row
    first (cart item released_at, booking capacity_released) with a
    conditional update in the same unit of work and only call this when the
    claim succeeded, so a release happens at most once per owner.
    """

    @Logger.io
    async def execute(
        self,
        *,
        uow: AbstractUnitOfWork,
        time_slot_id: UUID,
        quantity: int,
        reason: str,
    ) -> None:
        if quantity < 1:
            raise DomainError('quantity must be at least 1')

        released = await uow.time_slot_command_repo.decrement_floored(
            time_slot_id=time_slot_id, quantity=quantity
        )
        if not released:
            Logger.base.warning(f'⚠️ [RELEASE] Slot {time_slot_id} not found, nothing released')
            return

        metrics.record_release(reason=reason, quantity=quantity)
        Logger.base.info(f'🔓 [RELEASE] -{quantity} on slot {time_slot_id} ({reason})')
