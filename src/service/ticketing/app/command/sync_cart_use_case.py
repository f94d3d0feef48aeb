from typing import Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import CapacityExceededError, CustomBaseError
from src.platform.logging.loguru_io import Logger
from src.platform.types.utc_datetime import utc_now
from src.service.inventory.app.command.reserve_capacity_use_case import ReserveCapacityUseCase
from src.service.ticketing.app.command.release_expired_cart_items_use_case import (
    ReleaseExpiredCartItemsUseCase,
)
from src.service.ticketing.app.dto.line_quote import LineQuote
from src.service.ticketing.app.dto.sync_cart_result import (
    GuestCartLine,
    SkippedCartLine,
    SyncCartResult,
)
from src.service.ticketing.app.query.quote_line_use_case import QuoteLineUseCase
from src.service.ticketing.domain.entity.cart_item_entity import CartItem
from src.service.ticketing.domain.value_object.cart_owner import CartOwner


class SyncCartUseCase:
    """
    Merge a guest cart into the signed-in visitor's cart

    Flow:
    1. Quote every client-held line (expired or unbookable lines are skipped)
    2. Adopt the server-side guest items under the user
    3. Reserve each quoted line through its own hold; a full slot skips only
       that line
    4. Commit once and return the visitor's live cart
    """

    def __init__(
        self,
        *,
        uow: AbstractUnitOfWork,
        quote_line: QuoteLineUseCase,
        reserve_capacity: ReserveCapacityUseCase,
        release_expired: ReleaseExpiredCartItemsUseCase,
    ) -> None:
        self.uow = uow
        self.quote_line = quote_line
        self.reserve_capacity = reserve_capacity
        self.release_expired = release_expired

    @classmethod
    @inject
    def depends(
        cls,
        uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work]),
        quote_line: QuoteLineUseCase = Depends(Provide[Container.quote_line_use_case]),
        reserve_capacity: ReserveCapacityUseCase = Depends(
            Provide[Container.reserve_capacity_use_case]
        ),
        release_expired: ReleaseExpiredCartItemsUseCase = Depends(
            Provide[Container.release_expired_cart_items_use_case]
        ),
    ) -> Self:
        return cls(
            uow=uow,
            quote_line=quote_line,
            reserve_capacity=reserve_capacity,
            release_expired=release_expired,
        )

    @Logger.io
    async def execute(
        self,
        *,
        user_id: str,
        guest_cart_id: Optional[str] = None,
        lines: Optional[list[GuestCartLine]] = None,
    ) -> SyncCartResult:
        result = SyncCartResult()
        owner = CartOwner(user_id=user_id)

        now = utc_now()
        quoted: list[tuple[GuestCartLine, LineQuote]] = []
        for line in lines or []:
            if line.expires_at is not None and line.expires_at <= now:
                result.skipped.append(SkippedCartLine(line=line, reason='Item expired'))
                continue
            try:
                quote = await self.quote_line.execute(
                    time_slot_id=line.time_slot_id,
                    booking_date=line.booking_date,
                    counts=line.counts,
                    exhibition_id=line.exhibition_id,
                    show_id=line.show_id,
                )
            except CustomBaseError as e:
                result.skipped.append(SkippedCartLine(line=line, reason=e.message))
                continue
            quoted.append((line, quote))

        async with self.uow:
            if guest_cart_id:
                await self.release_expired.release_in(
                    uow=self.uow, owner=CartOwner(guest_cart_id=guest_cart_id)
                )
                result.adopted_count = await self.uow.cart_item_command_repo.adopt_guest_items(
                    guest_cart_id=guest_cart_id, user_id=user_id
                )

            for line, quote in quoted:
                cart_item = CartItem.create(
                    time_slot_id=line.time_slot_id,
                    booking_date=line.booking_date,
                    counts=line.counts,
                    subtotal=quote.subtotal,
                    user_id=user_id,
                    exhibition_id=quote.exhibition_id,
                    show_id=quote.show_id,
                    item_name=quote.item_name,
                )
                try:
                    async with self.reserve_capacity.hold(
                        uow=self.uow,
                        time_slot_id=line.time_slot_id,
                        quantity=line.counts.total,
                        source='sync',
                    ):
                        await self.uow.cart_item_command_repo.create(cart_item=cart_item)
                except CapacityExceededError:
                    result.skipped.append(
                        SkippedCartLine(line=line, reason='Insufficient capacity')
                    )
                except CustomBaseError as e:
                    result.skipped.append(SkippedCartLine(line=line, reason=e.message))

            await self.release_expired.release_in(uow=self.uow, owner=owner)
            result.synced = await self.uow.cart_item_command_repo.list_by_owner(owner=owner)
            await self.uow.commit()

        Logger.base.info(
            f'🔄 [CART] Synced cart for user {user_id}: adopted={result.adopted_count} '
            f'live={len(result.synced)} skipped={len(result.skipped)}'
        )
        return result
