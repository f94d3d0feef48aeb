from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlalchemy import delete, or_, select, update

from src.platform.database.session_repo import SessionRepo
from src.platform.logging.loguru_io import Logger
from src.platform.types.utc_datetime import utc_now
from src.service.ticketing.app.interface.i_cart_item_command_repo import ICartItemCommandRepo
from src.service.ticketing.domain.entity.cart_item_entity import CartItem
from src.service.ticketing.domain.enum.payment_order_status import PaymentOrderStatus
from src.service.ticketing.domain.value_object.cart_owner import CartOwner
from src.service.ticketing.driven_adapter.model.cart_item_model import CartItemModel
from src.service.ticketing.driven_adapter.model.payment_order_model import PaymentOrderModel
from src.service.ticketing.driven_adapter.repo.ticketing_mapper import (
    cart_item_to_entity,
    cart_item_to_model,
)


def _owner_filter(owner: CartOwner):
    if owner.user_id is not None:
        return CartItemModel.user_id == owner.user_id
    return CartItemModel.guest_cart_id == owner.guest_cart_id


class CartItemCommandRepoImpl(SessionRepo, ICartItemCommandRepo):
    @Logger.io
    async def create(self, *, cart_item: CartItem) -> CartItem:
        async with self._get_session() as session:
            session.add(cart_item_to_model(cart_item))
            await session.flush()
            return cart_item

    @Logger.io
    async def get_by_id(self, *, cart_item_id: UUID) -> Optional[CartItem]:
        async with self._get_session() as session:
            result = await session.execute(
                select(CartItemModel)
                .where(CartItemModel.id == cart_item_id)
                .execution_options(populate_existing=True)
            )
            model = result.scalar_one_or_none()
            return cart_item_to_entity(model) if model else None

    @Logger.io
    async def list_by_owner(self, *, owner: CartOwner) -> list[CartItem]:
        stmt = (
            select(CartItemModel)
            .where(_owner_filter(owner), CartItemModel.released_at.is_(None))
            .order_by(CartItemModel.created_at)
            .execution_options(populate_existing=True)
        )
        async with self._get_session() as session:
            result = await session.execute(stmt)
            return [cart_item_to_entity(model) for model in result.scalars().all()]

    @Logger.io
    async def list_expired(
        self,
        *,
        now: datetime,
        hold_cutoff: datetime,
        owner: Optional[CartOwner] = None,
        limit: int = 200,
    ) -> list[CartItem]:
        held_by_open_order = select(PaymentOrderModel.id).where(
            PaymentOrderModel.status.in_([s.value for s in PaymentOrderStatus.holding()]),
            PaymentOrderModel.created_at > hold_cutoff,
        )
        stmt = select(CartItemModel).where(
            CartItemModel.released_at.is_(None),
            CartItemModel.expires_at <= now,
            or_(
                CartItemModel.payment_order_id.is_(None),
                CartItemModel.payment_order_id.not_in(held_by_open_order),
            ),
        )
        if owner is not None:
            stmt = stmt.where(_owner_filter(owner))
        stmt = stmt.order_by(CartItemModel.expires_at).limit(limit)

        async with self._get_session() as session:
            result = await session.execute(stmt)
            return [cart_item_to_entity(model) for model in result.scalars().all()]

    @Logger.io
    async def claim_release(self, *, cart_item_id: UUID) -> bool:
        stmt = (
            update(CartItemModel)
            .where(CartItemModel.id == cart_item_id, CartItemModel.released_at.is_(None))
            .values(released_at=utc_now())
            .execution_options(synchronize_session=False)
        )
        async with self._get_session() as session:
            result = await session.execute(stmt)
            return result.rowcount == 1  # type: ignore[attr-defined]

    @Logger.io
    async def consume(self, *, cart_item_id: UUID) -> bool:
        stmt = (
            delete(CartItemModel)
            .where(CartItemModel.id == cart_item_id, CartItemModel.released_at.is_(None))
            .execution_options(synchronize_session=False)
        )
        async with self._get_session() as session:
            result = await session.execute(stmt)
            return result.rowcount == 1  # type: ignore[attr-defined]

    @Logger.io
    async def delete(self, *, cart_item_id: UUID) -> bool:
        stmt = (
            delete(CartItemModel)
            .where(CartItemModel.id == cart_item_id)
            .execution_options(synchronize_session=False)
        )
        async with self._get_session() as session:
            result = await session.execute(stmt)
            return result.rowcount == 1  # type: ignore[attr-defined]

    @Logger.io
    async def attach_to_order(self, *, cart_item_ids: list[UUID], payment_order_id: UUID) -> None:
        stmt = (
            update(CartItemModel)
            .where(CartItemModel.id.in_(cart_item_ids))
            .values(payment_order_id=payment_order_id)
            .execution_options(synchronize_session=False)
        )
        async with self._get_session() as session:
            await session.execute(stmt)

    @Logger.io
    async def adopt_guest_items(self, *, guest_cart_id: str, user_id: str) -> int:
        stmt = (
            update(CartItemModel)
            .where(
                CartItemModel.guest_cart_id == guest_cart_id,
                CartItemModel.released_at.is_(None),
            )
            .values(user_id=user_id, guest_cart_id=None)
            .execution_options(synchronize_session=False)
        )
        async with self._get_session() as session:
            result = await session.execute(stmt)
            return result.rowcount or 0  # type: ignore[attr-defined]
