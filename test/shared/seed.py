"""
Async seeding helpers for tests that drive use cases directly

Rows are written through the same repositories and unit of work the
application uses, on the engine bound to the test's event loop.
"""

from datetime import date, datetime, time, timedelta
from typing import Optional
from uuid import UUID

from src.platform.database.orm_db_setting import Database
from src.platform.database.unit_of_work import SqlAlchemyUnitOfWork
from src.platform.types.utc_datetime import museum_today
from src.service.catalog.domain.entity.exhibition_entity import Exhibition
from src.service.catalog.domain.entity.pricing_entity import Pricing
from src.service.catalog.domain.enum.catalog_status import ExhibitionStatus
from src.service.catalog.driven_adapter.repo.catalog_command_repo_impl import (
    CatalogCommandRepoImpl,
)
from src.service.catalog.driven_adapter.repo.catalog_query_repo_impl import CatalogQueryRepoImpl
from src.service.inventory.app.command.reserve_capacity_use_case import ReserveCapacityUseCase
from src.service.inventory.domain.entity.time_slot_entity import TimeSlot
from src.service.inventory.driven_adapter.repo.time_slot_query_repo_impl import (
    TimeSlotQueryRepoImpl,
)
from src.service.shared_kernel.domain.enum.ticket_type import TicketType
from src.service.ticketing.domain.entity.cart_item_entity import CartItem
from src.service.ticketing.domain.entity.payment_order_entity import PaymentOrder
from test.constants import DEFAULT_EXHIBITION_NAME, DEFAULT_PRICES, VISITOR_USER_ID
from test.shared.builders import build_cart_item, build_payment_order


def session_factory():
    return Database().session


def new_uow() -> SqlAlchemyUnitOfWork:
    return SqlAlchemyUnitOfWork(session_factory=session_factory())


def catalog_query_repo() -> CatalogQueryRepoImpl:
    return CatalogQueryRepoImpl(session_factory=session_factory())


def time_slot_query_repo() -> TimeSlotQueryRepoImpl:
    return TimeSlotQueryRepoImpl(session_factory=session_factory())


def future_date(days: int = 7) -> date:
    return museum_today() + timedelta(days=days)


async def seed_general_prices(prices: Optional[dict[str, int]] = None) -> None:
    repo = CatalogCommandRepoImpl(session_factory=session_factory())
    for ticket_type, price in (prices or DEFAULT_PRICES).items():
        await repo.replace_active_pricing(
            pricing=Pricing.create(ticket_type=TicketType(ticket_type), price=price)
        )


async def seed_exhibition(name: str = DEFAULT_EXHIBITION_NAME) -> Exhibition:
    repo = CatalogCommandRepoImpl(session_factory=session_factory())
    return await repo.create_exhibition(
        exhibition=Exhibition.create(name=name, status=ExhibitionStatus.ACTIVE)
    )


async def seed_time_slot(
    *,
    capacity: int = 10,
    buffer_capacity: int = 0,
    slot_date: Optional[date] = None,
    day_of_week: Optional[int] = None,
    exhibition_id: Optional[UUID] = None,
    start_time: time = time(10, 0),
    end_time: time = time(11, 0),
    current_bookings: int = 0,
) -> TimeSlot:
    if slot_date is None and day_of_week is None:
        slot_date = future_date()
    slot = TimeSlot.create(
        start_time=start_time,
        end_time=end_time,
        capacity=capacity,
        slot_date=slot_date,
        day_of_week=day_of_week,
        exhibition_id=exhibition_id,
        buffer_capacity=buffer_capacity,
    )
    slot.current_bookings = current_bookings

    uow = new_uow()
    async with uow:
        await uow.time_slot_command_repo.create_many(time_slots=[slot])
        await uow.commit()
    return slot


async def current_bookings_of(time_slot_id: UUID) -> int:
    slot = await time_slot_query_repo().get_by_id(time_slot_id=time_slot_id)
    assert slot is not None, f'Time slot {time_slot_id} not found'
    return slot.current_bookings


async def seed_cart_reservation(
    *,
    time_slot_id: UUID,
    adult: int = 2,
    expires_at: Optional[datetime] = None,
    user_id: Optional[str] = VISITOR_USER_ID,
    guest_cart_id: Optional[str] = None,
) -> CartItem:
    """A cart item holding its tickets on the slot counter, as AddToCart leaves it"""
    item = build_cart_item(
        time_slot_id=time_slot_id,
        adult=adult,
        expires_at=expires_at,
        user_id=user_id,
        guest_cart_id=guest_cart_id,
    )
    uow = new_uow()
    async with uow:
        async with ReserveCapacityUseCase().hold(
            uow=uow, time_slot_id=time_slot_id, quantity=item.total_tickets
        ):
            await uow.cart_item_command_repo.create(cart_item=item)
        await uow.commit()
    return item


async def seed_payment_order(
    cart_items: list[CartItem],
    *,
    gateway_order_id: str = 'order_test000001',
    created_at: Optional[datetime] = None,
) -> PaymentOrder:
    order = build_payment_order(cart_items, gateway_order_id=gateway_order_id)
    if created_at is not None:
        order.created_at = created_at
    uow = new_uow()
    async with uow:
        await uow.payment_order_command_repo.create(order=order)
        await uow.cart_item_command_repo.attach_to_order(
            cart_item_ids=[item.id for item in cart_items], payment_order_id=order.id
        )
        await uow.commit()
    return order


async def cart_item_exists(cart_item_id: UUID) -> bool:
    uow = new_uow()
    async with uow:
        return await uow.cart_item_command_repo.get_by_id(cart_item_id=cart_item_id) is not None
