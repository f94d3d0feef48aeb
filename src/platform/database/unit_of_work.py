"""
Unit of Work Pattern

- UoW owns the session lifecycle and the commit/rollback decision
- Command repositories share the UoW session, so a capacity increment and the
  row that owns it are written in one transaction
- `savepoint()` scopes a partial rollback inside that transaction; the
  reservation transaction helper uses it as its compensation step
"""

from __future__ import annotations

import abc
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Any, AsyncIterator

from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.database.session_repo import SessionFactory


if TYPE_CHECKING:
    from src.service.inventory.app.interface.i_time_slot_command_repo import (
        ITimeSlotCommandRepo,
    )
    from src.service.ticketing.app.interface.i_booking_command_repo import IBookingCommandRepo
    from src.service.ticketing.app.interface.i_cart_item_command_repo import (
        ICartItemCommandRepo,
    )
    from src.service.ticketing.app.interface.i_payment_order_command_repo import (
        IPaymentOrderCommandRepo,
    )
    from src.service.ticketing.app.interface.i_ticket_command_repo import ITicketCommandRepo


class AbstractUnitOfWork(abc.ABC):
    """
    Usage:
        async with uow:
            async with reserve_capacity.hold(uow=uow, time_slot_id=..., quantity=3):
                await uow.cart_item_command_repo.create(cart_item=...)
            await uow.commit()
    """

    time_slot_command_repo: ITimeSlotCommandRepo
    cart_item_command_repo: ICartItemCommandRepo
    payment_order_command_repo: IPaymentOrderCommandRepo
    booking_command_repo: IBookingCommandRepo
    ticket_command_repo: ITicketCommandRepo

    async def __aenter__(self) -> AbstractUnitOfWork:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.rollback()

    async def commit(self) -> None:
        await self._commit()

    @abc.abstractmethod
    async def _commit(self) -> None:
        raise NotImplementedError

    @abc.abstractmethod
    async def rollback(self) -> None:
        raise NotImplementedError

    @abc.abstractmethod
    def savepoint(self) -> Any:
        """Async context manager: roll back to this point if the block raises"""
        raise NotImplementedError


class SqlAlchemyUnitOfWork(AbstractUnitOfWork):
    def __init__(self, session_factory: SessionFactory) -> None:
        self.session_factory = session_factory
        self.session: AsyncSession | None = None
        self._session_cm: Any = None

    async def __aenter__(self) -> SqlAlchemyUnitOfWork:
        from src.service.inventory.driven_adapter.repo.time_slot_command_repo_impl import (
            TimeSlotCommandRepoImpl,
        )
        from src.service.ticketing.driven_adapter.repo.booking_command_repo_impl import (
            BookingCommandRepoImpl,
        )
        from src.service.ticketing.driven_adapter.repo.cart_item_command_repo_impl import (
            CartItemCommandRepoImpl,
        )
        from src.service.ticketing.driven_adapter.repo.payment_order_command_repo_impl import (
            PaymentOrderCommandRepoImpl,
        )
        from src.service.ticketing.driven_adapter.repo.ticket_command_repo_impl import (
            TicketCommandRepoImpl,
        )

        self._session_cm = self.session_factory()
        self.session = await self._session_cm.__aenter__()

        self.time_slot_command_repo = TimeSlotCommandRepoImpl()
        self.cart_item_command_repo = CartItemCommandRepoImpl()
        self.payment_order_command_repo = PaymentOrderCommandRepoImpl()
        self.booking_command_repo = BookingCommandRepoImpl()
        self.ticket_command_repo = TicketCommandRepoImpl()
        for repo in (
            self.time_slot_command_repo,
            self.cart_item_command_repo,
            self.payment_order_command_repo,
            self.booking_command_repo,
            self.ticket_command_repo,
        ):
            repo.session = self.session  # type: ignore[attr-defined]

        await super().__aenter__()
        return self

    async def __aexit__(self, *args: Any) -> None:
        try:
            await super().__aexit__(*args)
        finally:
            await self._session_cm.__aexit__(*args)
            self.session = None
            self._session_cm = None

    async def _commit(self) -> None:
        assert self.session is not None, 'UoW used outside "async with"'
        await self.session.commit()

    async def rollback(self) -> None:
        if self.session is not None:
            await self.session.rollback()

    @asynccontextmanager
    async def savepoint(self) -> AsyncIterator[None]:
        assert self.session is not None, 'UoW used outside "async with"'
        async with self.session.begin_nested():
            yield
