from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.ticketing.app.interface.i_booking_query_repo import (
    BookingFilters,
    IBookingQueryRepo,
)
from src.service.ticketing.domain.entity.booking_entity import Booking


class ListBookingsUseCase:
    def __init__(self, *, booking_query_repo: IBookingQueryRepo) -> None:
        self.booking_query_repo = booking_query_repo

    @classmethod
    @inject
    def depends(
        cls,
        booking_query_repo: IBookingQueryRepo = Depends(Provide[Container.booking_query_repo]),
    ) -> Self:
        return cls(booking_query_repo=booking_query_repo)

    @Logger.io
    async def list_for_user(self, *, user_id: str) -> list[Booking]:
        return await self.booking_query_repo.list_by_user(user_id=user_id)

    @Logger.io
    async def list_admin(
        self, *, filters: BookingFilters, page: int = 1, page_size: int = 20
    ) -> tuple[list[Booking], int]:
        page = max(page, 1)
        page_size = min(max(page_size, 1), 100)
        return await self.booking_query_repo.list_admin(
            filters=filters, limit=page_size, offset=(page - 1) * page_size
        )
