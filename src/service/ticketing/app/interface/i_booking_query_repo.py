from abc import ABC, abstractmethod
from datetime import date
from typing import Optional
from uuid import UUID

import attrs

from src.service.ticketing.domain.entity.booking_entity import Booking
from src.service.ticketing.domain.enum.booking_status import BookingStatus, PaymentStatus


@attrs.define(frozen=True)
class BookingFilters:
    status: Optional[BookingStatus] = None
    payment_status: Optional[PaymentStatus] = None
    date_from: Optional[date] = None
    date_to: Optional[date] = None
    exhibition_id: Optional[UUID] = None
    show_id: Optional[UUID] = None
    search: Optional[str] = None


class IBookingQueryRepo(ABC):
    @abstractmethod
    async def get_by_reference(self, *, booking_reference: str) -> Optional[Booking]:
        pass

    @abstractmethod
    async def get_by_id(self, *, booking_id: UUID) -> Optional[Booking]:
        pass

    @abstractmethod
    async def list_by_user(self, *, user_id: str) -> list[Booking]:
        pass

    @abstractmethod
    async def list_admin(
        self, *, filters: BookingFilters, limit: int, offset: int
    ) -> tuple[list[Booking], int]:
        """A page of bookings, newest first, and the total matching count"""
        pass
