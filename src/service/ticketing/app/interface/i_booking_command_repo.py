from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from src.service.ticketing.domain.entity.booking_entity import Booking


class IBookingCommandRepo(ABC):
    @abstractmethod
    async def create(self, *, booking: Booking) -> Booking:
        """Insert the booking together with its tickets"""
        pass

    @abstractmethod
    async def get_by_id(self, *, booking_id: UUID) -> Optional[Booking]:
        pass

    @abstractmethod
    async def list_by_payment_order(self, *, payment_order_id: UUID) -> list[Booking]:
        pass

    @abstractmethod
    async def list_by_gateway_payment_id(self, *, gateway_payment_id: str) -> list[Booking]:
        pass

    @abstractmethod
    async def claim_capacity_release(self, *, booking_id: UUID) -> bool:
        """capacity_released: false -> true. True when this call won the claim."""
        pass

    @abstractmethod
    async def update(self, *, booking: Booking) -> Booking:
        """Persist status, payment and refund fields"""
        pass
