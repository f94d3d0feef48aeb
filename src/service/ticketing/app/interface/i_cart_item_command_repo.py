"""
Cart Item Command Repository Interface

Runs on the unit-of-work session. released_at is the one-time release flag:
claim_release and consume are conditional on it, so the slot counter is
decremented or handed over to a booking at most once per item.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional
from uuid import UUID

from src.service.ticketing.domain.entity.cart_item_entity import CartItem
from src.service.ticketing.domain.value_object.cart_owner import CartOwner


class ICartItemCommandRepo(ABC):
    @abstractmethod
    async def create(self, *, cart_item: CartItem) -> CartItem:
        pass

    @abstractmethod
    async def get_by_id(self, *, cart_item_id: UUID) -> Optional[CartItem]:
        pass

    @abstractmethod
    async def list_by_owner(self, *, owner: CartOwner) -> list[CartItem]:
        """Unreleased items, oldest first"""
        pass

    @abstractmethod
    async def list_expired(
        self,
        *,
        now: datetime,
        hold_cutoff: datetime,
        owner: Optional[CartOwner] = None,
        limit: int = 200,
    ) -> list[CartItem]:
        """
        Unreleased items with expires_at <= now, except items snapshotted into
        a created/attempted payment order newer than hold_cutoff
        """
        pass

    @abstractmethod
    async def claim_release(self, *, cart_item_id: UUID) -> bool:
        """released_at: NULL -> now. True when this call won the claim."""
        pass

    @abstractmethod
    async def consume(self, *, cart_item_id: UUID) -> bool:
        """Delete an unreleased item whose reservation becomes a booking"""
        pass

    @abstractmethod
    async def delete(self, *, cart_item_id: UUID) -> bool:
        pass

    @abstractmethod
    async def attach_to_order(self, *, cart_item_ids: list[UUID], payment_order_id: UUID) -> None:
        pass

    @abstractmethod
    async def adopt_guest_items(self, *, guest_cart_id: str, user_id: str) -> int:
        """Move unreleased guest items to the user; returns how many moved"""
        pass
