"""Cart sync DTOs."""

from datetime import date, datetime
from typing import Optional
from uuid import UUID

import attrs

from src.service.shared_kernel.domain.value_object.ticket_counts import TicketCounts
from src.service.ticketing.domain.entity.cart_item_entity import CartItem


@attrs.define(frozen=True)
class GuestCartLine:
    """A cart line the client kept locally while signed out"""

    time_slot_id: UUID
    booking_date: date
    counts: TicketCounts
    exhibition_id: Optional[UUID] = None
    show_id: Optional[UUID] = None
    expires_at: Optional[datetime] = None


@attrs.define
class SkippedCartLine:
    line: GuestCartLine
    reason: str


@attrs.define
class SyncCartResult:
    """
    Outcome of moving a guest cart into a signed-in visitor's cart

    adopted_count covers server-side guest items re-owned as they are; synced
    holds every live item of the visitor's cart afterwards.
    """

    synced: list[CartItem] = attrs.field(factory=list)
    skipped: list[SkippedCartLine] = attrs.field(factory=list)
    adopted_count: int = 0
