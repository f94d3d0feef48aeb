"""Priced, validated booking line DTO."""

from datetime import date
from typing import Optional
from uuid import UUID

import attrs

from src.service.inventory.domain.entity.time_slot_entity import TimeSlot
from src.service.shared_kernel.domain.value_object.ticket_counts import TicketCounts


@attrs.define(frozen=True)
class LineQuote:
    """
    A line ready to be reserved: the slot serves the date, the owner is open
    on it, and the subtotal is priced from the active price list.
    """

    slot: TimeSlot
    booking_date: date
    counts: TicketCounts
    subtotal: int
    item_name: str
    exhibition_id: Optional[UUID] = None
    show_id: Optional[UUID] = None
