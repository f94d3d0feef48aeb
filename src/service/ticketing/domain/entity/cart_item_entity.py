from datetime import date, datetime, timedelta
import secrets
from typing import Optional
from uuid import UUID

import attrs
from uuid_utils.compat import uuid7

from src.platform.config.core_setting import settings
from src.platform.exception.exceptions import DomainError
from src.platform.types.utc_datetime import utc_now
from src.service.shared_kernel.domain.value_object.ticket_counts import TicketCounts


def new_guest_cart_id() -> str:
    return f'CART-{secrets.token_hex(5).upper()}'


@attrs.define
class CartItem:
    """
    A reservation held for a visitor until checkout or expiry

    While released_at is unset, the item's tickets are counted in its time
    slot's current_bookings. Owner is user_id (signed in) or guest_cart_id.
    """

    time_slot_id: UUID
    booking_date: date
    counts: TicketCounts
    subtotal: int
    expires_at: datetime
    user_id: Optional[str] = None
    guest_cart_id: Optional[str] = None
    exhibition_id: Optional[UUID] = None
    show_id: Optional[UUID] = None
    item_name: str = ''
    released_at: Optional[datetime] = None
    payment_order_id: Optional[UUID] = None
    id: UUID = attrs.field(factory=uuid7)
    created_at: Optional[datetime] = None

    @classmethod
    def create(
        cls,
        *,
        time_slot_id: UUID,
        booking_date: date,
        counts: TicketCounts,
        subtotal: int,
        user_id: Optional[str] = None,
        guest_cart_id: Optional[str] = None,
        exhibition_id: Optional[UUID] = None,
        show_id: Optional[UUID] = None,
        item_name: str = '',
    ) -> 'CartItem':
        if (user_id is None) == (guest_cart_id is None):
            raise DomainError('A cart item belongs to a user or a guest cart')
        counts.validate_bookable()
        if subtotal < 0:
            raise DomainError('subtotal cannot be negative')

        now = utc_now()
        return cls(
            time_slot_id=time_slot_id,
            booking_date=booking_date,
            counts=counts,
            subtotal=subtotal,
            user_id=user_id,
            guest_cart_id=guest_cart_id,
            exhibition_id=exhibition_id,
            show_id=show_id,
            item_name=item_name,
            expires_at=now + timedelta(minutes=settings.CART_RESERVATION_MINUTES),
            created_at=now,
        )

    @property
    def total_tickets(self) -> int:
        return self.counts.total

    def is_expired(self, now: datetime) -> bool:
        return self.expires_at <= now
