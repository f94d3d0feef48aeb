from datetime import date, datetime, timedelta
from typing import Any, Optional
from uuid import UUID

import attrs
from uuid_utils.compat import uuid7

from src.platform.config.core_setting import settings
from src.platform.exception.exceptions import DomainError
from src.platform.types.utc_datetime import utc_now
from src.service.shared_kernel.domain.value_object.ticket_counts import TicketCounts
from src.service.ticketing.domain.entity.cart_item_entity import CartItem
from src.service.ticketing.domain.enum.payment_order_status import PaymentOrderStatus


def _optional_uuid(value: Any) -> Optional[UUID]:
    return UUID(str(value)) if value else None


@attrs.define(frozen=True)
class SnapshotLine:
    """One cart line frozen into a payment order at checkout"""

    line_no: int
    cart_item_id: UUID
    time_slot_id: UUID
    booking_date: date
    counts: TicketCounts
    subtotal: int
    item_name: str = ''
    exhibition_id: Optional[UUID] = None
    show_id: Optional[UUID] = None

    @classmethod
    def from_cart_item(cls, *, line_no: int, cart_item: CartItem) -> 'SnapshotLine':
        return cls(
            line_no=line_no,
            cart_item_id=cart_item.id,
            time_slot_id=cart_item.time_slot_id,
            booking_date=cart_item.booking_date,
            counts=cart_item.counts,
            subtotal=cart_item.subtotal,
            item_name=cart_item.item_name,
            exhibition_id=cart_item.exhibition_id,
            show_id=cart_item.show_id,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            'line_no': self.line_no,
            'cart_item_id': str(self.cart_item_id),
            'time_slot_id': str(self.time_slot_id),
            'booking_date': self.booking_date.isoformat(),
            'counts': self.counts.to_dict(),
            'subtotal': self.subtotal,
            'item_name': self.item_name,
            'exhibition_id': str(self.exhibition_id) if self.exhibition_id else None,
            'show_id': str(self.show_id) if self.show_id else None,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> 'SnapshotLine':
        return cls(
            line_no=int(data['line_no']),
            cart_item_id=UUID(data['cart_item_id']),
            time_slot_id=UUID(data['time_slot_id']),
            booking_date=date.fromisoformat(data['booking_date']),
            counts=TicketCounts.from_dict(data.get('counts') or {}),
            subtotal=int(data.get('subtotal') or 0),
            item_name=data.get('item_name') or '',
            exhibition_id=_optional_uuid(data.get('exhibition_id')),
            show_id=_optional_uuid(data.get('show_id')),
        )


@attrs.define
class PaymentOrder:
    """
    A gateway order created from the live cart

    cart_snapshot is immutable once created; bookings are materialized from
    it, never from the cart, when payment is confirmed.
    """

    user_id: str
    amount: int
    cart_snapshot: list[SnapshotLine]
    currency: str = 'INR'
    receipt: str = ''
    visitor_name: str = ''
    visitor_email: str = ''
    visitor_phone: Optional[str] = None
    gateway_order_id: Optional[str] = None
    gateway_payment_id: Optional[str] = None
    status: PaymentOrderStatus = PaymentOrderStatus.CREATED
    paid_at: Optional[datetime] = None
    id: UUID = attrs.field(factory=uuid7)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def create(
        cls,
        *,
        user_id: str,
        cart_items: list[CartItem],
        visitor_name: str,
        visitor_email: str,
        visitor_phone: Optional[str] = None,
        currency: Optional[str] = None,
    ) -> 'PaymentOrder':
        if not cart_items:
            raise DomainError('Cart is empty')

        snapshot = [
            SnapshotLine.from_cart_item(line_no=line_no, cart_item=item)
            for line_no, item in enumerate(cart_items, start=1)
        ]
        amount = sum(line.subtotal for line in snapshot)
        if amount <= 0:
            raise DomainError('Cart total is zero; book free tickets directly')

        order_id = uuid7()
        now = utc_now()
        return cls(
            id=order_id,
            user_id=user_id,
            amount=amount,
            cart_snapshot=snapshot,
            currency=currency or settings.CURRENCY,
            receipt=f'rcpt_{order_id.hex[:24]}',
            visitor_name=visitor_name,
            visitor_email=visitor_email,
            visitor_phone=visitor_phone,
            created_at=now,
            updated_at=now,
        )

    @property
    def hold_expires_at(self) -> Optional[datetime]:
        if self.created_at is None:
            return None
        return self.created_at + timedelta(minutes=settings.PAYMENT_HOLD_MINUTES)
