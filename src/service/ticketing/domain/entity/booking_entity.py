from datetime import date, datetime
import secrets
import string
from typing import Optional
from uuid import UUID

import attrs
from uuid_utils.compat import uuid7

from src.platform.exception.exceptions import DomainError
from src.platform.logging.loguru_io import Logger
from src.platform.types.utc_datetime import museum_today, utc_now
from src.service.shared_kernel.domain.value_object.ticket_counts import TicketCounts
from src.service.ticketing.domain.entity.payment_order_entity import PaymentOrder, SnapshotLine
from src.service.ticketing.domain.entity.ticket_entity import Ticket
from src.service.ticketing.domain.enum.booking_status import BookingStatus, PaymentStatus
from src.service.ticketing.domain.enum.ticket_status import TicketStatus


_REFERENCE_ALPHABET = string.ascii_uppercase + string.digits


def new_booking_reference(on_date: date) -> str:
    suffix = ''.join(secrets.choice(_REFERENCE_ALPHABET) for _ in range(6))
    return f'BK{on_date:%Y%m%d}{suffix}'


@attrs.define
class Booking:
    """
    A confirmed visit to one time slot on one date

    Bookings from a paid order are keyed by (payment_order_id, snapshot_line),
    which makes materializing an order idempotent. capacity_released guards
    the one-time release of the slot counter on cancel or refund.
    """

    booking_reference: str
    time_slot_id: UUID
    booking_date: date
    counts: TicketCounts
    total_amount: int
    visitor_name: str = ''
    visitor_email: str = ''
    visitor_phone: Optional[str] = None
    user_id: Optional[str] = None
    exhibition_id: Optional[UUID] = None
    show_id: Optional[UUID] = None
    item_name: str = ''
    payment_order_id: Optional[UUID] = None
    snapshot_line: Optional[int] = None
    status: BookingStatus = BookingStatus.CONFIRMED
    payment_status: PaymentStatus = PaymentStatus.PENDING
    gateway_payment_id: Optional[str] = None
    capacity_released: bool = False
    refund_id: Optional[str] = None
    refund_amount: Optional[int] = None
    refunded_at: Optional[datetime] = None
    cancelled_at: Optional[datetime] = None
    tickets: list[Ticket] = attrs.field(factory=list)
    id: UUID = attrs.field(factory=uuid7)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    @Logger.io
    def create(
        cls,
        *,
        time_slot_id: UUID,
        booking_date: date,
        counts: TicketCounts,
        total_amount: int,
        visitor_name: str,
        visitor_email: str,
        visitor_phone: Optional[str] = None,
        user_id: Optional[str] = None,
        exhibition_id: Optional[UUID] = None,
        show_id: Optional[UUID] = None,
        item_name: str = '',
    ) -> 'Booking':
        counts.validate_bookable()
        if total_amount < 0:
            raise DomainError('total_amount cannot be negative')
        if not visitor_name or not visitor_email:
            raise DomainError('Visitor name and email are required')

        booking_id = uuid7()
        now = utc_now()
        return cls(
            id=booking_id,
            booking_reference=new_booking_reference(museum_today()),
            time_slot_id=time_slot_id,
            booking_date=booking_date,
            counts=counts,
            total_amount=total_amount,
            visitor_name=visitor_name,
            visitor_email=visitor_email,
            visitor_phone=visitor_phone,
            user_id=user_id,
            exhibition_id=exhibition_id,
            show_id=show_id,
            item_name=item_name,
            payment_status=PaymentStatus.FREE if total_amount == 0 else PaymentStatus.PENDING,
            tickets=[Ticket.create(booking_id=booking_id)],
            created_at=now,
            updated_at=now,
        )

    @classmethod
    def from_snapshot_line(
        cls, *, order: PaymentOrder, line: SnapshotLine, gateway_payment_id: str
    ) -> 'Booking':
        booking = cls.create(
            time_slot_id=line.time_slot_id,
            booking_date=line.booking_date,
            counts=line.counts,
            total_amount=line.subtotal,
            visitor_name=order.visitor_name or order.visitor_email,
            visitor_email=order.visitor_email,
            visitor_phone=order.visitor_phone,
            user_id=order.user_id,
            exhibition_id=line.exhibition_id,
            show_id=line.show_id,
            item_name=line.item_name,
        )
        return attrs.evolve(
            booking,
            payment_order_id=order.id,
            snapshot_line=line.line_no,
            payment_status=PaymentStatus.PAID,
            gateway_payment_id=gateway_payment_id,
        )

    @property
    def total_tickets(self) -> int:
        return self.counts.total

    @property
    def ticket(self) -> Optional[Ticket]:
        return self.tickets[0] if self.tickets else None

    def cancel(self) -> 'Booking':
        if self.status == BookingStatus.CANCELLED:
            raise DomainError('Booking already cancelled')
        now = utc_now()
        return attrs.evolve(self, status=BookingStatus.CANCELLED, cancelled_at=now, updated_at=now)

    def mark_unfulfilled(self) -> 'Booking':
        """Paid, but its time slot could not take the tickets back; needs a manual refund"""
        now = utc_now()
        return attrs.evolve(
            self,
            status=BookingStatus.CANCELLED,
            capacity_released=True,
            tickets=[attrs.evolve(t, status=TicketStatus.CANCELLED) for t in self.tickets],
            cancelled_at=now,
            updated_at=now,
        )

    def mark_refunded(self, *, refund_id: Optional[str], refund_amount: Optional[int]) -> 'Booking':
        if self.payment_status == PaymentStatus.REFUNDED:
            raise DomainError('Booking already refunded')
        now = utc_now()
        return attrs.evolve(
            self,
            status=BookingStatus.CANCELLED,
            payment_status=PaymentStatus.REFUNDED,
            refund_id=refund_id,
            refund_amount=self.total_amount if refund_amount is None else refund_amount,
            refunded_at=now,
            cancelled_at=self.cancelled_at or now,
            updated_at=now,
        )
