from datetime import date, datetime
from typing import List, Optional
from uuid import UUID

from pydantic import EmailStr, Field

from src.service.shared_kernel.driving_adapter.schema.camel_schema import CamelSchema
from src.service.ticketing.domain.entity.booking_entity import Booking
from src.service.ticketing.domain.entity.ticket_entity import Ticket
from src.service.ticketing.driving_adapter.http_controller.schema.cart_schema import (
    TicketCountsSchema,
)


class BookingCreateRequest(CamelSchema):
    model_config = {
        'json_schema_extra': {
            'example': {
                'timeSlotId': '01936d8f-5e73-7c4e-a9c5-123456789abc',
                'bookingDate': '2026-11-02',
                'tickets': {'adult': 2, 'child': 1},
                'visitorName': 'Asha Rao',
                'visitorEmail': 'asha@example.com',
                'visitorPhone': '+919800000000',
            }
        },
    }

    time_slot_id: UUID
    booking_date: date
    tickets: TicketCountsSchema
    visitor_name: str = Field(min_length=1, max_length=200)
    visitor_email: EmailStr
    visitor_phone: Optional[str] = Field(default=None, max_length=32)
    exhibition_id: Optional[UUID] = None
    show_id: Optional[UUID] = None


class TicketResponse(CamelSchema):
    id: UUID
    ticket_code: str
    status: str
    used_at: Optional[datetime]

    @classmethod
    def from_entity(cls, ticket: Ticket) -> 'TicketResponse':
        return cls(
            id=ticket.id,
            ticket_code=ticket.ticket_code,
            status=ticket.status.value,
            used_at=ticket.used_at,
        )


class BookingResponse(CamelSchema):
    id: UUID
    booking_reference: str
    time_slot_id: UUID
    booking_date: date
    exhibition_id: Optional[UUID]
    show_id: Optional[UUID]
    item_name: str
    tickets: TicketCountsSchema
    total_tickets: int
    total_amount: int
    visitor_name: str
    visitor_email: str
    visitor_phone: Optional[str]
    status: str
    payment_status: str
    payment_order_id: Optional[UUID]
    refund_amount: Optional[int]
    issued_tickets: List[TicketResponse]
    created_at: Optional[datetime]
    cancelled_at: Optional[datetime]

    @classmethod
    def from_entity(cls, booking: Booking) -> 'BookingResponse':
        return cls(
            id=booking.id,
            booking_reference=booking.booking_reference,
            time_slot_id=booking.time_slot_id,
            booking_date=booking.booking_date,
            exhibition_id=booking.exhibition_id,
            show_id=booking.show_id,
            item_name=booking.item_name,
            tickets=TicketCountsSchema.from_value(booking.counts),
            total_tickets=booking.total_tickets,
            total_amount=booking.total_amount,
            visitor_name=booking.visitor_name,
            visitor_email=booking.visitor_email,
            visitor_phone=booking.visitor_phone,
            status=booking.status.value,
            payment_status=booking.payment_status.value,
            payment_order_id=booking.payment_order_id,
            refund_amount=booking.refund_amount,
            issued_tickets=[TicketResponse.from_entity(t) for t in booking.tickets],
            created_at=booking.created_at,
            cancelled_at=booking.cancelled_at,
        )


class BookingListResponse(CamelSchema):
    bookings: List[BookingResponse]
    total: int
    page: int
    page_size: int


class RefundRequest(CamelSchema):
    amount: Optional[int] = Field(default=None, gt=0)  # paise; whole booking when omitted
    reason: Optional[str] = Field(default=None, max_length=500)
