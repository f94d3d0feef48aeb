from datetime import date, datetime
from typing import List, Optional
from uuid import UUID

from pydantic import Field

from src.service.shared_kernel.domain.value_object.ticket_counts import (
    MAX_TICKETS_PER_LINE,
    TicketCounts,
)
from src.service.shared_kernel.driving_adapter.schema.camel_schema import CamelSchema
from src.service.ticketing.app.dto.sync_cart_result import (
    GuestCartLine,
    SkippedCartLine,
    SyncCartResult,
)
from src.service.ticketing.domain.entity.cart_item_entity import CartItem


class TicketCountsSchema(CamelSchema):
    adult: int = Field(default=0, ge=0, le=MAX_TICKETS_PER_LINE)
    child: int = Field(default=0, ge=0, le=MAX_TICKETS_PER_LINE)
    student: int = Field(default=0, ge=0, le=MAX_TICKETS_PER_LINE)
    senior: int = Field(default=0, ge=0, le=MAX_TICKETS_PER_LINE)

    def to_value(self) -> TicketCounts:
        return TicketCounts(
            adult=self.adult, child=self.child, student=self.student, senior=self.senior
        )

    @classmethod
    def from_value(cls, counts: TicketCounts) -> 'TicketCountsSchema':
        return cls(**counts.to_dict())


class CartAddRequest(CamelSchema):
    model_config = {
        'json_schema_extra': {
            'example': {
                'timeSlotId': '01936d8f-5e73-7c4e-a9c5-123456789abc',
                'bookingDate': '2026-11-02',
                'exhibitionId': None,
                'showId': None,
                'tickets': {'adult': 2, 'child': 1},
            }
        },
    }

    time_slot_id: UUID
    booking_date: date
    tickets: TicketCountsSchema
    exhibition_id: Optional[UUID] = None
    show_id: Optional[UUID] = None
    cart_id: Optional[str] = Field(default=None, max_length=64)  # guest carts only


class CartItemResponse(CamelSchema):
    id: UUID
    time_slot_id: UUID
    booking_date: date
    exhibition_id: Optional[UUID]
    show_id: Optional[UUID]
    item_name: str
    tickets: TicketCountsSchema
    total_tickets: int
    subtotal: int
    expires_at: datetime
    payment_order_id: Optional[UUID]

    @classmethod
    def from_entity(cls, item: CartItem) -> 'CartItemResponse':
        return cls(
            id=item.id,
            time_slot_id=item.time_slot_id,
            booking_date=item.booking_date,
            exhibition_id=item.exhibition_id,
            show_id=item.show_id,
            item_name=item.item_name,
            tickets=TicketCountsSchema.from_value(item.counts),
            total_tickets=item.total_tickets,
            subtotal=item.subtotal,
            expires_at=item.expires_at,
            payment_order_id=item.payment_order_id,
        )


class CartResponse(CamelSchema):
    cart_id: Optional[str] = None
    items: List[CartItemResponse]
    total_tickets: int
    total_amount: int

    @classmethod
    def from_entities(
        cls, items: List[CartItem], cart_id: Optional[str] = None
    ) -> 'CartResponse':
        return cls(
            cart_id=cart_id,
            items=[CartItemResponse.from_entity(item) for item in items],
            total_tickets=sum(item.total_tickets for item in items),
            total_amount=sum(item.subtotal for item in items),
        )


class CartAddResponse(CamelSchema):
    cart_id: Optional[str] = None
    cart_item: CartItemResponse


class CartRemoveResponse(CamelSchema):
    removed_count: int


class CleanupExpiredResponse(CamelSchema):
    cleaned_count: int


# ============================ Sync ============================


class GuestCartLineRequest(CamelSchema):
    time_slot_id: UUID
    booking_date: date
    tickets: TicketCountsSchema
    exhibition_id: Optional[UUID] = None
    show_id: Optional[UUID] = None
    expires_at: Optional[datetime] = None

    def to_dto(self) -> GuestCartLine:
        return GuestCartLine(
            time_slot_id=self.time_slot_id,
            booking_date=self.booking_date,
            counts=self.tickets.to_value(),
            exhibition_id=self.exhibition_id,
            show_id=self.show_id,
            expires_at=self.expires_at,
        )


class CartSyncRequest(CamelSchema):
    guest_cart_id: Optional[str] = Field(default=None, max_length=64)
    items: List[GuestCartLineRequest] = Field(default_factory=list, max_length=50)


class SkippedItemResponse(CamelSchema):
    time_slot_id: UUID
    booking_date: date
    reason: str

    @classmethod
    def from_value(cls, skipped: SkippedCartLine) -> 'SkippedItemResponse':
        return cls(
            time_slot_id=skipped.line.time_slot_id,
            booking_date=skipped.line.booking_date,
            reason=skipped.reason,
        )


class CartSyncResponse(CamelSchema):
    synced_items: List[CartItemResponse]
    skipped_items: List[SkippedItemResponse]
    adopted_count: int

    @classmethod
    def from_value(cls, result: SyncCartResult) -> 'CartSyncResponse':
        return cls(
            synced_items=[CartItemResponse.from_entity(item) for item in result.synced],
            skipped_items=[SkippedItemResponse.from_value(s) for s in result.skipped],
            adopted_count=result.adopted_count,
        )
