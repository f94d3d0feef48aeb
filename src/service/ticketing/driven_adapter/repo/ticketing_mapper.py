from typing import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.types.utc_datetime import as_utc, utc_now
from src.service.shared_kernel.domain.value_object.ticket_counts import TicketCounts
from src.service.ticketing.domain.entity.booking_entity import Booking
from src.service.ticketing.domain.entity.cart_item_entity import CartItem
from src.service.ticketing.domain.entity.payment_order_entity import PaymentOrder, SnapshotLine
from src.service.ticketing.domain.entity.ticket_entity import Ticket
from src.service.ticketing.domain.enum.booking_status import BookingStatus, PaymentStatus
from src.service.ticketing.domain.enum.payment_order_status import PaymentOrderStatus
from src.service.ticketing.domain.enum.ticket_status import TicketStatus
from src.service.ticketing.driven_adapter.model.booking_model import BookingModel
from src.service.ticketing.driven_adapter.model.cart_item_model import CartItemModel
from src.service.ticketing.driven_adapter.model.payment_order_model import PaymentOrderModel
from src.service.ticketing.driven_adapter.model.ticket_model import TicketModel


def _counts_of(model: CartItemModel | BookingModel) -> TicketCounts:
    return TicketCounts(
        adult=model.adult_tickets,
        child=model.child_tickets,
        student=model.student_tickets,
        senior=model.senior_tickets,
    )


# ============================ Cart Item ============================


def cart_item_to_entity(model: CartItemModel) -> CartItem:
    return CartItem(
        id=model.id,
        user_id=model.user_id,
        guest_cart_id=model.guest_cart_id,
        time_slot_id=model.time_slot_id,
        exhibition_id=model.exhibition_id,
        show_id=model.show_id,
        item_name=model.item_name,
        booking_date=model.booking_date,
        counts=_counts_of(model),
        subtotal=model.subtotal,
        expires_at=as_utc(model.expires_at),
        released_at=as_utc(model.released_at),
        payment_order_id=model.payment_order_id,
        created_at=as_utc(model.created_at),
    )


def cart_item_to_model(cart_item: CartItem) -> CartItemModel:
    return CartItemModel(
        id=cart_item.id,
        user_id=cart_item.user_id,
        guest_cart_id=cart_item.guest_cart_id,
        time_slot_id=cart_item.time_slot_id,
        exhibition_id=cart_item.exhibition_id,
        show_id=cart_item.show_id,
        item_name=cart_item.item_name,
        booking_date=cart_item.booking_date,
        adult_tickets=cart_item.counts.adult,
        child_tickets=cart_item.counts.child,
        student_tickets=cart_item.counts.student,
        senior_tickets=cart_item.counts.senior,
        total_tickets=cart_item.total_tickets,
        subtotal=cart_item.subtotal,
        expires_at=cart_item.expires_at,
        released_at=cart_item.released_at,
        payment_order_id=cart_item.payment_order_id,
        created_at=cart_item.created_at or utc_now(),
    )


# ============================ Payment Order ============================


def payment_order_to_entity(model: PaymentOrderModel) -> PaymentOrder:
    return PaymentOrder(
        id=model.id,
        gateway_order_id=model.gateway_order_id,
        user_id=model.user_id,
        amount=model.amount,
        currency=model.currency,
        receipt=model.receipt,
        visitor_name=model.visitor_name,
        visitor_email=model.visitor_email,
        visitor_phone=model.visitor_phone,
        cart_snapshot=[SnapshotLine.from_dict(line) for line in model.cart_snapshot],
        status=PaymentOrderStatus(model.status),
        gateway_payment_id=model.gateway_payment_id,
        paid_at=as_utc(model.paid_at),
        created_at=as_utc(model.created_at),
        updated_at=as_utc(model.updated_at),
    )


def payment_order_to_model(order: PaymentOrder) -> PaymentOrderModel:
    now = utc_now()
    return PaymentOrderModel(
        id=order.id,
        gateway_order_id=order.gateway_order_id,
        user_id=order.user_id,
        amount=order.amount,
        currency=order.currency,
        receipt=order.receipt,
        visitor_name=order.visitor_name,
        visitor_email=order.visitor_email,
        visitor_phone=order.visitor_phone,
        cart_snapshot=[line.to_dict() for line in order.cart_snapshot],
        status=order.status.value,
        gateway_payment_id=order.gateway_payment_id,
        paid_at=order.paid_at,
        created_at=order.created_at or now,
        updated_at=order.updated_at or now,
    )


# ============================ Booking / Ticket ============================


def ticket_to_entity(model: TicketModel) -> Ticket:
    return Ticket(
        id=model.id,
        booking_id=model.booking_id,
        ticket_code=model.ticket_code,
        status=TicketStatus(model.status),
        used_at=as_utc(model.used_at),
        verified_by=model.verified_by,
        verification_device=model.verification_device,
        created_at=as_utc(model.created_at),
    )


def ticket_to_model(ticket: Ticket) -> TicketModel:
    return TicketModel(
        id=ticket.id,
        booking_id=ticket.booking_id,
        ticket_code=ticket.ticket_code,
        status=ticket.status.value,
        used_at=ticket.used_at,
        verified_by=ticket.verified_by,
        verification_device=ticket.verification_device,
        created_at=ticket.created_at or utc_now(),
    )


def booking_to_entity(model: BookingModel, tickets: Sequence[TicketModel] = ()) -> Booking:
    return Booking(
        id=model.id,
        booking_reference=model.booking_reference,
        payment_order_id=model.payment_order_id,
        snapshot_line=model.snapshot_line,
        user_id=model.user_id,
        visitor_name=model.visitor_name,
        visitor_email=model.visitor_email,
        visitor_phone=model.visitor_phone,
        time_slot_id=model.time_slot_id,
        exhibition_id=model.exhibition_id,
        show_id=model.show_id,
        item_name=model.item_name,
        booking_date=model.booking_date,
        counts=_counts_of(model),
        total_amount=model.total_amount,
        status=BookingStatus(model.status),
        payment_status=PaymentStatus(model.payment_status),
        gateway_payment_id=model.gateway_payment_id,
        capacity_released=model.capacity_released,
        refund_id=model.refund_id,
        refund_amount=model.refund_amount,
        refunded_at=as_utc(model.refunded_at),
        cancelled_at=as_utc(model.cancelled_at),
        tickets=[ticket_to_entity(ticket) for ticket in tickets],
        created_at=as_utc(model.created_at),
        updated_at=as_utc(model.updated_at),
    )


def booking_to_model(booking: Booking) -> BookingModel:
    now = utc_now()
    return BookingModel(
        id=booking.id,
        booking_reference=booking.booking_reference,
        payment_order_id=booking.payment_order_id,
        snapshot_line=booking.snapshot_line,
        user_id=booking.user_id,
        visitor_name=booking.visitor_name,
        visitor_email=booking.visitor_email,
        visitor_phone=booking.visitor_phone,
        time_slot_id=booking.time_slot_id,
        exhibition_id=booking.exhibition_id,
        show_id=booking.show_id,
        item_name=booking.item_name,
        booking_date=booking.booking_date,
        adult_tickets=booking.counts.adult,
        child_tickets=booking.counts.child,
        student_tickets=booking.counts.student,
        senior_tickets=booking.counts.senior,
        total_tickets=booking.total_tickets,
        total_amount=booking.total_amount,
        status=booking.status.value,
        payment_status=booking.payment_status.value,
        gateway_payment_id=booking.gateway_payment_id,
        capacity_released=booking.capacity_released,
        refund_id=booking.refund_id,
        refund_amount=booking.refund_amount,
        refunded_at=booking.refunded_at,
        cancelled_at=booking.cancelled_at,
        created_at=booking.created_at or now,
        updated_at=booking.updated_at or now,
    )


async def bookings_with_tickets(
    session: AsyncSession, models: Sequence[BookingModel]
) -> list[Booking]:
    """Map booking rows, loading their tickets with one extra query"""
    if not models:
        return []
    result = await session.execute(
        select(TicketModel)
        .where(TicketModel.booking_id.in_([model.id for model in models]))
        .order_by(TicketModel.created_at)
        .execution_options(populate_existing=True)
    )
    tickets_by_booking: dict = {}
    for ticket in result.scalars().all():
        tickets_by_booking.setdefault(ticket.booking_id, []).append(ticket)
    return [booking_to_entity(model, tickets_by_booking.get(model.id, [])) for model in models]
