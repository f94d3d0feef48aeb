"""init_museum_schema

Revision ID: 0001
Revises:
Create Date: 2026-10-19

Schema:
- exhibition, show, pricing: catalog
- time_slot: capacity ledger rows (current_bookings guarded by check constraints)
- capacity_log: audit of admin capacity changes
- user_profile: identity-provider users and their role
- payment_order: gateway orders with the cart snapshot they were created from
- cart_item: live reservations (counted in time_slot.current_bookings until released)
- booking, ticket: confirmed visits and their entry tickets
- ticket_verification: every gate scan
- payment_log: append-only gateway event log

Amounts are integers in minor currency units (paise).
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import JSONB


# revision identifiers, used by Alembic.
revision: str = '0001'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps(*, with_updated_at: bool = True) -> list[sa.Column]:
    columns = [
        sa.Column(
            'created_at',
            sa.DateTime(timezone=True),
            server_default=sa.text('now()'),
            nullable=False,
        )
    ]
    if with_updated_at:
        columns.append(
            sa.Column(
                'updated_at',
                sa.DateTime(timezone=True),
                server_default=sa.text('now()'),
                nullable=False,
            )
        )
    return columns


def upgrade() -> None:
    """Create all tables with final schema."""

    # ========== Catalog ==========

    op.create_table(
        'exhibition',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('category', sa.String(length=50), nullable=False),
        sa.Column('location', sa.String(length=200), nullable=False),
        sa.Column('start_date', sa.Date(), nullable=True),
        sa.Column('end_date', sa.Date(), nullable=True),
        sa.Column('image_url', sa.String(length=500), nullable=True),
        sa.Column('status', sa.String(length=20), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id', name='pk_exhibition'),
    )
    op.create_index('ix_exhibition_status', 'exhibition', ['status'])

    op.create_table(
        'show',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('show_type', sa.String(length=50), nullable=False),
        sa.Column('duration_minutes', sa.Integer(), nullable=False),
        sa.Column('image_url', sa.String(length=500), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id', name='pk_show'),
    )

    op.create_table(
        'pricing',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('exhibition_id', sa.Uuid(), nullable=True),
        sa.Column('show_id', sa.Uuid(), nullable=True),
        sa.Column('ticket_type', sa.String(length=20), nullable=False),
        sa.Column('price', sa.Integer(), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(
            ['exhibition_id'], ['exhibition.id'], name='fk_pricing_exhibition_id_exhibition'
        ),
        sa.ForeignKeyConstraint(['show_id'], ['show.id'], name='fk_pricing_show_id_show'),
        sa.PrimaryKeyConstraint('id', name='pk_pricing'),
    )
    op.create_index('ix_pricing_exhibition_id', 'pricing', ['exhibition_id'])
    op.create_index('ix_pricing_show_id', 'pricing', ['show_id'])

    # ========== Capacity ledger ==========

    op.create_table(
        'time_slot',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('exhibition_id', sa.Uuid(), nullable=True),
        sa.Column('show_id', sa.Uuid(), nullable=True),
        sa.Column('slot_date', sa.Date(), nullable=True),
        sa.Column('day_of_week', sa.SmallInteger(), nullable=True),
        sa.Column('start_time', sa.Time(), nullable=False),
        sa.Column('end_time', sa.Time(), nullable=False),
        sa.Column('capacity', sa.Integer(), nullable=False),
        sa.Column('current_bookings', sa.Integer(), nullable=False),
        sa.Column('buffer_capacity', sa.Integer(), nullable=False),
        sa.Column('slot_type', sa.String(length=20), nullable=False),
        sa.Column('notes', sa.String(length=500), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.CheckConstraint(
            'current_bookings >= 0', name='ck_time_slot_current_bookings_non_negative'
        ),
        sa.CheckConstraint(
            'current_bookings <= capacity', name='ck_time_slot_current_bookings_within_capacity'
        ),
        sa.CheckConstraint('capacity BETWEEN 1 AND 500', name='ck_time_slot_capacity_range'),
        sa.ForeignKeyConstraint(
            ['exhibition_id'], ['exhibition.id'], name='fk_time_slot_exhibition_id_exhibition'
        ),
        sa.ForeignKeyConstraint(['show_id'], ['show.id'], name='fk_time_slot_show_id_show'),
        sa.PrimaryKeyConstraint('id', name='pk_time_slot'),
    )
    op.create_index(
        'ix_time_slot_owner_date', 'time_slot', ['exhibition_id', 'show_id', 'slot_date']
    )

    op.create_table(
        'capacity_log',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('time_slot_id', sa.Uuid(), nullable=False),
        sa.Column('action', sa.String(length=50), nullable=False),
        sa.Column('previous_capacity', sa.Integer(), nullable=False),
        sa.Column('new_capacity', sa.Integer(), nullable=False),
        sa.Column('changed_by', sa.String(length=64), nullable=True),
        sa.Column('reason', sa.String(length=500), nullable=True),
        *_timestamps(with_updated_at=False),
        sa.ForeignKeyConstraint(
            ['time_slot_id'], ['time_slot.id'], name='fk_capacity_log_time_slot_id_time_slot'
        ),
        sa.PrimaryKeyConstraint('id', name='pk_capacity_log'),
    )
    op.create_index('ix_capacity_log_time_slot_id', 'capacity_log', ['time_slot_id'])

    # ========== Visitors and payments ==========

    op.create_table(
        'user_profile',
        sa.Column('id', sa.String(length=64), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('full_name', sa.String(length=255), nullable=False),
        sa.Column('phone', sa.String(length=32), nullable=True),
        sa.Column('role', sa.String(length=20), nullable=False),
        *_timestamps(with_updated_at=False),
        sa.PrimaryKeyConstraint('id', name='pk_user_profile'),
    )
    op.create_index('ix_user_profile_email', 'user_profile', ['email'])

    op.create_table(
        'payment_order',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('gateway_order_id', sa.String(length=64), nullable=True),
        sa.Column('user_id', sa.String(length=64), nullable=False),
        sa.Column('amount', sa.Integer(), nullable=False),
        sa.Column('currency', sa.String(length=3), nullable=False),
        sa.Column('receipt', sa.String(length=40), nullable=False),
        sa.Column('visitor_name', sa.String(length=255), nullable=False),
        sa.Column('visitor_email', sa.String(length=255), nullable=False),
        sa.Column('visitor_phone', sa.String(length=32), nullable=True),
        sa.Column('cart_snapshot', JSONB(), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('gateway_payment_id', sa.String(length=64), nullable=True),
        sa.Column('paid_at', sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id', name='pk_payment_order'),
        sa.UniqueConstraint('gateway_order_id', name='uq_payment_order_gateway_order_id'),
    )
    op.create_index('ix_payment_order_user_id', 'payment_order', ['user_id'])
    op.create_index('ix_payment_order_status', 'payment_order', ['status'])
    op.create_index('ix_payment_order_gateway_payment_id', 'payment_order', ['gateway_payment_id'])

    op.create_table(
        'cart_item',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('user_id', sa.String(length=64), nullable=True),
        sa.Column('guest_cart_id', sa.String(length=20), nullable=True),
        sa.Column('time_slot_id', sa.Uuid(), nullable=False),
        sa.Column('exhibition_id', sa.Uuid(), nullable=True),
        sa.Column('show_id', sa.Uuid(), nullable=True),
        sa.Column('item_name', sa.String(length=255), nullable=False),
        sa.Column('booking_date', sa.Date(), nullable=False),
        sa.Column('adult_tickets', sa.Integer(), nullable=False),
        sa.Column('child_tickets', sa.Integer(), nullable=False),
        sa.Column('student_tickets', sa.Integer(), nullable=False),
        sa.Column('senior_tickets', sa.Integer(), nullable=False),
        sa.Column('total_tickets', sa.Integer(), nullable=False),
        sa.Column('subtotal', sa.Integer(), nullable=False),
        sa.Column('expires_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('released_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('payment_order_id', sa.Uuid(), nullable=True),
        *_timestamps(with_updated_at=False),
        sa.CheckConstraint(
            '(user_id IS NOT NULL) OR (guest_cart_id IS NOT NULL)', name='ck_cart_item_has_owner'
        ),
        sa.CheckConstraint('total_tickets > 0', name='ck_cart_item_total_tickets_positive'),
        sa.ForeignKeyConstraint(
            ['time_slot_id'], ['time_slot.id'], name='fk_cart_item_time_slot_id_time_slot'
        ),
        sa.ForeignKeyConstraint(
            ['payment_order_id'],
            ['payment_order.id'],
            name='fk_cart_item_payment_order_id_payment_order',
        ),
        sa.PrimaryKeyConstraint('id', name='pk_cart_item'),
    )
    op.create_index('ix_cart_item_user_id', 'cart_item', ['user_id'])
    op.create_index('ix_cart_item_guest_cart_id', 'cart_item', ['guest_cart_id'])
    op.create_index('ix_cart_item_time_slot_id', 'cart_item', ['time_slot_id'])
    op.create_index('ix_cart_item_payment_order_id', 'cart_item', ['payment_order_id'])
    op.create_index('ix_cart_item_expiry', 'cart_item', ['released_at', 'expires_at'])

    # ========== Bookings and tickets ==========

    op.create_table(
        'booking',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('booking_reference', sa.String(length=20), nullable=False),
        sa.Column('payment_order_id', sa.Uuid(), nullable=True),
        sa.Column('snapshot_line', sa.Integer(), nullable=True),
        sa.Column('user_id', sa.String(length=64), nullable=True),
        sa.Column('visitor_name', sa.String(length=255), nullable=False),
        sa.Column('visitor_email', sa.String(length=255), nullable=False),
        sa.Column('visitor_phone', sa.String(length=32), nullable=True),
        sa.Column('time_slot_id', sa.Uuid(), nullable=False),
        sa.Column('exhibition_id', sa.Uuid(), nullable=True),
        sa.Column('show_id', sa.Uuid(), nullable=True),
        sa.Column('item_name', sa.String(length=255), nullable=False),
        sa.Column('booking_date', sa.Date(), nullable=False),
        sa.Column('adult_tickets', sa.Integer(), nullable=False),
        sa.Column('child_tickets', sa.Integer(), nullable=False),
        sa.Column('student_tickets', sa.Integer(), nullable=False),
        sa.Column('senior_tickets', sa.Integer(), nullable=False),
        sa.Column('total_tickets', sa.Integer(), nullable=False),
        sa.Column('total_amount', sa.Integer(), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('payment_status', sa.String(length=20), nullable=False),
        sa.Column('gateway_payment_id', sa.String(length=64), nullable=True),
        sa.Column('capacity_released', sa.Boolean(), nullable=False),
        sa.Column('refund_id', sa.String(length=64), nullable=True),
        sa.Column('refund_amount', sa.Integer(), nullable=True),
        sa.Column('refunded_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('cancelled_at', sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(
            ['payment_order_id'],
            ['payment_order.id'],
            name='fk_booking_payment_order_id_payment_order',
        ),
        sa.ForeignKeyConstraint(
            ['time_slot_id'], ['time_slot.id'], name='fk_booking_time_slot_id_time_slot'
        ),
        sa.PrimaryKeyConstraint('id', name='pk_booking'),
        sa.UniqueConstraint('booking_reference', name='uq_booking_booking_reference'),
        sa.UniqueConstraint('payment_order_id', 'snapshot_line', name='uq_booking_order_line'),
    )
    op.create_index('ix_booking_user_id', 'booking', ['user_id'])
    op.create_index('ix_booking_visitor_email', 'booking', ['visitor_email'])
    op.create_index('ix_booking_exhibition_id', 'booking', ['exhibition_id'])
    op.create_index('ix_booking_booking_date', 'booking', ['booking_date'])
    op.create_index('ix_booking_gateway_payment_id', 'booking', ['gateway_payment_id'])
    op.create_index('ix_booking_slot_status', 'booking', ['time_slot_id', 'status'])

    op.create_table(
        'ticket',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('booking_id', sa.Uuid(), nullable=False),
        sa.Column('ticket_code', sa.String(length=32), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('used_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('verified_by', sa.String(length=64), nullable=True),
        sa.Column('verification_device', sa.String(length=128), nullable=True),
        *_timestamps(with_updated_at=False),
        sa.ForeignKeyConstraint(
            ['booking_id'], ['booking.id'], name='fk_ticket_booking_id_booking'
        ),
        sa.PrimaryKeyConstraint('id', name='pk_ticket'),
        sa.UniqueConstraint('ticket_code', name='uq_ticket_ticket_code'),
    )
    op.create_index('ix_ticket_booking_id', 'ticket', ['booking_id'])

    op.create_table(
        'ticket_verification',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('ticket_id', sa.Uuid(), nullable=True),
        sa.Column('ticket_code', sa.String(length=64), nullable=False),
        sa.Column('result', sa.String(length=20), nullable=False),
        sa.Column('verified_by', sa.String(length=64), nullable=False),
        sa.Column('device', sa.String(length=128), nullable=True),
        sa.Column('location', sa.String(length=128), nullable=True),
        *_timestamps(with_updated_at=False),
        sa.ForeignKeyConstraint(
            ['ticket_id'], ['ticket.id'], name='fk_ticket_verification_ticket_id_ticket'
        ),
        sa.PrimaryKeyConstraint('id', name='pk_ticket_verification'),
    )
    op.create_index('ix_ticket_verification_ticket_id', 'ticket_verification', ['ticket_id'])

    op.create_table(
        'payment_log',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('payment_order_id', sa.Uuid(), nullable=True),
        sa.Column('gateway_order_id', sa.String(length=64), nullable=True),
        sa.Column('gateway_payment_id', sa.String(length=64), nullable=True),
        sa.Column('event', sa.String(length=64), nullable=False),
        sa.Column('status', sa.String(length=32), nullable=False),
        sa.Column('amount', sa.Integer(), nullable=True),
        sa.Column('payload', JSONB(), nullable=False),
        *_timestamps(with_updated_at=False),
        sa.PrimaryKeyConstraint('id', name='pk_payment_log'),
    )
    op.create_index('ix_payment_log_payment_order_id', 'payment_log', ['payment_order_id'])
    op.create_index('ix_payment_log_gateway_order_id', 'payment_log', ['gateway_order_id'])


def downgrade() -> None:
    """Drop all tables, dependents first."""
    for table in (
        'payment_log',
        'ticket_verification',
        'ticket',
        'booking',
        'cart_item',
        'payment_order',
        'user_profile',
        'capacity_log',
        'time_slot',
        'pricing',
        'show',
        'exhibition',
    ):
        op.drop_table(table)
