"""
Wire Modules Configuration

Defines the modules that need dependency injection wiring.
Shared between production and test environments.
"""

from types import ModuleType

from src.service.catalog.app.command import (
    manage_exhibition_use_case,
    manage_pricing_use_case,
    manage_show_use_case,
)
from src.service.catalog.app.query import browse_catalog_use_case
from src.service.inventory.app.command import create_time_slot_use_case, update_time_slot_use_case
from src.service.inventory.app.query import get_slot_availability_use_case, list_time_slots_use_case
from src.service.ticketing.app.command import (
    add_to_cart_use_case,
    cancel_booking_use_case,
    confirm_payment_use_case,
    create_booking_use_case,
    create_payment_order_use_case,
    handle_payment_webhook_use_case,
    refund_booking_use_case,
    remove_from_cart_use_case,
    sync_cart_use_case,
    verify_payment_use_case,
    verify_ticket_use_case,
)
from src.service.ticketing.app.query import (
    admin_report_use_case,
    get_booking_use_case,
    get_cart_use_case,
    list_bookings_use_case,
)
from src.service.ticketing.driving_adapter.http_controller import cart_controller
from src.service.ticketing.driving_adapter.http_controller.auth import role_auth


WIRE_MODULES: list[ModuleType] = [
    # Catalog
    manage_exhibition_use_case,
    manage_show_use_case,
    manage_pricing_use_case,
    browse_catalog_use_case,
    # Inventory
    create_time_slot_use_case,
    update_time_slot_use_case,
    get_slot_availability_use_case,
    list_time_slots_use_case,
    # Ticketing
    add_to_cart_use_case,
    remove_from_cart_use_case,
    sync_cart_use_case,
    get_cart_use_case,
    create_booking_use_case,
    cancel_booking_use_case,
    get_booking_use_case,
    list_bookings_use_case,
    admin_report_use_case,
    create_payment_order_use_case,
    confirm_payment_use_case,
    verify_payment_use_case,
    handle_payment_webhook_use_case,
    refund_booking_use_case,
    verify_ticket_use_case,
    cart_controller,
    role_auth,
]
