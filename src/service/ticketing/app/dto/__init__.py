"""Application layer DTOs"""

from src.service.ticketing.app.dto.gateway_result import (
    CheckoutOrder,
    GatewayOrder,
    GatewayRefund,
)
from src.service.ticketing.app.dto.line_quote import LineQuote
from src.service.ticketing.app.dto.sync_cart_result import (
    GuestCartLine,
    SkippedCartLine,
    SyncCartResult,
)

__all__ = [
    'CheckoutOrder',
    'GatewayOrder',
    'GatewayRefund',
    'GuestCartLine',
    'LineQuote',
    'SkippedCartLine',
    'SyncCartResult',
]
