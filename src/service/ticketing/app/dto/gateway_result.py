"""Payment gateway result DTOs."""

from typing import Any, Optional
from uuid import UUID

import attrs


@attrs.define(frozen=True)
class GatewayOrder:
    """Order created at the gateway; id is what the checkout widget is opened with."""

    id: str
    amount: int
    currency: str
    receipt: str
    status: str = 'created'
    raw: dict[str, Any] = attrs.field(factory=dict)


@attrs.define(frozen=True)
class GatewayRefund:
    id: str
    payment_id: str
    amount: int
    status: str
    raw: dict[str, Any] = attrs.field(factory=dict)
    speed: Optional[str] = None


@attrs.define(frozen=True)
class CheckoutOrder:
    """What the client needs to open the gateway checkout"""

    payment_order_id: UUID
    gateway_order_id: str
    amount: int
    currency: str
    key_id: str
    item_count: int
