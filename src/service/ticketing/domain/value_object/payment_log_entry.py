from typing import Any, Optional
from uuid import UUID

import attrs


@attrs.define(frozen=True)
class PaymentLogEntry:
    """One gateway interaction, appended to payment_log"""

    event: str
    status: str
    gateway_order_id: Optional[str] = None
    gateway_payment_id: Optional[str] = None
    payment_order_id: Optional[UUID] = None
    amount: Optional[int] = None
    payload: dict[str, Any] = attrs.field(factory=dict)
