from abc import ABC, abstractmethod
from typing import Any, Optional

from src.service.ticketing.app.dto.gateway_result import GatewayOrder, GatewayRefund


class IPaymentGateway(ABC):
    @property
    @abstractmethod
    def key_id(self) -> str:
        """Public key handed to the checkout widget"""
        pass

    @abstractmethod
    async def create_order(
        self,
        *,
        amount: int,
        currency: str,
        receipt: str,
        notes: Optional[dict[str, Any]] = None,
    ) -> GatewayOrder:
        pass

    @abstractmethod
    async def refund(
        self,
        *,
        gateway_payment_id: str,
        amount: Optional[int] = None,
        notes: Optional[dict[str, Any]] = None,
    ) -> GatewayRefund:
        pass

    @abstractmethod
    def verify_payment_signature(
        self, *, gateway_order_id: str, gateway_payment_id: str, signature: str
    ) -> bool:
        pass

    @abstractmethod
    def verify_webhook_signature(self, *, body: bytes, signature: str) -> bool:
        pass
