from abc import ABC, abstractmethod
from typing import Optional

from src.service.ticketing.domain.entity.payment_order_entity import PaymentOrder
from src.service.ticketing.domain.enum.payment_order_status import PaymentOrderStatus


class IPaymentOrderCommandRepo(ABC):
    @abstractmethod
    async def create(self, *, order: PaymentOrder) -> PaymentOrder:
        pass

    @abstractmethod
    async def get_by_gateway_order_id(self, *, gateway_order_id: str) -> Optional[PaymentOrder]:
        pass

    @abstractmethod
    async def claim_paid(self, *, gateway_order_id: str, gateway_payment_id: str) -> bool:
        """
        Conditional status update created|attempted|failed -> paid

        Returns:
            True for the single caller that moved the order to paid
        """
        pass

    @abstractmethod
    async def mark_status(
        self,
        *,
        gateway_order_id: str,
        status: PaymentOrderStatus,
        from_statuses: tuple[PaymentOrderStatus, ...],
        gateway_payment_id: Optional[str] = None,
    ) -> bool:
        pass

    @abstractmethod
    async def mark_refunded_by_payment_id(self, *, gateway_payment_id: str) -> bool:
        pass
