from abc import ABC, abstractmethod

from src.service.ticketing.domain.value_object.payment_log_entry import PaymentLogEntry


class IPaymentLogRepo(ABC):
    """Append-only log on its own session: entries survive a rolled-back unit of work."""

    @abstractmethod
    async def append(self, *, entry: PaymentLogEntry) -> None:
        pass
