from uuid_utils.compat import uuid7

from src.platform.database.session_repo import SessionFactory
from src.platform.logging.loguru_io import Logger
from src.platform.types.utc_datetime import utc_now
from src.service.ticketing.app.interface.i_payment_log_repo import IPaymentLogRepo
from src.service.ticketing.domain.value_object.payment_log_entry import PaymentLogEntry
from src.service.ticketing.driven_adapter.model.payment_log_model import PaymentLogModel


class PaymentLogRepoImpl(IPaymentLogRepo):
    def __init__(self, session_factory: SessionFactory) -> None:
        self.session_factory = session_factory

    @Logger.io
    async def append(self, *, entry: PaymentLogEntry) -> None:
        async with self.session_factory() as session:
            session.add(
                PaymentLogModel(
                    id=uuid7(),
                    payment_order_id=entry.payment_order_id,
                    gateway_order_id=entry.gateway_order_id,
                    gateway_payment_id=entry.gateway_payment_id,
                    event=entry.event,
                    status=entry.status,
                    amount=entry.amount,
                    payload=entry.payload,
                    created_at=utc_now(),
                )
            )
            await session.commit()
