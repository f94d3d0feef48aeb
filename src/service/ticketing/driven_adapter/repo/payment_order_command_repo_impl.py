from typing import Optional

from sqlalchemy import select, update

from src.platform.database.session_repo import SessionRepo
from src.platform.logging.loguru_io import Logger
from src.platform.types.utc_datetime import utc_now
from src.service.ticketing.app.interface.i_payment_order_command_repo import (
    IPaymentOrderCommandRepo,
)
from src.service.ticketing.domain.entity.payment_order_entity import PaymentOrder
from src.service.ticketing.domain.enum.payment_order_status import PaymentOrderStatus
from src.service.ticketing.driven_adapter.model.payment_order_model import PaymentOrderModel
from src.service.ticketing.driven_adapter.repo.ticketing_mapper import (
    payment_order_to_entity,
    payment_order_to_model,
)


class PaymentOrderCommandRepoImpl(SessionRepo, IPaymentOrderCommandRepo):
    """Status transitions are conditional updates; rows affected tells who won."""

    @Logger.io
    async def create(self, *, order: PaymentOrder) -> PaymentOrder:
        async with self._get_session() as session:
            session.add(payment_order_to_model(order))
            await session.flush()
            return order

    @Logger.io
    async def get_by_gateway_order_id(self, *, gateway_order_id: str) -> Optional[PaymentOrder]:
        async with self._get_session() as session:
            result = await session.execute(
                select(PaymentOrderModel)
                .where(PaymentOrderModel.gateway_order_id == gateway_order_id)
                .execution_options(populate_existing=True)
            )
            model = result.scalar_one_or_none()
            return payment_order_to_entity(model) if model else None

    @Logger.io
    async def claim_paid(self, *, gateway_order_id: str, gateway_payment_id: str) -> bool:
        now = utc_now()
        stmt = (
            update(PaymentOrderModel)
            .where(
                PaymentOrderModel.gateway_order_id == gateway_order_id,
                PaymentOrderModel.status.in_([s.value for s in PaymentOrderStatus.claimable()]),
            )
            .values(
                status=PaymentOrderStatus.PAID.value,
                gateway_payment_id=gateway_payment_id,
                paid_at=now,
                updated_at=now,
            )
            .execution_options(synchronize_session=False)
        )
        async with self._get_session() as session:
            result = await session.execute(stmt)
            return result.rowcount == 1  # type: ignore[attr-defined]

    @Logger.io
    async def mark_status(
        self,
        *,
        gateway_order_id: str,
        status: PaymentOrderStatus,
        from_statuses: tuple[PaymentOrderStatus, ...],
        gateway_payment_id: Optional[str] = None,
    ) -> bool:
        values: dict = {'status': status.value, 'updated_at': utc_now()}
        if gateway_payment_id:
            values['gateway_payment_id'] = gateway_payment_id
        stmt = (
            update(PaymentOrderModel)
            .where(
                PaymentOrderModel.gateway_order_id == gateway_order_id,
                PaymentOrderModel.status.in_([s.value for s in from_statuses]),
            )
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        async with self._get_session() as session:
            result = await session.execute(stmt)
            return result.rowcount == 1  # type: ignore[attr-defined]

    @Logger.io
    async def mark_refunded_by_payment_id(self, *, gateway_payment_id: str) -> bool:
        stmt = (
            update(PaymentOrderModel)
            .where(
                PaymentOrderModel.gateway_payment_id == gateway_payment_id,
                PaymentOrderModel.status == PaymentOrderStatus.PAID.value,
            )
            .values(status=PaymentOrderStatus.REFUNDED.value, updated_at=utc_now())
            .execution_options(synchronize_session=False)
        )
        async with self._get_session() as session:
            result = await session.execute(stmt)
            return (result.rowcount or 0) > 0  # type: ignore[attr-defined]
