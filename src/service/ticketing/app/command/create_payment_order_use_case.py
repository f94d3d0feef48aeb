from typing import Optional, Self

import attrs
from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.logging.loguru_io import Logger
from src.service.ticketing.app.command.release_expired_cart_items_use_case import (
    ReleaseExpiredCartItemsUseCase,
)
from src.service.ticketing.app.dto.gateway_result import CheckoutOrder
from src.service.ticketing.app.interface.i_payment_gateway import IPaymentGateway
from src.service.ticketing.app.interface.i_payment_log_repo import IPaymentLogRepo
from src.service.ticketing.domain.entity.payment_order_entity import PaymentOrder
from src.service.ticketing.domain.value_object.cart_owner import CartOwner
from src.service.ticketing.domain.value_object.payment_log_entry import PaymentLogEntry


class CreatePaymentOrderUseCase:
    """
    Checkout: snapshot the live cart into a gateway order

    Flow:
    1. Release the user's expired items and read what is left
    2. Freeze the items into an immutable snapshot with the server-side total
    3. Create the gateway order (no transaction held across the call)
    4. Store the order and link the cart items to it, which keeps them
       reserved while the payment is in flight
    """

    def __init__(
        self,
        *,
        uow: AbstractUnitOfWork,
        payment_gateway: IPaymentGateway,
        payment_log_repo: IPaymentLogRepo,
        release_expired: ReleaseExpiredCartItemsUseCase,
    ) -> None:
        self.uow = uow
        self.payment_gateway = payment_gateway
        self.payment_log_repo = payment_log_repo
        self.release_expired = release_expired

    @classmethod
    @inject
    def depends(
        cls,
        uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work]),
        payment_gateway: IPaymentGateway = Depends(Provide[Container.payment_gateway]),
        payment_log_repo: IPaymentLogRepo = Depends(Provide[Container.payment_log_repo]),
        release_expired: ReleaseExpiredCartItemsUseCase = Depends(
            Provide[Container.release_expired_cart_items_use_case]
        ),
    ) -> Self:
        return cls(
            uow=uow,
            payment_gateway=payment_gateway,
            payment_log_repo=payment_log_repo,
            release_expired=release_expired,
        )

    @Logger.io
    async def execute(
        self,
        *,
        user_id: str,
        visitor_name: str,
        visitor_email: str,
        visitor_phone: Optional[str] = None,
    ) -> CheckoutOrder:
        owner = CartOwner(user_id=user_id)
        async with self.uow:
            await self.release_expired.release_in(uow=self.uow, owner=owner)
            cart_items = await self.uow.cart_item_command_repo.list_by_owner(owner=owner)
            await self.uow.commit()

        order = PaymentOrder.create(
            user_id=user_id,
            cart_items=cart_items,
            visitor_name=visitor_name,
            visitor_email=visitor_email,
            visitor_phone=visitor_phone,
        )
        gateway_order = await self.payment_gateway.create_order(
            amount=order.amount,
            currency=order.currency,
            receipt=order.receipt,
            notes={'payment_order_id': str(order.id), 'user_id': user_id},
        )
        order = attrs.evolve(order, gateway_order_id=gateway_order.id)

        async with self.uow:
            await self.uow.payment_order_command_repo.create(order=order)
            await self.uow.cart_item_command_repo.attach_to_order(
                cart_item_ids=[item.id for item in cart_items], payment_order_id=order.id
            )
            await self.uow.commit()

        await self.payment_log_repo.append(
            entry=PaymentLogEntry(
                event='order.created',
                status=order.status.value,
                gateway_order_id=gateway_order.id,
                payment_order_id=order.id,
                amount=order.amount,
                payload=gateway_order.raw,
            )
        )
        Logger.base.info(
            f'💳 [CHECKOUT] Order {gateway_order.id} for user {user_id}: '
            f'{len(cart_items)} item(s), {order.amount} {order.currency}'
        )
        return CheckoutOrder(
            payment_order_id=order.id,
            gateway_order_id=gateway_order.id,
            amount=order.amount,
            currency=order.currency,
            key_id=self.payment_gateway.key_id,
            item_count=len(cart_items),
        )
