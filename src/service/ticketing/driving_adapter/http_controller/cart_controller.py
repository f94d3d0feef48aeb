from typing import Optional
from uuid import UUID

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, Header, Query, status

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.logging.loguru_io import Logger
from src.service.ticketing.app.command.add_to_cart_use_case import AddToCartUseCase
from src.service.ticketing.app.command.release_expired_cart_items_use_case import (
    ReleaseExpiredCartItemsUseCase,
)
from src.service.ticketing.app.command.remove_from_cart_use_case import RemoveFromCartUseCase
from src.service.ticketing.app.command.sync_cart_use_case import SyncCartUseCase
from src.service.ticketing.app.query.get_cart_use_case import GetCartUseCase
from src.service.ticketing.domain.entity.cart_item_entity import new_guest_cart_id
from src.service.ticketing.domain.entity.user_profile_entity import UserProfile
from src.service.ticketing.domain.value_object.cart_owner import CartOwner
from src.service.ticketing.driving_adapter.http_controller.auth.role_auth import (
    get_current_user,
    get_optional_user,
    require_admin,
)
from src.service.ticketing.driving_adapter.http_controller.schema.cart_schema import (
    CartAddRequest,
    CartAddResponse,
    CartItemResponse,
    CartRemoveResponse,
    CartResponse,
    CartSyncRequest,
    CartSyncResponse,
    CleanupExpiredResponse,
)


router = APIRouter()


async def get_guest_cart_id(
    x_cart_id: Optional[str] = Header(default=None, alias='X-Cart-Id'),
    cart_id: Optional[str] = Query(default=None, alias='cartId'),
) -> Optional[str]:
    """Guests identify their cart with the X-Cart-Id header or the cartId query parameter"""
    return x_cart_id or cart_id


@router.get('', status_code=status.HTTP_200_OK)
@Logger.io
async def get_cart(
    current_user: Optional[UserProfile] = Depends(get_optional_user),
    guest_cart_id: Optional[str] = Depends(get_guest_cart_id),
    use_case: GetCartUseCase = Depends(GetCartUseCase.depends),
) -> CartResponse:
    if current_user is None and not guest_cart_id:
        return CartResponse.from_entities([])

    owner = CartOwner.resolve(
        user_id=current_user.id if current_user else None, guest_cart_id=guest_cart_id
    )
    items = await use_case.execute(owner=owner)
    return CartResponse.from_entities(items, cart_id=owner.guest_cart_id)


@router.post('', status_code=status.HTTP_201_CREATED)
@Logger.io
async def add_to_cart(
    request: CartAddRequest,
    current_user: Optional[UserProfile] = Depends(get_optional_user),
    guest_cart_id: Optional[str] = Depends(get_guest_cart_id),
    use_case: AddToCartUseCase = Depends(AddToCartUseCase.depends),
) -> CartAddResponse:
    """Signed-in visitors add to their own cart; a guest without a cart id is issued one"""
    if current_user is None:
        guest_cart_id = guest_cart_id or request.cart_id or new_guest_cart_id()
    owner = CartOwner.resolve(
        user_id=current_user.id if current_user else None, guest_cart_id=guest_cart_id
    )
    cart_item = await use_case.execute(
        owner=owner,
        time_slot_id=request.time_slot_id,
        booking_date=request.booking_date,
        counts=request.tickets.to_value(),
        exhibition_id=request.exhibition_id,
        show_id=request.show_id,
    )
    return CartAddResponse(
        cart_id=owner.guest_cart_id, cart_item=CartItemResponse.from_entity(cart_item)
    )


@router.post('/add', status_code=status.HTTP_201_CREATED)
@Logger.io
async def add_to_user_cart(
    request: CartAddRequest,
    current_user: UserProfile = Depends(get_current_user),
    use_case: AddToCartUseCase = Depends(AddToCartUseCase.depends),
) -> CartAddResponse:
    cart_item = await use_case.execute(
        owner=CartOwner(user_id=current_user.id),
        time_slot_id=request.time_slot_id,
        booking_date=request.booking_date,
        counts=request.tickets.to_value(),
        exhibition_id=request.exhibition_id,
        show_id=request.show_id,
    )
    return CartAddResponse(cart_item=CartItemResponse.from_entity(cart_item))


@router.delete('', status_code=status.HTTP_200_OK)
@Logger.io
async def remove_from_cart(
    item_id: Optional[UUID] = Query(default=None, alias='itemId'),
    current_user: Optional[UserProfile] = Depends(get_optional_user),
    guest_cart_id: Optional[str] = Depends(get_guest_cart_id),
    use_case: RemoveFromCartUseCase = Depends(RemoveFromCartUseCase.depends),
) -> CartRemoveResponse:
    """Removes one item, or clears the cart when itemId is omitted"""
    owner = CartOwner.resolve(
        user_id=current_user.id if current_user else None, guest_cart_id=guest_cart_id
    )
    removed = await use_case.execute(owner=owner, cart_item_id=item_id)
    return CartRemoveResponse(removed_count=removed)


@router.post('/sync', status_code=status.HTTP_200_OK)
@Logger.io
async def sync_cart(
    request: CartSyncRequest,
    current_user: UserProfile = Depends(get_current_user),
    guest_cart_id: Optional[str] = Depends(get_guest_cart_id),
    use_case: SyncCartUseCase = Depends(SyncCartUseCase.depends),
) -> CartSyncResponse:
    result = await use_case.execute(
        user_id=current_user.id,
        guest_cart_id=request.guest_cart_id or guest_cart_id,
        lines=[line.to_dto() for line in request.items],
    )
    return CartSyncResponse.from_value(result)


@router.post('/cleanup-expired', status_code=status.HTTP_200_OK)
@Logger.io
@inject
async def cleanup_expired_cart_items(
    _admin: UserProfile = Depends(require_admin),
    uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work]),
    release_expired: ReleaseExpiredCartItemsUseCase = Depends(
        Provide[Container.release_expired_cart_items_use_case]
    ),
) -> CleanupExpiredResponse:
    cleaned = await release_expired.execute(uow=uow, trigger='admin')
    return CleanupExpiredResponse(cleaned_count=cleaned)
