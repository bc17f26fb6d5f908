from fastapi import Depends, Header, Request
from typing import Optional

from ..core.config import Settings
from ..core.locks import LockRegistry
from ..db.store import Store
from ..services import CartService, DiscountService, OrderService, ProductService


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_store(request: Request) -> Store:
    """
    The store created by ``create_app``. It lives as long as the app does and
    is shared by every request.
    """
    return request.app.state.store


def get_locks(request: Request) -> LockRegistry:
    return request.app.state.locks


def get_product_service(request: Request) -> ProductService:
    return request.app.state.products


def get_user_id(
    x_user_id: Optional[str] = Header(None),
    settings: Settings = Depends(get_settings),
) -> str:
    """
    Identify the caller by the x-user-id header.

    Authentication happens upstream; requests without the header act on the
    default demo user's cart.
    """
    return x_user_id or settings.DEFAULT_USER_ID


def get_cart_service(
    store: Store = Depends(get_store),
    locks: LockRegistry = Depends(get_locks),
) -> CartService:
    return CartService(store, locks)


def get_discount_service(
    store: Store = Depends(get_store),
    locks: LockRegistry = Depends(get_locks),
    settings: Settings = Depends(get_settings),
) -> DiscountService:
    return DiscountService(store, locks, settings)


def get_order_service(
    store: Store = Depends(get_store),
    locks: LockRegistry = Depends(get_locks),
    carts: CartService = Depends(get_cart_service),
    discounts: DiscountService = Depends(get_discount_service),
) -> OrderService:
    return OrderService(store, locks, carts, discounts)
