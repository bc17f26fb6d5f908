import asyncio
from datetime import datetime, timezone
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from storefront import create_app
from storefront.core.config import Settings
from storefront.core.locks import LockRegistry
from storefront.db import InMemoryStore
from storefront.schemas import CartItem, Order
from storefront.services import CartService, DiscountService, OrderService


class YieldingStore(InMemoryStore):
    """In-memory store that hands control back to the event loop on every call,
    so concurrently scheduled services actually interleave."""

    async def get_or_create_cart(self, user_id):
        await asyncio.sleep(0)
        return await super().get_or_create_cart(user_id)

    async def save_cart(self, user_id, cart):
        await asyncio.sleep(0)
        await super().save_cart(user_id, cart)

    async def record_order(self, order):
        await asyncio.sleep(0)
        return await super().record_order(order)

    async def current_order_count(self):
        await asyncio.sleep(0)
        return await super().current_order_count()

    async def find_discount_code(self, code):
        await asyncio.sleep(0)
        return await super().find_discount_code(code)

    async def mark_discount_code_used(self, code):
        await asyncio.sleep(0)
        await super().mark_discount_code_used(code)


@pytest.fixture
def settings():
    return Settings(_env_file=None, DATABASE_URL=None, NTH_ORDER_FOR_DISCOUNT=3, DISCOUNT_PERCENT=10.0)


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def locks():
    return LockRegistry()


@pytest.fixture
def discount_service(store, locks, settings):
    return DiscountService(store, locks, settings)


@pytest.fixture
def cart_service(store, locks):
    return CartService(store, locks)


@pytest.fixture
def order_service(store, locks, cart_service, discount_service):
    return OrderService(store, locks, cart_service, discount_service)


@pytest.fixture
def make_order():
    def _make_order(user_id="user-1", unit_price=10.0, quantity=1, discount_amount=0.0, discount_code=None):
        total_amount = unit_price * quantity
        return Order(
            id=f"order_{uuid4().hex}",
            user_id=user_id,
            items=[CartItem(product_id="p1", name="Widget", unit_price=unit_price, quantity=quantity)],
            total_amount=total_amount,
            discount_code=discount_code,
            discount_amount=discount_amount,
            final_amount=total_amount - discount_amount,
            created_at=datetime.now(timezone.utc),
        )

    return _make_order


@pytest.fixture
def place_order(cart_service, order_service):
    async def _place_order(user_id, unit_price=10.0, quantity=1, code=None):
        await cart_service.add_to_cart(user_id, "p1", "Widget", unit_price, quantity)
        return await order_service.checkout(user_id, code)

    return _place_order


@pytest.fixture
def client(settings):
    app = create_app(store=InMemoryStore(), settings=settings)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def yielding_store():
    return YieldingStore()
