from datetime import datetime, timezone
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.future import select
from typing import List, Optional

from .store import fold_stats
from .. import models
from ..schemas import Cart, CartItem, DiscountCode, Order, StoreStats


COUNTER_ID = 1


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    # SQLite hands timestamps back without tzinfo; they were written as UTC
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class SqlStore:
    """
    Store backed by SQLAlchemy. Every method runs in its own session and
    commits once, so each operation is a single transaction.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self.session_factory = session_factory

    # Carts

    async def _load_cart(self, user_id: str, db: AsyncSession) -> Optional[models.Cart]:
        query = select(models.Cart).where(models.Cart.user_id == user_id)
        result = await db.execute(query)
        return result.scalars().first()

    async def _load_or_add_cart(self, user_id: str, db: AsyncSession) -> models.Cart:
        cart = await self._load_cart(user_id, db)
        if not cart:
            cart = models.Cart(user_id=user_id, cart_items=[])
            db.add(cart)
        return cart

    @staticmethod
    def _to_cart(cart: models.Cart) -> Cart:
        return Cart(
            items=[CartItem.model_validate(item) for item in cart.cart_items],
            applied_discount_code=cart.applied_discount_code,
        )

    async def get_or_create_cart(self, user_id: str) -> Cart:
        async with self.session_factory() as db:
            cart = await self._load_or_add_cart(user_id, db)
            await db.commit()
            return self._to_cart(cart)

    async def _write_cart(self, user_id: str, cart: Cart, db: AsyncSession) -> None:
        row = await self._load_or_add_cart(user_id, db)
        row.applied_discount_code = cart.applied_discount_code
        row.cart_items = [
            models.CartItem(
                position=position,
                product_id=item.product_id,
                name=item.name,
                unit_price=item.unit_price,
                quantity=item.quantity,
            )
            for position, item in enumerate(cart.items)
        ]

    async def save_cart(self, user_id: str, cart: Cart) -> None:
        async with self.session_factory() as db:
            await self._write_cart(user_id, cart, db)
            await db.commit()

    async def clear_cart(self, user_id: str) -> None:
        await self.save_cart(user_id, Cart())

    # Orders

    @staticmethod
    def _to_order(order: models.Order) -> Order:
        return Order(
            id=order.id,
            user_id=order.user_id,
            items=[CartItem.model_validate(item) for item in order.items],
            total_amount=order.total_amount,
            discount_code=order.discount_code,
            discount_amount=order.discount_amount,
            final_amount=order.final_amount,
            created_at=_as_utc(order.created_at),
        )

    async def _load_counter(self, db: AsyncSession) -> models.OrderCounter:
        counter = await db.get(models.OrderCounter, COUNTER_ID)
        if not counter:
            counter = models.OrderCounter(id=COUNTER_ID, value=0)
            db.add(counter)
        return counter

    async def _add_order(self, order: Order, db: AsyncSession) -> int:
        counter = await self._load_counter(db)
        counter.value += 1

        db.add(models.Order(
            id=order.id,
            sequence=counter.value,
            user_id=order.user_id,
            total_amount=order.total_amount,
            discount_code=order.discount_code,
            discount_amount=order.discount_amount,
            final_amount=order.final_amount,
            created_at=order.created_at,
            items=[
                models.OrderItem(
                    position=position,
                    product_id=item.product_id,
                    name=item.name,
                    unit_price=item.unit_price,
                    quantity=item.quantity,
                )
                for position, item in enumerate(order.items)
            ],
        ))

        return counter.value

    async def record_order(self, order: Order) -> int:
        async with self.session_factory() as db:
            order_count = await self._add_order(order, db)
            await db.commit()
            return order_count

    async def complete_checkout(self, user_id: str, order: Order) -> int:
        async with self.session_factory() as db:
            order_count = await self._add_order(order, db)
            if order.discount_code:
                await self._mark_used(order.discount_code, db)
            await self._write_cart(user_id, Cart(), db)
            await db.commit()
            return order_count

    async def current_order_count(self) -> int:
        async with self.session_factory() as db:
            counter = await db.get(models.OrderCounter, COUNTER_ID)
            return counter.value if counter else 0

    async def _load_orders(self, db: AsyncSession, user_id: Optional[str] = None) -> List[models.Order]:
        query = select(models.Order).order_by(models.Order.sequence)
        if user_id is not None:
            query = query.where(models.Order.user_id == user_id)
        result = await db.execute(query)
        return result.scalars().all()

    async def list_orders(self, user_id: Optional[str] = None) -> List[Order]:
        async with self.session_factory() as db:
            return [self._to_order(order) for order in await self._load_orders(db, user_id)]

    # Discount codes

    async def _load_discount_code(self, code: str, db: AsyncSession) -> Optional[models.DiscountCode]:
        query = select(models.DiscountCode).where(models.DiscountCode.code == code)
        result = await db.execute(query)
        return result.scalars().first()

    async def add_discount_code(self, code: DiscountCode) -> None:
        async with self.session_factory() as db:
            if await self._load_discount_code(code.code, db):
                return

            db.add(models.DiscountCode(
                code=code.code,
                discount_percent=code.discount_percent,
                is_used=code.is_used,
            ))
            await db.commit()

    async def find_discount_code(self, code: str) -> Optional[DiscountCode]:
        async with self.session_factory() as db:
            found = await self._load_discount_code(code, db)
            return DiscountCode.model_validate(found) if found else None

    async def _mark_used(self, code: str, db: AsyncSession) -> None:
        found = await self._load_discount_code(code, db)
        if found:
            found.is_used = True

    async def mark_discount_code_used(self, code: str) -> None:
        async with self.session_factory() as db:
            await self._mark_used(code, db)
            await db.commit()

    async def compute_stats(self) -> StoreStats:
        async with self.session_factory() as db:
            orders = [self._to_order(order) for order in await self._load_orders(db)]

            result = await db.execute(select(models.DiscountCode).order_by(models.DiscountCode.id))
            codes = [DiscountCode.model_validate(code) for code in result.scalars().all()]

        return fold_stats(orders, codes)
