from typing import Dict, List, Optional

from .store import fold_stats
from ..schemas import Cart, DiscountCode, Order, StoreStats


class InMemoryStore:
    """
    Process-local store. State lives on the instance and is lost on restart.
    """

    def __init__(self):
        self._carts: Dict[str, Cart] = {}
        self._orders: List[Order] = []
        self._discount_codes: Dict[str, DiscountCode] = {}
        self._order_count = 0

    async def get_or_create_cart(self, user_id: str) -> Cart:
        cart = self._carts.get(user_id)
        if cart is None:
            cart = Cart()
            self._carts[user_id] = cart
        return cart.model_copy(deep=True)

    async def save_cart(self, user_id: str, cart: Cart) -> None:
        self._carts[user_id] = cart.model_copy(deep=True)

    async def clear_cart(self, user_id: str) -> None:
        self._carts[user_id] = Cart()

    async def record_order(self, order: Order) -> int:
        self._orders.append(order.model_copy(deep=True))
        self._order_count += 1
        return self._order_count

    async def current_order_count(self) -> int:
        return self._order_count

    async def complete_checkout(self, user_id: str, order: Order) -> int:
        # record first: the remaining steps cannot fail
        order_count = await self.record_order(order)
        if order.discount_code:
            await self.mark_discount_code_used(order.discount_code)
        await self.clear_cart(user_id)
        return order_count


    async def list_orders(self, user_id: Optional[str] = None) -> List[Order]:
        return [
            order.model_copy(deep=True)
            for order in self._orders
            if user_id is None or order.user_id == user_id
        ]

    async def add_discount_code(self, code: DiscountCode) -> None:
        # codes are append-only; insertion order doubles as issuance order
        self._discount_codes.setdefault(code.code, code.model_copy())

    async def find_discount_code(self, code: str) -> Optional[DiscountCode]:
        found = self._discount_codes.get(code)
        return found.model_copy() if found else None

    async def mark_discount_code_used(self, code: str) -> None:
        found = self._discount_codes.get(code)
        if found:
            found.is_used = True

    async def compute_stats(self) -> StoreStats:
        return fold_stats(self._orders, self._discount_codes.values())
