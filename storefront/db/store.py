"""
Storage protocol shared by the in-memory and SQL stores.

The store is the single source of truth for carts (by user id), orders
(append-only), discount codes (append-only, keyed by code) and the
completed-order counter. Every method hands out copies, so callers only
change stored state by passing objects back in.
"""

from typing import Iterable, List, Optional, Protocol

from ..schemas import Cart, DiscountCode, Order, StoreStats


class Store(Protocol):

    async def get_or_create_cart(self, user_id: str) -> Cart:
        """Return the user's cart, creating an empty one if needed."""
        ...

    async def save_cart(self, user_id: str, cart: Cart) -> None:
        ...

    async def clear_cart(self, user_id: str) -> None:
        """Reset the cart to no items and no applied discount code."""
        ...

    async def record_order(self, order: Order) -> int:
        """Append the order, advance the counter and return the new count."""
        ...

    async def current_order_count(self) -> int:
        ...

    async def complete_checkout(self, user_id: str, order: Order) -> int:
        """
        Commit a checkout as one unit: record the order, mark its discount
        code used and clear the user's cart. Either every write lands or none
        does. Returns the new order count.
        """
        ...

    async def list_orders(self, user_id: Optional[str] = None) -> List[Order]:
        ...

    async def add_discount_code(self, code: DiscountCode) -> None:
        ...

    async def find_discount_code(self, code: str) -> Optional[DiscountCode]:
        ...

    async def mark_discount_code_used(self, code: str) -> None:
        """Flag the code as used. Unknown codes are ignored."""
        ...

    async def compute_stats(self) -> StoreStats:
        ...


def fold_stats(orders: Iterable[Order], discount_codes: Iterable[DiscountCode]) -> StoreStats:
    """
    Aggregate statistics over every recorded order.

    This re-scans all orders on each call; there is no incremental aggregation.
    """
    stats = StoreStats(discount_codes=[code.model_copy() for code in discount_codes])

    for order in orders:
        stats.total_items_purchased += sum(item.quantity for item in order.items)
        stats.total_purchase_amount += order.total_amount
        stats.total_discount_amount += order.discount_amount

    return stats
