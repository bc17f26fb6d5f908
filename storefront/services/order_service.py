import uuid
import structlog
from datetime import datetime, timezone
from typing import List, Optional

from ..core.locks import LockRegistry
from ..db.store import Store
from ..exceptions import EmptyCartException, InvalidDiscountCodeException
from ..schemas import Cart, CheckoutResult, GenerateDiscountResult, Order, StoreStats
from .cart_service import CartService
from .discount_service import DiscountService


logger = structlog.get_logger(__name__)


def calculate_cart_total(cart: Cart) -> float:
    """Sum of unit price times quantity over every line, before discount"""
    return sum(item.unit_price * item.quantity for item in cart.items)


class OrderService:
    def __init__(self, store: Store, locks: LockRegistry, carts: CartService, discounts: DiscountService):
        self.store = store
        self.locks = locks
        self.carts = carts
        self.discounts = discounts

    async def apply_discount_code(self, user_id: str, code: str) -> Cart:
        """Attach a code to the cart after checking it exists and is unused"""
        if not await self.discounts.validate(code):
            raise InvalidDiscountCodeException()

        return await self.carts.apply_discount_code(user_id, code)

    async def checkout(self, user_id: str, code: Optional[str] = None) -> CheckoutResult:
        """
        Turn the user's cart into an order.

        Process:
        1. Reject an empty cart
        2. Calculate the total before discount
        3. Validate the applied discount code (``code`` overrides the one on the cart)
        4. Record the order, consume the code and clear the cart in one store write
        5. Issue the next discount code if this order hit the Nth-order boundary

        Every check happens before the first write, so a rejected checkout
        leaves the cart, the orders and the counter untouched. A store failure
        during the final write leaves them untouched as well.
        """
        async with self.locks.for_user(user_id):
            cart = await self.store.get_or_create_cart(user_id)

            if cart.is_empty:
                logger.warning("checkout_rejected", user_id=user_id, reason="empty_cart")
                raise EmptyCartException()

            applied_code = code or cart.applied_discount_code
            total_amount = calculate_cart_total(cart)

            async with self.locks.ledger:
                discount_code = None
                discount_amount = 0.0

                if applied_code:
                    valid_code = await self.discounts.validate(applied_code)
                    if not valid_code:
                        logger.warning("checkout_rejected", user_id=user_id, reason="invalid_discount_code", code=applied_code)
                        raise InvalidDiscountCodeException()

                    discount_code = valid_code.code
                    discount_amount = total_amount * valid_code.discount_percent / 100

                order = Order(
                    id=f"order_{uuid.uuid4().hex}",
                    user_id=user_id,
                    items=[item.model_copy() for item in cart.items],
                    total_amount=total_amount,
                    discount_code=discount_code,
                    discount_amount=discount_amount,
                    final_amount=total_amount - discount_amount,
                    created_at=datetime.now(timezone.utc),
                )

                order_count = await self.store.complete_checkout(user_id, order)

                next_code = await self.discounts.issue_if_due(order_count)

        logger.info(
            "checkout_completed",
            user_id=user_id,
            order_id=order.id,
            order_count=order_count,
            final_amount=order.final_amount,
            discount_code=discount_code,
        )
        return CheckoutResult(order=order, next_code=next_code)

    async def list_orders(self, user_id: Optional[str] = None) -> List[Order]:
        return await self.store.list_orders(user_id)

    async def get_stats(self) -> StoreStats:
        return await self.store.compute_stats()

    async def generate_discount_if_due(self) -> GenerateDiscountResult:
        """Manual trigger for the Nth-order rule"""
        async with self.locks.ledger:
            order_count = await self.store.current_order_count()
            code = await self.discounts.issue_if_due(order_count)

        return GenerateDiscountResult(current_order_count=order_count, issued=code is not None, code=code)
