import structlog
from pydantic import ValidationError
from typing import Any

from ..core.locks import LockRegistry
from ..db.store import Store
from ..exceptions import ValidationException
from ..schemas import Cart, CartItem
from .product_service import ProductService


logger = structlog.get_logger(__name__)


class CartService:
    def __init__(self, store: Store, locks: LockRegistry):
        self.store = store
        self.locks = locks

    async def get_cart(self, user_id: str) -> Cart:
        """Get a user's cart or create an empty one if it doesn't exist"""
        async with self.locks.for_user(user_id):
            return await self.store.get_or_create_cart(user_id)

    async def add_item(self, user_id: str, item: CartItem) -> Cart:
        """Add an item to the cart, merging quantities with an existing line for the same product"""
        async with self.locks.for_user(user_id):
            cart = await self.store.get_or_create_cart(user_id)

            existing_item = next((i for i in cart.items if i.product_id == item.product_id), None)
            if existing_item:
                existing_item.quantity += item.quantity
            else:
                cart.items.append(item.model_copy())

            await self.store.save_cart(user_id, cart)

        logger.info("cart_item_added", user_id=user_id, product_id=item.product_id, quantity=item.quantity)
        return cart

    async def add_to_cart(self, user_id: str, product_id: Any, name: Any, unit_price: Any, quantity: Any) -> Cart:
        """Validate a loose add-to-cart payload and add it to the cart"""
        try:
            item = CartItem(product_id=product_id, name=name, unit_price=unit_price, quantity=quantity)
        except ValidationError as e:
            fields = ", ".join(".".join(str(part) for part in error["loc"]) for error in e.errors())
            raise ValidationException(f"Invalid payload: {fields}") from e

        return await self.add_item(user_id, item)

    async def add_product_to_cart(self, user_id: str, product_id: str, quantity: int, products: ProductService) -> Cart:
        """Add a catalog product using its catalog name and price"""
        product = products.get_product(product_id)
        return await self.add_to_cart(user_id, product.id, product.name, product.price, quantity)

    async def apply_discount_code(self, user_id: str, code: str) -> Cart:
        """Attach a discount code to the cart. The code is only checked at checkout."""
        async with self.locks.for_user(user_id):
            cart = await self.store.get_or_create_cart(user_id)
            cart.applied_discount_code = code
            await self.store.save_cart(user_id, cart)

        logger.info("discount_code_applied", user_id=user_id, code=code)
        return cart

    async def clear_cart(self, user_id: str) -> Cart:
        """Clear all items and the applied code from the cart"""
        async with self.locks.for_user(user_id):
            await self.store.clear_cart(user_id)
            return await self.store.get_or_create_cart(user_id)
