from .cart import Cart
from .cart_item import CartItem
from .discount_code import DiscountCode
from .order import Order
from .order_item import OrderItem
from .order_counter import OrderCounter


__all__ = [
    "Cart",
    "CartItem",
    "DiscountCode",
    "Order",
    "OrderItem",
    "OrderCounter",
]
