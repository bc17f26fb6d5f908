from .cart import Cart, CartItem, AddToCartRequest, ApplyDiscountRequest
from .discount import DiscountCode, GenerateDiscountResult
from .order import Order, CheckoutRequest, CheckoutResult
from .product import Product
from .stats import StoreStats


__all__ = [
    "AddToCartRequest",
    "ApplyDiscountRequest",
    "Cart",
    "CartItem",
    "CheckoutRequest",
    "CheckoutResult",
    "DiscountCode",
    "GenerateDiscountResult",
    "Order",
    "Product",
    "StoreStats",
]
