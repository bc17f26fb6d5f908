from .cart_service import CartService
from .discount_service import DiscountService
from .order_service import OrderService
from .product_service import ProductService


__all__ = [
    "CartService",
    "DiscountService",
    "OrderService",
    "ProductService",
]
