from fastapi import APIRouter, Body, Depends, Query
from typing import Any, Dict

from ..core.dependencies import get_cart_service, get_order_service, get_product_service, get_user_id
from ..schemas import ApplyDiscountRequest, Cart
from ..services import CartService, OrderService, ProductService

router = APIRouter()


@router.get("", response_model=Cart)
async def get_cart(
    user_id: str = Depends(get_user_id),
    cart_service: CartService = Depends(get_cart_service)
):
    """Get current user's cart"""
    return await cart_service.get_cart(user_id)


@router.post("/add", response_model=Cart)
async def add_to_cart(
    payload: Dict[str, Any] = Body(...),
    user_id: str = Depends(get_user_id),
    cart_service: CartService = Depends(get_cart_service)
):
    """
    **Add Item To Cart**

    **Request Body:**
    - **product_id**: Product identifier
    - **name**: Product name
    - **unit_price**: Price per unit (>= 0)
    - **quantity**: Number of units (> 0)

    Adding a product already in the cart increases its quantity.
    """
    return await cart_service.add_to_cart(
        user_id,
        product_id=payload.get("product_id"),
        name=payload.get("name"),
        unit_price=payload.get("unit_price"),
        quantity=payload.get("quantity"),
    )


@router.post("/add/{product_id}", response_model=Cart)
async def add_product_to_cart(
    product_id: str,
    quantity: int = Query(1, ge=1),
    user_id: str = Depends(get_user_id),
    cart_service: CartService = Depends(get_cart_service),
    products: ProductService = Depends(get_product_service)
):
    """Add a catalog product to the cart"""
    return await cart_service.add_product_to_cart(user_id, product_id, quantity, products)


@router.post("/apply-discount", response_model=Cart)
async def apply_discount_code(
    payload: ApplyDiscountRequest,
    user_id: str = Depends(get_user_id),
    order_service: OrderService = Depends(get_order_service)
):
    """Apply a discount code to the cart. Unknown or used codes are rejected."""
    return await order_service.apply_discount_code(user_id, payload.code)


@router.delete("", response_model=Cart)
async def clear_cart(
    user_id: str = Depends(get_user_id),
    cart_service: CartService = Depends(get_cart_service)
):
    """Clear all items from cart"""
    return await cart_service.clear_cart(user_id)
