from fastapi import APIRouter, Depends
from typing import List, Optional

from ..core.dependencies import get_order_service, get_user_id
from ..schemas import CheckoutRequest, CheckoutResult, Order
from ..services import OrderService

router = APIRouter()


@router.post("/checkout", response_model=CheckoutResult)
async def checkout(
    payload: Optional[CheckoutRequest] = None,
    user_id: str = Depends(get_user_id),
    order_service: OrderService = Depends(get_order_service)
):
    """
    **Checkout**

    Turn the current user's cart into an order.

    **Request Body (optional):**
    - **code**: Discount code to apply to this order

    **Returns:**
    - **order**: The recorded order with totals and discount
    - **next_code**: Discount code generated by this order, if it was an Nth order

    Returns 400 when the cart is empty or the discount code is invalid or already used.
    """
    code = payload.code if payload else None
    return await order_service.checkout(user_id, code)


@router.get("/orders", response_model=List[Order])
async def get_user_orders(
    user_id: str = Depends(get_user_id),
    order_service: OrderService = Depends(get_order_service)
):
    """List the current user's orders, oldest first"""
    return await order_service.list_orders(user_id)
