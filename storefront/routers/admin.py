from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from typing import List

from ..core.dependencies import get_order_service
from ..schemas import GenerateDiscountResult, Order, StoreStats
from ..services import OrderService

router = APIRouter()


@router.get("/stats", response_model=StoreStats)
async def get_stats(order_service: OrderService = Depends(get_order_service)):
    """
    **Store Statistics**

    - **total_items_purchased**: Units sold across all orders
    - **total_purchase_amount**: Sum of order totals before discount
    - **total_discount_amount**: Sum of discounts given
    - **discount_codes**: Every generated code and whether it was used
    """
    return await order_service.get_stats()


@router.post("/discount/generate", response_model=GenerateDiscountResult)
async def generate_discount_code(order_service: OrderService = Depends(get_order_service)):
    """
    Generate the discount code for the current order count.

    A code is due after every Nth order (3, 6, 9, ...). Returns 400 with the
    current order count when no code is due yet.
    """
    result = await order_service.generate_discount_if_due()
    if result.issued:
        return result

    return JSONResponse(
        content={**result.model_dump(mode="json"), "error": "No discount code due yet"},
        status_code=status.HTTP_400_BAD_REQUEST
    )


@router.get("/orders", response_model=List[Order])
async def get_all_orders(order_service: OrderService = Depends(get_order_service)):
    """List every recorded order, oldest first"""
    return await order_service.list_orders()
