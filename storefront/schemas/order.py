from pydantic import BaseModel
from typing import Optional, List
from datetime import datetime

from .cart import CartItem
from .discount import DiscountCode


class Order(BaseModel):
    """Schema for a completed order. Orders never change once recorded."""
    id: str
    user_id: str
    items: List[CartItem]
    total_amount: float
    discount_code: Optional[str] = None
    discount_amount: float = 0.0
    final_amount: float
    created_at: datetime

    class Config:
        frozen = True
        from_attributes = True


class CheckoutRequest(BaseModel):
    """Schema for checkout requests"""
    code: Optional[str] = None


class CheckoutResult(BaseModel):
    """Schema for checkout responses"""
    order: Order
    next_code: Optional[DiscountCode] = None
