from pydantic import BaseModel
from typing import List

from .discount import DiscountCode


class StoreStats(BaseModel):
    """Schema for admin statistics, derived from every recorded order"""
    total_items_purchased: int = 0
    total_purchase_amount: float = 0.0
    total_discount_amount: float = 0.0
    discount_codes: List[DiscountCode] = []
