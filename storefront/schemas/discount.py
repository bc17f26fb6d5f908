from pydantic import BaseModel, Field
from typing import Optional


class DiscountCode(BaseModel):
    """Schema for a single-use percentage discount code"""
    code: str
    discount_percent: float = Field(gt=0, le=100)
    is_used: bool = False

    class Config:
        from_attributes = True


class GenerateDiscountResult(BaseModel):
    """Schema for the manual discount generation trigger"""
    current_order_count: int
    issued: bool
    code: Optional[DiscountCode] = None
