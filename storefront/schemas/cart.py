from pydantic import BaseModel, Field
from typing import Optional, List


class CartItem(BaseModel):
    """Schema for a single cart line, keyed by product_id within a cart"""
    product_id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    unit_price: float = Field(ge=0, strict=True, allow_inf_nan=False)
    quantity: int = Field(gt=0, strict=True)

    class Config:
        from_attributes = True


class Cart(BaseModel):
    """Schema for a user's cart"""
    items: List[CartItem] = []
    applied_discount_code: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return not self.items


class AddToCartRequest(BaseModel):
    """Schema for adding a catalog product to the cart"""
    quantity: int = Field(gt=0, default=1)


class ApplyDiscountRequest(BaseModel):
    """Schema for attaching a discount code to the cart"""
    code: str = Field(min_length=1)
