from pydantic import BaseModel, Field


class Product(BaseModel):
    """Schema for catalog products"""
    id: str
    name: str
    price: float = Field(ge=0, allow_inf_nan=False)
    description: str = ""
