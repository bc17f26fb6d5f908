from fastapi import APIRouter, Depends
from typing import List

from ..core.dependencies import get_product_service
from ..schemas import Product
from ..services import ProductService

router = APIRouter()


@router.get("", response_model=List[Product])
async def list_products(products: ProductService = Depends(get_product_service)):
    """List the product catalog"""
    return products.list_products()


@router.get("/{product_id}", response_model=Product)
async def get_product(product_id: str, products: ProductService = Depends(get_product_service)):
    """Get a single product, 404 if it doesn't exist"""
    return products.get_product(product_id)
