from typing import Dict, List, Optional

from ..exceptions import NotFoundException
from ..schemas import Product


DEFAULT_CATALOG = [
    Product(id="p1", name="Wireless Headphones", price=120, description="Comfortable over-ear wireless headphones."),
    Product(id="p2", name="Mechanical Keyboard", price=90, description="Compact mechanical keyboard with RGB."),
    Product(id="p3", name="4K Monitor", price=400, description="27-inch 4K IPS display."),
]


class ProductService:
    """Read-only product catalog."""

    def __init__(self, products: Optional[List[Product]] = None):
        catalog = DEFAULT_CATALOG if products is None else products
        self._products: Dict[str, Product] = {product.id: product for product in catalog}

    def list_products(self) -> List[Product]:
        return list(self._products.values())

    def get_product(self, product_id: str) -> Product:
        product = self._products.get(product_id)
        if product is None:
            raise NotFoundException(f"Product with ID {product_id} not found")
        return product
