"""
Catalog models for the storefront.

Model Hierarchy:
- Brand: Seller owning products and brand vouchers
- Product: Base product with a top-level status
- Classification: Individual SKU (color/size/other combination) with price and stock
- ClassificationImage: Images for each classification
- ProductDiscount / PreOrderProduct: Events a classification can take part in
"""

from .brand import Brand
from .product import Product
from .event import ProductDiscount, PreOrderProduct
from .classification import Classification, ClassificationImage

__all__ = [
    'Brand',
    'Product',
    'ProductDiscount',
    'PreOrderProduct',
    'Classification',
    'ClassificationImage',
]
