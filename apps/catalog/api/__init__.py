from .serializers import (
    BrandSerializer,
    ClassificationImageSerializer,
    ClassificationSerializer,
    ProductListSerializer,
    ProductDetailSerializer,
)

__all__ = [
    'BrandSerializer',
    'ClassificationImageSerializer',
    'ClassificationSerializer',
    'ProductListSerializer',
    'ProductDetailSerializer',
]
