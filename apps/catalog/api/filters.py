from django_filters import rest_framework as filters

from apps.catalog.choices import ProductStatus
from apps.catalog.models import Product


class ProductFilter(filters.FilterSet):
    """Filter for products by brand, status and price."""

    brand = filters.NumberFilter(field_name='brand_id')
    brand_slug = filters.CharFilter(field_name='brand__slug')
    status = filters.MultipleChoiceFilter(choices=ProductStatus.choices)

    # Price filters, on any classification of the product
    min_price = filters.NumberFilter(field_name='classifications__price', lookup_expr='gte', distinct=True)
    max_price = filters.NumberFilter(field_name='classifications__price', lookup_expr='lte', distinct=True)

    # Attribute filters
    color = filters.CharFilter(field_name='classifications__color', distinct=True)
    size = filters.CharFilter(field_name='classifications__size', distinct=True)

    class Meta:
        model = Product
        fields = ['brand', 'brand_slug', 'status']
