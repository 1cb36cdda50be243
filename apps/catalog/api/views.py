from rest_framework import viewsets, filters
from rest_framework.decorators import action
from rest_framework.response import Response
from django_filters.rest_framework import DjangoFilterBackend
from django.db.models import Prefetch

from apps.catalog.models import Product, Classification
from apps.catalog.services.classification_navigation import ClassificationNavigationService
from .serializers import ProductListSerializer, ProductDetailSerializer
from .filters import ProductFilter


class ProductViewSet(viewsets.ReadOnlyModelViewSet):
    """
    API endpoint for products (read-only).

    list: List products, filterable by brand and status
    retrieve: Product detail with its classifications
    classification_options: Picker state for a set of attribute picks
    """
    queryset = Product.objects.select_related('brand')
    lookup_field = 'slug'
    filterset_class = ProductFilter
    filter_backends = [DjangoFilterBackend, filters.SearchFilter, filters.OrderingFilter]
    search_fields = ['name', 'description', 'brand__name']
    ordering_fields = ['name', 'created_at']
    ordering = ['name']

    def get_serializer_class(self):
        if self.action == 'retrieve':
            return ProductDetailSerializer
        return ProductListSerializer

    def get_queryset(self):
        queryset = super().get_queryset()
        if self.action == 'retrieve':
            queryset = queryset.prefetch_related(
                Prefetch(
                    'classifications',
                    queryset=Classification.objects.select_related(
                        'product_discount', 'pre_order_product'
                    ).prefetch_related('images')
                )
            )
        else:
            queryset = queryset.prefetch_related('classifications')
        return queryset

    @action(detail=True, methods=['get'], url_path='classification-options')
    def classification_options(self, request, slug=None):
        """
        Resolve attribute picks to a classification.

        Query params:
        - color, size, other: picked option values
        - committed: id of the classification currently attached, if any
        """
        product = self.get_object()
        selections = {
            key: request.query_params.get(key)
            for key in ('color', 'size', 'other')
            if request.query_params.get(key)
        }
        data = ClassificationNavigationService.get_picker_data(
            product, selections, request.query_params.get('committed')
        )
        return Response(data)
