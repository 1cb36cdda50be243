from decimal import Decimal

from rest_framework import serializers

from apps.catalog.models import (
    Brand,
    Product,
    Classification,
    ClassificationImage,
)
from apps.catalog.services import availability
from apps.catalog.services.classification_resolver import default_classification
from apps.catalog.services.discount_calculator import DiscountCalculator

CENTS = Decimal('0.01')


# =============================================================================
# Brand Serializer
# =============================================================================

class BrandSerializer(serializers.ModelSerializer):
    class Meta:
        model = Brand
        fields = ['id', 'name', 'slug', 'logo', 'is_active']


# =============================================================================
# Classification Serializers
# =============================================================================

class ClassificationImageSerializer(serializers.ModelSerializer):
    thumbnail_url = serializers.SerializerMethodField()

    class Meta:
        model = ClassificationImage
        fields = ['id', 'image', 'thumbnail_url', 'display_order', 'is_active']

    def get_thumbnail_url(self, obj):
        if obj.thumbnail:
            request = self.context.get('request')
            if request:
                return request.build_absolute_uri(obj.thumbnail.url)
            return obj.thumbnail.url
        return None


class ClassificationSerializer(serializers.ModelSerializer):
    """Classification with the prices and stock the storefront shows."""
    label = serializers.CharField(read_only=True)
    images = ClassificationImageSerializer(many=True, read_only=True)
    discounted_price = serializers.SerializerMethodField()
    event_type = serializers.SerializerMethodField()
    max_quantity = serializers.SerializerMethodField()

    class Meta:
        model = Classification
        fields = [
            'id', 'title', 'label', 'type', 'color', 'size', 'other',
            'price', 'discounted_price', 'quantity', 'max_quantity',
            'status', 'event_type', 'images'
        ]

    def _snapshot(self, obj):
        # one snapshot per object and serializer run
        cache = self.context.setdefault('_snapshots', {})
        if obj.pk not in cache:
            cache[obj.pk] = obj.to_snapshot()
        return cache[obj.pk]

    def get_discounted_price(self, obj):
        snapshot = self._snapshot(obj)
        price = DiscountCalculator.unit_price_after_discount(
            snapshot.price, *availability.line_discount(snapshot)
        )
        return str(price.quantize(CENTS))

    def get_event_type(self, obj):
        return availability.event_type(self._snapshot(obj))

    def get_max_quantity(self, obj):
        return availability.max_quantity(self._snapshot(obj))


# =============================================================================
# Product Serializers
# =============================================================================

class ProductListSerializer(serializers.ModelSerializer):
    """Product list with price range."""
    brand_name = serializers.CharField(source='brand.name', read_only=True)
    classification_count = serializers.SerializerMethodField()
    min_price = serializers.SerializerMethodField()
    max_price = serializers.SerializerMethodField()

    class Meta:
        model = Product
        fields = [
            'id', 'name', 'slug', 'brand', 'brand_name', 'status',
            'classification_count', 'min_price', 'max_price'
        ]

    def _prices(self, obj):
        # iterate so a prefetch_related('classifications') is honoured
        return [c.price for c in obj.classifications.all()]

    def get_classification_count(self, obj):
        return len(self._prices(obj))

    def get_min_price(self, obj):
        prices = self._prices(obj)
        return str(min(prices)) if prices else None

    def get_max_price(self, obj):
        prices = self._prices(obj)
        return str(max(prices)) if prices else None


class ProductDetailSerializer(serializers.ModelSerializer):
    """Full product detail with classifications."""
    brand = BrandSerializer(read_only=True)
    classifications = ClassificationSerializer(many=True, read_only=True)
    default_classification = serializers.SerializerMethodField()

    class Meta:
        model = Product
        fields = [
            'id', 'name', 'slug', 'description', 'status', 'brand',
            'classifications', 'default_classification',
            'created_at', 'updated_at'
        ]

    def get_default_classification(self, obj):
        classification = default_classification(
            c.to_snapshot() for c in obj.classifications.all()
        )
        return classification.id if classification else None
