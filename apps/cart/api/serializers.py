from rest_framework import serializers


class CartLineSerializer(serializers.Serializer):
    """Read-only view of a CartLine."""
    id = serializers.IntegerField()
    classification_id = serializers.IntegerField(source='item_id')
    title = serializers.CharField(source='classification.title')
    label = serializers.CharField(source='classification.label')
    product_id = serializers.IntegerField()
    product_name = serializers.CharField()
    brand_id = serializers.IntegerField()
    quantity = serializers.IntegerField()
    max_quantity = serializers.IntegerField()
    price = serializers.DecimalField(source='classification.price', max_digits=14, decimal_places=2)
    unit_price = serializers.DecimalField(max_digits=14, decimal_places=2)
    total = serializers.DecimalField(max_digits=14, decimal_places=2)
    original_total = serializers.DecimalField(max_digits=14, decimal_places=2)
    savings = serializers.DecimalField(max_digits=14, decimal_places=2)
    event_type = serializers.CharField()
    image_url = serializers.CharField(source='classification.image_url', allow_null=True)
    block_reasons = serializers.ListField(child=serializers.CharField())
    is_blocked = serializers.BooleanField()


class CartItemQuantitySerializer(serializers.Serializer):
    quantity = serializers.IntegerField(min_value=1)


class CartItemClassificationSerializer(serializers.Serializer):
    """Attribute picks for swapping the classification of a cart line."""
    color = serializers.CharField(required=False, allow_blank=True)
    size = serializers.CharField(required=False, allow_blank=True)
    other = serializers.CharField(required=False, allow_blank=True)


class CartSummaryRequestSerializer(serializers.Serializer):
    """
    Selection and voucher choices sent by the cart page.

    Omitted keys keep what is stored for the customer.
    """
    selected_ids = serializers.ListField(child=serializers.IntegerField(), required=False)
    brand_vouchers = serializers.DictField(
        child=serializers.IntegerField(allow_null=True), required=False
    )
    platform_voucher = serializers.IntegerField(required=False, allow_null=True)

    def validate_brand_vouchers(self, value):
        # JSON object keys arrive as strings
        try:
            return {int(brand_id): voucher_id for brand_id, voucher_id in value.items()}
        except ValueError:
            raise serializers.ValidationError('Brand ids must be integers.')


class CheckoutIssueSerializer(serializers.Serializer):
    code = serializers.CharField()
    line_id = serializers.IntegerField(allow_null=True)
    requested = serializers.IntegerField(allow_null=True)
    available = serializers.IntegerField(allow_null=True)


class CartTotalsSerializer(serializers.Serializer):
    total_product_cost = serializers.DecimalField(max_digits=14, decimal_places=2)
    total_product_discount = serializers.DecimalField(max_digits=14, decimal_places=2)
    total_price = serializers.DecimalField(max_digits=14, decimal_places=2)
    brand_voucher_discounts = serializers.DictField(
        child=serializers.DecimalField(max_digits=14, decimal_places=2)
    )
    total_brand_voucher_discount = serializers.DecimalField(max_digits=14, decimal_places=2)
    platform_voucher_discount = serializers.DecimalField(max_digits=14, decimal_places=2)
    total_savings = serializers.DecimalField(max_digits=14, decimal_places=2)
    final_total = serializers.DecimalField(max_digits=14, decimal_places=2)
    selected_count = serializers.IntegerField()
