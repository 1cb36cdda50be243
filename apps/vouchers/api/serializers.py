from rest_framework import serializers

from apps.vouchers.choices import VoucherScope, VoucherStatus
from apps.vouchers.models import Voucher


class VoucherSerializer(serializers.ModelSerializer):
    brand_name = serializers.CharField(source='brand.name', read_only=True)
    status = serializers.SerializerMethodField()
    is_out_of_stock = serializers.BooleanField(read_only=True)

    class Meta:
        model = Voucher
        fields = [
            'id', 'code', 'name', 'scope', 'brand', 'brand_name',
            'discount_type', 'discount_value', 'max_discount', 'min_order_value',
            'apply_type', 'applicable_classifications', 'start_time', 'end_time',
            'status', 'is_out_of_stock'
        ]

    def get_status(self, obj):
        request = self.context.get('request')
        user = getattr(request, 'user', None)
        if user is not None and user.is_authenticated:
            # iterate so a prefetch_related('claimed_by') is honoured
            if any(u.pk == user.pk for u in obj.claimed_by.all()):
                return VoucherStatus.AVAILABLE
        return VoucherStatus.UNCLAIMED


class BestVoucherRequestSerializer(serializers.Serializer):
    """Payload of the best-voucher lookup."""
    scope = serializers.ChoiceField(choices=VoucherScope.choices)
    brand_id = serializers.IntegerField(required=False, allow_null=True)
    subtotal = serializers.DecimalField(max_digits=14, decimal_places=2, min_value=0)
    item_ids = serializers.ListField(
        child=serializers.IntegerField(), required=False, default=list
    )

    def validate(self, attrs):
        if attrs['scope'] == VoucherScope.BRAND and attrs.get('brand_id') is None:
            raise serializers.ValidationError({'brand_id': 'Required for brand vouchers.'})
        return attrs


class VoucherEvaluationSerializer(serializers.Serializer):
    """Read-only view of a VoucherEvaluation."""
    voucher_id = serializers.IntegerField(source='voucher.id')
    code = serializers.CharField(source='voucher.code')
    eligible = serializers.BooleanField()
    discount_amount = serializers.DecimalField(max_digits=14, decimal_places=2)
    reason = serializers.CharField(allow_null=True)
