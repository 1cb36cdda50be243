from django.utils import timezone
from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import filters, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from apps.vouchers.choices import VoucherScope
from apps.vouchers.loaders import voucher_snapshots
from apps.vouchers.models import Voucher
from apps.vouchers.services.selector import BestVoucherSelector
from .filters import VoucherFilter
from .serializers import (
    BestVoucherRequestSerializer,
    VoucherEvaluationSerializer,
    VoucherSerializer,
)


class VoucherViewSet(viewsets.ReadOnlyModelViewSet):
    """
    API endpoint for vouchers (read-only).

    list: Active vouchers, filterable by scope and brand
    retrieve: One voucher
    best: Best claimed voucher for a subtotal
    """
    queryset = Voucher.objects.filter(is_active=True).select_related('brand').prefetch_related(
        'applicable_classifications', 'claimed_by'
    )
    serializer_class = VoucherSerializer
    filterset_class = VoucherFilter
    filter_backends = [DjangoFilterBackend, filters.SearchFilter, filters.OrderingFilter]
    search_fields = ['code', 'name']
    ordering_fields = ['end_time', 'start_time', 'discount_value']
    ordering = ['end_time']

    @action(detail=False, methods=['post'])
    def best(self, request):
        """
        Evaluate the vouchers of one scope against a subtotal.

        Expected payload:
        {
            "scope": "BRAND",
            "brand_id": 1,
            "subtotal": "200000.00",
            "item_ids": [1, 2]
        }
        Only vouchers the customer has claimed compete for "best".
        """
        serializer = BestVoucherRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        queryset = Voucher.objects.filter(is_active=True, scope=data['scope'])
        if data['scope'] == VoucherScope.BRAND:
            queryset = queryset.filter(brand_id=data['brand_id'])

        groups = BestVoucherSelector.partition(voucher_snapshots(request.user, queryset))
        now = timezone.now()
        evaluations = BestVoucherSelector.evaluate_all(
            groups.available, data['subtotal'], data['item_ids'], now
        )
        best = BestVoucherSelector.pick_best_evaluation(
            groups.available, data['subtotal'], data['item_ids'], now
        )

        return Response({
            'best': VoucherEvaluationSerializer(best).data if best else None,
            'evaluations': VoucherEvaluationSerializer(evaluations, many=True).data,
            'unclaimed': [voucher.id for voucher in groups.unclaimed],
        })
