from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from apps.cart.loaders import build_aggregator
from apps.cart.models import CartItem
from apps.cart.services.totals import CartTotalsCalculator
from apps.catalog.exceptions import DataInconsistency, StockExceeded
from apps.catalog.services.classification_navigation import ClassificationNavigationService
from apps.vouchers.services.selector import BestVoucherSelector
from .serializers import (
    CartItemClassificationSerializer,
    CartItemQuantitySerializer,
    CartLineSerializer,
    CartSummaryRequestSerializer,
    CartTotalsSerializer,
    CheckoutIssueSerializer,
)


class CartItemViewSet(mixins.ListModelMixin, viewsets.GenericViewSet):
    """
    API endpoint for the authenticated customer's cart.

    list: Cart lines with prices and availability
    partial_update: Change a line's quantity
    destroy: Remove a line
    classification: Swap a line to another classification of its product
    summary: Totals for a selection and voucher choice
    """
    permission_classes = [IsAuthenticated]
    serializer_class = CartLineSerializer
    pagination_class = None

    def get_queryset(self):
        return CartItem.objects.filter(user=self.request.user).select_related(
            'classification__product'
        )

    def list(self, request, *args, **kwargs):
        aggregator = build_aggregator(request.user)
        serializer = CartLineSerializer(aggregator.lines, many=True)
        return Response(serializer.data)

    def partial_update(self, request, pk=None):
        item = self.get_object()
        serializer = CartItemQuantitySerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        aggregator = build_aggregator(request.user)
        try:
            line = aggregator.update_quantity(item.pk, serializer.validated_data['quantity'])
        except StockExceeded as e:
            return Response(
                {'error': str(e), 'available': e.available},
                status=status.HTTP_400_BAD_REQUEST
            )
        return Response(CartLineSerializer(line).data)

    def destroy(self, request, pk=None):
        item = self.get_object()
        aggregator = build_aggregator(request.user)
        aggregator.remove_line(item.pk)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=True, methods=['post'])
    def classification(self, request, pk=None):
        """
        Replay attribute picks on the line's product and commit the match.

        Expected payload:
        {"color": "Blue", "size": "M"}

        Returns the picker state and the committed change, if any. A complete
        pick matching no classification is a 400.
        """
        item = self.get_object()
        serializer = CartItemClassificationSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        product = item.classification.product
        resolver = ClassificationNavigationService.build_resolver(
            product,
            serializer.validated_data,
            committed_id=item.classification_id,
            line_id=item.pk,
        )
        try:
            resolver.require_match()
        except DataInconsistency as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        change = resolver.commit(quantity=item.quantity)
        committed_id = resolver.committed.id if resolver.committed else None
        picker = ClassificationNavigationService.get_picker_data(
            product, serializer.validated_data, committed_id
        )

        return Response({
            'changed': change is not None,
            'old_classification_id': change.old_variant_id if change else None,
            'new_classification_id': change.new_variant_id if change else None,
            'picker': picker,
        })

    @action(detail=False, methods=['post'])
    def summary(self, request):
        """
        Apply a selection and voucher choices, then return the totals.

        Expected payload:
        {
            "selected_ids": [1, 2],
            "brand_vouchers": {"1": 10},
            "platform_voucher": 20
        }
        Voucher choices that are not eligible for the selection are dropped;
        the response carries what was actually kept.
        """
        serializer = CartSummaryRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        aggregator = build_aggregator(request.user)
        requested_ids = data.get('selected_ids')
        if requested_ids is not None:
            aggregator.replace_selection(requested_ids)
        for brand_id, voucher_id in data.get('brand_vouchers', {}).items():
            aggregator.choose_brand_voucher(brand_id, voucher_id)
        if 'platform_voucher' in data:
            aggregator.choose_platform_voucher(data['platform_voucher'])

        calculator = CartTotalsCalculator(aggregator)
        totals = calculator.compute()
        issues = calculator.checkout_issues(requested_ids)

        best_brand_vouchers = {}
        for brand_id in aggregator.brand_ids():
            best = aggregator.best_brand_voucher(brand_id)
            best_brand_vouchers[str(brand_id)] = best.id if best else None
        best_platform = aggregator.best_platform_voucher()
        groups = BestVoucherSelector.partition(aggregator.platform_vouchers())

        return Response({
            'selected_ids': aggregator.selected_line_ids,
            'per_brand_selection': {
                str(brand_id): value for brand_id, value in aggregator.per_brand_selection().items()
            },
            'brand_vouchers': {
                str(brand_id): voucher_id
                for brand_id, voucher_id in aggregator.chosen_brand_voucher_ids.items()
            },
            'platform_voucher': aggregator.chosen_platform_voucher_id,
            'best_brand_vouchers': best_brand_vouchers,
            'best_platform_voucher': best_platform.id if best_platform else None,
            'unclaimed_platform_vouchers': [voucher.id for voucher in groups.unclaimed],
            'totals': CartTotalsSerializer(totals).data,
            'issues': CheckoutIssueSerializer(issues, many=True).data,
        })
