from django.db.models import F, Q
from django_filters import rest_framework as filters

from apps.vouchers.choices import VoucherScope
from apps.vouchers.models import Voucher


class VoucherFilter(filters.FilterSet):
    """Filter vouchers by scope and issuing brand."""

    scope = filters.ChoiceFilter(choices=VoucherScope.choices)
    brand = filters.NumberFilter(field_name='brand_id')
    brand_slug = filters.CharFilter(field_name='brand__slug')

    # Only vouchers that have not reached their usage limit
    in_stock = filters.BooleanFilter(method='filter_in_stock')

    class Meta:
        model = Voucher
        fields = ['scope', 'brand', 'brand_slug', 'apply_type']

    def filter_in_stock(self, queryset, name, value):
        in_stock = Q(quantity__isnull=True) | Q(used_count__lt=F('quantity'))
        if value is True:
            return queryset.filter(in_stock)
        elif value is False:
            return queryset.exclude(in_stock)
        return queryset
