"""
Builds voucher snapshots for one customer from the database.
"""

from apps.vouchers.models import Voucher


def voucher_snapshots(user, queryset=None):
    """
    Snapshot every voucher in ``queryset`` (active vouchers by default),
    marking the ones ``user`` has claimed as AVAILABLE.
    """
    if queryset is None:
        queryset = Voucher.objects.filter(is_active=True)
    queryset = queryset.prefetch_related('applicable_classifications')

    claimed_ids = set()
    if user is not None and user.is_authenticated:
        claimed_ids = set(user.claimed_vouchers.values_list('pk', flat=True))

    return [voucher.to_snapshot(claimed=voucher.pk in claimed_ids) for voucher in queryset]
