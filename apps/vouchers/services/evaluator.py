"""
Voucher eligibility and capped discount.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Any, Iterable, Optional

from django.utils import timezone

from apps.catalog.services.discount_calculator import (
    ZERO,
    DiscountCalculator,
    to_decimal,
)
from apps.vouchers.choices import UnavailableReason, VoucherApplyType
from apps.vouchers.services.snapshots import VoucherData


@dataclass(frozen=True)
class VoucherEvaluation:
    voucher: VoucherData
    eligible: bool
    discount_amount: Decimal = ZERO
    reason: Optional[str] = None


class VoucherEvaluator:

    @staticmethod
    def ineligibility_reason(
        voucher: VoucherData,
        order_subtotal: Decimal,
        selected_item_ids: Iterable[Any],
        now: datetime,
    ) -> Optional[str]:
        """First failed rule, checked in a fixed order; None when eligible."""
        if voucher.start_time is not None and now < voucher.start_time:
            return UnavailableReason.NOT_START_YET

        if voucher.apply_type == VoucherApplyType.SPECIFIC:
            if not set(voucher.applicable_item_ids) & set(selected_item_ids):
                return UnavailableReason.NOT_APPLICABLE

        if voucher.min_order_value is not None and order_subtotal < voucher.min_order_value:
            return UnavailableReason.MINIMUM_ORDER_NOT_MET

        if voucher.is_out_of_stock:
            return UnavailableReason.OUT_OF_STOCK

        return None

    @staticmethod
    def evaluate(
        voucher: VoucherData,
        order_subtotal: Any,
        selected_item_ids: Iterable[Any] = (),
        now: Optional[datetime] = None,
    ) -> VoucherEvaluation:
        """
        Evaluate ``voucher`` against the subtotal of its scope.

        The discount is capped per order by ``max_discount``. An ineligible
        voucher always reports a zero discount.
        """
        now = now or timezone.now()
        subtotal = max(to_decimal(order_subtotal), ZERO)

        reason = VoucherEvaluator.ineligibility_reason(
            voucher, subtotal, selected_item_ids, now
        )
        if reason is not None:
            return VoucherEvaluation(voucher=voucher, eligible=False, reason=reason)

        discount = DiscountCalculator.discount_amount(
            subtotal, voucher.discount_value, voucher.discount_type
        )
        if voucher.max_discount is not None:
            discount = min(discount, max(to_decimal(voucher.max_discount), ZERO))

        return VoucherEvaluation(voucher=voucher, eligible=True, discount_amount=discount)
