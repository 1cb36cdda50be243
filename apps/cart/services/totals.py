"""
Order totals shown under the cart and the checks run before checkout.
"""

from dataclasses import dataclass, field
from decimal import ROUND_FLOOR, Decimal
from typing import Any, Dict, Iterable, List, Optional

from django.core.exceptions import ImproperlyConfigured

from apps.cart.choices import CheckoutIssueCode
from apps.cart.services.selection import CartSelectionAggregator
from apps.catalog.conf import storefront_setting
from apps.catalog.services.discount_calculator import ZERO

ROUNDING_FLOOR = 'floor'
ROUNDING_NONE = 'none'


@dataclass(frozen=True)
class CartTotals:
    total_product_cost: Decimal
    total_product_discount: Decimal
    total_price: Decimal
    brand_voucher_discounts: Dict[Any, Decimal] = field(default_factory=dict)
    total_brand_voucher_discount: Decimal = ZERO
    platform_voucher_discount: Decimal = ZERO
    total_savings: Decimal = ZERO
    final_total: Decimal = ZERO
    selected_count: int = 0


@dataclass(frozen=True)
class CheckoutIssue:
    code: str
    line_id: Any = None
    requested: Optional[int] = None
    available: Optional[int] = None


class CartTotalsCalculator:
    """
    Totals over the selected lines of an aggregator.

    ``rounding`` is ``"floor"`` (final total rounded down to a whole unit)
    or ``"none"``; defaults to ``STOREFRONT['FINAL_TOTAL_ROUNDING']``.
    """

    def __init__(self, aggregator: CartSelectionAggregator, rounding: Optional[str] = None):
        self.aggregator = aggregator
        self.rounding = rounding or storefront_setting('FINAL_TOTAL_ROUNDING')
        if self.rounding not in (ROUNDING_FLOOR, ROUNDING_NONE):
            raise ImproperlyConfigured(f"Unknown final total rounding: {self.rounding!r}")

    def compute(self) -> CartTotals:
        aggregator = self.aggregator
        lines = aggregator.selected_lines()

        total_product_cost = sum((line.original_total for line in lines), ZERO)
        total_product_discount = sum((line.savings for line in lines), ZERO)
        total_price = aggregator.subtotal_platform()

        brand_discounts = aggregator.brand_voucher_discounts()
        total_brand_discount = sum(brand_discounts.values(), ZERO)
        platform_discount = aggregator.platform_voucher_discount()

        final_total = max(total_price - total_brand_discount - platform_discount, ZERO)
        if self.rounding == ROUNDING_FLOOR:
            final_total = final_total.quantize(Decimal('1'), rounding=ROUND_FLOOR)

        return CartTotals(
            total_product_cost=total_product_cost,
            total_product_discount=total_product_discount,
            total_price=total_price,
            brand_voucher_discounts=brand_discounts,
            total_brand_voucher_discount=total_brand_discount,
            platform_voucher_discount=platform_discount,
            total_savings=total_product_discount + total_brand_discount + platform_discount,
            final_total=final_total,
            selected_count=len(lines),
        )

    def checkout_issues(self, line_ids: Optional[Iterable[Any]] = None) -> List[CheckoutIssue]:
        """
        Problems with the lines about to be checked out (the current
        selection unless ``line_ids`` is given).
        """
        if line_ids is None:
            line_ids = self.aggregator.selected_line_ids
        line_ids = list(line_ids)
        if not line_ids:
            return [CheckoutIssue(code=CheckoutIssueCode.NOTHING_SELECTED)]

        issues = []
        for line_id in line_ids:
            line = self.aggregator.line(line_id)
            if line is None:
                continue
            available = line.max_quantity
            if available == 0:
                issues.append(CheckoutIssue(
                    code=CheckoutIssueCode.SOLD_OUT,
                    line_id=line_id,
                    requested=line.quantity,
                    available=0,
                ))
            elif line.quantity > available:
                issues.append(CheckoutIssue(
                    code=CheckoutIssueCode.INSUFFICIENT_STOCK,
                    line_id=line_id,
                    requested=line.quantity,
                    available=available,
                ))
        return issues
