"""
Discount arithmetic for product prices and voucher amounts.

Money is handled as ``Decimal`` in the store's base currency unit. Nothing
here rounds; display rounding belongs to the caller. Percentage discounts
are fractions in [0, 1] (0.2 means 20% off).
"""

from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from apps.catalog.choices import DiscountType

ZERO = Decimal('0')
ONE = Decimal('1')


def to_decimal(value: Any) -> Decimal:
    """
    Coerce a number to ``Decimal``.

    None, unparsable, NaN and infinite values become zero so the arithmetic
    below never produces NaN.
    """
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        number = value
    else:
        try:
            number = Decimal(str(value))
        except (InvalidOperation, ValueError, TypeError):
            return ZERO
    if not number.is_finite():
        return ZERO
    return number


class DiscountCalculator:
    """Pure price functions, no state."""

    @staticmethod
    def unit_price_after_discount(
        base_price: Any,
        discount_value: Any = None,
        discount_type: Optional[str] = None,
    ) -> Decimal:
        """
        Price of one unit once the discount is applied.

        PERCENTAGE -> base * (1 - value), AMOUNT -> base - value, both
        floored at zero. A missing type or a zero value leaves the base
        price untouched.
        """
        base = max(to_decimal(base_price), ZERO)
        value = to_decimal(discount_value)

        if discount_type is None or value <= ZERO:
            return base

        if discount_type == DiscountType.PERCENTAGE:
            return max(base * (ONE - min(value, ONE)), ZERO)
        if discount_type == DiscountType.AMOUNT:
            return max(base - value, ZERO)
        return base

    @staticmethod
    def line_total(
        base_price: Any,
        quantity: Any,
        discount_value: Any = None,
        discount_type: Optional[str] = None,
    ) -> Decimal:
        quantity = max(to_decimal(quantity), ZERO)
        unit_price = DiscountCalculator.unit_price_after_discount(
            base_price, discount_value, discount_type
        )
        return unit_price * quantity

    @staticmethod
    def discount_amount(
        amount: Any,
        discount_value: Any = None,
        discount_type: Optional[str] = None,
    ) -> Decimal:
        """How much a discount takes off ``amount`` (never more than the amount)."""
        base = max(to_decimal(amount), ZERO)
        return base - DiscountCalculator.unit_price_after_discount(
            base, discount_value, discount_type
        )

    @staticmethod
    def line_savings(
        base_price: Any,
        quantity: Any,
        discount_value: Any = None,
        discount_type: Optional[str] = None,
    ) -> Decimal:
        original = DiscountCalculator.line_total(base_price, quantity)
        return original - DiscountCalculator.line_total(
            base_price, quantity, discount_value, discount_type
        )
