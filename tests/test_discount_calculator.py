from decimal import Decimal

import pytest

from apps.catalog.choices import DiscountType
from apps.catalog.services.discount_calculator import DiscountCalculator, to_decimal


@pytest.mark.parametrize('discount_type', [DiscountType.PERCENTAGE, DiscountType.AMOUNT, None])
def test_zero_discount_keeps_base_price(discount_type):
    assert DiscountCalculator.unit_price_after_discount(Decimal('150'), 0, discount_type) == Decimal('150')


def test_missing_type_keeps_base_price():
    assert DiscountCalculator.unit_price_after_discount(Decimal('150'), Decimal('0.5')) == Decimal('150')


def test_percentage_discount():
    assert DiscountCalculator.unit_price_after_discount(
        Decimal('100'), Decimal('0.2'), DiscountType.PERCENTAGE
    ) == Decimal('80')


def test_amount_discount_floors_at_zero():
    assert DiscountCalculator.unit_price_after_discount(
        Decimal('100'), Decimal('30'), DiscountType.AMOUNT
    ) == Decimal('70')
    assert DiscountCalculator.unit_price_after_discount(
        Decimal('100'), Decimal('150'), DiscountType.AMOUNT
    ) == Decimal('0')


def test_percentage_above_one_is_clamped():
    assert DiscountCalculator.unit_price_after_discount(
        Decimal('100'), Decimal('1.5'), DiscountType.PERCENTAGE
    ) == Decimal('0')


def test_price_never_increases_with_larger_percentage():
    values = ['0', '0.05', '0.1', '0.25', '0.5', '0.75', '0.99', '1']
    prices = [
        DiscountCalculator.unit_price_after_discount(Decimal('250'), Decimal(v), DiscountType.PERCENTAGE)
        for v in values
    ]
    assert all(a >= b for a, b in zip(prices, prices[1:]))


def test_line_total_applies_discount_per_unit():
    assert DiscountCalculator.line_total(
        Decimal('100'), 3, Decimal('0.1'), DiscountType.PERCENTAGE
    ) == Decimal('270')


def test_line_total_negative_quantity_is_zero():
    assert DiscountCalculator.line_total(Decimal('100'), -2) == Decimal('0')


@pytest.mark.parametrize('value', [None, 'abc', float('nan'), float('inf'), Decimal('NaN')])
def test_to_decimal_never_returns_nan(value):
    assert to_decimal(value) == Decimal('0')


def test_unparsable_price_gives_zero_total():
    assert DiscountCalculator.line_total('not a price', 2) == Decimal('0')


def test_discount_amount():
    assert DiscountCalculator.discount_amount(
        Decimal('200000'), Decimal('0.2'), DiscountType.PERCENTAGE
    ) == Decimal('40000')
    assert DiscountCalculator.discount_amount(
        Decimal('5000'), Decimal('10000'), DiscountType.AMOUNT
    ) == Decimal('5000')


def test_line_savings():
    assert DiscountCalculator.line_savings(
        Decimal('100'), 2, Decimal('0.25'), DiscountType.PERCENTAGE
    ) == Decimal('50')
    assert DiscountCalculator.line_savings(Decimal('100'), 2) == Decimal('0')
