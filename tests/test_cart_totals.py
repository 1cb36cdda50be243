from decimal import Decimal

import pytest
from django.core.exceptions import ImproperlyConfigured

from apps.cart.choices import CheckoutIssueCode
from apps.cart.services.selection import CartSelectionAggregator
from apps.cart.services.totals import CartTotalsCalculator
from apps.catalog.choices import DiscountType
from apps.vouchers.choices import VoucherScope
from tests.factories import flash_sale, make_line, make_voucher


@pytest.fixture
def aggregator(cart_state):
    lines = [
        make_line(1, price='100', quantity=2, brand_id=1, product_discount=flash_sale('0.25')),
        make_line(2, price='99.50', quantity=1, brand_id=1),
        make_line(3, price='200', quantity=1, brand_id=2),
    ]
    vouchers = [
        make_voucher(10, brand_id=1, discount_type=DiscountType.AMOUNT, discount_value='10'),
        make_voucher(20, scope=VoucherScope.PLATFORM, discount_value='0.1', max_discount='100'),
    ]
    aggregator = CartSelectionAggregator(cart_state, lines, vouchers)
    aggregator.select_all()
    aggregator.choose_brand_voucher(1, 10)
    aggregator.choose_platform_voucher(20)
    return aggregator


def test_totals(aggregator):
    totals = CartTotalsCalculator(aggregator).compute()

    assert totals.total_product_cost == Decimal('499.50')
    assert totals.total_product_discount == Decimal('50')
    assert totals.total_price == Decimal('449.50')
    assert totals.brand_voucher_discounts == {1: Decimal('10'), 2: Decimal('0')}
    assert totals.total_brand_voucher_discount == Decimal('10')
    # 10% of 449.50 - 10
    assert totals.platform_voucher_discount == Decimal('43.95')
    assert totals.total_savings == Decimal('103.95')
    assert totals.final_total == Decimal('395')
    assert totals.selected_count == 3


def test_final_total_without_rounding(aggregator):
    totals = CartTotalsCalculator(aggregator, rounding='none').compute()

    assert totals.final_total == Decimal('395.55')


def test_rounding_follows_settings(aggregator, settings):
    settings.STOREFRONT = {'FINAL_TOTAL_ROUNDING': 'none'}

    assert CartTotalsCalculator(aggregator).compute().final_total == Decimal('395.55')


def test_unknown_rounding_is_rejected(aggregator):
    with pytest.raises(ImproperlyConfigured):
        CartTotalsCalculator(aggregator, rounding='bankers')


def test_empty_selection(cart_state):
    aggregator = CartSelectionAggregator(cart_state, [make_line(1)])
    calculator = CartTotalsCalculator(aggregator)

    totals = calculator.compute()

    assert totals.final_total == Decimal('0')
    assert totals.total_savings == Decimal('0')
    assert [issue.code for issue in calculator.checkout_issues()] == [
        CheckoutIssueCode.NOTHING_SELECTED
    ]


def test_checkout_issues(cart_state):
    lines = [
        make_line(1, quantity=5, stock=3),
        make_line(2, quantity=1, stock=0),
        make_line(3, quantity=1, stock=3),
    ]
    aggregator = CartSelectionAggregator(cart_state, lines)
    calculator = CartTotalsCalculator(aggregator)

    aggregator.replace_selection([1, 2, 3])
    issues = calculator.checkout_issues()
    assert [(i.code, i.line_id, i.available) for i in issues] == [
        (CheckoutIssueCode.INSUFFICIENT_STOCK, 1, 3),
    ]

    # the sold out line never makes it into the selection
    issues = calculator.checkout_issues([1, 2, 3])
    assert [(i.code, i.line_id) for i in issues] == [
        (CheckoutIssueCode.INSUFFICIENT_STOCK, 1),
        (CheckoutIssueCode.SOLD_OUT, 2),
    ]
