from datetime import timedelta
from decimal import Decimal

from django.utils import timezone

from apps.catalog.choices import DiscountType
from apps.vouchers.choices import VoucherStatus
from apps.vouchers.services.selector import BestVoucherSelector
from tests.factories import make_voucher


def test_capped_percentage_beats_flat_amount():
    percentage = make_voucher(1, discount_value='0.2', max_discount='50000', min_order_value='100000')
    flat = make_voucher(2, discount_type=DiscountType.AMOUNT, discount_value='10000')

    best = BestVoucherSelector.pick_best_evaluation([flat, percentage], Decimal('200000'))

    assert best.voucher == percentage
    assert best.discount_amount == Decimal('40000')
    assert BestVoucherSelector.pick_best([flat, percentage], Decimal('200000')) == percentage


def test_ineligible_vouchers_are_skipped():
    big = make_voucher(1, discount_value='0.5', min_order_value='1000')
    small = make_voucher(2, discount_value='0.1')

    assert BestVoucherSelector.pick_best([big, small], Decimal('500')) == small


def test_none_when_nothing_is_eligible():
    voucher = make_voucher(1, min_order_value='1000')

    assert BestVoucherSelector.pick_best([voucher], Decimal('500')) is None
    assert BestVoucherSelector.pick_best([], Decimal('500')) is None


def test_ties_go_to_the_voucher_ending_first():
    now = timezone.now()
    later = make_voucher(1, discount_type=DiscountType.AMOUNT, discount_value='10', end_time=now + timedelta(days=5))
    sooner = make_voucher(2, discount_type=DiscountType.AMOUNT, discount_value='10', end_time=now + timedelta(days=1))
    open_ended = make_voucher(3, discount_type=DiscountType.AMOUNT, discount_value='10')

    assert BestVoucherSelector.pick_best([open_ended, later, sooner], Decimal('100')) == sooner
    assert BestVoucherSelector.pick_best([open_ended, later], Decimal('100')) == later


def test_ties_with_same_end_keep_input_order():
    end = timezone.now() + timedelta(days=2)
    first = make_voucher(1, discount_type=DiscountType.AMOUNT, discount_value='10', end_time=end)
    second = make_voucher(2, discount_type=DiscountType.AMOUNT, discount_value='10', end_time=end)

    assert BestVoucherSelector.pick_best([first, second], Decimal('100')) == first
    assert BestVoucherSelector.pick_best([second, first], Decimal('100')) == second


def test_partition_by_status():
    available = make_voucher(1)
    unavailable = make_voucher(2, status=VoucherStatus.UNAVAILABLE)
    unclaimed = make_voucher(3, status=VoucherStatus.UNCLAIMED)

    groups = BestVoucherSelector.partition([unclaimed, available, unavailable])

    assert groups.available == [available]
    assert groups.unavailable == [unavailable]
    assert groups.unclaimed == [unclaimed]


def test_confirm_only_available_vouchers():
    available = make_voucher(1)
    unclaimed = make_voucher(2, status=VoucherStatus.UNCLAIMED)
    vouchers = [available, unclaimed]

    assert BestVoucherSelector.confirm(vouchers, 1) == available
    assert BestVoucherSelector.confirm(vouchers, 2) is None
    assert BestVoucherSelector.confirm(vouchers, 99) is None
    assert BestVoucherSelector.confirm(vouchers, None) is None


def test_evaluate_all_keeps_input_order():
    first = make_voucher(1, min_order_value='1000')
    second = make_voucher(2, discount_value='0.1')

    evaluations = BestVoucherSelector.evaluate_all([first, second], Decimal('500'))

    assert [e.voucher.id for e in evaluations] == [1, 2]
    assert [e.eligible for e in evaluations] == [False, True]
    assert evaluations[1].discount_amount == Decimal('50')
