from decimal import Decimal

import pytest

from apps.catalog.choices import (
    BlockReason,
    ClassificationStatus,
    DiscountType,
    EventStatus,
    OrderEvent,
    ProductStatus,
)
from apps.catalog.exceptions import PricingEngineError, StockExceeded
from apps.catalog.services import availability
from tests.factories import flash_sale, make_classification, pre_order


def test_event_type():
    assert availability.event_type(make_classification(1)) == OrderEvent.NORMAL
    assert availability.event_type(make_classification(1, product_discount=flash_sale())) == OrderEvent.FLASH_SALE
    assert availability.event_type(make_classification(1, pre_order=pre_order())) == OrderEvent.PRE_ORDER
    waiting = flash_sale(status=EventStatus.WAITING)
    assert availability.event_type(make_classification(1, product_discount=waiting)) == OrderEvent.NORMAL


def test_effective_stock_uses_active_event_stock():
    assert availability.effective_stock(make_classification(1, quantity=10)) == 10
    assert availability.effective_stock(
        make_classification(1, quantity=10, product_discount=flash_sale(quantity=3))
    ) == 3
    assert availability.effective_stock(
        make_classification(1, quantity=10, product_discount=flash_sale(quantity=3, status=EventStatus.INACTIVE))
    ) == 10
    # event without its own stock
    assert availability.effective_stock(
        make_classification(1, quantity=10, pre_order=pre_order())
    ) == 10


def test_max_quantity_is_never_negative():
    assert availability.max_quantity(make_classification(1, quantity=-4)) == 0


def test_line_discount_only_for_active_flash_sale():
    assert availability.line_discount(make_classification(1, product_discount=flash_sale('0.3'))) == (
        Decimal('0.3'), DiscountType.PERCENTAGE
    )
    assert availability.line_discount(
        make_classification(1, product_discount=flash_sale('0.3', status=EventStatus.WAITING))
    ) == (None, None)
    assert availability.line_discount(make_classification(1, pre_order=pre_order())) == (None, None)


def test_purchasable_classification_has_no_block_reasons():
    classification = make_classification(1)

    assert availability.line_block_reasons(classification) == []
    assert availability.is_purchasable(classification, product_status=ProductStatus.OFFICIAL)


@pytest.mark.parametrize('product_status', [
    ProductStatus.INACTIVE,
    ProductStatus.BANNED,
    ProductStatus.UN_PUBLISHED,
    ProductStatus.OUT_OF_STOCK,
])
def test_unsellable_product_blocks_line(product_status):
    classification = make_classification(1)

    assert availability.line_block_reasons(classification, product_status=product_status) == [
        BlockReason.PRODUCT_UNAVAILABLE
    ]
    assert not availability.is_purchasable(classification, product_status=product_status)


def test_hidden_classification():
    classification = make_classification(1, status=ClassificationStatus.HIDDEN)
    sibling = make_classification(2)

    assert availability.line_block_reasons(classification, [classification, sibling]) == [
        BlockReason.HIDDEN
    ]


def test_no_active_classification_left():
    classification = make_classification(1, status=ClassificationStatus.INACTIVE)

    assert availability.line_block_reasons(classification, [classification]) == [
        BlockReason.NO_ACTIVE_CLASSIFICATION,
        BlockReason.PRODUCT_UNAVAILABLE,
    ]


def test_out_of_stock():
    classification = make_classification(1, quantity=0)

    assert availability.line_block_reasons(classification) == [BlockReason.OUT_OF_STOCK]


@pytest.mark.parametrize('status, reason', [
    (EventStatus.CANCELLED, BlockReason.EVENT_CANCELLED),
    (EventStatus.INACTIVE, BlockReason.EVENT_INACTIVE),
    (EventStatus.SOLD_OUT, BlockReason.EVENT_SOLD_OUT),
])
def test_event_status_blocks_line(status, reason):
    classification = make_classification(1, product_discount=flash_sale(status=status))

    assert availability.line_block_reasons(classification) == [reason]


def test_validate_quantity():
    classification = make_classification(7, quantity=5)

    assert availability.validate_quantity(classification, 5) == 5

    with pytest.raises(StockExceeded) as excinfo:
        availability.validate_quantity(classification, 6)
    assert excinfo.value.classification_id == 7
    assert excinfo.value.requested == 6
    assert excinfo.value.available == 5

    with pytest.raises(PricingEngineError):
        availability.validate_quantity(classification, 0)


def test_clamp_quantity():
    classification = make_classification(1, quantity=5)

    assert availability.clamp_quantity(classification, 9) == 5
    assert availability.clamp_quantity(classification, 0) == 1
    assert availability.clamp_quantity(make_classification(2, quantity=0), 3) == 0


def test_product_level_classification_checks():
    hidden = make_classification(1, status=ClassificationStatus.HIDDEN)
    empty = make_classification(2, quantity=0)

    assert not availability.has_active_classification([hidden])
    assert availability.has_active_classification([hidden, empty])
    assert not availability.has_classification_with_quantity([empty])
    assert availability.has_classification_with_quantity([empty, hidden])


def test_active_flash_sale_applies_while_pre_order_waits():
    classification = make_classification(
        1,
        pre_order=pre_order(status=EventStatus.WAITING),
        product_discount=flash_sale('0.2', quantity=4),
    )

    assert availability.event_type(classification) == OrderEvent.FLASH_SALE
    assert availability.line_discount(classification) == (Decimal('0.2'), DiscountType.PERCENTAGE)
    assert availability.effective_stock(classification) == 4


def test_active_pre_order_wins_over_active_flash_sale():
    classification = make_classification(1, pre_order=pre_order(), product_discount=flash_sale())

    assert availability.event_type(classification) == OrderEvent.PRE_ORDER
    assert availability.line_discount(classification) == (None, None)


def test_status_of_either_event_blocks_line():
    classification = make_classification(
        1,
        pre_order=pre_order(status=EventStatus.SOLD_OUT),
        product_discount=flash_sale(status=EventStatus.CANCELLED),
    )

    assert availability.line_block_reasons(classification) == [
        BlockReason.EVENT_SOLD_OUT, BlockReason.EVENT_CANCELLED,
    ]
