"""
Builders for engine records used across the test modules.
"""

from datetime import timedelta
from decimal import Decimal

from django.utils import timezone

from apps.cart.services.lines import CartLine
from apps.catalog.choices import (
    ClassificationStatus,
    DiscountType,
    EventKind,
    EventStatus,
    ProductStatus,
)
from apps.catalog.services.snapshots import ClassificationData, EventData
from apps.vouchers.choices import VoucherApplyType, VoucherScope, VoucherStatus
from apps.vouchers.services.snapshots import VoucherData


def make_classification(id, price='100', quantity=10, **kwargs):
    return ClassificationData(id=id, price=Decimal(price), quantity=quantity, **kwargs)


def flash_sale(discount='0.2', status=EventStatus.ACTIVE, quantity=None):
    return EventData(
        kind=EventKind.FLASH_SALE,
        status=status,
        discount=Decimal(discount),
        quantity=quantity,
    )


def pre_order(status=EventStatus.ACTIVE, quantity=None):
    return EventData(kind=EventKind.PRE_ORDER, status=status, quantity=quantity)


def make_line(
    line_id,
    price='100',
    quantity=1,
    brand_id=1,
    stock=10,
    status=ClassificationStatus.ACTIVE,
    product_discount=None,
    pre_order=None,
    product_status=ProductStatus.OFFICIAL,
):
    """A line whose classification id is ``line_id * 10``."""
    classification = make_classification(
        id=line_id * 10,
        price=price,
        quantity=stock,
        status=status,
        product_discount=product_discount,
        pre_order=pre_order,
    )
    return CartLine(
        id=line_id,
        classification=classification,
        quantity=quantity,
        brand_id=brand_id,
        product_id=line_id,
        product_name=f'Product {line_id}',
        product_status=product_status,
        siblings=(classification,),
    )


def make_voucher(
    id,
    scope=VoucherScope.BRAND,
    brand_id=1,
    discount_type=DiscountType.PERCENTAGE,
    discount_value='0.1',
    max_discount=None,
    min_order_value=None,
    apply_type=VoucherApplyType.ALL,
    applicable_item_ids=(),
    status=VoucherStatus.AVAILABLE,
    unavailable_reason=None,
    start_time=None,
    end_time=None,
):
    now = timezone.now()
    return VoucherData(
        id=id,
        code=f'V{id}',
        scope=scope,
        brand_id=brand_id if scope == VoucherScope.BRAND else None,
        discount_type=discount_type,
        discount_value=Decimal(discount_value),
        max_discount=Decimal(max_discount) if max_discount is not None else None,
        min_order_value=Decimal(min_order_value) if min_order_value is not None else None,
        apply_type=apply_type,
        applicable_item_ids=frozenset(applicable_item_ids),
        status=status,
        unavailable_reason=unavailable_reason,
        start_time=start_time or now - timedelta(days=1),
        end_time=end_time,
    )
