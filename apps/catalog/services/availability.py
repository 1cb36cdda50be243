"""
Stock, lifecycle and purchasability rules for classifications and cart lines.
"""

from decimal import Decimal
from typing import Iterable, List, Optional, Sequence, Tuple

from apps.catalog.choices import (
    BlockReason,
    ClassificationStatus,
    DiscountType,
    EventKind,
    EventStatus,
    OrderEvent,
)
from apps.catalog.conf import storefront_setting
from apps.catalog.exceptions import StockExceeded
from apps.catalog.services.snapshots import ClassificationData, EventData


def active_event(classification: ClassificationData) -> Optional[EventData]:
    """The active pre-order, else the active flash sale, else None."""
    for event in classification.events:
        if event.is_active:
            return event
    return None


def event_type(classification: ClassificationData) -> str:
    """NORMAL, FLASH_SALE or PRE_ORDER depending on the active event."""
    event = active_event(classification)
    if event is None:
        return OrderEvent.NORMAL
    if event.kind == EventKind.PRE_ORDER:
        return OrderEvent.PRE_ORDER
    return OrderEvent.FLASH_SALE


def effective_stock(classification: ClassificationData) -> int:
    """Event-scoped stock while an event with its own stock is active, else own stock."""
    event = active_event(classification)
    if event is not None and event.quantity is not None:
        return event.quantity
    return classification.quantity


def max_quantity(classification: ClassificationData) -> int:
    return max(effective_stock(classification), 0)


def line_discount(classification: ClassificationData) -> Tuple[Optional[Decimal], Optional[str]]:
    """(discount value, discount type) applied to the unit price of a line."""
    event = active_event(classification)
    if event is not None and event.kind == EventKind.FLASH_SALE and event.discount:
        return event.discount, DiscountType.PERCENTAGE
    return None, None


def has_active_classification(classifications: Iterable[ClassificationData]) -> bool:
    return any(c.status == ClassificationStatus.ACTIVE for c in classifications)


def has_classification_with_quantity(classifications: Iterable[ClassificationData]) -> bool:
    return any(effective_stock(c) > 0 for c in classifications)


def is_product_purchasable(product_status: Optional[str]) -> bool:
    if product_status is None:
        return True
    return product_status in storefront_setting('PURCHASABLE_PRODUCT_STATUSES')


def is_purchasable(
    classification: ClassificationData,
    siblings: Sequence[ClassificationData] = (),
    product_status: Optional[str] = None,
) -> bool:
    """
    Whether a classification can be picked: it is active, has stock at the
    level that applies to it, and its product is sellable at all.
    """
    if classification.status != ClassificationStatus.ACTIVE:
        return False
    if effective_stock(classification) <= 0:
        return False
    if not has_active_classification(siblings or [classification]):
        return False
    return is_product_purchasable(product_status)


def line_block_reasons(
    classification: ClassificationData,
    siblings: Sequence[ClassificationData] = (),
    product_status: Optional[str] = None,
) -> List[str]:
    """
    Every reason preventing a cart line from being checked out.

    An empty list means the line can be selected.
    """
    siblings = siblings or [classification]
    reasons = []

    if not is_product_purchasable(product_status):
        reasons.append(BlockReason.PRODUCT_UNAVAILABLE)
    if not has_active_classification(siblings):
        reasons.append(BlockReason.NO_ACTIVE_CLASSIFICATION)
    if classification.status == ClassificationStatus.HIDDEN:
        reasons.append(BlockReason.HIDDEN)
    elif classification.status != ClassificationStatus.ACTIVE:
        reasons.append(BlockReason.PRODUCT_UNAVAILABLE)
    if effective_stock(classification) <= 0 or not has_classification_with_quantity(siblings):
        reasons.append(BlockReason.OUT_OF_STOCK)

    for event in classification.events:
        if event.status == EventStatus.CANCELLED:
            reasons.append(BlockReason.EVENT_CANCELLED)
        elif event.status == EventStatus.INACTIVE:
            reasons.append(BlockReason.EVENT_INACTIVE)
        elif event.status == EventStatus.SOLD_OUT:
            reasons.append(BlockReason.EVENT_SOLD_OUT)

    # dedupe, keep order
    return list(dict.fromkeys(reasons))


def validate_quantity(classification: ClassificationData, quantity: int) -> int:
    """Return ``quantity`` or raise StockExceeded when it cannot be supplied."""
    available = max_quantity(classification)
    if quantity < 1 or quantity > available:
        raise StockExceeded(classification.id, quantity, available)
    return quantity


def clamp_quantity(classification: ClassificationData, quantity: int) -> int:
    """Bring ``quantity`` into [1, available]; 0 when nothing is available."""
    available = max_quantity(classification)
    if available == 0:
        return 0
    return min(max(quantity, 1), available)
