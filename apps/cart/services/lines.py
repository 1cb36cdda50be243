from dataclasses import dataclass, replace
from decimal import Decimal
from typing import Any, List, Optional, Tuple

from apps.catalog.choices import ProductStatus
from apps.catalog.services import availability
from apps.catalog.services.discount_calculator import DiscountCalculator
from apps.catalog.services.snapshots import ClassificationData


@dataclass(frozen=True)
class CartLine:
    """
    One cart row: a classification and how many units of it.

    ``siblings`` holds every classification of the same product so
    product-level rules (no active classification left, nothing in stock)
    can be checked per line.
    """
    id: Any
    classification: ClassificationData
    quantity: int
    brand_id: Any
    product_id: Any = None
    product_name: str = ''
    product_status: Optional[str] = ProductStatus.OFFICIAL
    siblings: Tuple[ClassificationData, ...] = ()

    @property
    def item_id(self) -> Any:
        return self.classification.id

    @property
    def discount(self) -> Tuple[Optional[Decimal], Optional[str]]:
        return availability.line_discount(self.classification)

    @property
    def unit_price(self) -> Decimal:
        return DiscountCalculator.unit_price_after_discount(
            self.classification.price, *self.discount
        )

    @property
    def total(self) -> Decimal:
        return DiscountCalculator.line_total(
            self.classification.price, self.quantity, *self.discount
        )

    @property
    def original_total(self) -> Decimal:
        return DiscountCalculator.line_total(self.classification.price, self.quantity)

    @property
    def savings(self) -> Decimal:
        return DiscountCalculator.line_savings(
            self.classification.price, self.quantity, *self.discount
        )

    @property
    def event_type(self) -> str:
        return availability.event_type(self.classification)

    @property
    def max_quantity(self) -> int:
        return availability.max_quantity(self.classification)

    @property
    def block_reasons(self) -> List[str]:
        return availability.line_block_reasons(
            self.classification, self.siblings, self.product_status
        )

    @property
    def is_blocked(self) -> bool:
        return bool(self.block_reasons)

    def with_quantity(self, quantity: int) -> 'CartLine':
        return replace(self, quantity=quantity)

    def with_classification(self, classification: ClassificationData, quantity: int) -> 'CartLine':
        return replace(self, classification=classification, quantity=quantity)
