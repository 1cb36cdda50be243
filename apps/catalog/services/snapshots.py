"""
Immutable records the engine computes on.

Models produce these through ``to_snapshot()``; the engine never sees an
ORM instance, so everything under ``services`` runs without a database.
"""

from dataclasses import dataclass, replace
from decimal import Decimal
from typing import Any, Dict, Iterator, Mapping, Optional, Tuple

from apps.catalog.choices import (
    ClassificationStatus,
    ClassificationType,
    EventStatus,
)

ATTRIBUTE_KEYS: Tuple[str, ...] = ('color', 'size', 'other')


def clean_attribute_value(value: Any) -> Optional[str]:
    """Blank strings and None both mean "no value" for an attribute."""
    if value is None:
        return None
    value = str(value)
    return value if value.strip() else None


@dataclass(frozen=True)
class Selection:
    """A (possibly partial) color/size/other assignment."""
    color: Optional[str] = None
    size: Optional[str] = None
    other: Optional[str] = None

    def get(self, key: str) -> Optional[str]:
        if key not in ATTRIBUTE_KEYS:
            raise KeyError(key)
        return getattr(self, key)

    def with_value(self, key: str, value: Optional[str]) -> 'Selection':
        if key not in ATTRIBUTE_KEYS:
            raise KeyError(key)
        return replace(self, **{key: clean_attribute_value(value)})

    def items(self) -> Iterator[Tuple[str, Optional[str]]]:
        for key in ATTRIBUTE_KEYS:
            yield key, getattr(self, key)

    def fixed_items(self, exclude: Optional[str] = None) -> Dict[str, str]:
        """Attributes with a value, optionally leaving one key out."""
        return {
            key: value for key, value in self.items()
            if value is not None and key != exclude
        }

    def as_dict(self) -> Dict[str, Optional[str]]:
        return dict(self.items())

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> 'Selection':
        return cls(**{
            key: clean_attribute_value(data.get(key)) for key in ATTRIBUTE_KEYS
        })

    @classmethod
    def from_classification(cls, classification: Optional['ClassificationData']) -> 'Selection':
        if classification is None:
            return cls()
        return cls(
            color=classification.color,
            size=classification.size,
            other=classification.other,
        )


@dataclass(frozen=True)
class EventData:
    """
    Pre-order or flash-sale record a classification takes part in.

    ``quantity`` is the stock reserved for the event; when it is None the
    classification's own stock applies.
    """
    kind: str
    status: str
    discount: Optional[Decimal] = None
    quantity: Optional[int] = None

    @property
    def is_active(self) -> bool:
        return self.status == EventStatus.ACTIVE


@dataclass(frozen=True)
class ClassificationData:
    """One purchasable SKU of a product."""
    id: Any
    title: str = ''
    color: Optional[str] = None
    size: Optional[str] = None
    other: Optional[str] = None
    price: Decimal = Decimal('0')
    quantity: int = 0
    status: str = ClassificationStatus.ACTIVE
    type: str = ClassificationType.CUSTOM
    pre_order: Optional[EventData] = None
    product_discount: Optional[EventData] = None
    image_url: Optional[str] = None

    def attribute(self, key: str) -> Optional[str]:
        if key not in ATTRIBUTE_KEYS:
            raise KeyError(key)
        return getattr(self, key)

    def matches(self, selection: Selection, exclude: Optional[str] = None) -> bool:
        """True when every set attribute of ``selection`` (but ``exclude``) agrees."""
        return all(
            self.attribute(key) == value
            for key, value in selection.fixed_items(exclude=exclude).items()
        )

    @property
    def is_active(self) -> bool:
        return self.status == ClassificationStatus.ACTIVE

    @property
    def events(self) -> Tuple[EventData, ...]:
        """Linked events, pre-order first."""
        return tuple(e for e in (self.pre_order, self.product_discount) if e is not None)

    @property
    def label(self) -> str:
        """Display label such as "Red, M"."""
        return ', '.join(
            value for _, value in Selection.from_classification(self).items() if value
        )
