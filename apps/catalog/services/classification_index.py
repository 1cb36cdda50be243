"""
Attribute index over a product's classifications.

Which options exist for color/size/other, and which of them are still
reachable given what the customer already picked. Options are inferred
from the classification records themselves, nothing is configured.
"""

from typing import Dict, Iterable, List, Optional

from apps.catalog.services.snapshots import (
    ATTRIBUTE_KEYS,
    ClassificationData,
    Selection,
)


class ClassificationIndex:

    def __init__(self, classifications: Iterable[ClassificationData]):
        self.classifications: List[ClassificationData] = list(classifications)
        self.all_options: Dict[str, List[str]] = {
            key: self._distinct_values(key) for key in ATTRIBUTE_KEYS
        }

    def _distinct_values(self, key: str) -> List[str]:
        # first-seen order
        values = []
        for classification in self.classifications:
            value = classification.attribute(key)
            if value is not None and value not in values:
                values.append(value)
        return values

    def constrained_keys(self) -> List[str]:
        """Attributes that at least one classification defines."""
        return [key for key in ATTRIBUTE_KEYS if self.all_options[key]]

    def first_attribute_key(self) -> Optional[str]:
        """The leading attribute; its option buttons carry the classification image."""
        keys = self.constrained_keys()
        return keys[0] if keys else None

    def available_options(self, key: str, selection: Selection) -> List[str]:
        """
        Options of ``key`` still reachable given the other picked attributes.

        Example:
            classifications: Red/S, Red/M, Blue/S
            available_options('size', Selection(color='Blue')) -> ['S']
        """
        reachable = {
            classification.attribute(key)
            for classification in self.classifications
            if classification.matches(selection, exclude=key)
        }
        return [option for option in self.all_options[key] if option in reachable]

    def matches(self, selection: Selection) -> List[ClassificationData]:
        """Classifications agreeing with every set attribute of ``selection``."""
        return [c for c in self.classifications if c.matches(selection)]

    def find_for_option(
        self,
        key: str,
        value: str,
        selection: Selection,
    ) -> Optional[ClassificationData]:
        """First classification offering ``value`` for ``key`` that fits the other picks."""
        for classification in self.classifications:
            if classification.attribute(key) == value and classification.matches(selection, exclude=key):
                return classification
        return None
