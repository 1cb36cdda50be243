"""
Classification picker state machine.

The customer taps attribute options one at a time; after each tap the
resolver works out whether the picks identify exactly one classification,
which options remain reachable and which of them can be bought.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional

from apps.catalog.choices import ClassificationType, ProductStatus
from apps.catalog.exceptions import DataInconsistency
from apps.catalog.services import availability
from apps.catalog.services.classification_index import ClassificationIndex
from apps.catalog.services.snapshots import (
    ATTRIBUTE_KEYS,
    ClassificationData,
    Selection,
)
from apps.catalog.signals import variant_changed

logger = logging.getLogger(__name__)


class ResolverState(str, Enum):
    INCOMPLETE = 'incomplete'
    COMPLETE_UNMATCHED = 'complete_unmatched'
    COMPLETE_MATCHED = 'complete_matched'


@dataclass(frozen=True)
class VariantChange:
    """
    Emitted when a different classification is committed.

    Carries the previous id so the caller can roll back if the server
    rejects the change.
    """
    old_variant_id: Any
    new_variant_id: Any
    quantity: int
    line_id: Any = None


@dataclass(frozen=True)
class OptionState:
    """Everything the picker needs to render one option button."""
    key: str
    value: str
    is_available: bool
    is_selectable: bool
    is_selected: bool
    is_current: bool
    image_url: Optional[str] = None

    @property
    def is_enabled(self) -> bool:
        return self.is_available and self.is_selectable


def default_classification(
    classifications: Iterable[ClassificationData],
) -> Optional[ClassificationData]:
    """Initial pick on a product page: the DEFAULT classification, else the cheapest."""
    classifications = list(classifications)
    if not classifications:
        return None
    for classification in classifications:
        if classification.type == ClassificationType.DEFAULT:
            return classification
    return min(classifications, key=lambda c: c.price)


class ClassificationResolver:
    """
    Resolves attribute picks to a classification.

    Args:
        classifications: every classification of the product
        committed: classification currently attached to the cart line / page
        product_status: top-level product status, gates purchasability
        line_id: cart line being edited, forwarded in VariantChange
    """

    def __init__(
        self,
        classifications: Iterable[ClassificationData],
        committed: Optional[ClassificationData] = None,
        product_status: Optional[str] = ProductStatus.OFFICIAL,
        line_id: Any = None,
    ):
        self.index = ClassificationIndex(classifications)
        self.product_status = product_status
        self.line_id = line_id
        self.committed = committed
        self.selection = Selection.from_classification(committed)
        self.state = ResolverState.INCOMPLETE
        self.matched: Optional[ClassificationData] = None
        self._resolve()

    @property
    def classifications(self) -> List[ClassificationData]:
        return self.index.classifications

    # -------------------------------------------------------------------------
    # Transitions
    # -------------------------------------------------------------------------

    def select(self, key: str, value: Optional[str]) -> ResolverState:
        """
        Apply one tap. Tapping the value already picked for ``key`` clears
        it; any other value replaces the pick for that key only.
        """
        if key not in ATTRIBUTE_KEYS:
            logger.warning("Ignoring selection on unknown attribute %r", key)
            return self.state

        new_value = None if self.selection.get(key) == value else value
        self.selection = self.selection.with_value(key, new_value)
        self._resolve()
        return self.state

    def cancel(self) -> ResolverState:
        """Drop pending picks and return to the committed classification."""
        self.selection = Selection.from_classification(self.committed)
        self._resolve()
        return self.state

    def commit(self, quantity: int = 1) -> Optional[VariantChange]:
        """
        Make the matched classification the committed one.

        Returns the change (also sent through ``variant_changed``) or None
        when there is nothing to commit: picks incomplete or ambiguous, the
        match cannot be bought, or it is the classification already
        committed.
        """
        if self.state != ResolverState.COMPLETE_MATCHED:
            logger.info("Commit skipped, resolver is %s", self.state.value)
            return None

        new = self.matched
        if self.committed is not None and self.committed.id == new.id:
            return None
        if not self.is_selectable(new):
            logger.info("Commit skipped, classification %s cannot be purchased", new.id)
            return None

        change = VariantChange(
            old_variant_id=self.committed.id if self.committed is not None else None,
            new_variant_id=new.id,
            quantity=quantity,
            line_id=self.line_id,
        )
        self.committed = new
        variant_changed.send(sender=self.__class__, change=change)
        return change

    def _resolve(self) -> None:
        keys = self.index.constrained_keys()
        if any(self.selection.get(key) is None for key in keys):
            self.state = ResolverState.INCOMPLETE
            self.matched = None
            return

        matches = self.index.matches(self.selection)
        if len(matches) == 1:
            self.state = ResolverState.COMPLETE_MATCHED
            self.matched = matches[0]
            return

        logger.warning(
            "Selection %s matches %d classifications",
            self.selection.as_dict(), len(matches),
        )
        self.state = ResolverState.COMPLETE_UNMATCHED
        self.matched = None

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def require_match(self) -> Optional[ClassificationData]:
        """Matched classification; raises DataInconsistency for an unmatched complete pick."""
        if self.state == ResolverState.COMPLETE_UNMATCHED:
            raise DataInconsistency(
                self.selection.as_dict(), len(self.index.matches(self.selection))
            )
        return self.matched

    def is_selectable(self, classification: ClassificationData) -> bool:
        return availability.is_purchasable(
            classification, self.classifications, self.product_status
        )

    def available_options(self, key: str) -> List[str]:
        return self.index.available_options(key, self.selection)

    def option_states(self, key: str) -> List[OptionState]:
        """
        Button model for every option of ``key``.

        A picked option whose classification became unavailable is still
        listed (disabled) so the customer can move away from it.
        """
        available = set(self.available_options(key))
        show_image = key == self.index.first_attribute_key()
        states = []

        for option in self.index.all_options[key]:
            candidate = self.index.find_for_option(key, option, self.selection)
            states.append(OptionState(
                key=key,
                value=option,
                is_available=option in available,
                is_selectable=candidate is not None and self.is_selectable(candidate),
                is_selected=self.selection.get(key) == option,
                is_current=self.matched is not None and self.matched.attribute(key) == option,
                image_url=candidate.image_url if show_image and candidate is not None else None,
            ))
        return states

    def all_option_states(self) -> Dict[str, List[OptionState]]:
        return {key: self.option_states(key) for key in self.index.constrained_keys()}

    def title(self) -> str:
        """Label of the committed classification, empty when nothing is committed."""
        return self.committed.label if self.committed is not None else ''
