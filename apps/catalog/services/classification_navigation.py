"""
Service for building the classification picker payload of a product.
Options and their availability are INFERRED from the classification data.
"""

from decimal import Decimal
from typing import Any, Dict, Mapping, Optional

from apps.catalog.models import Product
from apps.catalog.services.classification_resolver import (
    ClassificationResolver,
    OptionState,
    default_classification,
)
from apps.catalog.services.snapshots import ATTRIBUTE_KEYS, ClassificationData
from apps.catalog.services import availability
from apps.catalog.services.discount_calculator import DiscountCalculator

CENTS = Decimal('0.01')


class ClassificationNavigationService:
    """
    Service to turn attribute picks coming from the UI into picker state.
    """

    @staticmethod
    def build_resolver(
        product: Product,
        selections: Mapping[str, str],
        committed_id: Optional[Any] = None,
        line_id: Optional[Any] = None,
    ) -> ClassificationResolver:
        """
        Build a resolver for ``product`` and replay the picks in
        ``selections`` on top of the committed classification.

        Args:
            product: The product to resolve within
            selections: Dict of {attribute_key: option_value}; keys other than
                color/size/other are ignored
            committed_id: Classification currently attached (cart line), if any
            line_id: Cart line being edited, carried by the committed change
        """
        classifications = product.get_classification_snapshots()
        committed = None
        if committed_id is not None:
            committed = next((c for c in classifications if str(c.id) == str(committed_id)), None)

        resolver = ClassificationResolver(
            classifications,
            committed=committed,
            product_status=product.status,
            line_id=line_id,
        )
        for key in ATTRIBUTE_KEYS:
            value = selections.get(key)
            if value and resolver.selection.get(key) != value:
                resolver.select(key, value)
        return resolver

    @staticmethod
    def serialize_classification(classification: ClassificationData) -> Dict[str, Any]:
        discount, discount_type = availability.line_discount(classification)
        return {
            'id': classification.id,
            'title': classification.title,
            'color': classification.color,
            'size': classification.size,
            'other': classification.other,
            'price': str(classification.price),
            'discounted_price': str(DiscountCalculator.unit_price_after_discount(
                classification.price, discount, discount_type
            ).quantize(CENTS)),
            'event_type': availability.event_type(classification),
            'max_quantity': availability.max_quantity(classification),
            'status': classification.status,
            'image_url': classification.image_url,
        }

    @staticmethod
    def serialize_option(option: OptionState) -> Dict[str, Any]:
        return {
            'value': option.value,
            'is_available': option.is_available,
            'is_selectable': option.is_selectable,
            'is_enabled': option.is_enabled,
            'is_selected': option.is_selected,
            'is_current': option.is_current,
            'image_url': option.image_url,
        }

    @staticmethod
    def get_picker_data(
        product: Product,
        selections: Mapping[str, str],
        committed_id: Optional[Any] = None,
    ) -> Dict[str, Any]:
        """
        Full picker payload.

        Returns dict with:
        - state: incomplete / complete_unmatched / complete_matched
        - selection: current picks
        - matched: serialized classification when matched
        - default: classification preselected on the product page
        - options: per attribute key, the button model of each option
        """
        resolver = ClassificationNavigationService.build_resolver(
            product, selections, committed_id
        )
        serialize = ClassificationNavigationService.serialize_classification
        default = default_classification(resolver.classifications)

        return {
            'product': {
                'id': product.id,
                'name': product.name,
                'slug': product.slug,
                'status': product.status,
            },
            'state': resolver.state.value,
            'selection': resolver.selection.as_dict(),
            'matched': serialize(resolver.matched) if resolver.matched else None,
            'matched_is_selectable': (
                resolver.is_selectable(resolver.matched) if resolver.matched else False
            ),
            'default': serialize(default) if default else None,
            'first_attribute_key': resolver.index.first_attribute_key(),
            'options': {
                key: [
                    ClassificationNavigationService.serialize_option(option)
                    for option in options
                ]
                for key, options in resolver.all_option_states().items()
            },
        }
