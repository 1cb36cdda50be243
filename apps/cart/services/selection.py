"""
Cart selection aggregator.

Tracks which cart lines are ticked for checkout, sums them per brand and
for the whole order, and keeps the chosen brand and platform vouchers
consistent with the current selection.
"""

import logging
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional

from apps.cart.choices import BrandSelection
from apps.cart.services.lines import CartLine
from apps.cart.services.state import CartState
from apps.cart.signals import line_removed, quantity_changed
from apps.catalog.services import availability
from apps.catalog.services.discount_calculator import ZERO
from apps.catalog.services.snapshots import ClassificationData
from apps.vouchers.services.evaluator import VoucherEvaluation, VoucherEvaluator
from apps.vouchers.services.selector import BestVoucherSelector
from apps.vouchers.services.snapshots import VoucherData

logger = logging.getLogger(__name__)


class CartSelectionAggregator:
    """
    View-model of the cart page.

    Args:
        state: where the selection and chosen vouchers are persisted
        lines: current cart lines, in display order
        vouchers: brand and platform vouchers visible to the customer
        now: evaluation time for vouchers (defaults to the current time)

    Every mutating call is one transition: local state is updated, the
    selection and vouchers are re-validated, and only then is the result
    written to ``state`` and signals sent.
    """

    def __init__(
        self,
        state: CartState,
        lines: Iterable[CartLine] = (),
        vouchers: Iterable[VoucherData] = (),
        now: Optional[datetime] = None,
    ):
        self.state = state
        self.now = now
        self._lines: Dict[Any, CartLine] = {line.id: line for line in lines}
        self._vouchers: List[VoucherData] = list(vouchers)
        self._selected: List[Any] = state.get_selected_line_ids()
        self._brand_vouchers: Dict[Any, Any] = state.get_brand_voucher_ids()
        self._platform_voucher_id: Any = state.get_platform_voucher_id()
        self._refresh()

    # -------------------------------------------------------------------------
    # Lines
    # -------------------------------------------------------------------------

    @property
    def lines(self) -> List[CartLine]:
        return list(self._lines.values())

    def line(self, line_id: Any) -> Optional[CartLine]:
        return self._lines.get(line_id)

    def brand_ids(self) -> List[Any]:
        # display order
        return list(dict.fromkeys(line.brand_id for line in self._lines.values()))

    def lines_for_brand(self, brand_id: Any) -> List[CartLine]:
        return [line for line in self._lines.values() if line.brand_id == brand_id]

    def selectable_line_ids(self, brand_id: Any = None) -> List[Any]:
        lines = self.lines if brand_id is None else self.lines_for_brand(brand_id)
        return [line.id for line in lines if not line.is_blocked]

    def set_lines(self, lines: Iterable[CartLine]) -> None:
        """Replace the line snapshot; ids no longer present drop out of the selection."""
        self._lines = {line.id: line for line in lines}
        self._refresh()

    def remove_line(self, line_id: Any) -> Optional[CartLine]:
        line = self._lines.pop(line_id, None)
        if line is None:
            logger.debug("Remove ignored, line %s is not in the cart", line_id)
            return None
        self._refresh()
        line_removed.send(
            sender=self.__class__, line_id=line_id, classification_id=line.item_id
        )
        return line

    def update_quantity(self, line_id: Any, quantity: int) -> Optional[CartLine]:
        """
        Change the quantity of a line.

        Raises StockExceeded when ``quantity`` is below 1 or above the
        stock that applies to the line's classification.
        """
        line = self._lines.get(line_id)
        if line is None:
            logger.debug("Quantity update ignored, line %s is not in the cart", line_id)
            return None

        availability.validate_quantity(line.classification, quantity)
        if quantity == line.quantity:
            return line

        previous_quantity = line.quantity
        updated = line.with_quantity(quantity)
        self._lines[line_id] = updated
        self._refresh()
        quantity_changed.send(
            sender=self.__class__,
            line_id=line_id,
            quantity=quantity,
            previous_quantity=previous_quantity,
        )
        return updated

    def apply_variant_change(self, change, classification: ClassificationData) -> Optional[CartLine]:
        """
        Swap the classification of the line named in ``change`` (a
        VariantChange committed by the picker). The quantity is brought
        within the new classification's stock.

        When another line already holds the new classification the two are
        merged into that line, as the persisted cart rows are; the merged
        line is returned.
        """
        line = self._lines.get(change.line_id)
        if line is None:
            logger.debug("Variant change ignored, line %s is not in the cart", change.line_id)
            return None

        duplicate = next(
            (other for other in self._lines.values()
             if other.id != line.id and other.item_id == classification.id),
            None,
        )
        if duplicate is not None:
            quantity = availability.clamp_quantity(
                classification, duplicate.quantity + change.quantity
            )
            merged = duplicate.with_classification(classification, quantity or duplicate.quantity)
            del self._lines[line.id]
            self._lines[duplicate.id] = merged
            if line.id in self._selected and duplicate.id not in self._selected:
                self._selected.append(duplicate.id)
            logger.info("Merged line %s into %s", line.id, duplicate.id)
            self._refresh()
            return merged

        quantity = availability.clamp_quantity(classification, change.quantity)
        updated = line.with_classification(classification, quantity or line.quantity)
        self._lines[line.id] = updated
        self._refresh()
        return updated

    # -------------------------------------------------------------------------
    # Selection
    # -------------------------------------------------------------------------

    @property
    def selected_line_ids(self) -> List[Any]:
        return list(self._selected)

    def is_selected(self, line_id: Any) -> bool:
        return line_id in self._selected

    def selected_lines(self, brand_id: Any = None) -> List[CartLine]:
        return [
            line for line in self._lines.values()
            if line.id in self._selected and (brand_id is None or line.brand_id == brand_id)
        ]

    def selected_item_ids(self, brand_id: Any = None) -> List[Any]:
        return [line.item_id for line in self.selected_lines(brand_id)]

    def toggle_line(self, line_id: Any) -> bool:
        """Flip one line; returns whether it is selected afterwards."""
        line = self._lines.get(line_id)
        if line is None:
            logger.debug("Toggle ignored, line %s is not in the cart", line_id)
            return False

        if line_id in self._selected:
            self._selected.remove(line_id)
        elif line.is_blocked:
            logger.info("Line %s cannot be selected: %s", line_id, ', '.join(line.block_reasons))
        else:
            self._selected.append(line_id)
        self._refresh()
        return line_id in self._selected

    def toggle_brand(self, brand_id: Any) -> BrandSelection:
        """
        Brand checkbox: when every selectable line of the brand is ticked,
        untick them all; otherwise tick them all.
        """
        selectable = self.selectable_line_ids(brand_id)
        if selectable and all(line_id in self._selected for line_id in selectable):
            self._selected = [i for i in self._selected if i not in selectable]
        else:
            self._select(selectable)
        self._refresh()
        return self.brand_selection(brand_id)

    def select_all(self) -> bool:
        """The "select all" checkbox; returns whether everything is selected afterwards."""
        selectable = self.selectable_line_ids()
        if selectable and all(line_id in self._selected for line_id in selectable):
            self._selected = []
        else:
            self._select(selectable)
        self._refresh()
        return bool(selectable) and len(self._selected) == len(selectable)

    def clear_selection(self) -> None:
        self._selected = []
        self._refresh()

    def replace_selection(self, line_ids: Iterable[Any]) -> List[Any]:
        """Select exactly ``line_ids``; unknown and blocked lines are left out."""
        self._selected = []
        self._select(line_ids)
        self._refresh()
        return self.selected_line_ids

    def _select(self, line_ids: Iterable[Any]) -> None:
        for line_id in line_ids:
            if line_id not in self._selected:
                self._selected.append(line_id)

    def brand_selection(self, brand_id: Any) -> BrandSelection:
        selectable = self.selectable_line_ids(brand_id)
        count = sum(1 for line_id in selectable if line_id in self._selected)
        if selectable and count == len(selectable):
            return BrandSelection.ALL
        if count:
            return BrandSelection.SOME
        return BrandSelection.NONE

    def per_brand_selection(self) -> Dict[Any, BrandSelection]:
        return {brand_id: self.brand_selection(brand_id) for brand_id in self.brand_ids()}

    # -------------------------------------------------------------------------
    # Subtotals
    # -------------------------------------------------------------------------

    def subtotal_for_brand(self, brand_id: Any) -> Decimal:
        """Selected lines of the brand, each at its own discounted price."""
        return sum((line.total for line in self.selected_lines(brand_id)), ZERO)

    def subtotal_platform(self) -> Decimal:
        return sum((self.subtotal_for_brand(b) for b in self.brand_ids()), ZERO)

    # -------------------------------------------------------------------------
    # Vouchers
    # -------------------------------------------------------------------------

    @property
    def vouchers(self) -> List[VoucherData]:
        return list(self._vouchers)

    def set_vouchers(self, vouchers: Iterable[VoucherData]) -> None:
        """Replace the voucher list; chosen ids that disappeared are dropped."""
        self._vouchers = list(vouchers)
        self._refresh()

    def vouchers_for_brand(self, brand_id: Any) -> List[VoucherData]:
        return [
            v for v in self._vouchers
            if v.is_brand_scoped and v.brand_id == brand_id
        ]

    def platform_vouchers(self) -> List[VoucherData]:
        return [v for v in self._vouchers if not v.is_brand_scoped]

    def choose_brand_voucher(self, brand_id: Any, voucher_id: Any) -> Optional[VoucherEvaluation]:
        """
        Pick a voucher for one brand; None clears the choice.

        Returns the evaluation of the picked voucher. The choice is only
        kept when the voucher is claimed and eligible for the brand's
        current subtotal; None when it was dropped straight away, e.g. the
        brand has nothing selected.
        """
        if voucher_id is None:
            self._brand_vouchers.pop(brand_id, None)
            self._refresh()
            return None

        voucher = BestVoucherSelector.confirm(self.vouchers_for_brand(brand_id), voucher_id)
        if voucher is None:
            logger.info("Voucher %s cannot be used for brand %s", voucher_id, brand_id)
            return None

        evaluation = self._evaluate_for_brand(voucher, brand_id)
        if evaluation.eligible:
            self._brand_vouchers[brand_id] = voucher.id
            self._refresh()
            if self._brand_vouchers.get(brand_id) != voucher.id:
                return None
        return evaluation

    def choose_platform_voucher(self, voucher_id: Any) -> Optional[VoucherEvaluation]:
        if voucher_id is None:
            self._platform_voucher_id = None
            self._refresh()
            return None

        voucher = BestVoucherSelector.confirm(self.platform_vouchers(), voucher_id)
        if voucher is None:
            logger.info("Voucher %s cannot be used for the order", voucher_id)
            return None

        evaluation = self._evaluate_for_platform(voucher)
        if evaluation.eligible:
            self._platform_voucher_id = voucher.id
            self._refresh()
            if self._platform_voucher_id != voucher.id:
                return None
        return evaluation

    def chosen_brand_voucher(self, brand_id: Any) -> Optional[VoucherData]:
        return self._find_voucher(
            self.vouchers_for_brand(brand_id), self._brand_vouchers.get(brand_id)
        )

    def chosen_platform_voucher(self) -> Optional[VoucherData]:
        return self._find_voucher(self.platform_vouchers(), self._platform_voucher_id)

    @property
    def chosen_brand_voucher_ids(self) -> Dict[Any, Any]:
        return dict(self._brand_vouchers)

    @property
    def chosen_platform_voucher_id(self) -> Any:
        return self._platform_voucher_id

    def brand_voucher_evaluation(self, brand_id: Any) -> Optional[VoucherEvaluation]:
        voucher = self.chosen_brand_voucher(brand_id)
        if voucher is None:
            return None
        return self._evaluate_for_brand(voucher, brand_id)

    def brand_voucher_discount(self, brand_id: Any) -> Decimal:
        evaluation = self.brand_voucher_evaluation(brand_id)
        return evaluation.discount_amount if evaluation is not None else ZERO

    def brand_voucher_discounts(self) -> Dict[Any, Decimal]:
        return {brand_id: self.brand_voucher_discount(brand_id) for brand_id in self.brand_ids()}

    def platform_voucher_base(self) -> Decimal:
        """Platform subtotal once brand vouchers are taken off."""
        base = self.subtotal_platform() - sum(self.brand_voucher_discounts().values(), ZERO)
        return max(base, ZERO)

    def platform_voucher_evaluation(self) -> Optional[VoucherEvaluation]:
        voucher = self.chosen_platform_voucher()
        if voucher is None:
            return None
        return self._evaluate_for_platform(voucher)

    def platform_voucher_discount(self) -> Decimal:
        evaluation = self.platform_voucher_evaluation()
        return evaluation.discount_amount if evaluation is not None else ZERO

    def best_brand_voucher(self, brand_id: Any) -> Optional[VoucherData]:
        """Best claimed voucher for the brand's current selection."""
        available = BestVoucherSelector.partition(self.vouchers_for_brand(brand_id)).available
        return BestVoucherSelector.pick_best(
            available,
            self.subtotal_for_brand(brand_id),
            self.selected_item_ids(brand_id),
            self.now,
        )

    def best_platform_voucher(self) -> Optional[VoucherData]:
        available = BestVoucherSelector.partition(self.platform_vouchers()).available
        return BestVoucherSelector.pick_best(
            available,
            self.platform_voucher_base(),
            self.selected_item_ids(),
            self.now,
        )

    def _evaluate_for_brand(self, voucher: VoucherData, brand_id: Any) -> VoucherEvaluation:
        return VoucherEvaluator.evaluate(
            voucher,
            self.subtotal_for_brand(brand_id),
            self.selected_item_ids(brand_id),
            self.now,
        )

    def _evaluate_for_platform(self, voucher: VoucherData) -> VoucherEvaluation:
        return VoucherEvaluator.evaluate(
            voucher,
            self.platform_voucher_base(),
            self.selected_item_ids(),
            self.now,
        )

    @staticmethod
    def _find_voucher(vouchers: Iterable[VoucherData], voucher_id: Any) -> Optional[VoucherData]:
        if voucher_id is None:
            return None
        return next((v for v in vouchers if v.id == voucher_id), None)

    # -------------------------------------------------------------------------
    # Consistency
    # -------------------------------------------------------------------------

    def _refresh(self) -> None:
        """
        Re-validate after a transition: the selection only holds known,
        unblocked lines, and a chosen voucher survives only while its scope
        has a non-zero subtotal and the voucher is still eligible.
        """
        selected = [
            line_id for line_id in self._selected
            if line_id in self._lines and not self._lines[line_id].is_blocked
        ]
        if len(selected) != len(self._selected):
            logger.debug(
                "Pruned lines %s from the selection",
                [i for i in self._selected if i not in selected],
            )
        self._selected = selected

        brands = set(self.brand_ids())
        for brand_id, voucher_id in list(self._brand_vouchers.items()):
            reason = None
            voucher = BestVoucherSelector.confirm(self.vouchers_for_brand(brand_id), voucher_id)
            if brand_id not in brands or voucher is None:
                reason = 'stale'
            elif self.subtotal_for_brand(brand_id) <= ZERO:
                reason = 'empty selection'
            else:
                evaluation = self._evaluate_for_brand(voucher, brand_id)
                if not evaluation.eligible:
                    reason = evaluation.reason
            if reason is not None:
                logger.info(
                    "Cleared voucher %s of brand %s (%s)", voucher_id, brand_id, reason
                )
                del self._brand_vouchers[brand_id]

        if self._platform_voucher_id is not None:
            reason = None
            voucher = BestVoucherSelector.confirm(self.platform_vouchers(), self._platform_voucher_id)
            if voucher is None:
                reason = 'stale'
            elif self.subtotal_platform() <= ZERO:
                reason = 'empty selection'
            else:
                evaluation = self._evaluate_for_platform(voucher)
                if not evaluation.eligible:
                    reason = evaluation.reason
            if reason is not None:
                logger.info(
                    "Cleared platform voucher %s (%s)", self._platform_voucher_id, reason
                )
                self._platform_voucher_id = None

        self._persist()

    def _persist(self) -> None:
        self.state.set_selected_line_ids(self._selected)
        self.state.set_brand_voucher_ids(self._brand_vouchers)
        self.state.set_platform_voucher_id(self._platform_voucher_id)
