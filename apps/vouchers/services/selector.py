"""
Best voucher selection and the voucher sheet grouping.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Iterable, List, Optional

from apps.vouchers.choices import VoucherStatus
from apps.vouchers.services.evaluator import VoucherEvaluation, VoucherEvaluator
from apps.vouchers.services.snapshots import VoucherData


@dataclass(frozen=True)
class VoucherGroups:
    available: List[VoucherData]
    unavailable: List[VoucherData]
    unclaimed: List[VoucherData]


class BestVoucherSelector:

    @staticmethod
    def evaluate_all(
        vouchers: Iterable[VoucherData],
        order_subtotal: Any,
        selected_item_ids: Iterable[Any] = (),
        now: Optional[datetime] = None,
    ) -> List[VoucherEvaluation]:
        selected_item_ids = list(selected_item_ids)
        return [
            VoucherEvaluator.evaluate(voucher, order_subtotal, selected_item_ids, now)
            for voucher in vouchers
        ]

    @staticmethod
    def pick_best_evaluation(
        vouchers: Iterable[VoucherData],
        order_subtotal: Any,
        selected_item_ids: Iterable[Any] = (),
        now: Optional[datetime] = None,
    ) -> Optional[VoucherEvaluation]:
        """
        Highest discount among eligible vouchers. Ties go to the voucher
        ending soonest, then to input order.
        """
        best = None
        for evaluation in BestVoucherSelector.evaluate_all(
            vouchers, order_subtotal, selected_item_ids, now
        ):
            if not evaluation.eligible:
                continue
            if best is None or BestVoucherSelector._beats(evaluation, best):
                best = evaluation
        return best

    @staticmethod
    def pick_best(
        vouchers: Iterable[VoucherData],
        order_subtotal: Any,
        selected_item_ids: Iterable[Any] = (),
        now: Optional[datetime] = None,
    ) -> Optional[VoucherData]:
        best = BestVoucherSelector.pick_best_evaluation(
            vouchers, order_subtotal, selected_item_ids, now
        )
        return best.voucher if best is not None else None

    @staticmethod
    def _beats(candidate: VoucherEvaluation, current: VoucherEvaluation) -> bool:
        if candidate.discount_amount != current.discount_amount:
            return candidate.discount_amount > current.discount_amount
        candidate_end = candidate.voucher.end_time
        current_end = current.voucher.end_time
        if candidate_end is None:
            return False
        return current_end is None or candidate_end < current_end

    @staticmethod
    def partition(vouchers: Iterable[VoucherData]) -> VoucherGroups:
        """Split vouchers by upstream status for the voucher sheet."""
        groups = {status: [] for status in VoucherStatus.values}
        for voucher in vouchers:
            groups.get(voucher.status, groups[VoucherStatus.UNAVAILABLE]).append(voucher)
        return VoucherGroups(
            available=groups[VoucherStatus.AVAILABLE],
            unavailable=groups[VoucherStatus.UNAVAILABLE],
            unclaimed=groups[VoucherStatus.UNCLAIMED],
        )

    @staticmethod
    def confirm(vouchers: Iterable[VoucherData], voucher_id: Any) -> Optional[VoucherData]:
        """The voucher picked on the sheet, only if it can actually be used."""
        if voucher_id is None:
            return None
        for voucher in vouchers:
            if voucher.id == voucher_id:
                return voucher if voucher.status == VoucherStatus.AVAILABLE else None
        return None
