from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Any, FrozenSet, Optional

from apps.vouchers.choices import (
    UnavailableReason,
    VoucherApplyType,
    VoucherScope,
    VoucherStatus,
)


@dataclass(frozen=True)
class VoucherData:
    """
    Voucher as fetched for a brand or the platform.

    ``status`` and ``unavailable_reason`` are the upstream annotations;
    eligibility is still re-checked locally against the current subtotal.
    """
    id: Any
    scope: str
    discount_type: str
    discount_value: Decimal
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    brand_id: Any = None
    code: str = ''
    max_discount: Optional[Decimal] = None
    min_order_value: Optional[Decimal] = None
    apply_type: str = VoucherApplyType.ALL
    applicable_item_ids: FrozenSet[Any] = field(default_factory=frozenset)
    status: str = VoucherStatus.AVAILABLE
    unavailable_reason: Optional[str] = None

    @property
    def is_out_of_stock(self) -> bool:
        return self.unavailable_reason == UnavailableReason.OUT_OF_STOCK

    @property
    def is_brand_scoped(self) -> bool:
        return self.scope == VoucherScope.BRAND
