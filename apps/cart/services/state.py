"""
Key-value store for a customer's cart selection.

Selected lines and chosen vouchers survive between requests; they live in
a Django cache (``STOREFRONT['CART_STATE_CACHE']``) under keys scoped by
an owner key, typically the user id.
"""

from typing import Any, Dict, List, Optional

from django.core.cache import caches

from apps.catalog.conf import storefront_setting

SELECTED_LINES = 'selected_lines'
BRAND_VOUCHERS = 'brand_vouchers'
PLATFORM_VOUCHER = 'platform_voucher'


class CartState:

    def __init__(self, owner_key: Any, cache=None, timeout: Optional[int] = None):
        self.owner_key = owner_key
        self.cache = cache if cache is not None else caches[storefront_setting('CART_STATE_CACHE')]
        self.timeout = timeout if timeout is not None else storefront_setting('CART_STATE_TIMEOUT')

    def _key(self, name: str) -> str:
        return f'storefront:cart:{self.owner_key}:{name}'

    def get(self, name: str, default: Any = None) -> Any:
        return self.cache.get(self._key(name), default)

    def set(self, name: str, value: Any) -> None:
        self.cache.set(self._key(name), value, self.timeout)

    def delete(self, name: str) -> None:
        self.cache.delete(self._key(name))

    def clear(self) -> None:
        self.cache.delete_many([
            self._key(name) for name in (SELECTED_LINES, BRAND_VOUCHERS, PLATFORM_VOUCHER)
        ])

    def get_selected_line_ids(self) -> List[Any]:
        return list(self.get(SELECTED_LINES, []))

    def set_selected_line_ids(self, line_ids: List[Any]) -> None:
        self.set(SELECTED_LINES, list(line_ids))

    def get_brand_voucher_ids(self) -> Dict[Any, Any]:
        return dict(self.get(BRAND_VOUCHERS, {}))

    def set_brand_voucher_ids(self, voucher_ids: Dict[Any, Any]) -> None:
        self.set(BRAND_VOUCHERS, dict(voucher_ids))

    def get_platform_voucher_id(self) -> Any:
        return self.get(PLATFORM_VOUCHER)

    def set_platform_voucher_id(self, voucher_id: Any) -> None:
        if voucher_id is None:
            self.delete(PLATFORM_VOUCHER)
        else:
            self.set(PLATFORM_VOUCHER, voucher_id)
