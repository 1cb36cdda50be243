"""
Access to the ``STOREFRONT`` settings dict with defaults.
"""

from django.conf import settings

DEFAULTS = {
    'CART_STATE_CACHE': 'default',
    'CART_STATE_TIMEOUT': 60 * 60 * 24 * 7,
    'FINAL_TOTAL_ROUNDING': 'floor',
    'PURCHASABLE_PRODUCT_STATUSES': ['OFFICIAL', 'FLASH_SALE'],
}


def storefront_setting(name):
    """Return a storefront setting, falling back to its default."""
    if name not in DEFAULTS:
        raise KeyError(f"Unknown storefront setting: {name}")
    return getattr(settings, 'STOREFRONT', {}).get(name, DEFAULTS[name])
