"""
Signals sent by the catalog engine.

Receivers live in the shell (``apps.cart.receivers``); the engine only
announces what changed.
"""

from django.dispatch import Signal

# kwargs: change (VariantChange)
variant_changed = Signal()
