"""
Signals sent by the cart aggregator after a line changes.

Payloads carry the previous values so a caller can roll back when the
persistence layer rejects the change.
"""

from django.dispatch import Signal

# kwargs: line_id, quantity, previous_quantity
quantity_changed = Signal()

# kwargs: line_id, classification_id
line_removed = Signal()
