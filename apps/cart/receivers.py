"""
Persist engine events to ``CartItem``.
"""

import logging

from django.db import transaction
from django.dispatch import receiver
from django.utils import timezone

from apps.cart.models import CartItem
from apps.cart.signals import line_removed, quantity_changed
from apps.catalog.signals import variant_changed

logger = logging.getLogger(__name__)


@receiver(variant_changed)
def save_variant_change(sender, change, **kwargs):
    """
    Point the cart row at the new classification. When the customer
    already has a row for it, the two rows are merged.
    """
    if change.line_id is None:
        return

    with transaction.atomic():
        item = CartItem.objects.select_for_update().filter(pk=change.line_id).first()
        if item is None:
            logger.warning("Cart item %s vanished before its variant change", change.line_id)
            return

        existing = CartItem.objects.select_for_update().filter(
            user_id=item.user_id,
            classification_id=change.new_variant_id,
        ).exclude(pk=item.pk).first()

        if existing is not None:
            existing.quantity += change.quantity
            existing.save(update_fields=['quantity', 'updated_at'])
            item.delete()
            logger.info(
                "Merged cart item %s into %s (classification %s)",
                change.line_id, existing.pk, change.new_variant_id,
            )
        else:
            item.classification_id = change.new_variant_id
            item.quantity = change.quantity
            item.save(update_fields=['classification', 'quantity', 'updated_at'])


@receiver(quantity_changed)
def save_quantity(sender, line_id, quantity, **kwargs):
    CartItem.objects.filter(pk=line_id).update(quantity=quantity, updated_at=timezone.now())


@receiver(line_removed)
def delete_line(sender, line_id, **kwargs):
    CartItem.objects.filter(pk=line_id).delete()
