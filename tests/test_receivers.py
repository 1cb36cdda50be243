import pytest

from apps.cart.loaders import build_aggregator, load_cart_lines
from apps.cart.models import CartItem
from apps.catalog.services.classification_resolver import ClassificationResolver

pytestmark = pytest.mark.django_db


def resolver_for(item):
    classifications = item.classification.product.get_classification_snapshots()
    committed = next(c for c in classifications if c.id == item.classification_id)
    return ClassificationResolver(classifications, committed=committed, line_id=item.pk)


def test_committed_change_is_saved(user, shirt_variants):
    item = CartItem.objects.create(user=user, classification=shirt_variants['Red, S'], quantity=2)
    resolver = resolver_for(item)
    resolver.select('size', 'M')

    change = resolver.commit(quantity=item.quantity)

    item.refresh_from_db()
    assert change.old_variant_id == shirt_variants['Red, S'].pk
    assert item.classification == shirt_variants['Red, M']
    assert item.quantity == 2


def test_committed_change_merges_existing_row(user, shirt_variants):
    item = CartItem.objects.create(user=user, classification=shirt_variants['Red, S'], quantity=2)
    existing = CartItem.objects.create(user=user, classification=shirt_variants['Red, M'], quantity=1)
    resolver = resolver_for(item)
    resolver.select('size', 'M')

    resolver.commit(quantity=item.quantity)

    existing.refresh_from_db()
    assert existing.quantity == 3
    assert not CartItem.objects.filter(pk=item.pk).exists()


def test_quantity_change_is_saved(user, shirt_variants):
    item = CartItem.objects.create(user=user, classification=shirt_variants['Red, S'], quantity=1)
    aggregator = build_aggregator(user)

    aggregator.update_quantity(item.pk, 4)

    item.refresh_from_db()
    assert item.quantity == 4


def test_removed_line_is_deleted(user, shirt_variants):
    item = CartItem.objects.create(user=user, classification=shirt_variants['Red, S'])
    aggregator = build_aggregator(user)

    aggregator.remove_line(item.pk)

    assert not CartItem.objects.filter(pk=item.pk).exists()


def test_load_cart_lines(user, shirt_variants):
    CartItem.objects.create(user=user, classification=shirt_variants['Red, S'])
    CartItem.objects.create(user=user, classification=shirt_variants['Blue, S'])

    lines = {line.item_id: line for line in load_cart_lines(user)}

    assert set(lines) == {shirt_variants['Red, S'].pk, shirt_variants['Blue, S'].pk}
    # Blue/S has no stock
    assert lines[shirt_variants['Blue, S'].pk].is_blocked
    assert not lines[shirt_variants['Red, S'].pk].is_blocked
