"""
Builds the cart engine for one customer from the database.
"""

from apps.cart.models import CartItem
from apps.cart.services.selection import CartSelectionAggregator
from apps.cart.services.state import CartState
from apps.vouchers.loaders import voucher_snapshots


def load_cart_lines(user):
    items = CartItem.objects.filter(user=user).select_related(
        'classification__product',
        'classification__product_discount',
        'classification__pre_order_product',
    ).prefetch_related('classification__images')

    # one sibling query per product
    siblings_by_product = {}
    lines = []
    for item in items:
        product = item.classification.product
        if product.pk not in siblings_by_product:
            siblings_by_product[product.pk] = product.get_classification_snapshots()
        lines.append(item.to_line(siblings=siblings_by_product[product.pk]))
    return lines


def cart_state_for(user):
    return CartState(owner_key=f'user-{user.pk}')


def build_aggregator(user, now=None):
    return CartSelectionAggregator(
        cart_state_for(user),
        lines=load_cart_lines(user),
        vouchers=voucher_snapshots(user),
        now=now,
    )
