from decimal import Decimal

import pytest
from django.core.cache import cache

from apps.cart.services.state import CartState
from apps.catalog.services.snapshots import ClassificationData


@pytest.fixture(autouse=True)
def clear_cart_state():
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def shirt_classifications():
    """Red/S=1, Red/M=2, Blue/S=3."""
    return [
        ClassificationData(id=1, color='Red', size='S', price=Decimal('100'), quantity=5, image_url='/red.jpg'),
        ClassificationData(id=2, color='Red', size='M', price=Decimal('120'), quantity=5, image_url='/red.jpg'),
        ClassificationData(id=3, color='Blue', size='S', price=Decimal('110'), quantity=5, image_url='/blue.jpg'),
    ]


@pytest.fixture
def cart_state():
    return CartState('test-owner')


@pytest.fixture
def user(django_user_model):
    return django_user_model.objects.create_user(username='customer', password='secret')


@pytest.fixture
def brand():
    from apps.catalog.models import Brand

    return Brand.objects.create(name='Acme')


@pytest.fixture
def shirt(brand):
    """Product with Red/S, Red/M and Blue/S classifications."""
    from apps.catalog.models import Classification, Product

    product = Product.objects.create(brand=brand, name='Basic Shirt')
    Classification.objects.create(product=product, color='Red', size='S', price=Decimal('100'), quantity=5)
    Classification.objects.create(product=product, color='Red', size='M', price=Decimal('120'), quantity=5)
    Classification.objects.create(product=product, color='Blue', size='S', price=Decimal('110'), quantity=0)
    return product


@pytest.fixture
def shirt_variants(shirt):
    return {c.label: c for c in shirt.classifications.all()}
