from decimal import Decimal

from apps.catalog.services.classification_index import ClassificationIndex
from apps.catalog.services.snapshots import ClassificationData, Selection


def test_options_are_inferred_in_first_seen_order(shirt_classifications):
    index = ClassificationIndex(shirt_classifications)

    assert index.all_options['color'] == ['Red', 'Blue']
    assert index.all_options['size'] == ['S', 'M']
    assert index.all_options['other'] == []


def test_constrained_keys_skip_unused_attributes(shirt_classifications):
    index = ClassificationIndex(shirt_classifications)

    assert index.constrained_keys() == ['color', 'size']
    assert index.first_attribute_key() == 'color'


def test_single_classification_product_has_no_constrained_keys():
    index = ClassificationIndex([ClassificationData(id=1, price=Decimal('10'))])

    assert index.constrained_keys() == []
    assert index.first_attribute_key() is None


def test_available_options_follow_other_picks(shirt_classifications):
    index = ClassificationIndex(shirt_classifications)

    assert index.available_options('size', Selection(color='Blue')) == ['S']
    assert index.available_options('color', Selection(size='M')) == ['Red']
    assert index.available_options('size', Selection()) == ['S', 'M']


def test_available_options_ignore_own_pick(shirt_classifications):
    index = ClassificationIndex(shirt_classifications)

    # switching color stays possible while a color is picked
    assert index.available_options('color', Selection(color='Red', size='S')) == ['Red', 'Blue']


def test_matches_and_find_for_option(shirt_classifications):
    index = ClassificationIndex(shirt_classifications)

    assert [c.id for c in index.matches(Selection(color='Red'))] == [1, 2]
    assert index.find_for_option('size', 'M', Selection(color='Blue')) is None
    assert index.find_for_option('color', 'Blue', Selection(size='S')).id == 3


def test_blank_attribute_values_are_ignored():
    index = ClassificationIndex([
        ClassificationData(id=1, color='Red', size=None),
        ClassificationData(id=2, color='Blue', size=None),
    ])

    assert index.constrained_keys() == ['color']
