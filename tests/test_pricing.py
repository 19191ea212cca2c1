from decimal import Decimal
from types import SimpleNamespace

import pytest

from flowers import rules


def listing(price='200', is_on_sale=False, sale_price=None, discount_label=None):
    return SimpleNamespace(
        price=Decimal(price),
        is_on_sale=is_on_sale,
        sale_price=Decimal(sale_price) if sale_price is not None else None,
        discount_label=discount_label,
    )


def test_regular_price():
    view = rules.resolve_price(listing())
    assert view.display_price == Decimal('200')
    assert view.strikethrough_price is None
    assert view.badge_text is None
    assert not view.discounted


def test_discounted_price_shows_old_price_and_badge():
    view = rules.resolve_price(listing(is_on_sale=True, sale_price='150', discount_label='-25%'))
    assert view.display_price == Decimal('150')
    assert view.strikethrough_price == Decimal('200')
    assert view.badge_text == '-25%'


@pytest.mark.parametrize('label', [None, '', '   '])
def test_blank_label_falls_back_to_default_badge(label):
    view = rules.resolve_price(listing(is_on_sale=True, sale_price='150', discount_label=label))
    assert view.badge_text == rules.DEFAULT_DISCOUNT_LABEL


@pytest.mark.parametrize('kwargs', [
    {'is_on_sale': True, 'sale_price': None},
    {'is_on_sale': True, 'sale_price': '0'},
    {'is_on_sale': True, 'sale_price': '200'},
    {'is_on_sale': True, 'sale_price': '250'},
    {'is_on_sale': False, 'sale_price': '150'},
])
def test_no_discount_unless_sale_price_is_below_price(kwargs):
    item = listing(**kwargs)
    assert not rules.has_discount(item)
    assert rules.resolve_price(item).display_price == Decimal('200')


def test_switching_sale_on_prefills_price_and_label():
    sale_price, label = rules.apply_sale_toggle(True, Decimal('200'), None, '')
    assert sale_price == Decimal('200')
    assert label == rules.DEFAULT_DISCOUNT_LABEL


def test_switching_sale_on_keeps_typed_values():
    assert rules.apply_sale_toggle(True, Decimal('200'), Decimal('120'), 'Весна') == (Decimal('120'), 'Весна')


def test_switching_sale_off_keeps_values_until_save():
    assert rules.apply_sale_toggle(False, Decimal('200'), Decimal('120'), 'Весна') == (Decimal('120'), 'Весна')
    assert rules.sale_fields_for_save(False, Decimal('120'), 'Весна') == (None, None)


def test_saving_active_sale_keeps_fields():
    assert rules.sale_fields_for_save(True, Decimal('120'), 'Весна') == (Decimal('120'), 'Весна')
