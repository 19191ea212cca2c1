"""
Catalog visibility and pricing rules for listings.

Everything here is pure: functions read listing attributes (a Flower or any
object with the same fields) and never touch the database or the request.
Time-dependent rules take ``now`` explicitly.
"""
from dataclasses import dataclass
from datetime import timedelta
from decimal import Decimal
from typing import Optional

STALE_AFTER = timedelta(hours=48)
DEFAULT_DISCOUNT_LABEL = 'Знижка'

SINGLE_FLOWERS_PREFIX = 'квіти'
BOUQUET_TOKEN = 'букет'
COMPOSITION_TOKEN = 'компози'
VAZON_TOKEN = 'вазон'


# ------------------------------------------------------------
# Catalog scopes
# ------------------------------------------------------------

@dataclass(frozen=True)
class Catalog:
    """What a buyer-facing catalog shows besides the staleness rule"""
    key: str
    title: str
    type_prefix: str = ''
    type_token: str = ''
    require_active: bool = False
    require_sale: bool = False


FLOWERS = Catalog('flowers', 'Квіти поштучно', type_prefix=SINGLE_FLOWERS_PREFIX, require_active=True)
BOUQUETS = Catalog('bukety', 'Букети', type_token=BOUQUET_TOKEN)
VAZONY = Catalog('vazony', 'Вазони', type_token=VAZON_TOKEN)
SALES = Catalog('sales', 'Акції та знижки', require_sale=True)
MAP = Catalog('map', 'Магазини на мапі')

CATALOGS = {c.key: c for c in (FLOWERS, BOUQUETS, VAZONY, SALES, MAP)}


# ------------------------------------------------------------
# Visibility
# ------------------------------------------------------------

def last_update(listing):
    return listing.photo_updated_at or listing.created_at


def is_stale(listing, now):
    """More than 48 hours since the photo (or the listing) was last updated"""
    updated = last_update(listing)
    if updated is None:
        return False
    return now - updated > STALE_AFTER


def _type_text(type_string):
    return (type_string or '').casefold()


def is_bouquet(type_string):
    return BOUQUET_TOKEN in _type_text(type_string)


def is_bouquet_like(type_string):
    """Bouquets and compositions; only used to route "show on map" links"""
    text = _type_text(type_string)
    return BOUQUET_TOKEN in text or COMPOSITION_TOKEN in text


def is_vazon(type_string):
    return VAZON_TOKEN in _type_text(type_string)


def is_single_flowers(type_string):
    return _type_text(type_string).startswith(SINGLE_FLOWERS_PREFIX)


def matches_catalog_category(listing, catalog):
    text = _type_text(listing.type)
    if catalog.type_prefix and not text.startswith(catalog.type_prefix):
        return False
    if catalog.type_token and catalog.type_token not in text:
        return False
    return True


def is_visible(listing, now, catalog=None):
    """Whether a buyer-facing catalog shows the listing"""
    if catalog is not None:
        if catalog.require_active and not listing.is_active:
            return False
        if not matches_catalog_category(listing, catalog):
            return False
        if catalog.require_sale and not has_discount(listing):
            return False
    return not is_stale(listing, now)


# ------------------------------------------------------------
# Pricing
# ------------------------------------------------------------

@dataclass(frozen=True)
class PriceView:
    display_price: Decimal
    strikethrough_price: Optional[Decimal] = None
    badge_text: Optional[str] = None

    @property
    def discounted(self):
        return self.strikethrough_price is not None


def has_discount(listing):
    sale_price = listing.sale_price
    return bool(
        listing.is_on_sale
        and sale_price is not None
        and 0 < sale_price < listing.price
    )


def discount_badge(label):
    if label and label.strip():
        return label
    return DEFAULT_DISCOUNT_LABEL


def resolve_price(listing):
    if has_discount(listing):
        return PriceView(
            display_price=listing.sale_price,
            strikethrough_price=listing.price,
            badge_text=discount_badge(listing.discount_label),
        )
    return PriceView(display_price=listing.price)


def apply_sale_toggle(is_on_sale, price, sale_price, label):
    """
    Sale fields as the editing form should show them after the sale switch
    moves. Switching on with no sale price starts from the base price;
    switching off keeps whatever was typed until the listing is saved.
    """
    if is_on_sale:
        if not sale_price:
            sale_price = price
        if not label:
            label = DEFAULT_DISCOUNT_LABEL
    return sale_price, label


def sale_fields_for_save(is_on_sale, sale_price, label):
    """Sale price and label to persist; both are dropped once the sale is off"""
    if not is_on_sale:
        return None, None
    return sale_price, label
