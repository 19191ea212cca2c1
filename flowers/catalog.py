"""
Catalog query builder.

Turns the buyer's filter fields into a Flower queryset, and groups visible
listings by shop for the map feed.
"""
import re
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Optional
from urllib.parse import urlencode

from django.db.models import Q
from django.urls import reverse
from django.utils import timezone

from . import rules
from .models import Flower


@dataclass(frozen=True)
class CatalogFilters:
    city: str = ''
    name: str = ''
    type: str = ''
    max_price: Optional[Decimal] = None
    category: str = ''

    @classmethod
    def from_params(cls, params, category=''):
        """Read filters from a QueryDict (``maxPrice`` or ``price`` for the price cap)"""
        return cls(
            city=params.get('city', '').strip(),
            name=params.get('name', '').strip(),
            type=params.get('type', '').strip(),
            max_price=parse_max_price(params.get('maxPrice') or params.get('price') or ''),
            category=params.get('category', category).strip(),
        )

    def as_params(self):
        params = {'city': self.city, 'name': self.name, 'type': self.type}
        if self.max_price is not None:
            params['maxPrice'] = str(self.max_price)
        return {k: v for k, v in params.items() if v}


def parse_max_price(raw):
    """Positive number or None; anything else means "no cap" """
    try:
        value = Decimal(str(raw).strip().replace(',', '.'))
    except (InvalidOperation, ValueError):
        return None
    if not value.is_finite() or value <= 0:
        return None
    return value


def icontains(field, value):
    # iregex folds case for non-ASCII text on SQLite too, unlike icontains
    return Q(**{f'{field}__iregex': re.escape(value)})


def istartswith(field, value):
    return Q(**{f'{field}__iregex': '^' + re.escape(value)})


def build_catalog_query(filters, catalog=None, queryset=None):
    """Queryset for the filters (all optional, ANDed), newest first"""
    qs = Flower.objects.all() if queryset is None else queryset

    if catalog is not None:
        if catalog.require_active:
            qs = qs.filter(is_active=True)
        if catalog.require_sale:
            qs = qs.filter(is_on_sale=True)
        if catalog.type_prefix:
            qs = qs.filter(istartswith('type', catalog.type_prefix))
        if catalog.type_token:
            qs = qs.filter(icontains('type', catalog.type_token))

    if filters.city:
        qs = qs.filter(icontains('city', filters.city))
    if filters.name:
        qs = qs.filter(icontains('name', filters.name))
    if filters.type:
        qs = qs.filter(icontains('type', filters.type))
    if filters.category:
        qs = qs.filter(icontains('type', filters.category))
    if filters.max_price is not None:
        qs = qs.filter(price__lte=filters.max_price)

    return qs.select_related('shop').order_by('-created_at', '-pk')


def search_catalog(catalog, filters, now=None):
    """Evaluated catalog: query plus the in-memory visibility rules"""
    now = now or timezone.now()
    listings = build_catalog_query(filters, catalog)
    return [f for f in listings if rules.is_visible(f, now, catalog)]


def matches_filters(listing, filters, fallback_city=''):
    """In-memory twin of build_catalog_query's filter clauses"""
    def contains(haystack, needle):
        return not needle or needle.casefold() in (haystack or '').casefold()

    return (
        contains(listing.city or fallback_city, filters.city)
        and contains(listing.name, filters.name)
        and contains(listing.type, filters.type)
        and contains(listing.type, filters.category)
        and (filters.max_price is None or listing.price <= filters.max_price)
    )


@dataclass
class ShopOnMap:
    shop_id: int
    shop_name: str
    address: str
    city: str
    lat: Optional[float]
    lng: Optional[float]
    min_price: Decimal
    flowers_count: int

    def as_dict(self):
        return {
            'shop_id': self.shop_id,
            'shop_name': self.shop_name,
            'address': self.address,
            'city': self.city,
            'lat': self.lat,
            'lng': self.lng,
            'min_price': str(self.min_price),
            'flowers_count': self.flowers_count,
        }


def group_by_shop(listings):
    """Shops that carry the listings, cheapest first"""
    shops = {}
    for flower in listings:
        profile = flower.shop
        entry = shops.get(profile.pk)
        if entry is None:
            shops[profile.pk] = ShopOnMap(
                shop_id=profile.pk,
                shop_name=profile.shop_name,
                address=profile.address,
                city=profile.city,
                lat=profile.lat,
                lng=profile.lng,
                min_price=flower.price,
                flowers_count=1,
            )
        else:
            entry.min_price = min(entry.min_price, flower.price)
            entry.flowers_count += 1
    return sorted(shops.values(), key=lambda s: s.min_price)


def map_listings(filters, now=None):
    """Visible listings for the map, filtered in memory against the shop city too"""
    now = now or timezone.now()
    listings = Flower.objects.select_related('shop').order_by('-created_at', '-pk')
    return [
        f for f in listings
        if not rules.is_stale(f, now) and matches_filters(f, filters, fallback_city=f.shop.city)
    ]


def map_link(flower):
    """
    "Show on map" target for a catalog card: the internal map with the shop
    highlighted, or an external map search for bouquets and compositions.
    """
    shop = flower.shop
    city = shop.city or flower.city or ''
    if not rules.is_bouquet_like(flower.type):
        params = {'highlightShopId': shop.pk}
        if city:
            params['city'] = city
        if flower.name:
            params['name'] = flower.name
        return f"{reverse('flowers:map')}?{urlencode(params)}"

    query = ', '.join(part for part in (city, shop.address, shop.shop_name or flower.name) if part)
    return f"https://www.google.com/maps/search/?api=1&{urlencode({'query': query})}"
