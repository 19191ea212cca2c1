import logging

from django.contrib import messages
from django.db import DatabaseError
from django.http import HttpResponse, JsonResponse
from django.shortcuts import get_object_or_404, redirect, render
from django.utils import timezone
from django.views.decorators.http import require_POST

from core.access import Scope
from core.decorators import role_required
from . import rules
from .catalog import CatalogFilters, group_by_shop, map_link, map_listings, search_catalog
from .forms import FlowerForm, FlowerPhotoForm, FlowerUpdateForm
from .models import Flower

logger = logging.getLogger(__name__)


def _card(flower):
    return {
        'flower': flower,
        'price': rules.resolve_price(flower),
        'map_url': map_link(flower),
    }


def catalog_page(request, catalog_key):
    """Buyer catalog: single flowers, bouquets, vazony or sales"""
    catalog = rules.CATALOGS[catalog_key]
    filters = CatalogFilters.from_params(request.GET)

    try:
        listings = search_catalog(catalog, filters)
    except DatabaseError:
        logger.exception('Catalog %s query failed', catalog.key)
        messages.error(request, f'Не вдалося завантажити: {catalog.title.lower()}')
        listings = []

    return render(request, 'flowers/catalog.html', {
        'catalog': catalog,
        'filters': filters,
        'cards': [_card(f) for f in listings],
    })


def map_page(request):
    """Shops that have visible listings; ?highlightShopId marks one of them"""
    filters = CatalogFilters.from_params(request.GET)
    highlight = request.GET.get('highlightShopId', '')

    try:
        listings = map_listings(filters)
    except DatabaseError:
        logger.exception('Map query failed')
        messages.error(request, 'Не вдалося завантажити дані для мапи')
        listings = []

    shops = group_by_shop(listings)
    selected = [_card(f) for f in listings if str(f.shop_id) == highlight]
    return render(request, 'flowers/map.html', {
        'filters': filters,
        'shops': shops,
        'highlight': highlight,
        'selected_cards': selected,
    })


def map_data(request):
    filters = CatalogFilters.from_params(request.GET)
    try:
        listings = map_listings(filters)
    except DatabaseError as e:
        logger.exception('Map query failed')
        return JsonResponse({'shops': [], 'error': str(e)[:80]}, status=500)
    return JsonResponse({'shops': [s.as_dict() for s in group_by_shop(listings)]})


# ==========================================
# SELLER: LISTINGS
# ==========================================

@role_required(Scope.SELLER)
def add_flower(request):
    profile = request.profile

    if request.method == 'POST':
        form = FlowerForm(request.POST, request.FILES)
        if form.is_valid():
            try:
                flower = form.save_for_shop(profile, timezone.now())
            except DatabaseError:
                logger.exception('Adding listing for shop %s failed', profile.pk)
                messages.error(request, 'Помилка додавання оголошення')
            else:
                logger.info('Shop %s added listing %s', profile.pk, flower.pk)
                messages.success(request, 'Оголошення додано 🌷')
                return redirect('flowers:add')
    else:
        form = FlowerForm()

    return render(request, 'flowers/add_flower.html', {'form': form, 'profile': profile})


@role_required(Scope.SELLER)
def my_flowers(request):
    profile = request.profile
    now = timezone.now()

    try:
        flowers = list(Flower.objects.filter(shop=profile).order_by('-created_at', '-pk'))
    except DatabaseError:
        logger.exception('Loading listings for shop %s failed', profile.pk)
        messages.error(request, 'Не вдалося завантажити ваші квіти')
        flowers = []

    rows = [{
        'flower': f,
        'price': rules.resolve_price(f),
        'stale': rules.is_stale(f, now),
        'form': FlowerUpdateForm(instance=f, prefix=f'f{f.pk}'),
    } for f in flowers]
    return render(request, 'flowers/my_flowers.html', {'profile': profile, 'rows': rows})


@require_POST
@role_required(Scope.SELLER)
def update_flower(request, flower_id):
    flower = get_object_or_404(Flower, id=flower_id, shop=request.profile)
    form = FlowerUpdateForm(request.POST, instance=flower, prefix=f'f{flower.pk}')

    if not form.is_valid():
        for errors in form.errors.values():
            for error in errors:
                messages.error(request, error)
        return redirect('flowers:my_flowers')

    try:
        form.save()
    except DatabaseError:
        logger.exception('Updating listing %s failed', flower.pk)
        messages.error(request, 'Не вдалося оновити квітку')
    else:
        messages.success(request, f'«{flower.name}» збережено')
    return redirect('flowers:my_flowers')


@require_POST
@role_required(Scope.SELLER)
def upload_photo(request, flower_id):
    """New photo; resets the 48-hour staleness clock"""
    flower = get_object_or_404(Flower, id=flower_id, shop=request.profile)
    form = FlowerPhotoForm(request.POST, request.FILES)

    if not form.is_valid():
        messages.error(request, 'Не вдалося завантажити фото')
        return redirect('flowers:my_flowers')

    flower.photo = form.cleaned_data['photo']
    flower.photo_updated_at = timezone.now()
    try:
        flower.save(update_fields=['photo', 'photo_updated_at'])
    except DatabaseError:
        logger.exception('Saving photo for listing %s failed', flower.pk)
        messages.error(request, 'Фото оновлено, але не вдалося зберегти зміни в оголошенні')
    else:
        messages.success(request, 'Фото оновлено')
    return redirect('flowers:my_flowers')


@require_POST
@role_required(Scope.SELLER)
def delete_flower(request, flower_id):
    flower = get_object_or_404(Flower, id=flower_id, shop=request.profile)
    try:
        flower.delete()
    except DatabaseError:
        logger.exception('Deleting listing %s failed', flower_id)
        messages.error(request, 'Не вдалося видалити квітку')
    else:
        messages.success(request, 'Оголошення видалено')
    return redirect('flowers:my_flowers')


# ==========================================
# SHOP QR CODE & POSTER
# ==========================================

@role_required(Scope.SELLER)
def download_qr_png(request):
    """Download the shop's map QR code as PNG"""
    from .qr_generator import get_qr_image_bytes

    shop = request.profile
    qr_buffer = get_qr_image_bytes(shop)

    response = HttpResponse(qr_buffer.getvalue(), content_type='image/png')
    response['Content-Disposition'] = f'attachment; filename="kvity_shop_{shop.pk}_QR.png"'
    return response


@role_required(Scope.SELLER)
def download_qr_poster(request):
    """Download the shop poster as PDF"""
    from .poster_generator import generate_shop_poster

    shop = request.profile
    now = timezone.now()
    offers = [f for f in Flower.objects.filter(shop=shop, is_active=True) if not rules.is_stale(f, now)]
    poster_buffer = generate_shop_poster(shop, offers)

    response = HttpResponse(poster_buffer.getvalue(), content_type='application/pdf')
    response['Content-Disposition'] = f'attachment; filename="kvity_shop_{shop.pk}_Poster.pdf"'
    return response

