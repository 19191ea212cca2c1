from datetime import timedelta
from decimal import Decimal

import pytest
from django.urls import reverse
from django.utils import timezone

from core.models import Role
from flowers.models import Flower
from tests.conftest import image_upload, login

pytestmark = pytest.mark.django_db


def test_add_single_flowers(seller_client, seller):
    response = seller_client.post(reverse('flowers:add'), {
        'category': 'Квіти',
        'subtype': 'кущова',
        'name': 'Троянда біла',
        'price': '85',
        'stock': '12',
        'photo': image_upload(),
    })

    assert response.status_code == 302
    flower = Flower.objects.get()
    assert flower.shop == seller
    assert flower.type == 'Квіти · кущова'
    assert flower.category == 'Квіти'
    assert flower.city == seller.city
    assert flower.is_active
    assert flower.photo_updated_at is not None


def test_bouquet_needs_description(seller_client):
    response = seller_client.post(reverse('flowers:add'), {
        'category': 'Букети',
        'name': 'Весняний',
        'price': '900',
        'stock': '1',
    })
    assert response.status_code == 200
    assert 'додайте, будь ласка, опис' in response.content.decode()
    assert not Flower.objects.exists()


def test_price_must_be_positive(seller_client):
    response = seller_client.post(reverse('flowers:add'), {
        'category': 'Квіти', 'name': 'Тюльпан', 'price': '0', 'stock': '3',
    })
    assert 'Ціна має бути більше 0' in response.content.decode()
    assert not Flower.objects.exists()


def test_buyers_cannot_add_listings(client, make_profile):
    response = login(client, make_profile(Role.BUYER)).get(reverse('flowers:add'))
    assert response.status_code == 403


def test_my_flowers_flags_stale_listings(seller_client, seller, make_flower):
    make_flower(seller, name='Свіжа')
    make_flower(seller, name='Стара', created_at=timezone.now() - timedelta(hours=50))

    response = seller_client.get(reverse('flowers:my_flowers'))

    stale = {row['flower'].name: row['stale'] for row in response.context['rows']}
    assert stale == {'Свіжа': False, 'Стара': True}


def update(client, flower, **fields):
    prefix = f'f{flower.pk}'
    data = {f'{prefix}-{key}': value for key, value in fields.items()}
    return client.post(reverse('flowers:update', args=[flower.pk]), data)


def test_switching_sale_on_uses_base_price_and_default_label(seller_client, seller, make_flower):
    flower = make_flower(seller, price=Decimal('200'))

    update(seller_client, flower, price='200', stock='5', is_on_sale='on', sale_price='', discount_label='')

    flower.refresh_from_db()
    assert flower.is_on_sale
    assert flower.sale_price == Decimal('200')
    assert flower.discount_label == 'Знижка'


def test_switching_sale_off_clears_sale_fields(seller_client, seller, make_flower):
    flower = make_flower(seller, is_on_sale=True, sale_price=Decimal('150'), discount_label='Весна')

    update(seller_client, flower, price='200', stock='5', sale_price='150', discount_label='Весна')

    flower.refresh_from_db()
    assert not flower.is_on_sale
    assert flower.sale_price is None
    assert flower.discount_label is None


def test_restocking_reactivates_listing(seller_client, seller, make_flower):
    flower = make_flower(seller, stock=0)
    assert not flower.is_active

    update(seller_client, flower, price='100', stock='4')

    flower.refresh_from_db()
    assert flower.stock == 4
    assert flower.is_active


def test_photo_upload_resets_staleness(seller_client, seller, make_flower):
    flower = make_flower(seller, created_at=timezone.now() - timedelta(days=3))

    seller_client.post(reverse('flowers:upload_photo', args=[flower.pk]), {'photo': image_upload()})

    flower.refresh_from_db()
    assert flower.photo
    assert timezone.now() - flower.photo_updated_at < timedelta(minutes=1)


def test_broken_image_is_rejected(seller_client, seller, make_flower):
    from django.core.files.uploadedfile import SimpleUploadedFile

    flower = make_flower(seller)
    bogus = SimpleUploadedFile('photo.png', b'not an image', content_type='image/png')

    seller_client.post(reverse('flowers:upload_photo', args=[flower.pk]), {'photo': bogus})

    flower.refresh_from_db()
    assert not flower.photo


def test_delete_own_listing(seller_client, seller, make_flower):
    flower = make_flower(seller)
    seller_client.post(reverse('flowers:delete', args=[flower.pk]))
    assert not Flower.objects.filter(pk=flower.pk).exists()


def test_cannot_touch_another_shops_listing(seller_client, make_profile, make_flower):
    other = make_flower(make_profile(Role.SELLER))
    assert seller_client.post(reverse('flowers:delete', args=[other.pk])).status_code == 404
    assert update(seller_client, other, price='1', stock='1').status_code == 404
    assert Flower.objects.filter(pk=other.pk).exists()


def test_qr_code_download(seller_client, seller):
    response = seller_client.get(reverse('flowers:download_qr_png'))
    assert response.status_code == 200
    assert response['Content-Type'] == 'image/png'
    assert response.content.startswith(b'\x89PNG')
    assert f'kvity_shop_{seller.pk}_QR.png' in response['Content-Disposition']


def test_poster_download(seller_client, seller, make_flower):
    make_flower(seller, name='Rose', is_on_sale=True, sale_price=Decimal('60'))
    response = seller_client.get(reverse('flowers:download_qr_poster'))
    assert response.status_code == 200
    assert response['Content-Type'] == 'application/pdf'
    assert response.content.startswith(b'%PDF')


def test_shop_map_url_in_qr(seller):
    from flowers.qr_generator import shop_map_url

    assert shop_map_url(seller) == f'https://kvity.test/map/?highlightShopId={seller.pk}'
