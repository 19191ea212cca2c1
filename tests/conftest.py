from datetime import datetime, timezone as dt_timezone
from decimal import Decimal
from io import BytesIO

import pytest
from django.contrib.auth.models import User
from django.core.files.uploadedfile import SimpleUploadedFile
from PIL import Image

from core.models import Role, UserProfile
from flowers.models import Flower

FIXED_NOW = datetime(2026, 5, 10, 12, 0, tzinfo=dt_timezone.utc)
PASSWORD = 'secret123'


@pytest.fixture(autouse=True)
def media_root(settings, tmp_path):
    settings.MEDIA_ROOT = str(tmp_path / 'media')
    settings.SITE_URL = 'https://kvity.test'
    return settings.MEDIA_ROOT


@pytest.fixture
def now():
    return FIXED_NOW


def image_upload(name='photo.png', color='pink'):
    buffer = BytesIO()
    Image.new('RGB', (20, 20), color).save(buffer, format='PNG')
    return SimpleUploadedFile(name, buffer.getvalue(), content_type='image/png')


@pytest.fixture
def make_profile(db):
    counter = {'n': 0}

    def make(role=Role.SELLER, **fields):
        counter['n'] += 1
        user = User.objects.create_user(
            username=fields.pop('username', f'user{counter["n"]}'),
            email=f'user{counter["n"]}@example.com',
            password=PASSWORD,
        )
        fields.setdefault('shop_name', f'Квіткова крамниця {counter["n"]}')
        fields.setdefault('city', 'Київ')
        fields.setdefault('address', 'вул. Хрещатик, 1')
        fields.setdefault('contact', '+380501234567')
        return UserProfile.objects.create(user=user, role=role, **fields)

    return make


@pytest.fixture
def seller(make_profile):
    return make_profile(Role.SELLER)


@pytest.fixture
def portal_admin(make_profile):
    return make_profile(Role.ADMIN, shop_name='', username='moderator')


@pytest.fixture
def make_flower(db):
    def make(shop, **fields):
        fields.setdefault('name', 'Троянда червона')
        fields.setdefault('type', 'Квіти · кущова')
        fields.setdefault('price', Decimal('100.00'))
        fields.setdefault('stock', 5)
        fields.setdefault('city', shop.city)
        return Flower.objects.create(shop=shop, **fields)

    return make


def login(client, profile):
    client.force_login(profile.user)
    return client


@pytest.fixture
def seller_client(client, seller):
    return login(client, seller)
