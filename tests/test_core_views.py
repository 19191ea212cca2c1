import pytest
from django.contrib.auth.models import User
from django.urls import reverse
from django.utils import timezone

from core.access import PROFILE_LOAD_FAILED, SELLERS_ONLY
from core.models import Role, TelegramLinkCode, UserProfile
from orders.models import Order
from tests.conftest import PASSWORD, image_upload, login

pytestmark = pytest.mark.django_db

SHOP_FORM = {
    'account_type': 'shop',
    'username': 'podil_flowers',
    'email': 'podil@example.com',
    'password': 'tulips2024',
    'shop_name': 'Квіти Подолу',
    'city': 'Київ',
    'address': 'вул. Сагайдачного, 10',
    'contact': '+380931234567',
}


def test_shop_registration_starts_pending(client):
    response = client.post(reverse('core:register'), SHOP_FORM)

    assert response['Location'] == reverse('core:login')
    profile = UserProfile.objects.get(user__username='podil_flowers')
    assert profile.role == Role.PENDING
    assert profile.shop_name == 'Квіти Подолу'


def test_shop_registration_needs_every_shop_field(client):
    response = client.post(reverse('core:register'), dict(SHOP_FORM, address=''))
    assert response.status_code == 200
    assert 'Заповніть всі поля' in response.content.decode()
    assert not User.objects.exists()


def test_buyer_registration(client):
    client.post(reverse('core:register'), {
        'account_type': 'buyer', 'username': 'olena', 'email': 'olena@example.com', 'password': 'secret12',
    })
    assert UserProfile.objects.get(user__username='olena').role == Role.BUYER


def test_duplicate_username(client, seller):
    response = client.post(reverse('core:register'), dict(SHOP_FORM, username=seller.user.username))
    assert 'Такий логін вже зайнятий.' in response.content.decode()


def test_login_follows_safe_next(client, seller):
    response = client.post(
        reverse('core:login') + '?next=/myorders/',
        {'username': seller.user.username, 'password': PASSWORD},
    )
    assert response['Location'] == '/myorders/'


def test_login_ignores_foreign_next(client, seller):
    response = client.post(
        reverse('core:login'),
        {'username': seller.user.username, 'password': PASSWORD, 'next': 'https://evil.example/'},
    )
    assert response['Location'] == reverse('core:dashboard')


def test_wrong_password(client, seller):
    response = client.post(reverse('core:login'), {'username': seller.user.username, 'password': 'nope'})
    assert response.status_code == 200
    assert 'Невірний логін або пароль.' in response.content.decode()


def test_seller_dashboard_shows_stats(seller_client, seller, make_flower):
    flower = make_flower(seller)
    Order.objects.create(
        flower=flower, shop=seller, buyer_name='Олена', buyer_phone='+380', quantity=2,
        status=Order.Status.DONE,
    )
    response = seller_client.get(reverse('core:dashboard'))
    assert response.status_code == 200
    assert response.context['stats']['done_orders'] == 1


def test_pending_dashboard_has_no_stats(client, make_profile):
    response = login(client, make_profile(Role.PENDING)).get(reverse('core:dashboard'))
    assert response.status_code == 200
    assert response.context['stats'] is None


def test_admin_dashboard_goes_to_approvals(client, portal_admin):
    response = login(client, portal_admin).get(reverse('core:dashboard'))
    assert response['Location'] == reverse('admin_portal:pending_shops')


def test_missing_profile_is_denied(client, db):
    user = User.objects.create_user('ghost', password=PASSWORD)
    client.force_login(user)
    response = client.get(reverse('core:dashboard'))
    assert response.status_code == 403
    assert PROFILE_LOAD_FAILED in response.content.decode()


def test_profile_update(seller_client, seller):
    response = seller_client.post(reverse('core:profile'), {
        'shop_name': 'Нова назва', 'city': 'Львів', 'address': 'пл. Ринок, 1',
        'contact': '+380', 'lat': '49.84', 'lng': '24.03',
    })
    assert response['Location'] == reverse('core:profile')
    seller.refresh_from_db()
    assert (seller.shop_name, seller.city, seller.lat) == ('Нова назва', 'Львів', 49.84)
    assert seller.role == Role.SELLER


def test_profile_avatar_upload(seller_client, seller):
    seller_client.post(reverse('core:profile'), {'avatar': image_upload('shop.png')})
    seller.refresh_from_db()
    assert seller.avatar.name.startswith(f'avatars/{seller.user_id}/')


def test_admins_may_open_shop_profile(client, portal_admin):
    assert login(client, portal_admin).get(reverse('core:profile')).status_code == 200


def test_buyers_may_not_open_shop_profile(client, make_profile):
    response = login(client, make_profile(Role.BUYER)).get(reverse('core:profile'))
    assert response.status_code == 403
    assert SELLERS_ONLY in response.content.decode()


def test_telegram_code(seller_client, seller):
    response = seller_client.get(reverse('core:telegram'))
    code = TelegramLinkCode.objects.get(shop=seller)

    assert len(code.code) == TelegramLinkCode.LENGTH
    assert set(code.code) <= set(TelegramLinkCode.ALPHABET)
    assert not code.is_expired()
    assert f'/link {code.code}' in response.content.decode()

    seller_client.get(reverse('core:telegram'))
    assert TelegramLinkCode.objects.filter(shop=seller).count() == 1


def test_telegram_code_expiry(seller):
    issued_at = timezone.now()
    code = TelegramLinkCode.issue_for(seller, now=issued_at)
    assert not code.is_expired(issued_at + TelegramLinkCode.TTL / 2)
    assert code.is_expired(issued_at + TelegramLinkCode.TTL)


def test_debug_endpoint(client, seller, make_flower):
    make_flower(seller, name='Лілія')
    payload = client.get(reverse('core:debug')).json()
    assert payload['error'] is None
    assert payload['env']['database_engine'] == 'sqlite3'
    assert payload['data'][0]['name'] == 'Лілія'
    assert payload['data'][0]['photo'] is None


def test_telegram_code_comes_from_secrets(monkeypatch):
    picks = []

    def choice(alphabet):
        picks.append(alphabet)
        return alphabet[0]

    monkeypatch.setattr('core.models.secrets.choice', choice)

    assert TelegramLinkCode.generate_code() == 'A' * TelegramLinkCode.LENGTH
    assert picks == [TelegramLinkCode.ALPHABET] * TelegramLinkCode.LENGTH
