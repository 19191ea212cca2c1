import logging

from django.conf import settings
from django.contrib import messages
from django.contrib.auth import authenticate, login, logout
from django.db import DatabaseError
from django.http import JsonResponse
from django.shortcuts import redirect, render
from django.utils.http import url_has_allowed_host_and_scheme

from flowers.models import Flower
from orders.services import shop_stats
from .access import Scope
from .decorators import role_required
from .forms import AvatarForm, ProfileForm, RegisterForm
from .models import Role, TelegramLinkCode

logger = logging.getLogger(__name__)


def home(request):
    """Landing page"""
    return render(request, 'core/home.html')


def register(request):
    """Shop registration; the shop stays pending until an admin approves it"""
    if request.method == 'POST':
        form = RegisterForm(request.POST)
        if form.is_valid():
            try:
                profile = form.save()
            except DatabaseError:
                logger.exception('Registration failed for %s', form.cleaned_data.get('username'))
                messages.error(request, 'Не вдалося створити користувача')
            else:
                logger.info('Registered profile %s as %s', profile.pk, profile.role)
                if profile.role == Role.PENDING:
                    messages.success(request, 'Заявку надіслано! Після підтвердження адміністратором ви отримаєте доступ до кабінету.')
                else:
                    messages.success(request, 'Акаунт створено. Тепер увійдіть.')
                return redirect('core:login')
    else:
        form = RegisterForm()

    return render(request, 'core/register.html', {'form': form})


def user_login(request):
    """User login"""
    if request.method == 'POST':
        username = request.POST.get('username')
        password = request.POST.get('password')

        user = authenticate(request, username=username, password=password)

        if user is not None:
            login(request, user)
            messages.success(request, f'Вітаємо, {user.username}!')

            next_url = request.GET.get('next') or request.POST.get('next')
            if next_url and url_has_allowed_host_and_scheme(next_url, allowed_hosts={request.get_host()}):
                return redirect(next_url)
            return redirect('core:dashboard')
        else:
            messages.error(request, 'Невірний логін або пароль.')

    return render(request, 'core/login.html', {'next': request.GET.get('next', '')})


def user_logout(request):
    """User logout"""
    logout(request)
    messages.success(request, 'Ви вийшли з акаунта.')
    return redirect('core:home')


@role_required(Scope.SIGNED_IN)
def dashboard(request):
    """Route admins to approvals; everyone else sees their cabinet"""
    profile = request.profile

    if profile.role == Role.ADMIN:
        return redirect('admin_portal:pending_shops')

    stats = None
    if profile.role == Role.SELLER:
        try:
            stats = shop_stats(profile)
        except DatabaseError:
            logger.exception('Stats for shop %s failed', profile.pk)

    return render(request, 'core/dashboard.html', {'profile': profile, 'stats': stats})


@role_required(Scope.SHOP_PROFILE)
def profile(request):
    """Shop profile page with edit and avatar upload"""
    profile = request.profile

    if request.method == 'POST' and 'avatar' in request.FILES:
        avatar_form = AvatarForm(request.POST, request.FILES)
        form = ProfileForm(instance=profile)
        if avatar_form.is_valid():
            profile.avatar = avatar_form.cleaned_data['avatar']
            try:
                profile.save(update_fields=['avatar'])
            except DatabaseError:
                logger.exception('Avatar update for profile %s failed', profile.pk)
                messages.error(request, 'Не вдалося оновити профіль')
            else:
                messages.success(request, 'Фото магазину оновлено')
                return redirect('core:profile')
        else:
            messages.error(request, 'Помилка завантаження аватара')
    elif request.method == 'POST':
        form = ProfileForm(request.POST, instance=profile)
        avatar_form = AvatarForm()
        if form.is_valid():
            try:
                form.save()
            except DatabaseError:
                logger.exception('Profile update for %s failed', profile.pk)
                messages.error(request, 'Не вдалося зберегти зміни профілю')
            else:
                messages.success(request, 'Профіль збережено')
                return redirect('core:profile')
    else:
        form = ProfileForm(instance=profile)
        avatar_form = AvatarForm()

    return render(request, 'core/profile.html', {
        'profile': profile,
        'form': form,
        'avatar_form': avatar_form,
    })


@role_required(Scope.SELLER)
def telegram_connect(request):
    """Fresh link code for the orders bot"""
    bot_username = settings.TELEGRAM_BOT_USERNAME.lstrip('@')
    try:
        link_code = TelegramLinkCode.issue_for(request.profile)
    except DatabaseError as e:
        logger.exception('Issuing Telegram code for %s failed', request.profile.pk)
        messages.error(request, f'Не вдалося створити код: {str(e)[:80]}')
        link_code = None

    return render(request, 'core/telegram.html', {
        'link_code': link_code,
        'bot_username': bot_username,
        'bot_url': f'https://t.me/{bot_username}',
    })


def debug_status(request):
    """Diagnostic read: store configuration and a few listings"""
    engine = settings.DATABASES['default']['ENGINE']
    response = {
        'env': {
            'database_engine': engine.rsplit('.', 1)[-1],
            'database_name': '✅ Set' if settings.DATABASES['default'].get('NAME') else '❌ Not Set',
        },
        'data': None,
        'error': None,
    }
    try:
        response['data'] = [
            {
                'id': f.pk,
                'name': f.name,
                'shop_id': f.shop_id,
                'city': f.city,
                'photo': f.photo_url,
            }
            for f in Flower.objects.order_by('-created_at')[:5]
        ]
    except DatabaseError as e:
        response['error'] = str(e)[:80]
    return JsonResponse(response)
