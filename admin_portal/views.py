import logging

from django.contrib import messages
from django.db import DatabaseError
from django.shortcuts import get_object_or_404, redirect, render
from django.views.decorators.http import require_POST

from core.access import Scope
from core.decorators import role_required
from core.models import Role, RoleTransitionError, UserProfile
from orders.models import AuditLog

logger = logging.getLogger(__name__)


@role_required(Scope.ADMIN)
def pending_shops(request):
    """Shops waiting for approval, newest first"""
    try:
        shops = list(
            UserProfile.objects.filter(role=Role.PENDING)
            .select_related('user')
            .order_by('-created_at')
        )
    except DatabaseError:
        logger.exception('Loading pending shops failed')
        messages.error(request, 'Не вдалося завантажити список pending-магазинів')
        shops = []

    return render(request, 'admin_portal/pending_shops.html', {'shops': shops})


@require_POST
@role_required(Scope.ADMIN)
def moderate_shop(request, profile_id):
    shop = get_object_or_404(UserProfile, id=profile_id)
    action = request.POST.get('action')

    if action == 'approve':
        new_role, log_action = Role.SELLER, 'SHOP_APPROVED'
    elif action == 'reject':
        new_role, log_action = Role.REJECTED, 'SHOP_REJECTED'
    else:
        messages.error(request, 'Невідома дія')
        return redirect('admin_portal:pending_shops')

    try:
        shop.set_role_by_admin(request.profile, new_role)
    except RoleTransitionError:
        messages.error(request, f'Магазин "{shop.display_name}" вже не очікує підтвердження.')
        return redirect('admin_portal:pending_shops')
    except DatabaseError:
        logger.exception('Role update for profile %s failed', shop.pk)
        messages.error(request, 'Не вдалося оновити роль')
        return redirect('admin_portal:pending_shops')

    AuditLog.record(request, log_action, shop, details=f'{shop.display_name}: pending -> {new_role}')
    logger.info('Profile %s moved to %s by %s', shop.pk, new_role, request.user.pk)

    if new_role == Role.SELLER:
        messages.success(request, f'Магазин "{shop.display_name}" підтверджено!')
    else:
        messages.warning(request, f'Магазин "{shop.display_name}" відхилено.')
    return redirect('admin_portal:pending_shops')
