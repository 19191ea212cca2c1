"""
Role/access gate.

Decides what a session may see on a page, given the page scope and the role
read from the session user's profile. No request or database access here;
``core.decorators.role_required`` feeds it and acts on the decision.
"""
import enum
from dataclasses import dataclass

from .models import Role


class Scope(enum.Enum):
    SIGNED_IN = 'signed_in'
    SELLER = 'seller'
    SHOP_PROFILE = 'shop_profile'
    ADMIN = 'admin'


class Outcome(enum.Enum):
    ALLOW = 'allow'
    REDIRECT_LOGIN = 'redirect_login'
    REDIRECT_DASHBOARD = 'redirect_dashboard'
    DENY = 'deny'


@dataclass(frozen=True)
class AccessDecision:
    outcome: Outcome
    message: str = ''

    @property
    def allowed(self):
        return self.outcome is Outcome.ALLOW


LOGIN_REQUIRED = 'Увійдіть, щоб відкрити цю сторінку.'
PROFILE_LOAD_FAILED = 'Не вдалося завантажити профіль.'
SELLERS_ONLY = 'Сторінка доступна лише для продавців.'
SHOP_PENDING = 'Ваш магазин очікує підтвердження адміністратором.'
SHOP_REJECTED = 'Заявку вашого магазину відхилено.'
ADMIN_ONLY = 'Доступ тільки для адміністратора.'

ALLOW = AccessDecision(Outcome.ALLOW)


def _seller_page(role, admin_allowed):
    if role == Role.SELLER:
        return ALLOW
    if role == Role.ADMIN:
        return ALLOW if admin_allowed else AccessDecision(Outcome.DENY, SELLERS_ONLY)
    if role == Role.PENDING:
        return AccessDecision(Outcome.DENY, SHOP_PENDING)
    if role == Role.REJECTED:
        return AccessDecision(Outcome.DENY, SHOP_REJECTED)
    if role == Role.BUYER:
        return AccessDecision(Outcome.DENY, SELLERS_ONLY)
    raise ValueError(f'Unknown role: {role!r}')


def _admin_page(role):
    if role == Role.ADMIN:
        return ALLOW
    if role in (Role.SELLER, Role.PENDING, Role.REJECTED, Role.BUYER):
        return AccessDecision(Outcome.REDIRECT_DASHBOARD, ADMIN_ONLY)
    raise ValueError(f'Unknown role: {role!r}')


def decide(scope, authenticated, role):
    """
    Return the AccessDecision for a page.

    ``role`` is None when the session exists but its profile could not be
    loaded; that is a hard denial, never an implicit allow.
    """
    if not authenticated:
        return AccessDecision(Outcome.REDIRECT_LOGIN, LOGIN_REQUIRED)

    if role is None:
        return AccessDecision(Outcome.DENY, PROFILE_LOAD_FAILED)

    if scope is Scope.SIGNED_IN:
        if role not in Role.values:
            raise ValueError(f'Unknown role: {role!r}')
        return ALLOW
    if scope is Scope.SELLER:
        return _seller_page(role, admin_allowed=False)
    if scope is Scope.SHOP_PROFILE:
        return _seller_page(role, admin_allowed=True)
    if scope is Scope.ADMIN:
        return _admin_page(role)
    raise ValueError(f'Unknown scope: {scope!r}')
