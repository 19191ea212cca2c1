import logging
from functools import wraps

from django.contrib import messages
from django.db import DatabaseError
from django.shortcuts import redirect, render
from django.urls import reverse

from .access import Outcome, decide
from .models import UserProfile

logger = logging.getLogger(__name__)


def load_profile(user):
    """Profile of the session user, or None if it cannot be loaded"""
    try:
        return UserProfile.objects.select_related('user').get(user=user)
    except UserProfile.DoesNotExist:
        logger.warning('No profile for user %s', user.pk)
    except DatabaseError:
        logger.exception('Profile lookup failed for user %s', user.pk)
    return None


def role_required(scope):
    """
    Decorator to gate views by the role on the user's profile.
    Usage: @role_required(Scope.SELLER)

    The loaded profile is attached as ``request.profile``.
    """
    def decorator(view_func):
        @wraps(view_func)
        def wrapper(request, *args, **kwargs):
            authenticated = request.user.is_authenticated
            profile = load_profile(request.user) if authenticated else None
            decision = decide(scope, authenticated, profile.role if profile else None)

            if decision.outcome is Outcome.REDIRECT_LOGIN:
                messages.error(request, decision.message)
                return redirect(f"{reverse('core:login')}?next={request.path}")

            if decision.outcome is Outcome.REDIRECT_DASHBOARD:
                messages.error(request, decision.message)
                return redirect('core:dashboard')

            if decision.outcome is Outcome.DENY:
                return render(request, 'core/access_denied.html', {
                    'message': decision.message,
                    'profile': profile,
                }, status=403)

            request.profile = profile
            return view_func(request, *args, **kwargs)

        return wrapper
    return decorator


def get_client_ip(request):
    """Get client IP address"""
    x_forwarded_for = request.META.get('HTTP_X_FORWARDED_FOR')
    if x_forwarded_for:
        ip = x_forwarded_for.split(',')[0]
    else:
        ip = request.META.get('REMOTE_ADDR')
    return ip
