import secrets
from datetime import timedelta

from django.db import models
from django.contrib.auth.models import User
from django.utils import timezone


class Role(models.TextChoices):
    """Every role a profile can hold"""
    PENDING = 'pending', 'Очікує підтвердження'
    SELLER = 'seller', 'Продавець'
    REJECTED = 'rejected', 'Відхилено'
    BUYER = 'buyer', 'Покупець'
    ADMIN = 'admin', 'Адміністратор'


class RoleTransitionError(Exception):
    pass


def avatar_upload_to(instance, filename):
    return f"avatars/{instance.user_id}/{int(timezone.now().timestamp())}-{filename}"


class UserProfile(models.Model):
    """Shop (or buyer/admin) profile attached to an auth user"""

    # pending -> seller / rejected is the only role change in-flow
    ADMIN_TRANSITIONS = {
        Role.PENDING: {Role.SELLER, Role.REJECTED},
    }

    user = models.OneToOneField(User, on_delete=models.CASCADE, related_name='profile')
    role = models.CharField(max_length=10, choices=Role.choices, default=Role.PENDING)
    shop_name = models.CharField(max_length=200, blank=True)
    city = models.CharField(max_length=100, blank=True)
    address = models.CharField(max_length=300, blank=True)
    contact = models.CharField(max_length=100, blank=True)
    avatar = models.ImageField(upload_to=avatar_upload_to, null=True, blank=True)

    # Shop location for the map
    lat = models.FloatField(null=True, blank=True)
    lng = models.FloatField(null=True, blank=True)

    created_at = models.DateTimeField(default=timezone.now)

    @property
    def is_seller(self):
        return self.role == Role.SELLER

    @property
    def is_admin(self):
        return self.role == Role.ADMIN

    @property
    def display_name(self):
        return self.shop_name or self.user.username

    def set_role_by_admin(self, actor, new_role):
        """Approve or reject a pending shop. Only an admin profile may do this."""
        if actor is None or actor.role != Role.ADMIN:
            raise RoleTransitionError('Only an admin can change a shop role.')

        allowed = self.ADMIN_TRANSITIONS.get(self.role, set())
        if new_role not in allowed:
            raise RoleTransitionError(
                f"Profile {self.pk} cannot move from '{self.role}' to '{new_role}'"
            )

        self.role = new_role
        self.save(update_fields=['role'])

    def __str__(self):
        return f"{self.display_name} ({self.role})"

    class Meta:
        ordering = ['-created_at']


class TelegramLinkCode(models.Model):
    """One-time code a seller sends to the orders bot to link their chat"""

    ALPHABET = 'ABCDEFGHJKLMNPQRSTUVWXYZ23456789'
    LENGTH = 6
    TTL = timedelta(minutes=10)

    shop = models.OneToOneField(UserProfile, on_delete=models.CASCADE, related_name='telegram_code')
    code = models.CharField(max_length=LENGTH)
    expires_at = models.DateTimeField()

    @classmethod
    def generate_code(cls):
        return ''.join(secrets.choice(cls.ALPHABET) for _ in range(cls.LENGTH))

    @classmethod
    def issue_for(cls, shop, now=None):
        """Create or replace the shop's code"""
        now = now or timezone.now()
        link_code, _ = cls.objects.update_or_create(
            shop=shop,
            defaults={'code': cls.generate_code(), 'expires_at': now + cls.TTL},
        )
        return link_code

    def is_expired(self, now=None):
        return (now or timezone.now()) >= self.expires_at

    def __str__(self):
        return f"{self.code} for {self.shop}"
