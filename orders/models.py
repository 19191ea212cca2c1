from django.db import models
from django.contrib.auth.models import User
from django.utils import timezone
from core.models import UserProfile
from flowers.models import Flower


class Order(models.Model):
    """A buyer's order for one listing"""

    class Status(models.TextChoices):
        NEW = 'new', 'Нове'
        IN_PROGRESS = 'in_progress', 'В роботі'
        DONE = 'done', 'Виконано'
        CANCELLED = 'cancelled', 'Скасовано'

    ACTIVE_STATUSES = (Status.NEW, Status.IN_PROGRESS)
    CLOSED_STATUSES = (Status.DONE, Status.CANCELLED)

    # Kept after the seller deletes the listing
    flower = models.ForeignKey(Flower, on_delete=models.SET_NULL, null=True, blank=True, related_name='orders')
    shop = models.ForeignKey(UserProfile, on_delete=models.CASCADE, related_name='orders')

    buyer_name = models.CharField(max_length=100)
    buyer_phone = models.CharField(max_length=30)
    buyer_email = models.EmailField(null=True, blank=True)
    buyer_comment = models.TextField(null=True, blank=True)

    quantity = models.PositiveIntegerField()
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.NEW)

    created_at = models.DateTimeField(default=timezone.now)

    def __str__(self):
        return f"Order #{self.id} - {self.buyer_phone} - {self.status}"

    class Meta:
        ordering = ['-created_at']


class AuditLog(models.Model):
    """Audit trail for order status changes and shop moderation"""

    user = models.ForeignKey(User, on_delete=models.SET_NULL, null=True, blank=True)
    action = models.CharField(max_length=100)
    model_name = models.CharField(max_length=50, blank=True)
    object_id = models.CharField(max_length=100, blank=True, null=True, default='')
    details = models.TextField(blank=True)
    ip_address = models.GenericIPAddressField(null=True, blank=True)
    timestamp = models.DateTimeField(auto_now_add=True)

    @classmethod
    def record(cls, request, action, obj, details=''):
        from core.decorators import get_client_ip
        return cls.objects.create(
            user=request.user if request.user.is_authenticated else None,
            action=action,
            model_name=type(obj).__name__,
            object_id=str(obj.pk),
            details=details,
            ip_address=get_client_ip(request),
        )

    def __str__(self):
        return f"{self.user} - {self.action} - {self.timestamp}"

    class Meta:
        ordering = ['-timestamp']
