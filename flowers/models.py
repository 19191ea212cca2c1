from django.db import models
from django.utils import timezone
from core.models import UserProfile


def photo_upload_to(instance, filename):
    return f"flowers/{instance.shop_id}/{int(timezone.now().timestamp())}-{filename}"


def compose_type(category, subtype):
    """Composite type string, e.g. "Букети · піоновидна" """
    category = (category or '').strip()
    subtype = (subtype or '').strip()
    if category and subtype:
        return f"{category} · {subtype}"
    return category or subtype


class Flower(models.Model):
    """A listing: single flowers, a potted plant, a bouquet or a composition"""

    CATEGORY_FLOWERS = 'Квіти'
    CATEGORY_VAZONY = 'Вазони'
    CATEGORY_BOUQUETS = 'Букети'
    CATEGORY_COMPOSITIONS = 'Композиції'

    CATEGORY_CHOICES = [
        (CATEGORY_FLOWERS, 'Квіти поштучно'),
        (CATEGORY_VAZONY, 'Вазони'),
        (CATEGORY_BOUQUETS, 'Букети'),
        (CATEGORY_COMPOSITIONS, 'Композиції'),
    ]
    # Categories that need a description
    COMPLEX_CATEGORIES = (CATEGORY_VAZONY, CATEGORY_BOUQUETS, CATEGORY_COMPOSITIONS)

    shop = models.ForeignKey(UserProfile, on_delete=models.CASCADE, related_name='flowers')
    name = models.CharField(max_length=200)
    type = models.CharField(max_length=200, blank=True)
    price = models.DecimalField(max_digits=10, decimal_places=2)
    stock = models.PositiveIntegerField(default=0)
    sold_count = models.PositiveIntegerField(default=0)
    city = models.CharField(max_length=100, blank=True)

    description = models.TextField(blank=True)
    composition_flowers = models.CharField(max_length=300, blank=True)

    photo = models.ImageField(upload_to=photo_upload_to, null=True, blank=True)
    photo_updated_at = models.DateTimeField(null=True, blank=True)

    is_active = models.BooleanField(default=True)

    # Discount
    is_on_sale = models.BooleanField(default=False)
    sale_price = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)
    discount_label = models.CharField(max_length=60, null=True, blank=True)

    created_at = models.DateTimeField(default=timezone.now)

    def save(self, *args, **kwargs):
        # A listing with nothing in stock is never active
        self.is_active = self.stock > 0
        update_fields = kwargs.get('update_fields')
        if update_fields is not None and 'stock' in update_fields:
            kwargs['update_fields'] = set(update_fields) | {'is_active'}
        super().save(*args, **kwargs)

    @property
    def photo_url(self):
        return self.photo.url if self.photo else None

    @property
    def category(self):
        return self.type.split(' · ', 1)[0] if self.type else ''

    def __str__(self):
        return self.name

    class Meta:
        ordering = ['-created_at']
