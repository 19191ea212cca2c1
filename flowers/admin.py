from django.contrib import admin
from .models import Flower

@admin.register(Flower)
class FlowerAdmin(admin.ModelAdmin):
    list_display = ['name', 'type', 'shop', 'price', 'stock', 'sold_count', 'is_active', 'is_on_sale', 'created_at']
    list_filter = ['is_active', 'is_on_sale', 'created_at']
    search_fields = ['name', 'type', 'city', 'shop__shop_name']
    readonly_fields = ['sold_count', 'is_active']
