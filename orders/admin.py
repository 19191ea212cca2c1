from django.contrib import admin
from .models import Order, AuditLog

@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    list_display = ['id', 'buyer_name', 'buyer_phone', 'flower', 'shop', 'quantity', 'status', 'created_at']
    list_filter = ['status', 'created_at']
    search_fields = ['buyer_phone', 'buyer_name', 'shop__shop_name']
    # Status changes go through the seller page so stock stays in step
    readonly_fields = ['status']

@admin.register(AuditLog)
class AuditLogAdmin(admin.ModelAdmin):
    list_display = ['user', 'action', 'model_name', 'object_id', 'timestamp']
    list_filter = ['action', 'timestamp']
    search_fields = ['user__username', 'action']
