from django.contrib import admin
from .models import Role, TelegramLinkCode, UserProfile

@admin.register(UserProfile)
class UserProfileAdmin(admin.ModelAdmin):
    list_display = ['user', 'shop_name', 'city', 'role', 'contact', 'created_at']
    list_filter = ['role', 'city']
    search_fields = ['user__username', 'shop_name', 'city', 'contact']
    actions = ['approve_shops', 'reject_shops']

    def _moderate(self, request, queryset, role):
        # Same rule as the approval page: only pending shops move
        updated = queryset.filter(role=Role.PENDING).update(role=role)
        self.message_user(request, f"{updated} shops updated.")

    def approve_shops(self, request, queryset):
        self._moderate(request, queryset, Role.SELLER)
    approve_shops.short_description = "Approve selected pending shops"

    def reject_shops(self, request, queryset):
        self._moderate(request, queryset, Role.REJECTED)
    reject_shops.short_description = "Reject selected pending shops"

@admin.register(TelegramLinkCode)
class TelegramLinkCodeAdmin(admin.ModelAdmin):
    list_display = ['shop', 'code', 'expires_at']
