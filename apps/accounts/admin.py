# ==========================================
# apps/accounts/admin.py
# ==========================================

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.db.models import Count
from .models import User


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """Users with the number of cards, vouchers and gift cards they own."""

    list_display = [
        'email',
        'display_name',
        'is_active',
        'is_staff',
        'owned_cards',
        'owned_vouchers',
        'owned_gift_cards',
        'created_at',
    ]
    list_filter = ['is_active', 'is_staff', 'is_superuser']
    search_fields = ['email', 'display_name']
    ordering = ['-created_at']

    # BaseUserAdmin expects a username field
    fieldsets = (
        (None, {'fields': ('email', 'display_name', 'password')}),
        ('Permissions', {'fields': ('is_active', 'is_staff', 'is_superuser')}),
        ('Timestamps', {'fields': ('created_at', 'last_login')}),
    )
    add_fieldsets = (
        (None, {
            'classes': ('wide',),
            'fields': ('email', 'display_name', 'password1', 'password2'),
        }),
    )
    readonly_fields = ['created_at', 'last_login']
    filter_horizontal = []

    def get_queryset(self, request):
        return super().get_queryset(request).annotate(
            card_count=Count('cards', distinct=True),
            voucher_count=Count('vouchers', distinct=True),
            gift_card_count=Count('gift_cards', distinct=True),
        )

    @admin.display(description='Cards', ordering='card_count')
    def owned_cards(self, obj):
        return obj.card_count

    @admin.display(description='Vouchers', ordering='voucher_count')
    def owned_vouchers(self, obj):
        return obj.voucher_count

    @admin.display(description='Gift cards', ordering='gift_card_count')
    def owned_gift_cards(self, obj):
        return obj.gift_card_count
