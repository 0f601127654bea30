# ==========================================
# apps/giftcards/admin.py
# ==========================================

from django.contrib import admin
from apps.giftcards.models import GiftCard, GiftCardShare, GiftCardTransaction
from apps.giftcards.services import recalculate_balance


class GiftCardShareInline(admin.TabularInline):
    """Inline admin for gift card shares."""
    model = GiftCardShare
    extra = 0
    fields = ['shared_with', 'can_edit', 'can_delete', 'can_edit_transactions', 'created_at']
    readonly_fields = ['created_at']
    raw_id_fields = ['shared_with']


class GiftCardTransactionInline(admin.TabularInline):
    """Read-only transaction history. Balance changes go through the ledger."""
    model = GiftCardTransaction
    extra = 0
    fields = ['amount', 'description', 'transaction_date', 'created_by', 'deleted_at']
    readonly_fields = fields
    can_delete = False

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(GiftCard)
class GiftCardAdmin(admin.ModelAdmin):
    """Admin interface for gift cards."""

    list_display = [
        'merchant_name',
        'card_number',
        'owner',
        'initial_balance',
        'current_balance',
        'currency',
        'status',
        'expires_at',
    ]
    list_filter = ['status', 'currency', 'expires_at']
    search_fields = ['merchant_name', 'card_number', 'owner__email']
    # Balance is owned by the ledger
    readonly_fields = ['initial_balance', 'current_balance', 'created_at', 'updated_at']
    raw_id_fields = ['owner']
    inlines = [GiftCardShareInline, GiftCardTransactionInline]
    date_hierarchy = 'created_at'
    ordering = ['-created_at']

    fieldsets = (
        ('Basic Information', {
            'fields': ('owner', 'merchant_name', 'card_number', 'pin', 'status')
        }),
        ('Balance', {
            'fields': ('initial_balance', 'current_balance', 'currency', 'expires_at')
        }),
        ('Notes', {
            'fields': ('notes',)
        }),
        ('Metadata', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    actions = ['recalculate_balances']

    @admin.action(description='Recalculate balance from transactions')
    def recalculate_balances(self, request, queryset):
        """Rebuild cached balances from transaction history."""
        for gift_card in queryset:
            recalculate_balance(gift_card_id=gift_card.id)
        self.message_user(request, f"Recalculated balances for {queryset.count()} gift cards")

    def get_queryset(self, request):
        """Optimize query."""
        qs = super().get_queryset(request)
        return qs.select_related('owner')


@admin.register(GiftCardTransaction)
class GiftCardTransactionAdmin(admin.ModelAdmin):
    """Read-only admin for gift card transactions."""

    list_display = ['gift_card', 'amount', 'transaction_date', 'created_by', 'deleted_at']
    list_filter = ['transaction_date', 'deleted_at']
    search_fields = ['gift_card__card_number', 'gift_card__merchant_name', 'description']
    date_hierarchy = 'transaction_date'
    ordering = ['-transaction_date']

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False

    def get_queryset(self, request):
        """Optimize query."""
        qs = super().get_queryset(request)
        return qs.select_related('gift_card', 'created_by')
