# ==========================================
# apps/cards/admin.py
# ==========================================

from django.contrib import admin
from apps.cards.models import Card, CardShare


class CardShareInline(admin.TabularInline):
    """Inline admin for card shares."""
    model = CardShare
    extra = 0
    fields = ['shared_with', 'can_edit', 'can_delete', 'created_at']
    readonly_fields = ['created_at']
    raw_id_fields = ['shared_with']


@admin.register(Card)
class CardAdmin(admin.ModelAdmin):
    """Admin interface for loyalty cards."""

    list_display = [
        'merchant_name',
        'program',
        'card_number',
        'owner',
        'status',
        'share_count',
        'created_at'
    ]
    list_filter = ['status', 'barcode_type', 'created_at']
    search_fields = ['merchant_name', 'program', 'card_number', 'owner__email']
    readonly_fields = ['created_at', 'updated_at']
    raw_id_fields = ['owner']
    inlines = [CardShareInline]
    date_hierarchy = 'created_at'
    ordering = ['-created_at']

    fieldsets = (
        ('Basic Information', {
            'fields': ('owner', 'merchant_name', 'program', 'status')
        }),
        ('Card', {
            'fields': ('card_number', 'barcode_type', 'notes')
        }),
        ('Metadata', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    def share_count(self, obj):
        """Show number of shares."""
        return obj.shares.count()
    share_count.short_description = 'Shares'

    def get_queryset(self, request):
        """Optimize query."""
        qs = super().get_queryset(request)
        return qs.select_related('owner')
