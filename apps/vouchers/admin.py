# ==========================================
# apps/vouchers/admin.py
# ==========================================

from django.contrib import admin
from apps.vouchers.models import Voucher, VoucherShare


class VoucherShareInline(admin.TabularInline):
    """Inline admin for voucher shares. Voucher shares are always read-only."""
    model = VoucherShare
    extra = 0
    fields = ['shared_with', 'created_at']
    readonly_fields = ['created_at']
    raw_id_fields = ['shared_with']


@admin.register(Voucher)
class VoucherAdmin(admin.ModelAdmin):
    """Admin interface for vouchers."""

    list_display = [
        'merchant_name',
        'code',
        'voucher_type',
        'value',
        'owner',
        'valid_from',
        'valid_until',
        'created_at'
    ]
    list_filter = ['voucher_type', 'usage_limit_type', 'valid_until']
    search_fields = ['merchant_name', 'code', 'description', 'owner__email']
    readonly_fields = ['created_at', 'updated_at']
    raw_id_fields = ['owner']
    inlines = [VoucherShareInline]
    date_hierarchy = 'valid_until'
    ordering = ['valid_until']

    fieldsets = (
        ('Basic Information', {
            'fields': ('owner', 'merchant_name', 'code', 'description')
        }),
        ('Discount', {
            'fields': ('voucher_type', 'value', 'min_purchase_amount', 'usage_limit_type')
        }),
        ('Validity', {
            'fields': ('valid_from', 'valid_until', 'barcode_type')
        }),
        ('Metadata', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    def get_queryset(self, request):
        """Optimize query."""
        qs = super().get_queryset(request)
        return qs.select_related('owner')
