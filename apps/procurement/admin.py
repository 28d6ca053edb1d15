# ==========================================
# apps/procurement/admin.py
# ==========================================

from django.contrib import admin
from django.utils.html import format_html
from .models import ProcurementRequest, RequestStatus
from .services import delete_request, get_image_storage, update_request


STATUS_COLORS = {
    RequestStatus.PENDING: ('#E5C49A', '#2C1810'),
    RequestStatus.APPROVED: ('#7FA7C9', 'white'),
    RequestStatus.ORDERED: ('#A47449', 'white'),
    RequestStatus.RECEIVED: ('#6B8E5E', 'white'),
    RequestStatus.DONE: ('#6B8E5E', 'white'),
    RequestStatus.CANCELLED: ('#B85C5C', 'white'),
}


@admin.register(ProcurementRequest)
class ProcurementRequestAdmin(admin.ModelAdmin):
    """
    Admin interface for Procurement Requests.

    Deletions go through the service layer so attached images are removed
    together with the request.
    """

    list_display = [
        'item_name_en',
        'item_name_zh',
        'category',
        'priority',
        'requestor_name',
        'department',
        'status_badge',
        'created_at',
    ]

    list_filter = [
        'status',
        'priority',
        'category',
        'created_at',
    ]

    search_fields = [
        'item_name_en',
        'item_name_zh',
        'requestor_name',
        'department',
    ]

    readonly_fields = [
        'image_path',
        'created_at',
        'updated_at',
    ]

    date_hierarchy = 'created_at'
    ordering = ['-created_at']

    fieldsets = (
        ('Item', {
            'fields': (
                'item_name_en',
                'item_name_zh',
                'category',
                'quantity',
                'unit',
                'estimated_price',
                'supplier',
                'priority',
                'date_needed',
                'image_path',
            )
        }),
        ('Requester', {
            'fields': (
                'requestor_name',
                'department',
                'comments',
            )
        }),
        ('Purchasing', {
            'fields': (
                'status',
                'quote_obtained',
                'manager_approved',
                'order_placed',
                'payment_processed',
                'item_received',
                'invoice_filed',
                'purchaser_notes',
            )
        }),
        ('Metadata', {
            'fields': ('created_at', 'updated_at', 'completed_at'),
            'classes': ('collapse',),
        }),
    )

    actions = [
        'mark_approved',
        'mark_cancelled',
    ]

    def status_badge(self, obj):
        """Display request status as colored badge."""
        bg, fg = STATUS_COLORS.get(obj.status, ('#ccc', '#666'))
        return format_html(
            '<span style="background: {}; color: {}; padding: 3px 8px; '
            'border-radius: 10px; font-size: 11px;">{}</span>',
            bg, fg, obj.get_status_display()
        )
    status_badge.short_description = 'Status'
    status_badge.admin_order_field = 'status'

    def _set_status(self, request, queryset, new_status):
        for procurement_request in queryset:
            update_request(request_id=procurement_request.id, data={'status': new_status})
        self.message_user(request, f'Updated {queryset.count()} request(s) to {new_status}.')

    @admin.action(description='Mark selected requests as Approved')
    def mark_approved(self, request, queryset):
        self._set_status(request, queryset, RequestStatus.APPROVED)

    @admin.action(description='Mark selected requests as Cancelled')
    def mark_cancelled(self, request, queryset):
        self._set_status(request, queryset, RequestStatus.CANCELLED)

    def save_model(self, request, obj, form, change):
        if change:
            obj.touch()
        super().save_model(request, obj, form, change)

    def delete_model(self, request, obj):
        deleted = delete_request(request_id=obj.id)
        if deleted.image_path:
            get_image_storage().delete(deleted.image_path)

    def delete_queryset(self, request, queryset):
        storage = get_image_storage()
        for procurement_request in queryset:
            deleted = delete_request(request_id=procurement_request.id)
            if deleted.image_path:
                storage.delete(deleted.image_path)
