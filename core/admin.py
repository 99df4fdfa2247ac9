"""
Core — Django Admin Configuration

Audit entries are browsable but never editable.

@file core/admin.py
"""

from django.contrib import admin
from django.utils.html import format_html
from django.utils.translation import gettext_lazy as _

from core.models import AuditLog

ACTION_COLORS = {
    AuditLog.ActionChoices.CREATE: '#16a34a',
    AuditLog.ActionChoices.UPDATE: '#2563eb',
    AuditLog.ActionChoices.DELETE: '#dc2626',
}


@admin.register(AuditLog)
class AuditLogAdmin(admin.ModelAdmin):
    list_display = ('timestamp', 'colored_action', 'model_name', 'object_id', 'actor')
    list_filter = ('action', 'model_name')
    search_fields = ('object_id', 'actor__username')
    readonly_fields = [field.name for field in AuditLog._meta.fields]
    date_hierarchy = 'timestamp'
    list_select_related = ('actor',)
    list_per_page = 50

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False

    @admin.display(description=_('Action'), ordering='action')
    def colored_action(self, obj):
        return format_html(
            '<b style="color:{}">{}</b>',
            ACTION_COLORS.get(obj.action, '#6b7280'),
            obj.get_action_display(),
        )
