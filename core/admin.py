"""
Django admin registrations for the core models.

Audit events are read-only in the admin: they are written by the
application and the password reset command, never edited by hand.
"""

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as DjangoUserAdmin

from .models import User, AuditEvent


@admin.register(User)
class UserAdmin(DjangoUserAdmin):
    list_display = ('email', 'username', 'role', 'department', 'is_active', 'password_changed_at')
    list_filter = ('role', 'is_active')
    search_fields = ('email', 'username', 'first_name', 'last_name')
    ordering = ('email',)
    fieldsets = DjangoUserAdmin.fieldsets + (
        ('Hospital', {'fields': ('role', 'department', 'password_changed_at')}),
    )
    readonly_fields = ('password_changed_at',)


@admin.register(AuditEvent)
class AuditEventAdmin(admin.ModelAdmin):
    list_display = ('action', 'object_type', 'object_id', 'user', 'created_at')
    list_filter = ('action', 'object_type')
    search_fields = ('object_id', 'user__email')

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False
