from django.contrib import admin
from django.utils.html import format_html

from .models import User, UserStatus


@admin.register(User)
class UserAdmin(admin.ModelAdmin):
    """
    Admin interface for operator accounts.

    Passwords are set through the API (or ``ensure_default_admin``) so they
    are always hashed; the admin only shows the hash.
    """

    list_display = [
        'email',
        'username',
        'role',
        'status_badge',
        'is_staff',
        'created_at',
        'last_login',
    ]

    list_filter = [
        'role',
        'status',
        'is_staff',
    ]

    search_fields = [
        'email',
        'username',
    ]

    ordering = ['-created_at']

    fieldsets = (
        ('Basic Information', {
            'fields': ('email', 'username', 'password')
        }),
        ('Permissions', {
            'fields': ('role', 'status', 'is_staff', 'is_superuser'),
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at', 'last_login'),
            'classes': ('collapse',),
        }),
    )

    readonly_fields = [
        'password',
        'created_at',
        'updated_at',
        'last_login',
    ]

    def status_badge(self, obj):
        """Display account status as colored badge."""
        color = '#6B8E5E' if obj.is_active else '#B85C5C'
        return format_html(
            '<span style="background: {}; color: white; padding: 3px 8px; '
            'border-radius: 10px; font-size: 11px;">{}</span>',
            color, obj.get_status_display()
        )
    status_badge.short_description = 'Status'
    status_badge.admin_order_field = 'status'

    actions = ['activate_users', 'deactivate_users']

    @admin.action(description='Activate selected users')
    def activate_users(self, request, queryset):
        count = queryset.update(status=UserStatus.ACTIVE)
        self.message_user(request, f'Activated {count} user(s).')

    @admin.action(description='Deactivate selected users')
    def deactivate_users(self, request, queryset):
        """Deactivate selected users (excludes superusers for safety)."""
        safe_queryset = queryset.filter(is_superuser=False)
        count = safe_queryset.update(status=UserStatus.INACTIVE)
        skipped = queryset.count() - count
        msg = f'Deactivated {count} user(s).'
        if skipped:
            msg += f' Skipped {skipped} superuser(s) for safety.'
        self.message_user(request, msg)
