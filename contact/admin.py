"""
Contact Django Admin Configuration
"""
from django.contrib import admin
from .models import Contact


@admin.register(Contact)
class ContactAdmin(admin.ModelAdmin):
    """Admin interface for contact submissions."""

    list_display = [
        'name', 'email', 'phone', 'status', 'created_at'
    ]

    list_filter = [
        'status', 'created_at'
    ]

    search_fields = [
        'name', 'email', 'message'
    ]

    readonly_fields = [
        'id', 'name', 'email', 'phone', 'message', 'ip_address', 'user_agent',
        'created_at', 'updated_at'
    ]

    fieldsets = (
        ('Contact Information', {
            'fields': ('name', 'email', 'phone', 'message')
        }),
        ('Status', {
            'fields': ('status',)
        }),
        ('Tracking', {
            'fields': ('ip_address', 'user_agent'),
            'classes': ('collapse',)
        }),
        ('Metadata', {
            'fields': ('id', 'created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    actions = ['mark_read', 'mark_replied']

    def has_add_permission(self, request):
        """Submissions come from the contact form only."""
        return False

    @admin.action(description='Mark selected contacts as read')
    def mark_read(self, request, queryset):
        for contact in queryset:
            contact.mark_as_read()

    @admin.action(description='Mark selected contacts as replied')
    def mark_replied(self, request, queryset):
        for contact in queryset:
            contact.mark_as_replied()
