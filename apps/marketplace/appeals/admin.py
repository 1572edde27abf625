"""Marketplace Appeals - Admin Configuration."""
from django.contrib import admin
from django.utils.html import format_html
from unfold.admin import ModelAdmin, TabularInline

from .models import Appeal, AppealImage


class AppealImageInline(TabularInline):
    model = AppealImage
    extra = 0
    fields = ['image', 'sort_order']


@admin.register(Appeal)
class AppealAdmin(ModelAdmin):
    list_display = ['id', 'type', 'title', 'reason', 'author', 'respondent', 'status_badge', 'created_at']
    list_filter = ['type', 'reason', 'status', 'created_at']
    search_fields = ['title', 'description', 'author__email', 'respondent__email']
    raw_id_fields = ['author', 'respondent', 'ticket', 'chat']
    readonly_fields = ['created_at', 'updated_at']
    date_hierarchy = 'created_at'
    inlines = [AppealImageInline]
    actions = ['mark_in_progress', 'mark_closed']

    @admin.display(description='Status')
    def status_badge(self, obj):
        colors = {'new': '#dc3545', 'in_progress': '#ffc107', 'closed': '#28a745'}
        return format_html('<span style="color: {};">{}</span>', colors.get(obj.status, '#6c757d'), obj.get_status_display())

    @admin.action(description='Mark as in progress')
    def mark_in_progress(self, request, queryset):
        queryset.update(status=Appeal.Status.IN_PROGRESS)

    @admin.action(description='Mark as closed')
    def mark_closed(self, request, queryset):
        queryset.update(status=Appeal.Status.CLOSED)
