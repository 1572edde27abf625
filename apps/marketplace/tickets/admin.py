"""Marketplace Tickets - Admin Configuration."""
from django.contrib import admin
from django.utils.html import format_html
from unfold.admin import ModelAdmin, TabularInline

from .models import Category, Occupation, Ticket, TicketImage, Unit


class TicketImageInline(TabularInline):
    model = TicketImage
    extra = 0
    fields = ['image', 'sort_order']


@admin.register(Category)
class CategoryAdmin(ModelAdmin):
    list_display = ['title', 'description']
    search_fields = ['title', 'description']


@admin.register(Occupation)
class OccupationAdmin(ModelAdmin):
    list_display = ['title']
    search_fields = ['title']
    filter_horizontal = ['categories']


@admin.register(Unit)
class UnitAdmin(ModelAdmin):
    list_display = ['title']
    search_fields = ['title']


@admin.register(Ticket)
class TicketAdmin(ModelAdmin):
    list_display = ['id', 'title', 'kind_badge', 'category', 'budget', 'author', 'master', 'active', 'created_at']
    list_filter = ['service', 'active', 'category', 'created_at']
    search_fields = ['title', 'description', 'author__email', 'master__email']
    raw_id_fields = ['author', 'master', 'category', 'subcategory', 'unit']
    filter_horizontal = ['addresses']
    readonly_fields = ['created_at', 'updated_at']
    date_hierarchy = 'created_at'
    inlines = [TicketImageInline]

    fieldsets = (
        ('Basic Info', {'fields': ('title', 'description', 'notice', 'category', 'subcategory')}),
        ('Budget', {'fields': ('budget', 'negotiable_budget', 'unit')}),
        ('Parties', {'fields': ('author', 'master', 'service', 'active')}),
        ('Location', {'fields': ('addresses',)}),
        ('Timestamps', {'fields': ('created_at', 'updated_at'), 'classes': ('collapse',)}),
    )

    @admin.display(description='Kind')
    def kind_badge(self, obj):
        if obj.service:
            return format_html('<span style="color: green;">Service</span>')
        return format_html('<span style="color: #2563eb;">Request</span>')
