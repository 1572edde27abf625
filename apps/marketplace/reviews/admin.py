"""Marketplace Reviews - Admin Configuration."""
from django.contrib import admin
from django.utils.html import format_html
from unfold.admin import ModelAdmin, TabularInline

from .models import Review, ReviewImage


class ReviewImageInline(TabularInline):
    model = ReviewImage
    extra = 0
    fields = ['image', 'sort_order']


@admin.register(Review)
class ReviewAdmin(ModelAdmin):
    list_display = ['id', 'type', 'master', 'client', 'rating_stars', 'ticket', 'created_at']
    list_filter = ['type', 'rating', 'created_at']
    search_fields = ['master__email', 'client__email', 'description']
    raw_id_fields = ['master', 'client', 'ticket']
    readonly_fields = ['created_at', 'updated_at']
    date_hierarchy = 'created_at'
    inlines = [ReviewImageInline]

    @admin.display(description='Rating')
    def rating_stars(self, obj):
        stars = '★' * obj.rating + '☆' * (5 - obj.rating)
        color = '#ffc107' if obj.rating >= 4 else '#dc3545' if obj.rating <= 2 else '#6c757d'
        return format_html('<span style="color: {};">{}</span>', color, stars)
