"""Users Lists - Admin Configuration."""
from django.contrib import admin
from unfold.admin import ModelAdmin

from .models import BlackList, Favorite


class MemberListAdmin(ModelAdmin):
    list_display = ['id', 'owner', 'created_at', 'updated_at']
    search_fields = ['owner__email']
    raw_id_fields = ['owner']
    filter_horizontal = ['clients', 'masters', 'tickets']
    readonly_fields = ['created_at', 'updated_at']


@admin.register(BlackList)
class BlackListAdmin(MemberListAdmin):
    pass


@admin.register(Favorite)
class FavoriteAdmin(MemberListAdmin):
    pass
