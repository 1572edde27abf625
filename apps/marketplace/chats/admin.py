"""Marketplace Chats - Admin Configuration."""
from django.contrib import admin
from unfold.admin import ModelAdmin

from .models import Chat


@admin.register(Chat)
class ChatAdmin(ModelAdmin):
    list_display = ['id', 'author', 'reply_author', 'ticket', 'active', 'created_at']
    list_filter = ['active', 'created_at']
    search_fields = ['author__email', 'reply_author__email']
    raw_id_fields = ['author', 'reply_author', 'ticket']
    readonly_fields = ['created_at', 'updated_at']
