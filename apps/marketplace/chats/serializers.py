"""Marketplace Chats - Serializers."""
from rest_framework import serializers

from apps.common.core.api import IRIField
from .models import Chat


class ChatSerializer(serializers.ModelSerializer):
    author = IRIField('users', source='author_id', read_only=True)
    replyAuthor = IRIField('users', source='reply_author_id', read_only=True)
    ticket = IRIField('tickets', source='ticket_id', read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)

    class Meta:
        model = Chat
        fields = ['id', 'author', 'replyAuthor', 'ticket', 'active', 'createdAt']


class ChatCreateSerializer(serializers.Serializer):
    replyAuthor = IRIField('users')
    ticket = IRIField('tickets', required=False, allow_null=True)
