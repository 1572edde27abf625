"""Marketplace Appeals - Serializers."""
from rest_framework import serializers

from apps.common.core.api import IRIField
from .models import Appeal, AppealImage


class ComplaintReasonSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    code = serializers.CharField()
    title = serializers.CharField()


class AppealImageSerializer(serializers.ModelSerializer):
    class Meta:
        model = AppealImage
        fields = ['id', 'image', 'sort_order']


class AppealSerializer(serializers.ModelSerializer):
    complaintReason = serializers.CharField(source='reason', read_only=True)
    author = IRIField('users', source='author_id', read_only=True)
    respondent = IRIField('users', source='respondent_id', read_only=True)
    ticket = IRIField('tickets', source='ticket_id', read_only=True)
    chat = IRIField('chats', source='chat_id', read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    images = AppealImageSerializer(many=True, read_only=True)

    class Meta:
        model = Appeal
        fields = ['id', 'type', 'title', 'description', 'complaintReason', 'status', 'author', 'respondent',
                  'ticket', 'chat', 'createdAt', 'images']


class AppealCreateSerializer(serializers.Serializer):
    """Presence checks happen in the service so the error names every missing field."""
    type = serializers.CharField(required=False, allow_blank=True)
    title = serializers.CharField(required=False, allow_blank=True, max_length=255)
    description = serializers.CharField(required=False, allow_blank=True)
    complaintReason = serializers.CharField(required=False, allow_blank=True)
    respondent = IRIField('users', required=False, allow_null=True)
    ticket = IRIField('tickets', required=False, allow_null=True)
    chat = IRIField('chats', required=False, allow_null=True)
