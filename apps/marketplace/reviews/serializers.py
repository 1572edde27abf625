"""Marketplace Reviews - Serializers."""
from rest_framework import serializers

from apps.common.core.api import IRIField
from .models import Review, ReviewImage


class ReviewImageSerializer(serializers.ModelSerializer):
    class Meta:
        model = ReviewImage
        fields = ['id', 'image', 'sort_order']


class ReviewSerializer(serializers.ModelSerializer):
    ticket = IRIField('tickets', source='ticket_id', read_only=True)
    master = IRIField('users', source='master_id', read_only=True)
    client = IRIField('users', source='client_id', read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    images = ReviewImageSerializer(many=True, read_only=True)

    class Meta:
        model = Review
        fields = ['id', 'type', 'rating', 'description', 'ticket', 'master', 'client', 'createdAt', 'images']


class ReviewCreateSerializer(serializers.Serializer):
    """Both parties are sent; the server checks which one is the actor."""
    type = serializers.ChoiceField(choices=Review.Type.choices, required=False)
    rating = serializers.IntegerField()
    description = serializers.CharField(required=False, allow_blank=True)
    ticket = IRIField('tickets', required=False, allow_null=True)
    master = IRIField('users')
    client = IRIField('users')
