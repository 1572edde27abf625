"""Marketplace Tickets - Serializers."""
from rest_framework import serializers

from apps.common.core.api import IRIField, MoneyField
from apps.common.geography.serializers import AddressPayloadSerializer, AddressSerializer
from apps.users.identity.serializers import UserBriefSerializer
from .models import Category, Occupation, Ticket, TicketImage, Unit


class CategorySerializer(serializers.ModelSerializer):
    class Meta:
        model = Category
        fields = ['id', 'title', 'description', 'image']


class OccupationSerializer(serializers.ModelSerializer):
    categories = serializers.PrimaryKeyRelatedField(many=True, read_only=True)

    class Meta:
        model = Occupation
        fields = ['id', 'title', 'description', 'categories']


class UnitSerializer(serializers.ModelSerializer):
    class Meta:
        model = Unit
        fields = ['id', 'title', 'description']


class TicketImageSerializer(serializers.ModelSerializer):
    class Meta:
        model = TicketImage
        fields = ['id', 'image', 'sort_order']


class TicketSerializer(serializers.ModelSerializer):
    """Directory representation; ``reviewsCount``/``rating`` describe the ticket owner."""
    negotiableBudget = serializers.BooleanField(source='negotiable_budget', read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    category = CategorySerializer(read_only=True)
    subcategory = OccupationSerializer(read_only=True)
    unit = UnitSerializer(read_only=True)
    addresses = AddressSerializer(many=True, read_only=True)
    author = UserBriefSerializer(read_only=True)
    master = UserBriefSerializer(read_only=True)
    images = TicketImageSerializer(many=True, read_only=True)
    reviewsCount = serializers.SerializerMethodField()
    rating = serializers.SerializerMethodField()

    class Meta:
        model = Ticket
        fields = ['id', 'title', 'description', 'notice', 'budget', 'negotiableBudget', 'unit', 'category',
                  'subcategory', 'addresses', 'author', 'master', 'active', 'service', 'createdAt', 'images',
                  'reviewsCount', 'rating']

    def _owner_stats(self, obj) -> dict:
        stats = self.context.get('owner_stats', {})
        return stats.get(obj.owner_id, {'count': 0, 'rating': 0})

    def get_reviewsCount(self, obj) -> int:
        return self._owner_stats(obj)['count']

    def get_rating(self, obj) -> float:
        return self._owner_stats(obj)['rating']


class TicketWriteSerializer(serializers.Serializer):
    title = serializers.CharField(max_length=255)
    description = serializers.CharField(required=False, allow_blank=True)
    notice = serializers.CharField(required=False, allow_blank=True)
    budget = MoneyField(required=False, allow_null=True)
    negotiableBudget = serializers.BooleanField(source='negotiable_budget', required=False)
    unit = IRIField('units', required=False, allow_null=True)
    category = IRIField('categories')
    subcategory = IRIField('occupations', required=False, allow_null=True)
    active = serializers.BooleanField(required=False)
    addresses = AddressPayloadSerializer(many=True, required=False)


class TicketUpdateSerializer(TicketWriteSerializer):
    title = serializers.CharField(max_length=255, required=False)
    category = IRIField('categories', required=False)
