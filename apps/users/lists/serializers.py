"""Users Lists - Serializers."""
from rest_framework import serializers

from .models import BlackList, Favorite


class RefListField(serializers.Field):
    """Related rows rendered as ``[{"id": ...}]``."""

    def __init__(self, **kwargs):
        kwargs['read_only'] = True
        super().__init__(**kwargs)

    def to_representation(self, manager):
        return [{'id': pk if isinstance(pk, int) else str(pk)} for pk in manager.order_by('pk').values_list('pk', flat=True)]


class OwnerField(serializers.Field):

    def __init__(self, **kwargs):
        kwargs.update(read_only=True, source='owner_id')
        super().__init__(**kwargs)

    def to_representation(self, value):
        return {'id': str(value)}


class BlackListSerializer(serializers.ModelSerializer):
    author = OwnerField()
    tickets = RefListField()
    clients = RefListField()
    masters = RefListField()

    class Meta:
        model = BlackList
        fields = ['id', 'author', 'tickets', 'clients', 'masters']


class FavoriteSerializer(serializers.ModelSerializer):
    user = OwnerField()
    tickets = RefListField()
    clients = RefListField()
    masters = RefListField()

    class Meta:
        model = Favorite
        fields = ['id', 'user', 'tickets', 'clients', 'masters']


class ListEntriesSerializer(serializers.Serializer):
    """References are resolved by the service so unknown ones can be reported per entry."""
    clients = serializers.ListField(child=serializers.CharField(), required=False, allow_null=True)
    masters = serializers.ListField(child=serializers.CharField(), required=False, allow_null=True)
    tickets = serializers.ListField(child=serializers.CharField(), required=False, allow_null=True)
