"""Common Core API - Serializer Fields and Mixins."""
from rest_framework import serializers

from apps.common.core.iri import make_iri, parse_reference


class IRIField(serializers.Field):
    """Reference rendered as ``/api/<collection>/<id>``; accepts IRI or raw id."""

    def __init__(self, collection: str, **kwargs):
        self.collection = collection
        super().__init__(**kwargs)

    def to_representation(self, value):
        pk = getattr(value, 'pk', value)
        return make_iri(self.collection, pk)

    def to_internal_value(self, data):
        pk = parse_reference(data, self.collection)
        if pk is None:
            raise serializers.ValidationError(f'Expected a reference to /api/{self.collection}/<id>')
        return pk


class MoneyField(serializers.DecimalField):
    """Serializer field for budgets."""

    def __init__(self, **kwargs):
        kwargs.setdefault('max_digits', 12)
        kwargs.setdefault('decimal_places', 2)
        kwargs.setdefault('min_value', 0)
        super().__init__(**kwargs)


class PhotoUploadSerializer(serializers.Serializer):
    """Multipart body of the per-resource upload-photo endpoints."""
    imageFile = serializers.ImageField()


class ErrorResponseSerializer(serializers.Serializer):
    """Standard error response."""
    code = serializers.CharField()
    message = serializers.CharField()
    details = serializers.DictField(required=False)
