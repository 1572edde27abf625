"""Common Geography - Serializers."""
from rest_framework import serializers

from apps.common.core.api import IRIField
from .models import Address, City, Community, District, Province, Settlement, Suburb, Village


class ProvinceSerializer(serializers.ModelSerializer):
    class Meta:
        model = Province
        fields = ['id', 'title', 'description']


class SuburbSerializer(serializers.ModelSerializer):
    city = IRIField('cities', source='city_id', read_only=True)

    class Meta:
        model = Suburb
        fields = ['id', 'title', 'description', 'city']


class CitySerializer(serializers.ModelSerializer):
    province = IRIField('provinces', source='province_id', read_only=True)
    suburbs = SuburbSerializer(many=True, read_only=True)

    class Meta:
        model = City
        fields = ['id', 'title', 'description', 'province', 'suburbs']


class VillageSerializer(serializers.ModelSerializer):
    settlement = IRIField('settlements', source='settlement_id', read_only=True)

    class Meta:
        model = Village
        fields = ['id', 'title', 'description', 'settlement']


class SettlementSerializer(serializers.ModelSerializer):
    district = IRIField('districts', source='district_id', read_only=True)
    villages = VillageSerializer(many=True, read_only=True)

    class Meta:
        model = Settlement
        fields = ['id', 'title', 'description', 'district', 'villages']


class CommunitySerializer(serializers.ModelSerializer):
    district = IRIField('districts', source='district_id', read_only=True)

    class Meta:
        model = Community
        fields = ['id', 'title', 'description', 'district']


class DistrictSerializer(serializers.ModelSerializer):
    province = IRIField('provinces', source='province_id', read_only=True)
    settlements = SettlementSerializer(many=True, read_only=True)
    communities = CommunitySerializer(many=True, read_only=True)

    class Meta:
        model = District
        fields = ['id', 'title', 'description', 'province', 'settlements', 'communities']


class GeoRefSerializer(serializers.Serializer):
    """Minimal nested form used inside addresses."""
    id = serializers.IntegerField()
    title = serializers.CharField()


class AddressSerializer(serializers.ModelSerializer):
    province = GeoRefSerializer(read_only=True)
    city = GeoRefSerializer(read_only=True)
    suburb = GeoRefSerializer(read_only=True)
    district = GeoRefSerializer(read_only=True)
    settlement = GeoRefSerializer(read_only=True)
    community = GeoRefSerializer(read_only=True)
    village = GeoRefSerializer(read_only=True)
    full_address = serializers.CharField(read_only=True)
    short_address = serializers.CharField(read_only=True)

    class Meta:
        model = Address
        fields = ['id', 'province', 'city', 'suburb', 'district', 'settlement', 'community', 'village', 'full_address', 'short_address']


class AddressPayloadSerializer(serializers.Serializer):
    """Selector payload: IRIs (or ids) for the populated branch."""
    province = serializers.CharField()
    city = serializers.CharField(required=False, allow_null=True)
    suburb = serializers.CharField(required=False, allow_null=True)
    district = serializers.CharField(required=False, allow_null=True)
    settlement = serializers.CharField(required=False, allow_null=True)
    community = serializers.CharField(required=False, allow_null=True)
    village = serializers.CharField(required=False, allow_null=True)
