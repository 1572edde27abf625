"""Common Geography - API Views.

Read-only endpoints for the geography hierarchy used by cascading selectors.
"""
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView
from drf_spectacular.utils import extend_schema

from apps.common.core.api import collection_response
from apps.common.core.exceptions import NotFoundError, ValidationError
from .serializers import (
    CitySerializer, CommunitySerializer, DistrictSerializer, ProvinceSerializer,
    SettlementSerializer, SuburbSerializer, VillageSerializer,
)
from .services import GeographySelector


class GeographyListView(APIView):
    """List one level, optionally narrowed by its parent id."""
    permission_classes = [AllowAny]
    level = ''
    parent_param = None
    serializer_class = None

    @extend_schema(tags=['Geography'])
    def get(self, request):
        parent_id = None
        if self.parent_param:
            raw = request.query_params.get(self.parent_param)
            if raw:
                if not raw.isdigit():
                    raise ValidationError(f'{self.parent_param} must be an integer id')
                parent_id = int(raw)
        items = GeographySelector.list_level(self.level, parent_id)
        return collection_response(request, self.serializer_class(items, many=True).data)


class GeographyDetailView(APIView):
    permission_classes = [AllowAny]
    level = ''
    serializer_class = None

    @extend_schema(tags=['Geography'])
    def get(self, request, pk):
        obj = GeographySelector.get(self.level, pk)
        if obj is None:
            raise NotFoundError(f'{self.level.capitalize()} not found')
        return Response(self.serializer_class(obj).data)


class ProvinceListView(GeographyListView):
    level = 'province'
    serializer_class = ProvinceSerializer


class ProvinceDetailView(GeographyDetailView):
    level = 'province'
    serializer_class = ProvinceSerializer


class CityListView(GeographyListView):
    level = 'city'
    parent_param = 'province'
    serializer_class = CitySerializer


class CityDetailView(GeographyDetailView):
    level = 'city'
    serializer_class = CitySerializer


class SuburbListView(GeographyListView):
    level = 'suburb'
    parent_param = 'city'
    serializer_class = SuburbSerializer


class DistrictListView(GeographyListView):
    level = 'district'
    parent_param = 'province'
    serializer_class = DistrictSerializer


class DistrictDetailView(GeographyDetailView):
    level = 'district'
    serializer_class = DistrictSerializer


class SettlementListView(GeographyListView):
    level = 'settlement'
    parent_param = 'district'
    serializer_class = SettlementSerializer


class CommunityListView(GeographyListView):
    level = 'community'
    parent_param = 'district'
    serializer_class = CommunitySerializer


class VillageListView(GeographyListView):
    level = 'village'
    parent_param = 'settlement'
    serializer_class = VillageSerializer
