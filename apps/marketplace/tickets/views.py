"""Marketplace Tickets - API Views."""
from django_filters.rest_framework import DjangoFilterBackend
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import generics, permissions, status
from rest_framework.parsers import FormParser, MultiPartParser
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.common.core.api import ErrorResponseSerializer, HydraListMixin, IsMarketplaceMember, PhotoUploadSerializer, collection_response
from apps.common.core.exceptions import ValidationError
from . import directory
from .filters import TicketFilter
from .serializers import (
    CategorySerializer, OccupationSerializer, TicketImageSerializer, TicketSerializer,
    TicketUpdateSerializer, TicketWriteSerializer, UnitSerializer,
)
from .services import CatalogSelector, TicketSelector, TicketService


def _write_data(validated: dict) -> dict:
    data = dict(validated)
    if 'addresses' in data and data['addresses'] is not None:
        data['addresses'] = [dict(address) for address in data['addresses']]
    return data


class TicketListView(generics.ListAPIView):
    """Directory listing; ``period``, ``sort`` and ``secondarySort`` arrange the filtered result."""
    serializer_class = TicketSerializer
    filter_backends = [DjangoFilterBackend]
    filterset_class = TicketFilter
    pagination_class = None

    def get_permissions(self):
        if self.request.method == 'POST':
            return [IsMarketplaceMember()]
        return [permissions.AllowAny()]

    def get_queryset(self):
        return TicketSelector.directory(self.request.user)

    @extend_schema(parameters=[
        OpenApiParameter('period', str, enum=list(directory.TIME_WINDOWS)),
        OpenApiParameter('sort', str, enum=list(directory.SORT_KEYS)),
        OpenApiParameter('secondarySort', str, enum=list(directory.SORT_KEYS) + [directory.SECONDARY_NONE]),
    ], responses={200: TicketSerializer(many=True)}, tags=['Tickets'])
    def get(self, request, *args, **kwargs):
        tickets = list(self.filter_queryset(self.get_queryset()))
        context = self.get_serializer_context()
        context['owner_stats'] = TicketSelector.owner_stats(tickets)
        items = TicketSerializer(tickets, many=True, context=context).data

        period = request.query_params.get('period', 'all')
        sort = request.query_params.get('sort')
        secondary = request.query_params.get('secondarySort', directory.SECONDARY_NONE)
        if period not in directory.TIME_WINDOWS:
            raise ValidationError(f'Unknown period: {period}')
        if sort is not None and sort not in directory.SORT_KEYS:
            raise ValidationError(f'Unknown sort: {sort}')
        if period != 'all' or sort is not None:
            items = directory.arrange(items, window=period, primary=sort or 'newest', secondary=secondary)
        return collection_response(request, items)

    @extend_schema(request=TicketWriteSerializer, responses={201: TicketSerializer, 400: ErrorResponseSerializer}, tags=['Tickets'])
    def post(self, request):
        serializer = TicketWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        ticket = TicketService.create_ticket(request.user, **_write_data(serializer.validated_data))
        ticket = TicketSelector.get(ticket.pk)
        return Response(TicketSerializer(ticket, context={'owner_stats': TicketSelector.owner_stats([ticket])}).data,
                        status=status.HTTP_201_CREATED)


class TicketDetailView(APIView):

    def get_permissions(self):
        if self.request.method == 'PATCH':
            return [IsMarketplaceMember()]
        return [permissions.AllowAny()]

    @extend_schema(responses={200: TicketSerializer}, tags=['Tickets'])
    def get(self, request, pk):
        ticket = TicketSelector.get(pk)
        return Response(TicketSerializer(ticket, context={'owner_stats': TicketSelector.owner_stats([ticket])}).data)

    @extend_schema(request=TicketUpdateSerializer, responses={200: TicketSerializer}, tags=['Tickets'])
    def patch(self, request, pk):
        ticket = TicketSelector.get(pk)
        serializer = TicketUpdateSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        TicketService.update_ticket(ticket, request.user, **_write_data(serializer.validated_data))
        ticket = TicketSelector.get(pk)
        return Response(TicketSerializer(ticket, context={'owner_stats': TicketSelector.owner_stats([ticket])}).data)


class TicketPhotoUploadView(APIView):
    permission_classes = [IsMarketplaceMember]
    parser_classes = [MultiPartParser, FormParser]

    @extend_schema(request=PhotoUploadSerializer, responses={201: TicketImageSerializer}, tags=['Tickets'])
    def post(self, request, pk):
        ticket = TicketSelector.get(pk)
        serializer = PhotoUploadSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        image = TicketService.add_photo(ticket, request.user, serializer.validated_data['imageFile'])
        return Response(TicketImageSerializer(image).data, status=status.HTTP_201_CREATED)


class CategoryListView(HydraListMixin, generics.ListAPIView):
    permission_classes = [permissions.AllowAny]
    serializer_class = CategorySerializer
    pagination_class = None

    def get_queryset(self):
        return CatalogSelector.categories()

    @extend_schema(tags=['Tickets'])
    def get(self, request, *args, **kwargs):
        return super().get(request, *args, **kwargs)


class OccupationListView(HydraListMixin, generics.ListAPIView):
    permission_classes = [permissions.AllowAny]
    serializer_class = OccupationSerializer
    pagination_class = None

    def get_queryset(self):
        raw = self.request.query_params.get('category')
        if raw and not raw.isdigit():
            raise ValidationError('category must be an integer id')
        return CatalogSelector.occupations(raw)

    @extend_schema(parameters=[OpenApiParameter('category', int)], tags=['Tickets'])
    def get(self, request, *args, **kwargs):
        return super().get(request, *args, **kwargs)


class UnitListView(HydraListMixin, generics.ListAPIView):
    permission_classes = [permissions.AllowAny]
    serializer_class = UnitSerializer
    pagination_class = None

    def get_queryset(self):
        return CatalogSelector.units()

    @extend_schema(tags=['Tickets'])
    def get(self, request, *args, **kwargs):
        return super().get(request, *args, **kwargs)
