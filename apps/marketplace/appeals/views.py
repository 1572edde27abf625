"""Marketplace Appeals - API Views."""
from drf_spectacular.utils import extend_schema
from rest_framework import permissions, status
from rest_framework.parsers import FormParser, MultiPartParser
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.common.core.api import ErrorResponseSerializer, IsMarketplaceMember, PhotoUploadSerializer, collection_response
from .reasons import complaint_reasons
from .serializers import AppealCreateSerializer, AppealImageSerializer, AppealSerializer, ComplaintReasonSerializer
from .services import AppealSelector, AppealService


class AppealListView(APIView):
    permission_classes = [IsMarketplaceMember]

    @extend_schema(responses={200: AppealSerializer(many=True)}, tags=['Appeals'])
    def get(self, request):
        return collection_response(request, AppealSerializer(AppealSelector.filed_by(request.user), many=True).data)

    @extend_schema(request=AppealCreateSerializer, responses={201: AppealSerializer, 400: ErrorResponseSerializer, 403: ErrorResponseSerializer}, tags=['Appeals'])
    def post(self, request):
        serializer = AppealCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        appeal = AppealService.create_appeal(
            request.user,
            appeal_type=data.get('type'),
            title=data.get('title'),
            description=data.get('description'),
            reason=data.get('complaintReason'),
            respondent_id=data.get('respondent'),
            ticket_id=data.get('ticket'),
            chat_id=data.get('chat'),
        )
        return Response(AppealSerializer(appeal).data, status=status.HTTP_201_CREATED)


class ComplaintReasonListView(APIView):
    permission_classes = [permissions.AllowAny]

    @extend_schema(responses={200: ComplaintReasonSerializer(many=True)}, tags=['Appeals'])
    def get(self, request):
        return collection_response(request, ComplaintReasonSerializer(complaint_reasons(), many=True).data)


class AppealPhotoUploadView(APIView):
    permission_classes = [IsMarketplaceMember]
    parser_classes = [MultiPartParser, FormParser]

    @extend_schema(request=PhotoUploadSerializer, responses={201: AppealImageSerializer}, tags=['Appeals'])
    def post(self, request, pk):
        appeal = AppealSelector.get(pk)
        serializer = PhotoUploadSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        image = AppealService.add_photo(appeal, request.user, serializer.validated_data['imageFile'])
        return Response(AppealImageSerializer(image).data, status=status.HTTP_201_CREATED)
