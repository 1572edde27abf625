"""Marketplace Reviews - API Views."""
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import permissions, status
from rest_framework.parsers import FormParser, MultiPartParser
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.common.core.api import ErrorResponseSerializer, IsMarketplaceMember, PhotoUploadSerializer, collection_response
from apps.common.core.exceptions import ValidationError
from apps.common.core.iri import is_uuid, parse_reference
from .serializers import ReviewCreateSerializer, ReviewImageSerializer, ReviewSerializer
from .services import ReviewSelector, ReviewService


def _user_param(request, name):
    raw = request.query_params.get(name)
    if not raw:
        return None
    pk = parse_reference(raw, 'users')
    if pk is None or not is_uuid(pk):
        raise ValidationError(f'{name} must be a user reference')
    return pk


class ReviewListView(APIView):

    def get_permissions(self):
        if self.request.method == 'POST':
            return [IsMarketplaceMember()]
        return [permissions.AllowAny()]

    @extend_schema(parameters=[OpenApiParameter('master', str), OpenApiParameter('client', str),
                               OpenApiParameter('about', str), OpenApiParameter('type', str, enum=['client', 'master'])],
                   responses={200: ReviewSerializer(many=True)}, tags=['Reviews'])
    def get(self, request):
        reviews = ReviewSelector.for_query(
            master_id=_user_param(request, 'master'),
            client_id=_user_param(request, 'client'),
            about_id=_user_param(request, 'about'),
            review_type=request.query_params.get('type'),
        )
        return collection_response(request, ReviewSerializer(reviews, many=True).data)

    @extend_schema(request=ReviewCreateSerializer, responses={201: ReviewSerializer, 403: ErrorResponseSerializer, 404: ErrorResponseSerializer}, tags=['Reviews'])
    def post(self, request):
        serializer = ReviewCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        review = ReviewService.create_from_payload(request.user, serializer.validated_data)
        return Response(ReviewSerializer(review).data, status=status.HTTP_201_CREATED)


class ReviewDetailView(APIView):
    permission_classes = [permissions.AllowAny]

    @extend_schema(responses={200: ReviewSerializer}, tags=['Reviews'])
    def get(self, request, pk):
        return Response(ReviewSerializer(ReviewSelector.get(pk)).data)


class ReviewPhotoUploadView(APIView):
    permission_classes = [IsMarketplaceMember]
    parser_classes = [MultiPartParser, FormParser]

    @extend_schema(request=PhotoUploadSerializer, responses={201: ReviewImageSerializer}, tags=['Reviews'])
    def post(self, request, pk):
        review = ReviewSelector.get(pk)
        serializer = PhotoUploadSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        image = ReviewService.add_photo(review, request.user, serializer.validated_data['imageFile'])
        return Response(ReviewImageSerializer(image).data, status=status.HTTP_201_CREATED)
