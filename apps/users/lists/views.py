"""Users Lists - API Views."""
from drf_spectacular.utils import extend_schema
from rest_framework import permissions, status
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.common.core.api import ErrorResponseSerializer
from .serializers import BlackListSerializer, FavoriteSerializer, ListEntriesSerializer
from .services import BlackListService, FavoriteService


class MemberListMixin:
    """Endpoints shared by the blacklist and the favorites; subclasses set the service and serializer."""
    service = None
    serializer_class = None
    permission_classes = [permissions.IsAuthenticated]

    def render(self, member_list, messages=None, status_code=status.HTTP_200_OK):
        data = self.serializer_class(member_list).data
        if messages is not None:
            data['messages'] = messages
        return Response(data, status=status_code)

    def entries(self, request) -> dict:
        serializer = ListEntriesSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        return dict(serializer.validated_data)


class BlackListMeView(MemberListMixin, APIView):
    service = BlackListService
    serializer_class = BlackListSerializer

    @extend_schema(responses={200: BlackListSerializer, 404: ErrorResponseSerializer}, tags=['Blacklists'])
    def get(self, request):
        return self.render(self.service.mine(request.user))


class BlackListCreateView(MemberListMixin, APIView):
    service = BlackListService
    serializer_class = BlackListSerializer

    @extend_schema(request=ListEntriesSerializer, responses={201: BlackListSerializer, 400: ErrorResponseSerializer}, tags=['Blacklists'])
    def post(self, request):
        blacklist, messages = self.service.create(request.user, **self.entries(request))
        return self.render(blacklist, messages, status.HTTP_201_CREATED)


class BlackListDetailView(MemberListMixin, APIView):
    service = BlackListService
    serializer_class = BlackListSerializer

    @extend_schema(request=ListEntriesSerializer, responses={200: BlackListSerializer, 403: ErrorResponseSerializer}, tags=['Blacklists'])
    def patch(self, request, pk):
        blacklist, messages = self.service.update(self.service.get(pk), request.user, **self.entries(request))
        return self.render(blacklist, messages)

    @extend_schema(responses={204: None, 403: ErrorResponseSerializer}, tags=['Blacklists'])
    def delete(self, request, pk):
        self.service.delete(self.service.get(pk), request.user)
        return Response(status=status.HTTP_204_NO_CONTENT)


class FavoriteMeView(MemberListMixin, APIView):
    service = FavoriteService
    serializer_class = FavoriteSerializer

    @extend_schema(responses={200: FavoriteSerializer, 404: ErrorResponseSerializer}, tags=['Favorites'])
    def get(self, request):
        return self.render(self.service.mine(request.user))


class FavoriteCreateView(MemberListMixin, APIView):
    service = FavoriteService
    serializer_class = FavoriteSerializer

    @extend_schema(request=ListEntriesSerializer, responses={201: FavoriteSerializer, 404: ErrorResponseSerializer}, tags=['Favorites'])
    def post(self, request):
        favorite, _ = self.service.create(request.user, **self.entries(request))
        return self.render(favorite, status_code=status.HTTP_201_CREATED)


class FavoriteDetailView(MemberListMixin, APIView):
    service = FavoriteService
    serializer_class = FavoriteSerializer

    @extend_schema(request=ListEntriesSerializer, responses={200: FavoriteSerializer, 404: ErrorResponseSerializer}, tags=['Favorites'])
    def patch(self, request, pk):
        favorite, _ = self.service.update(self.service.get(pk), request.user, **self.entries(request))
        return self.render(favorite)

    @extend_schema(responses={204: None, 403: ErrorResponseSerializer}, tags=['Favorites'])
    def delete(self, request, pk):
        self.service.delete(self.service.get(pk), request.user)
        return Response(status=status.HTTP_204_NO_CONTENT)
