"""Users Identity - API Views."""
from rest_framework import status, permissions
from rest_framework.views import APIView
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from .serializers import (
    PublicProfileSerializer, TokenRefreshSerializer, UserLoginSerializer,
    UserProfileUpdateSerializer, UserRegistrationSerializer, UserSerializer,
)
from .services import AuthService, ProfileService


class RegisterView(APIView):
    permission_classes = [permissions.AllowAny]

    @extend_schema(request=UserRegistrationSerializer, responses={201: UserSerializer}, tags=['Authentication'])
    def post(self, request):
        serializer = UserRegistrationSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = AuthService.register(
            email=serializer.validated_data['email'],
            password=serializer.validated_data['password'],
            first_name=serializer.validated_data.get('firstName', ''),
            last_name=serializer.validated_data.get('lastName', ''),
            role=serializer.validated_data['role'],
        )
        return Response(UserSerializer(user).data, status=status.HTTP_201_CREATED)


class LoginView(APIView):
    permission_classes = [permissions.AllowAny]

    @extend_schema(request=UserLoginSerializer, tags=['Authentication'])
    def post(self, request):
        serializer = UserLoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        result = AuthService.login(
            email=serializer.validated_data['email'],
            password=serializer.validated_data['password'],
        )
        return Response({
            'access': result['access'],
            'refresh': result['refresh'],
            'user': UserSerializer(result['user']).data,
        })


class RefreshTokenView(APIView):
    permission_classes = [permissions.AllowAny]

    @extend_schema(request=TokenRefreshSerializer, tags=['Authentication'])
    def post(self, request):
        serializer = TokenRefreshSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        return Response(AuthService.refresh_token(serializer.validated_data['refresh']))


class MeView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    @extend_schema(responses={200: UserSerializer}, tags=['Profile'])
    def get(self, request):
        return Response(UserSerializer(ProfileService.get_user(request.user.pk)).data)

    @extend_schema(request=UserProfileUpdateSerializer, responses={200: UserSerializer}, tags=['Profile'])
    def patch(self, request):
        serializer = UserProfileUpdateSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        ProfileService.update_profile(request.user, **serializer.validated_data)
        return Response(UserSerializer(ProfileService.get_user(request.user.pk)).data)


class PublicProfileView(APIView):
    permission_classes = [permissions.AllowAny]

    @extend_schema(responses={200: PublicProfileSerializer}, tags=['Profile'])
    def get(self, request, user_id):
        from apps.marketplace.tickets.serializers import TicketSerializer

        profile = ProfileService.public_profile(user_id, viewer=request.user)
        user = profile['user']
        data = dict(UserSerializer(user, context={'request': request}).data)
        data.pop('email', None)
        data.pop('phone', None)
        owner_stats = {user.pk: profile['stats']}
        data['reviewsCount'] = profile['stats']['count']
        data['rating'] = profile['stats']['rating']
        data['isFavorite'] = profile['is_favorite']
        data['activeTickets'] = TicketSerializer(
            profile['active_tickets'], many=True, context={'request': request, 'owner_stats': owner_stats}
        ).data
        return Response(data)
