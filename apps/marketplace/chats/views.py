"""Marketplace Chats - API Views."""
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.common.core.api import ErrorResponseSerializer, IsMarketplaceMember, collection_response
from apps.common.core.exceptions import ChatNotFound, ValidationError
from apps.common.core.iri import is_uuid, parse_reference
from .serializers import ChatCreateSerializer, ChatSerializer
from .services import ChatSelector, ChatService


class ChatListView(APIView):
    permission_classes = [IsMarketplaceMember]

    @extend_schema(parameters=[OpenApiParameter('participant', str)], responses={200: ChatSerializer(many=True)}, tags=['Chats'])
    def get(self, request):
        participant = None
        raw = request.query_params.get('participant')
        if raw:
            participant = parse_reference(raw, 'users')
            if participant is None or not is_uuid(participant):
                raise ValidationError('participant must be a user reference')
        chats = list(ChatSelector.for_user(request.user, participant))
        return collection_response(request, ChatSerializer(chats, many=True).data)

    @extend_schema(request=ChatCreateSerializer, responses={201: ChatSerializer, 403: ErrorResponseSerializer, 409: ErrorResponseSerializer}, tags=['Chats'])
    def post(self, request):
        serializer = ChatCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        chat = ChatService.create_chat(
            request.user,
            reply_author_id=serializer.validated_data['replyAuthor'],
            ticket_id=serializer.validated_data.get('ticket'),
        )
        return Response(ChatSerializer(chat).data, status=status.HTTP_201_CREATED)


class ChatDetailView(APIView):
    permission_classes = [IsMarketplaceMember]

    @extend_schema(responses={200: ChatSerializer}, tags=['Chats'])
    def get(self, request, pk):
        chat = ChatSelector.get(pk)
        if not chat.involves(request.user):
            # reported as missing to non-participants
            raise ChatNotFound(details={'chat_id': str(pk)})
        return Response(ChatSerializer(chat).data)
