"""Marketplace Chats - Application Services."""
import logging
from typing import Optional

from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import transaction

from apps.common.core.exceptions import (
    ChatAlreadyExists, ChatNotFound, SelfActionForbidden, TicketMismatch, TicketNotFound, UserNotFound,
)
from apps.marketplace.tickets.models import Ticket
from apps.users.lists.services import BlackListService
from .models import Chat

logger = logging.getLogger('apps.chats')


class ChatSelector:

    @staticmethod
    def for_user(user, participant_id: Optional[str] = None):
        qs = Chat.objects.involving(user).select_related('author', 'reply_author', 'ticket')
        if participant_id:
            qs = qs.filter(author_id__in=[user.pk, participant_id], reply_author_id__in=[user.pk, participant_id])
        return qs

    @staticmethod
    def get(chat_id) -> Chat:
        try:
            return Chat.objects.select_related('author', 'reply_author', 'ticket').get(pk=chat_id)
        except (Chat.DoesNotExist, ValueError):
            raise ChatNotFound(details={'chat_id': str(chat_id)})


class ChatService:

    @staticmethod
    @transaction.atomic
    def create_chat(user, reply_author_id, ticket_id=None) -> Chat:
        """Open a chat with another member.

        Members who blacklisted each other cannot chat, nor can a member about a
        ticket they blacklisted. With a ticket, a client may only address the
        master of the ticket and a master only its author. Only one chat may
        exist per pair of users and ticket, whichever of them opened it.
        """
        User = get_user_model()
        try:
            reply_author = User.objects.get(pk=reply_author_id, is_active=True)
        except (User.DoesNotExist, DjangoValidationError):
            raise UserNotFound(details={'user_id': str(reply_author_id)})
        if reply_author.pk == user.pk:
            raise SelfActionForbidden('You cannot post a chat with yourself')

        ticket = None
        if ticket_id is not None:
            ticket = Ticket.objects.filter(pk=ticket_id).first() if str(ticket_id).isdigit() else None
            if ticket is None:
                raise TicketNotFound(details={'ticket_id': str(ticket_id)})

        BlackListService.check(user, reply_author, ticket)

        if Chat.objects.between(user, reply_author, ticket).exists():
            raise ChatAlreadyExists()

        if ticket is not None:
            client_to_master = user.is_client and reply_author.is_master and ticket.master_id == reply_author.pk
            master_to_client = user.is_master and reply_author.is_client and ticket.author_id == reply_author.pk
            if not (client_to_master or master_to_client):
                raise TicketMismatch("Probably ticket's author/master doesn't match to reply author")

        chat = Chat.objects.create(author=user, reply_author=reply_author, ticket=ticket, active=True)
        logger.info(f"Chat created: {chat.id} {user.id} -> {reply_author.id} (ticket={ticket_id})")
        return chat
