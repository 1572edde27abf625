"""Marketplace Appeals - Application Services."""
import logging
from typing import Optional

from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import transaction

from apps.common.core.exceptions import (
    AppealNotFound, AuthenticationError, ChatNotFound, InvalidComplaintReason, MissingRequiredFields,
    PermissionDenied, RoleMismatch, SelfActionForbidden, TicketMismatch, TicketNotFound, UserNotFound,
    ValidationError,
)
from apps.common.core.validators import validate_image_upload
from apps.marketplace.chats.models import Chat
from apps.marketplace.reviews.eligibility import can_complain
from apps.marketplace.tickets.models import Ticket
from .models import Appeal, AppealImage
from .reasons import is_valid_reason

logger = logging.getLogger('apps.appeals')

MAX_APPEAL_IMAGES = 10

_DECISION_ERRORS = {
    'AUTHENTICATION_ERROR': AuthenticationError,
    'ROLE_MISMATCH': RoleMismatch,
    'USER_NOT_FOUND': UserNotFound,
    'SELF_ACTION_FORBIDDEN': SelfActionForbidden,
}


class AppealSelector:

    @staticmethod
    def filed_by(user):
        return Appeal.objects.filter(author=user).select_related('respondent', 'ticket', 'chat').prefetch_related('images')

    @staticmethod
    def get(appeal_id) -> Appeal:
        try:
            return Appeal.objects.select_related('author', 'respondent').get(pk=appeal_id)
        except (Appeal.DoesNotExist, ValueError):
            raise AppealNotFound(details={'appeal_id': str(appeal_id)})


class AppealService:

    @staticmethod
    @transaction.atomic
    def create_appeal(user, appeal_type: str, title: str, description: str, reason: str, respondent_id,
                      ticket_id: Optional[str] = None, chat_id: Optional[str] = None) -> Appeal:
        missing = [name for name, value in (('type', appeal_type), ('title', title), ('description', description),
                                            ('complaintReason', reason), ('respondent', respondent_id)) if not value]
        if missing:
            raise MissingRequiredFields(fields=missing)
        if not is_valid_reason(reason):
            raise InvalidComplaintReason(details={'complaintReason': reason})

        User = get_user_model()
        try:
            respondent = User.objects.get(pk=respondent_id)
        except (User.DoesNotExist, DjangoValidationError):
            raise UserNotFound('Respondent not found', details={'user_id': str(respondent_id)})

        decision = can_complain(user.pk, getattr(user, 'role', None), respondent.pk)
        if not decision:
            raise _DECISION_ERRORS.get(decision.code, PermissionDenied)(decision.reason)

        appeal = Appeal(type=appeal_type, title=title, description=description, reason=reason,
                        author=user, respondent=respondent)
        if appeal_type == Appeal.Type.TICKET:
            if not ticket_id:
                raise MissingRequiredFields(fields=['ticket'])
            ticket = Ticket.objects.filter(pk=ticket_id).first() if str(ticket_id).isdigit() else None
            if ticket is None:
                raise TicketNotFound(details={'ticket_id': str(ticket_id)})
            if respondent.pk not in (ticket.author_id, ticket.master_id):
                raise TicketMismatch("Respondent's ticket doesn't match")
            appeal.ticket = ticket
        elif appeal_type == Appeal.Type.CHAT:
            if not chat_id:
                raise MissingRequiredFields(fields=['chat'])
            chat = Chat.objects.filter(pk=chat_id).first() if str(chat_id).isdigit() else None
            if chat is None:
                raise ChatNotFound(details={'chat_id': str(chat_id)})
            if {chat.author_id, chat.reply_author_id} != {user.pk, respondent.pk}:
                raise ValidationError("Chat doesn't link you and the respondent", code='CHAT_MISMATCH')
            appeal.chat = chat
        else:
            raise ValidationError('Wrong type', details={'type': appeal_type})

        appeal.save()
        logger.info(f"Appeal created: {appeal.id} by {user.id} against {respondent.id} ({appeal_type}/{reason})")
        return appeal

    @staticmethod
    def add_photo(appeal: Appeal, user, image_file) -> AppealImage:
        if appeal.author_id != user.pk:
            raise PermissionDenied('Only the author of the appeal can add photos')
        validate_image_upload(image_file)
        count = appeal.images.count()
        if count >= MAX_APPEAL_IMAGES:
            raise ValidationError(f'An appeal can have at most {MAX_APPEAL_IMAGES} photos')
        image = AppealImage.objects.create(appeal=appeal, image=image_file, sort_order=count)
        logger.info(f"Photo {image.id} uploaded for appeal {appeal.id}")
        return image
