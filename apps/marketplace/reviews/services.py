"""Marketplace Reviews - Application Services."""
import logging
from typing import Any, Dict, Iterable

from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import transaction
from django.db.models import Avg, Count

from apps.common.core.exceptions import (
    AuthenticationError, InvalidRating, PermissionDenied, ReviewNotFound, ReviewRoleMismatch,
    SelfReviewForbidden, TicketNotFound, UserNotFound, ValidationError,
)
from apps.common.core.validators import validate_image_upload
from apps.marketplace.tickets.models import Ticket
from . import eligibility
from .models import Review, ReviewImage

logger = logging.getLogger('apps.reviews')

MAX_REVIEW_IMAGES = 10

_DECISION_ERRORS = {
    'AUTHENTICATION_ERROR': AuthenticationError,
    'USER_NOT_FOUND': UserNotFound,
    'SELF_REVIEW_FORBIDDEN': SelfReviewForbidden,
    'ROLE_MISMATCH': ReviewRoleMismatch,
    'INVALID_RATING': InvalidRating,
}


def _raise_for(decision: eligibility.Decision) -> None:
    if not decision:
        raise _DECISION_ERRORS.get(decision.code, PermissionDenied)(decision.reason)


class ReviewSelector:

    @staticmethod
    def stats_for_users(user_ids: Iterable) -> Dict[Any, Dict]:
        """``{user_id: {'count', 'rating'}}`` over the reviews rating each user."""
        user_ids = set(user_ids)
        stats = {user_id: {'count': 0, 'rating': 0} for user_id in user_ids}
        if not user_ids:
            return stats
        for side, field in ((Review.Type.MASTER, 'master_id'), (Review.Type.CLIENT, 'client_id')):
            rows = (Review.objects.filter(type=side, **{f'{field}__in': user_ids})
                    .values(field).annotate(count=Count('id'), rating=Avg('rating')))
            for row in rows:
                entry = stats[row[field]]
                total = entry['rating'] * entry['count'] + (row['rating'] or 0) * row['count']
                entry['count'] += row['count']
                entry['rating'] = round(total / entry['count'], 2) if entry['count'] else 0
        return stats

    @staticmethod
    def for_query(master_id=None, client_id=None, about_id=None, review_type=None):
        qs = Review.objects.select_related('master', 'client', 'ticket').prefetch_related('images')
        if master_id:
            qs = qs.filter(master_id=master_id)
        if client_id:
            qs = qs.filter(client_id=client_id)
        if about_id:
            qs = qs.about(about_id)
        if review_type:
            qs = qs.filter(type=review_type)
        return qs

    @staticmethod
    def get(review_id) -> Review:
        try:
            return Review.objects.select_related('master', 'client', 'ticket').get(pk=review_id)
        except (Review.DoesNotExist, ValueError):
            raise ReviewNotFound(details={'review_id': str(review_id)})


class ReviewService:

    @staticmethod
    def _load_user(user_id):
        User = get_user_model()
        try:
            return User.objects.get(pk=user_id, is_active=True)
        except (User.DoesNotExist, DjangoValidationError):
            raise UserNotFound(details={'user_id': str(user_id)})

    @staticmethod
    @transaction.atomic
    def create_review(user, target_id, rating: int, description: str = '', ticket_id=None) -> Review:
        """Leave a review about ``target_id``.

        The reviewer and the target are on opposite sides; the review ``type``
        is the side being rated. The ticket, when given, must belong to the
        rated side: its author for a rated client, its master for a rated master.
        """
        target = ReviewService._load_user(target_id)
        _raise_for(eligibility.can_review(user.pk, user.role, target.pk, target.role))
        _raise_for(eligibility.validate_rating(rating))

        review_type = eligibility.review_type_for(user.role)
        if review_type == Review.Type.CLIENT:
            master, client = user, target
        else:
            master, client = target, user

        ticket = None
        if ticket_id is not None:
            ticket = Ticket.objects.filter(pk=ticket_id).first() if str(ticket_id).isdigit() else None
            if ticket is None:
                raise TicketNotFound(details={'ticket_id': str(ticket_id)})
            owned = ticket.author_id == client.pk if review_type == Review.Type.CLIENT else ticket.master_id == master.pk
            if not owned:
                raise TicketNotFound("Ticket doesn't match the reviewed user", details={'ticket_id': str(ticket_id)})

        review = Review.objects.create(type=review_type, rating=rating, description=description or '',
                                       ticket=ticket, master=master, client=client)
        logger.info(f"Review created: {review.id} by {user.id} about {target.id} ({review_type}, {rating})")
        return review

    @staticmethod
    def add_photo(review: Review, user, image_file) -> ReviewImage:
        if review.reviewer_id != user.pk:
            raise PermissionDenied('Only the author of the review can add photos')
        validate_image_upload(image_file)
        count = review.images.count()
        if count >= MAX_REVIEW_IMAGES:
            raise ValidationError(f'A review can have at most {MAX_REVIEW_IMAGES} photos')
        image = ReviewImage.objects.create(review=review, image=image_file, sort_order=count)
        logger.info(f"Photo {image.id} uploaded for review {review.id}")
        return image

    @staticmethod
    def create_from_payload(user, data: Dict) -> Review:
        """``POST /api/reviews`` body: the actor fills their own side, the other side is the target."""
        review_type = eligibility.review_type_for(getattr(user, 'role', None))
        if review_type is None or data.get('type', review_type) != review_type:
            raise ReviewRoleMismatch()
        own_side, target_side = ('master', 'client') if review_type == Review.Type.CLIENT else ('client', 'master')
        own_id = data.get(own_side)
        if own_id is not None and str(own_id) != str(user.pk):
            raise PermissionDenied(f'You can only review as the {own_side} yourself')
        return ReviewService.create_review(
            user,
            target_id=data[target_side],
            rating=data['rating'],
            description=data.get('description', ''),
            ticket_id=data.get('ticket'),
        )
